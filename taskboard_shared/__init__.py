"""Schemas shared between the Taskboard server and client codegen."""
