"""
Taskboard

Personal task tracker backend: date bucketing, drag-and-drop reordering and
snoozing over a key-value document store.
"""

__version__ = "0.1.0"
