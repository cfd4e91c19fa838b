"""
Order-rank allocation for drag-and-drop positioning.

Ranks are floats. A moved task gets a rank strictly between its new
neighbours, so nothing else is rewritten. Ranks are never renormalized;
repeated inserts at the same spot halve the gap each time until floating
point runs out and two ranks collide. That limit is accepted.
"""

from __future__ import annotations

from typing import Optional

from taskboard.models.base import now_ms


def allocate_rank(
    before_rank: Optional[float],
    after_rank: Optional[float],
    now: Optional[float] = None,
) -> float:
    """Rank for a task placed after ``before_rank`` and ahead of ``after_rank``.

    - both neighbours: midpoint
    - only the one before (dropped at the end): before + 1
    - only the one after (dropped at the start): after - 1
    - neither (empty section, or neighbours failed to load): wall-clock ms
    """
    if before_rank is not None and after_rank is not None:
        return (before_rank + after_rank) / 2
    if before_rank is not None:
        return before_rank + 1
    if after_rank is not None:
        return after_rank - 1
    return now if now is not None else now_ms()
