"""Unit tests for order-rank allocation."""

from __future__ import annotations

import time

import pytest

from taskboard.services.ranking import allocate_rank


class TestAllocateRank:
    @pytest.mark.parametrize(
        "before, after",
        [(1.0, 2.0), (-5.0, 5.0), (1_700_000_000_000.0, 1_700_000_000_001.0), (0.25, 0.2500001)],
    )
    def test_between_two_neighbours_is_strictly_inside(self, before, after):
        rank = allocate_rank(before, after)
        assert before < rank < after

    def test_between_two_neighbours_is_the_midpoint(self):
        assert allocate_rank(10.0, 20.0) == 15.0

    def test_only_before_appends(self):
        assert allocate_rank(42.0, None) == 43.0

    def test_only_after_prepends(self):
        assert allocate_rank(None, 42.0) == 41.0

    def test_neither_uses_supplied_clock(self):
        assert allocate_rank(None, None, now=1234.0) == 1234.0

    def test_neither_defaults_to_wall_clock_ms(self):
        lower = time.time() * 1000 - 1
        rank = allocate_rank(None, None)
        upper = time.time() * 1000 + 1
        assert lower <= rank <= upper

    def test_zero_rank_neighbour_is_present(self):
        # 0.0 is a real rank, not "missing"
        assert allocate_rank(0.0, None) == 1.0
        assert allocate_rank(None, 0.0) == -1.0
        assert allocate_rank(0.0, 1.0) == 0.5

    def test_repeated_inserts_stay_ordered_until_precision_runs_out(self):
        before, after = 1.0, 2.0
        for _ in range(30):
            rank = allocate_rank(before, after)
            assert before < rank < after
            after = rank
