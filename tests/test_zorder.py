"""Tests for stack index allocation."""

import pytest

from deskwin.core.zorder import next_index


class TestNextIndex:
    def test_empty_snapshot_starts_at_one(self):
        assert next_index([]) == 1

    @pytest.mark.parametrize(
        "indices",
        [[1], [3, 1, 2], [7, 7, 7], [1, 100, 2], range(1, 50)],
    )
    def test_result_exceeds_every_sibling(self, indices):
        # Given / When
        result = next_index(indices)
        # Then
        assert result > max(indices)
        assert result == max(indices) + 1

    def test_unparsable_indices_count_as_zero(self):
        # Given
        indices = ["5", None, "x", float("nan")]
        # When
        result = next_index(indices)
        # Then
        assert result == 6

    def test_only_unset_indices(self):
        assert next_index([None, ""]) == 1

    def test_accepts_generators(self):
        assert next_index(i for i in (4, 2)) == 5
