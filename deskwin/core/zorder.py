"""Stacking index allocation among sibling windows."""
from __future__ import annotations

from typing import Iterable


def _as_index(value: object) -> int:
    # unset or unparsable indices paint at the bottom
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def next_index(indices: Iterable[object]) -> int:
    """
    Returns one more than the highest stack index currently observed, so the
    caller paints above every sibling it could see. An empty snapshot yields 1.
    """
    highest = 0
    for value in indices:
        highest = max(_as_index(value), highest)
    return highest + 1
