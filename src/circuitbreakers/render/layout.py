"""Placement of window buckets on a rectangular ring.

Buckets run clockwise: the top row left to right, down the right column,
the bottom row right to left, then up the left column back to bucket 0.
``EMPTY`` marks a slot with no bucket in it.

A ring of 9 buckets is laid out as::

    [B0] -> [B1] -> [B2]
                     |
                    [B3]
    [B8]            [B4]
    [B7] <- [B6] <- [B5]
"""

from __future__ import annotations

from dataclasses import dataclass

EMPTY = -1


@dataclass(frozen=True, slots=True)
class RingLayout:
    top: tuple[int, ...]
    right: tuple[int, ...] = ()
    left: tuple[int, ...] = ()
    bottom: tuple[int, ...] = ()

    def indices(self) -> list[int]:
        placed = self.top + self.right + self.left + self.bottom
        return sorted(i for i in placed if i != EMPTY)


def ring_layout(capacity: int) -> RingLayout:
    if capacity < 1:
        msg = f"capacity must be at least 1, got {capacity}"
        raise ValueError(msg)
    if capacity == 1:
        return RingLayout(top=(0, EMPTY, EMPTY))
    if capacity == 2:
        return RingLayout(top=(0, 1, EMPTY))
    if capacity == 3:
        return RingLayout(top=(0, 1, 2))
    if capacity == 4:
        return RingLayout(top=(0, 1, 2), bottom=(EMPTY, EMPTY, 3))
    if capacity == 5:
        return RingLayout(top=(0, 1, 2), bottom=(EMPTY, 4, 3))
    if capacity == 6:
        return RingLayout(top=(0, 1, 2), bottom=(5, 4, 3))

    # Top and bottom rows hold 3 each; the rest fill the right column first,
    # then the left column from the bottom up.
    middle = capacity - 6
    right_len = (middle + 1) // 2
    left_len = middle // 2
    right = tuple(3 + i for i in range(right_len))
    bottom = tuple(capacity - left_len - 1 - i for i in range(3))
    gap = right_len - left_len
    left = (EMPTY,) * gap + tuple(6 + right_len + left_len - i - 1 for i in range(left_len))
    return RingLayout(top=(0, 1, 2), right=right, left=left, bottom=bottom)
