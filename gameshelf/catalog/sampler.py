"""Reproducible sampling of the Steam app universe."""
from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def sample(universe: Sequence[T], count: int, seed: str) -> list[T]:
    """Pick ``count`` entries from ``universe`` without replacement.

    The same seed and universe always give the same entries in the same
    order. ``count`` is clamped to the universe size. Indices are drawn
    uniformly and redrawn when already taken, so a full-size sample spends
    most of its draws near the end; that tail is expected O(n log n).
    """

    size = min(max(count, 0), len(universe))
    rng = random.Random(seed)
    used_indices: set[int] = set()
    picked: list[T] = []

    while len(picked) < size:
        index = rng.randrange(len(universe))
        if index in used_indices:
            continue
        used_indices.add(index)
        picked.append(universe[index])

    return picked
