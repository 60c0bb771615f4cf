"""Weighted random choice with O(log n) draws.

`WeightedChoice` precomputes the running total of the weights once, so
each draw is a single uniform number plus a binary search over the
cumulative weights.
"""

from __future__ import annotations

import bisect
import random
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

from .errors import WeightError

T = TypeVar('T')


@dataclass(frozen=True)
class Weighted(Generic[T]):
    weight: float
    item: T


class WeightedChoice(Generic[T]):
    """Draws items with probability proportional to their weight.

    Weights are relative magnitudes and don't need to sum to one. The
    total must be strictly positive and no single weight may be negative.
    Items are kept in input order; an item is selected when the uniform
    draw falls inside its slice ``[cumulative_before, cumulative)`` of the
    range ``[0, total)``, so zero-weight items are never drawn.
    """
    def __init__(self, items: Sequence[Weighted[T]]):
        if not items:
            raise WeightError('WeightedChoice called with no items')
        self.items: List[T] = []
        self.cumulative: List[float] = []
        running_total = 0.0
        for entry in items:
            if entry.weight < 0.0:
                raise WeightError(f"negative weight {entry.weight} for {entry.item}")
            running_total += entry.weight
            self.items.append(entry.item)
            self.cumulative.append(running_total)
        if not running_total > 0.0:
            raise WeightError(f"WeightedChoice called with a total weight of {running_total}")
        self.total = running_total

    def __len__(self) -> int:
        return len(self.items)

    def index_for(self, draw: float) -> int:
        """Index of the item owning `draw`, a value in ``[0, total)``."""
        index = bisect.bisect_right(self.cumulative, draw)
        if index >= len(self.items):
            # random() * total can round up to total itself.
            index = bisect.bisect_left(self.cumulative, self.total)
        return index

    def sample(self, rng: random.Random) -> T:
        draw = rng.random() * self.total
        return self.items[self.index_for(draw)]
