"""Seeded random source and cumulative-weight sampling."""

from __future__ import annotations

from typing import Generic, List, Protocol, Sequence, TypeVar

T = TypeVar("T")


class UniformSource(Protocol):
    """Anything that yields floats uniformly distributed in ``[0, 1)``."""

    def next_uniform(self) -> float:
        ...


class LinearCongruentialRNG:
    """Reproducible LCG; the same seed always replays the same sequence."""

    MULTIPLIER = 1664525
    INCREMENT = 1013904223
    MODULUS = 2 ** 32

    def __init__(self, seed: int = 0) -> None:
        self.seed = seed
        self._state = seed % self.MODULUS

    def next_uniform(self) -> float:
        self._state = (self._state * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        return self._state / self.MODULUS


def weighted_index(weights: Sequence[float], source: UniformSource) -> int:
    """Pick an index with probability proportional to its weight."""

    if not weights:
        raise ValueError("weighted_index() requires at least one weight")
    remainder = source.next_uniform() * sum(weights)
    for index, weight in enumerate(weights):
        remainder -= weight
        if remainder <= 0:
            return index
    # float residue can leave a sliver above zero
    return len(weights) - 1


def ladder_weights(count: int, ladder: Sequence[float]) -> List[float]:
    """Assign ``ladder`` weights by rank; ranks past the end reuse the last rung."""

    last = len(ladder) - 1
    return [float(ladder[min(rank, last)]) for rank in range(count)]


class WeightedSampler(Generic[T]):
    """Draws items by weight from a pluggable uniform source."""

    def __init__(self, source: UniformSource) -> None:
        self.source = source

    def index(self, weights: Sequence[float]) -> int:
        return weighted_index(weights, self.source)

    def choose(self, items: Sequence[T], weights: Sequence[float]) -> T:
        if len(items) != len(weights):
            raise ValueError("items and weights must have the same length")
        return items[self.index(weights)]
