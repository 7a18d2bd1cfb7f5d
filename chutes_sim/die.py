"""Fair and weighted dice driven by an injected random source."""

from __future__ import annotations

import bisect
import itertools
import math
import random
from typing import Protocol, Sequence, runtime_checkable

from chutes_sim.errors import ConfigurationError


@runtime_checkable
class Roller(Protocol):
    """Structural interface: anything with ``sides`` and ``roll()`` can drive a game."""

    @property
    def sides(self) -> int: ...

    def roll(self) -> int: ...


def validate_die(sides: int, weights: Sequence[float] | None = None) -> None:
    """Raise ConfigurationError unless *sides*/*weights* describe a usable die."""
    if isinstance(sides, bool) or not isinstance(sides, int) or sides < 1:
        raise ConfigurationError(f"die must have at least 1 side, got {sides!r}")
    if weights is None:
        return
    if len(weights) != sides:
        raise ConfigurationError(
            f"expected {sides} die weights, got {len(weights)}"
        )
    for face, w in enumerate(weights, start=1):
        # NaN fails the comparison
        if not (w >= 0) or math.isinf(w):
            raise ConfigurationError(f"weight for face {face} must be a finite non-negative number, got {w!r}")
    if not any(w > 0 for w in weights):
        raise ConfigurationError("at least one die weight must be positive")
    if not math.isfinite(sum(weights)):
        raise ConfigurationError("die weights must have a finite sum")


class Die:
    """A die with *sides* faces, optionally weighted.

    Weights are turned into a cumulative table once. A roll draws
    ``r`` uniformly in ``[0, total)`` and returns the first face whose
    cumulative weight is ``>= r``.
    """

    def __init__(
        self,
        sides: int,
        weights: Sequence[float] | None = None,
        rng: random.Random | None = None,
    ):
        validate_die(sides, weights)
        self._sides = sides
        self._weights = tuple(float(w) for w in weights) if weights is not None else None
        self._cumulative: list[float] | None = (
            list(itertools.accumulate(self._weights)) if self._weights is not None else None
        )
        self.rng = rng or random.Random()

    @classmethod
    def seeded(
        cls,
        sides: int,
        weights: Sequence[float] | None = None,
        seed: int | None = None,
    ) -> Die:
        return cls(sides, weights, rng=random.Random(seed))

    @property
    def sides(self) -> int:
        return self._sides

    @property
    def weights(self) -> tuple[float, ...] | None:
        return self._weights

    @property
    def is_fair(self) -> bool:
        return self._cumulative is None

    def roll(self) -> int:
        if self._cumulative is None:
            return self.rng.randint(1, self._sides)
        r = self.rng.random() * self._cumulative[-1]
        # bisect_left == first index whose cumulative weight is >= r
        return min(bisect.bisect_left(self._cumulative, r), self._sides - 1) + 1

    def __repr__(self) -> str:
        kind = "fair" if self.is_fair else f"weights={list(self.weights)}"
        return f"Die(sides={self._sides}, {kind})"
