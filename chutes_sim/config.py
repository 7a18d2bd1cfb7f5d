"""Run configuration: frozen, validated up front."""

from __future__ import annotations

import time
from dataclasses import dataclass

from chutes_sim.board import OvershootPolicy
from chutes_sim.die import validate_die
from chutes_sim.errors import ConfigurationError

DEFAULT_SIDES = 6
DEFAULT_ITERATIONS = 10_000
DEFAULT_STEP_BUDGET = 10_000


def parse_weights(text: str) -> tuple[float, ...]:
    """Parse ``"1,2,0.5"`` into a tuple of floats."""
    parts = [p.strip() for p in text.split(",")]
    try:
        return tuple(float(p) for p in parts)
    except ValueError:
        raise ConfigurationError(f"die weights must be comma-separated numbers, got {text!r}") from None


@dataclass(frozen=True)
class SimulationConfig:
    """Everything a run needs besides the board itself.

    ``seed=None`` is replaced by the current time so every run is
    reproducible from the seed it reports.
    """

    die_sides: int = DEFAULT_SIDES
    die_weights: tuple[float, ...] | None = None
    iterations: int = DEFAULT_ITERATIONS
    step_budget: int = DEFAULT_STEP_BUDGET
    overshoot: OvershootPolicy = OvershootPolicy.CLAMP_TO_GOAL
    seed: int | None = None
    workers: int = 1

    def __post_init__(self) -> None:
        """Reject invalid values (uses object.__setattr__ since frozen)."""
        if self.die_weights is not None:
            object.__setattr__(self, "die_weights", tuple(self.die_weights))
        validate_die(self.die_sides, self.die_weights)
        if self.iterations < 0:
            raise ConfigurationError(f"iterations must be >= 0, got {self.iterations}")
        if self.step_budget < 1:
            raise ConfigurationError(f"step budget must be >= 1, got {self.step_budget}")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        if not isinstance(self.overshoot, OvershootPolicy):
            raise ConfigurationError(f"unknown overshoot policy {self.overshoot!r}")
        if self.seed is None:
            object.__setattr__(self, "seed", time.time_ns() % 2**32)
