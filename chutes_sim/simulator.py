"""Game runner: plays single-pawn games to the goal, one at a time or in batches."""

from __future__ import annotations

import logging
import random
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from chutes_sim.board import BoardGraph
from chutes_sim.die import Die, Roller
from chutes_sim.errors import ConfigurationError

log = logging.getLogger(__name__)


# ── Structured types ────────────────────────────────────────────────

@dataclass(frozen=True)
class GameResult:
    """Outcome of one game.

    ``rolls_to_win`` is None when the step budget ran out; the rolls of an
    unfinished game are not kept.
    """

    rolls_to_win: int | None
    sequence: tuple[int, ...] = ()

    @property
    def finished(self) -> bool:
        return self.rolls_to_win is not None


UNFINISHED = GameResult(rolls_to_win=None)


@dataclass
class SimulationBatch:
    """All results of one run, in the order the games were played."""

    results: list[GameResult] = field(default_factory=list)
    iterations: int = 0
    step_budget: int = 0

    def finished(self) -> Iterator[GameResult]:
        return (r for r in self.results if r.finished)

    @property
    def wins(self) -> int:
        return sum(1 for _ in self.finished())

    @property
    def unfinished(self) -> int:
        return len(self.results) - self.wins

    def rolls(self) -> list[int]:
        return [r.rolls_to_win for r in self.finished()]


# ── Runner ───────────────────────────────────────────────────────────

def play_one(
    graph: BoardGraph,
    die: Roller,
    goal: int,
    step_budget: int,
    start: int = 0,
) -> GameResult:
    """Roll from *start* until *goal* is reached or *step_budget* rolls are used."""
    square = start
    sequence: list[int] = []
    for _ in range(step_budget):
        face = die.roll()
        sequence.append(face)
        square = graph.next_square(square, face)
        if square == goal:
            return GameResult(rolls_to_win=len(sequence), sequence=tuple(sequence))
    return UNFINISHED


def play_many(
    graph: BoardGraph,
    die: Roller,
    goal: int,
    iterations: int,
    step_budget: int,
) -> SimulationBatch:
    """Play *iterations* independent games in sequence, sharing only the die."""
    if iterations < 0:
        raise ConfigurationError(f"iterations must be >= 0, got {iterations}")
    results = [play_one(graph, die, goal, step_budget) for _ in range(iterations)]
    return SimulationBatch(results=results, iterations=iterations, step_budget=step_budget)


# ── Partitioned runner ──────────────────────────────────────────────

def chunk_sizes(iterations: int, workers: int) -> list[int]:
    """Split *iterations* into *workers* contiguous chunks, larger ones first."""
    base, extra = divmod(iterations, workers)
    return [base + (1 if i < extra else 0) for i in range(workers)]


def chunk_seeds(seed: int, workers: int) -> list[int]:
    """One independent stream seed per chunk, derived from the run seed."""
    parent = random.Random(seed)
    return [parent.getrandbits(63) for _ in range(workers)]


def _play_chunk(
    graph: BoardGraph,
    weights: tuple[float, ...] | None,
    seed: int,
    count: int,
    step_budget: int,
) -> list[GameResult]:
    die = Die.seeded(graph.sides, weights, seed)
    return [play_one(graph, die, graph.goal, step_budget) for _ in range(count)]


def play_many_partitioned(
    graph: BoardGraph,
    weights: Sequence[float] | None,
    seed: int,
    iterations: int,
    step_budget: int,
    workers: int,
) -> SimulationBatch:
    """Play *iterations* games across *workers* processes.

    Each chunk gets its own die and random stream, so the batch is
    reproducible for a given ``(seed, workers)`` pair. It does not match
    the sequential batch for the same seed. Any worker failure propagates
    and no partial batch is returned.
    """
    if iterations < 0:
        raise ConfigurationError(f"iterations must be >= 0, got {iterations}")
    if workers < 1:
        raise ConfigurationError(f"workers must be >= 1, got {workers}")

    weights = tuple(weights) if weights is not None else None
    sizes = chunk_sizes(iterations, workers)
    seeds = chunk_seeds(seed, workers)
    log.debug("Partitioned %d games into chunks %s", iterations, sizes)

    results: list[GameResult] = []
    with ProcessPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(_play_chunk, graph, weights, s, n, step_budget)
            for s, n in zip(seeds, sizes)
        ]
        for future in futures:
            results.extend(future.result())

    return SimulationBatch(results=results, iterations=iterations, step_budget=step_budget)
