"""Summary statistics over a simulation batch, including jump attribution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from chutes_sim.board import BoardGraph, landing_square
from chutes_sim.simulator import SimulationBatch


@dataclass(frozen=True)
class StatsReport:
    """Read-only summary of one run.

    ``jump_counts[k]`` belongs to ``graph.topology.jumps[k]``.
    """

    mean_rolls: float
    shortest_rolls: int
    shortest_sequence: tuple[int, ...]
    jump_counts: tuple[int, ...]
    total_jumps: int
    wins: int
    unfinished: int

    def jump_share(self, index: int) -> float:
        """Percentage of all traversals that went through jump *index*."""
        if not self.total_jumps:
            return 0.0
        return 100.0 * self.jump_counts[index] / self.total_jumps


def replay(graph: BoardGraph, sequence: Iterable[int], start: int = 0) -> Iterator[tuple[int, int]]:
    """Yield ``(landed, dest)`` for every roll of *sequence*.

    *landed* is the square reached before any jump, using the same
    overshoot policy the transition table was built with.
    """
    square = start
    for face in sequence:
        landed = landing_square(square, face, graph.size, graph.policy)
        dest = graph.mapping[landed]
        yield landed, dest
        square = dest


def attributable_jumps(graph: BoardGraph) -> dict[int, int]:
    """Map each jump start square to the index of the jump that owns it.

    Later definitions win, matching ``build_mapping``.
    """
    owners: dict[int, int] = {}
    for index, jump in enumerate(graph.topology.jumps):
        if jump.in_bounds(graph.size):
            owners[jump.start] = index
    return owners


def compute_stats(graph: BoardGraph, batch: SimulationBatch) -> StatsReport:
    wins = 0
    total_rolls = 0
    shortest: tuple[int, ...] | None = None

    for result in batch.finished():
        wins += 1
        total_rolls += result.rolls_to_win
        if shortest is None or result.rolls_to_win < len(shortest):
            shortest = result.sequence

    jumps = graph.topology.jumps
    owners = attributable_jumps(graph)
    counts = [0] * len(jumps)
    total_jumps = 0

    for result in batch.finished():
        for landed, dest in replay(graph, result.sequence):
            index = owners.get(landed)
            if index is not None and jumps[index].end == dest:
                counts[index] += 1
                total_jumps += 1

    return StatsReport(
        mean_rolls=total_rolls / wins if wins else 0.0,
        shortest_rolls=len(shortest) if shortest is not None else 0,
        shortest_sequence=shortest if shortest is not None else (),
        jump_counts=tuple(counts),
        total_jumps=total_jumps,
        wins=wins,
        unfinished=len(batch.results) - wins,
    )
