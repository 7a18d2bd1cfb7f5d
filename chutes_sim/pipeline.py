"""End-to-end run: build the graph, simulate, aggregate."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from chutes_sim.board import BoardGraph, BoardTopology
from chutes_sim.config import SimulationConfig
from chutes_sim.die import Die
from chutes_sim.simulator import SimulationBatch, play_many, play_many_partitioned
from chutes_sim.stats import StatsReport, compute_stats

log = logging.getLogger(__name__)


@dataclass
class RunResult:
    graph: BoardGraph
    batch: SimulationBatch
    report: StatsReport
    seed: int


def run_simulation(topology: BoardTopology, config: SimulationConfig) -> RunResult:
    """Simulate ``config.iterations`` games on *topology* and summarize them.

    The graph is built exactly once. With ``workers > 1`` games are split
    across processes, one random stream per worker.
    """
    graph = BoardGraph.build(topology, config.die_sides, config.overshoot)
    log.info(
        "Built board: %d squares, %d jumps, d%d, overshoot=%s",
        graph.size, len(topology.jumps), graph.sides, config.overshoot.value,
    )

    t0 = time.monotonic()
    if config.workers > 1:
        batch = play_many_partitioned(
            graph, config.die_weights, config.seed,
            config.iterations, config.step_budget, config.workers,
        )
    else:
        die = Die.seeded(config.die_sides, config.die_weights, config.seed)
        batch = play_many(graph, die, graph.goal, config.iterations, config.step_budget)
    elapsed = time.monotonic() - t0
    log.info(
        "Simulated %d games in %.2fs (seed=%d, workers=%d)",
        config.iterations, elapsed, config.seed, config.workers,
    )
    if batch.unfinished:
        log.info("%d games hit the %d-roll budget", batch.unfinished, config.step_budget)

    report = compute_stats(graph, batch)
    return RunResult(graph=graph, batch=batch, report=report, seed=config.seed)
