"""CLI entry point: python -m chutes_sim {run,board}."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from chutes_sim.board import BoardGraph, BoardTopology, OvershootPolicy, classic_topology
from chutes_sim.boardfile import load_board
from chutes_sim.chart import make_jump_chart, make_rolls_chart
from chutes_sim.config import (
    DEFAULT_ITERATIONS,
    DEFAULT_SIDES,
    DEFAULT_STEP_BUDGET,
    SimulationConfig,
    parse_weights,
)
from chutes_sim.errors import ConfigurationError
from chutes_sim.pipeline import run_simulation
from chutes_sim.report import format_mapping, format_report


def _load_topology(args: argparse.Namespace) -> BoardTopology:
    if args.board is None:
        return classic_topology()
    path = Path(args.board)
    if not path.exists():
        raise ConfigurationError(f"board file not found: {path}")
    return load_board(path)


# ── run ──────────────────────────────────────────────────────────────

def cmd_run(args: argparse.Namespace) -> None:
    """Simulate games on a board and print the statistics."""
    topology = _load_topology(args)
    config = SimulationConfig(
        die_sides=args.sides,
        die_weights=parse_weights(args.weights) if args.weights else None,
        iterations=args.iterations,
        step_budget=args.steps,
        overshoot=OvershootPolicy(args.overshoot),
        seed=args.seed,
        workers=args.workers,
    )

    result = run_simulation(topology, config)
    print(f"Seed: {result.seed}")
    print(format_report(result.report, result.graph))

    if args.chart_dir:
        out = Path(args.chart_dir)
        out.mkdir(parents=True, exist_ok=True)
        rolls_png = make_rolls_chart(result.batch, output_path=str(out / "rolls_to_win.png"))
        jumps_png = make_jump_chart(result.report, result.graph, output_path=str(out / "jump_usage.png"))
        print(f"\nCharts saved to {rolls_png} and {jumps_png}")


# ── board ────────────────────────────────────────────────────────────

def cmd_board(args: argparse.Namespace) -> None:
    """Print the effective jump mapping of a board."""
    topology = _load_topology(args)
    graph = BoardGraph.build(topology, args.sides, OvershootPolicy(args.overshoot))
    print(format_mapping(graph))


# ── main ─────────────────────────────────────────────────────────────

def _add_board_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--board", "-c", help="Board file (default: classic 10x10 board)")
    p.add_argument("--sides", "-d", type=int, default=DEFAULT_SIDES, help="Die sides (default 6)")
    p.add_argument("--exceed", "-e", dest="overshoot", action="store_const",
                   const=OvershootPolicy.CLAMP_TO_GOAL.value,
                   help="Rolling past the last square wins (default)")
    p.add_argument("--exact", "-x", dest="overshoot", action="store_const",
                   const=OvershootPolicy.EXACT_ONLY.value,
                   help="Must land exactly on the last square to win")
    p.set_defaults(overshoot=OvershootPolicy.CLAMP_TO_GOAL.value)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="chutes_sim",
        description="Monte Carlo simulator for snakes-and-ladders boards",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable DEBUG-level logging")
    # accepted after the subcommand too; SUPPRESS keeps the top-level value when absent
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS,
                        help="Enable DEBUG-level logging")
    sub = parser.add_subparsers(dest="command")

    p_run = sub.add_parser("run", parents=[common], help="Simulate games and print statistics")
    _add_board_args(p_run)
    p_run.add_argument("--weights", "-p", help="Comma-separated face weights, one per side")
    p_run.add_argument("--iterations", "-i", type=int, default=DEFAULT_ITERATIONS,
                       help="Games to simulate (default 10000)")
    p_run.add_argument("--steps", "-s", type=int, default=DEFAULT_STEP_BUDGET,
                       help="Max rolls per game (default 10000)")
    p_run.add_argument("--seed", "-S", type=int, help="RNG seed (default: current time)")
    p_run.add_argument("--workers", "-w", type=int, default=1,
                       help="Worker processes, one random stream each (default 1)")
    p_run.add_argument("--chart-dir", help="Write PNG charts to this directory")

    p_board = sub.add_parser("board", parents=[common], help="Show a board's jump mapping")
    _add_board_args(p_board)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {"run": cmd_run, "board": cmd_board}
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return

    try:
        handler(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
