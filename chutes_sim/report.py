"""Plain-text rendering of a StatsReport."""

from __future__ import annotations

from chutes_sim.board import BoardGraph
from chutes_sim.stats import StatsReport


def format_report(report: StatsReport, graph: BoardGraph) -> str:
    """Human-readable summary. Squares are shown 1-based, as on the board."""
    lines = [f"Average rolls to win: {report.mean_rolls:.2f}"]

    faces = " ".join(str(f) for f in report.shortest_sequence)
    if report.shortest_rolls:
        lines.append(f"Shortest game ({report.shortest_rolls} rolls): {faces}")
    else:
        lines.append("Shortest game: no game finished")

    lines.append(f"Finished games: {report.wins}  (unfinished: {report.unfinished})")
    lines.append("")
    lines.append("Jump traversal counts:")
    if not graph.topology.jumps:
        lines.append("  (board has no jumps)")
    for k, jump in enumerate(graph.topology.jumps):
        lines.append(
            f"  {jump.start + 1:>3}->{jump.end + 1:<3} : "
            f"{report.jump_counts[k]:>6} times  ({report.jump_share(k):5.2f}%)"
        )
    lines.append(f"  total      : {report.total_jumps:>6}")
    return "\n".join(lines)


def format_mapping(graph: BoardGraph) -> str:
    """One line per square that a jump actually moves, plus the board size."""
    lines = [f"Board: {graph.size} squares, goal {graph.goal + 1}"]
    for square, dest in enumerate(graph.mapping):
        if dest != square:
            kind = "ladder" if dest > square else "chute"
            lines.append(f"  {square + 1:>3} -> {dest + 1:<3} ({kind})")
    return "\n".join(lines)
