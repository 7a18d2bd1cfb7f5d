"""Charts of a simulation run: rolls-to-win histogram and jump usage."""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt

from chutes_sim.board import BoardGraph
from chutes_sim.simulator import SimulationBatch
from chutes_sim.stats import StatsReport


def make_rolls_chart(
    batch: SimulationBatch,
    output_path: str = "rolls_to_win.png",
    title: str = "Rolls to win",
) -> str:
    """Histogram of rolls-to-win over finished games, one bin per roll count.

    Returns the path to the saved PNG.
    """
    rolls = batch.rolls()

    fig, ax = plt.subplots(figsize=(10, 5))
    if rolls:
        lo, hi = min(rolls), max(rolls)
        ax.hist(rolls, bins=range(lo, hi + 2), color="#4A90D9", edgecolor="white", align="left")
        mean = sum(rolls) / len(rolls)
        ax.axvline(mean, color="#D94A4A", linestyle="--", label=f"mean {mean:.2f}")
        ax.legend()
    else:
        ax.text(0.5, 0.5, "no finished games", ha="center", va="center", transform=ax.transAxes)

    ax.set_xlabel("Rolls")
    ax.set_ylabel("Games")
    ax.set_title(f"{title} ({len(rolls)} of {len(batch.results)} games finished)",
                 fontsize=14, fontweight="bold")

    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path


def jump_labels(graph: BoardGraph) -> list[str]:
    """Bar names for each jump; the index keeps duplicate definitions apart."""
    return [f"#{k} {j.start + 1}->{j.end + 1}" for k, j in enumerate(graph.topology.jumps)]


def make_jump_chart(
    report: StatsReport,
    graph: BoardGraph,
    output_path: str = "jump_usage.png",
    title: str = "Jump traversals",
) -> str:
    """Horizontal bar chart of traversal counts per jump, sorted descending.

    Returns the path to the saved PNG.
    """
    labels = jump_labels(graph)
    items = sorted(zip(labels, report.jump_counts), key=lambda kv: kv[1], reverse=True)
    names = [name for name, _ in items]
    counts = [count for _, count in items]

    fig, ax = plt.subplots(figsize=(10, max(3, len(names) * 0.4)))
    bars = ax.barh(names, counts, color="#4A90D9", edgecolor="white")

    top = max(counts, default=0)
    for bar, count in zip(bars, counts):
        ax.text(
            bar.get_width() + top * 0.01, bar.get_y() + bar.get_height() / 2,
            f"{count}",
            va="center", fontsize=9,
        )

    ax.set_xlabel("Traversals")
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.invert_yaxis()  # most used on top
    ax.set_xlim(left=0, right=max(top * 1.1, 1))

    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
