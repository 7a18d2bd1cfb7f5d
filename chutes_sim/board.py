"""Board topology and the per-square transition table."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from chutes_sim.errors import ConfigurationError

log = logging.getLogger(__name__)

# Standard 10x10 layout, squares numbered 1-100 as printed on the board.
# fmt: off
CLASSIC_JUMPS: dict[int, int] = {
    # Ladders (go UP)
     1: 38,   4: 14,   9: 31,  21: 42,  28: 84,
    36: 44,  51: 67,  71: 91,  80: 100,
    # Chutes (go DOWN)
    16:  6,  47: 26,  49: 11,  56: 53,  62: 19,
    64: 60,  87: 24,  93: 73,  95: 75,  98: 78,
}
# fmt: on

CLASSIC_ROWS = 10
CLASSIC_COLUMNS = 10


class OvershootPolicy(enum.Enum):
    """What happens when a roll would carry the pawn past the last square."""

    CLAMP_TO_GOAL = "clamp"  # overshooting wins immediately
    EXACT_ONLY = "exact"  # overshooting leaves the pawn where it is


@dataclass(frozen=True)
class Jump:
    """A snake/chute or ladder from *start* to *end* (0-based squares)."""

    start: int
    end: int

    @property
    def is_ladder(self) -> bool:
        return self.end > self.start

    @property
    def is_chute(self) -> bool:
        return self.end < self.start

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.start < size and 0 <= self.end < size


@dataclass(frozen=True)
class BoardTopology:
    """Square count plus the jump definitions, in the order they were given."""

    size: int
    jumps: tuple[Jump, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size < 1:
            raise ConfigurationError(f"board size must be at least 1, got {self.size!r}")
        object.__setattr__(self, "jumps", tuple(self.jumps))

    @classmethod
    def from_grid(cls, rows: int, columns: int, jumps: Iterable[Jump] = ()) -> BoardTopology:
        if rows < 1 or columns < 1:
            raise ConfigurationError(
                f"board dimensions must be positive, got {rows}x{columns}"
            )
        return cls(size=rows * columns, jumps=tuple(jumps))

    @property
    def goal(self) -> int:
        return self.size - 1


def classic_topology() -> BoardTopology:
    """The standard board, converted to 0-based squares."""
    jumps = tuple(Jump(start - 1, end - 1) for start, end in CLASSIC_JUMPS.items())
    return BoardTopology.from_grid(CLASSIC_ROWS, CLASSIC_COLUMNS, jumps)


# ── Graph construction ──────────────────────────────────────────────

def build_mapping(jumps: Sequence[Jump], size: int) -> tuple[int, ...]:
    """``mapping[i]`` is where a pawn landing on *i* ends up.

    Identity except at jump starts. A later jump with the same start
    overrides an earlier one. Out-of-range jumps are dropped with a warning.
    """
    if size < 1:
        raise ConfigurationError(f"board size must be at least 1, got {size!r}")
    mapping = list(range(size))
    for index, jump in enumerate(jumps):
        if not jump.in_bounds(size):
            log.warning(
                "Dropping jump #%d (%d -> %d): outside board of %d squares",
                index, jump.start, jump.end, size,
            )
            continue
        if mapping[jump.start] != jump.start:
            log.debug(
                "Jump #%d overrides earlier jump at square %d", index, jump.start,
            )
        mapping[jump.start] = jump.end
    return tuple(mapping)


def landing_square(square: int, face: int, size: int, policy: OvershootPolicy) -> int:
    """Square reached by *face* from *square*, before any jump is applied."""
    raw = square + face
    if raw < size:
        return raw
    if policy is OvershootPolicy.CLAMP_TO_GOAL:
        return size - 1
    return square


def build_transitions(
    mapping: Sequence[int],
    size: int,
    sides: int,
    policy: OvershootPolicy,
) -> tuple[tuple[int, ...], ...]:
    """``table[i][f - 1]`` is the square a roll of *f* from *i* ends on."""
    if sides < 1:
        raise ConfigurationError(f"die must have at least 1 side, got {sides!r}")
    return tuple(
        tuple(
            mapping[landing_square(i, face, size, policy)]
            for face in range(1, sides + 1)
        )
        for i in range(size)
    )


@dataclass(frozen=True)
class BoardGraph:
    """A topology compiled for one die size and overshoot policy.

    Built once per run and read-only afterwards, so it can be shared
    freely between simulation workers.
    """

    topology: BoardTopology
    sides: int
    policy: OvershootPolicy
    mapping: tuple[int, ...] = field(repr=False)
    transitions: tuple[tuple[int, ...], ...] = field(repr=False)

    @classmethod
    def build(
        cls,
        topology: BoardTopology,
        sides: int,
        policy: OvershootPolicy = OvershootPolicy.CLAMP_TO_GOAL,
    ) -> BoardGraph:
        mapping = build_mapping(topology.jumps, topology.size)
        transitions = build_transitions(mapping, topology.size, sides, policy)
        return cls(
            topology=topology,
            sides=sides,
            policy=policy,
            mapping=mapping,
            transitions=transitions,
        )

    @property
    def size(self) -> int:
        return self.topology.size

    @property
    def goal(self) -> int:
        return self.topology.goal

    def next_square(self, square: int, face: int) -> int:
        return self.transitions[square][face - 1]
