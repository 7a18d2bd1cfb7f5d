"""Tests for chutes_sim.board (topology, mapping, transition table)."""

import logging

import pytest

from chutes_sim.board import (
    CLASSIC_JUMPS,
    BoardGraph,
    BoardTopology,
    Jump,
    OvershootPolicy,
    build_mapping,
    build_transitions,
    classic_topology,
    landing_square,
)
from chutes_sim.errors import ConfigurationError

CLAMP = OvershootPolicy.CLAMP_TO_GOAL
EXACT = OvershootPolicy.EXACT_ONLY


# ── classic board ────────────────────────────────────────────────────

def test_classic_has_9_ladders_and_10_chutes():
    jumps = classic_topology().jumps
    assert sum(j.is_ladder for j in jumps) == 9
    assert sum(j.is_chute for j in jumps) == 10


def test_classic_is_zero_based():
    topo = classic_topology()
    assert topo.size == 100
    assert Jump(0, 37) in topo.jumps  # printed 1 -> 38
    assert Jump(79, 99) in topo.jumps  # printed 80 -> 100
    assert len(topo.jumps) == len(CLASSIC_JUMPS)


# ── topology ─────────────────────────────────────────────────────────

def test_size_must_be_positive():
    with pytest.raises(ConfigurationError):
        BoardTopology(size=0)


def test_from_grid_multiplies_dimensions():
    topo = BoardTopology.from_grid(3, 4)
    assert topo.size == 12
    assert topo.goal == 11


def test_from_grid_rejects_empty_grid():
    with pytest.raises(ConfigurationError):
        BoardTopology.from_grid(0, 5)


# ── mapping ──────────────────────────────────────────────────────────

def test_mapping_is_identity_without_jumps():
    assert build_mapping([], 5) == (0, 1, 2, 3, 4)


def test_mapping_applies_jumps():
    mapping = build_mapping([Jump(1, 4), Jump(3, 0)], 5)
    assert mapping == (0, 4, 2, 0, 4)


def test_duplicate_start_last_definition_wins():
    mapping = build_mapping([Jump(2, 5), Jump(2, 1)], 6)
    assert mapping[2] == 1


def test_out_of_range_jump_dropped_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="chutes_sim.board"):
        mapping = build_mapping([Jump(2, 50), Jump(-1, 3), Jump(1, 3)], 5)
    assert mapping == (0, 3, 2, 3, 4)
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2


def test_mapping_entries_always_in_bounds():
    size = 20
    jumps = [Jump(s, e) for s, e in [(3, 17), (25, 1), (10, -4), (19, 0), (5, 5)]]
    mapping = build_mapping(jumps, size)
    assert all(0 <= m < size for m in mapping)


# ── landing / overshoot ──────────────────────────────────────────────

def test_landing_without_overshoot():
    assert landing_square(3, 2, 10, CLAMP) == 5
    assert landing_square(3, 2, 10, EXACT) == 5


def test_overshoot_clamps_to_goal():
    assert landing_square(8, 5, 10, CLAMP) == 9


def test_overshoot_exact_stays_put():
    assert landing_square(8, 5, 10, EXACT) == 8


# ── transitions ──────────────────────────────────────────────────────

def test_transitions_shape():
    table = build_transitions(build_mapping([], 7), 7, 4, CLAMP)
    assert len(table) == 7
    assert all(len(row) == 4 for row in table)


@pytest.mark.parametrize("policy", [CLAMP, EXACT])
def test_every_destination_is_a_valid_square(policy):
    topo = classic_topology()
    graph = BoardGraph.build(topo, 6, policy)
    for row in graph.transitions:
        for dest in row:
            assert 0 <= dest < topo.size


def test_transitions_are_idempotent():
    mapping = build_mapping([Jump(2, 7), Jump(6, 1)], 10)
    first = build_transitions(mapping, 10, 6, EXACT)
    second = build_transitions(mapping, 10, 6, EXACT)
    assert first == second


def test_clamp_every_square_near_goal_can_win_directly():
    size, sides = 30, 6
    graph = BoardGraph.build(BoardTopology(size), sides, CLAMP)
    for i in range(size - 1 - sides, size - 1):
        assert graph.goal in graph.transitions[i]


def test_exact_overshoot_keeps_square():
    size, sides = 12, 6
    graph = BoardGraph.build(BoardTopology(size), sides, EXACT)
    for i in range(size):
        for face in range(1, sides + 1):
            if i + face >= size:
                assert graph.next_square(i, face) == i


def test_jump_to_goal_next_to_start_square():
    """size=10, jump 5->9: a 1 from square 4 lands on 5 and jumps to the goal."""
    graph = BoardGraph.build(BoardTopology(10, (Jump(5, 9),)), 6, CLAMP)
    assert graph.next_square(4, 1) == 9


def test_small_exact_board():
    """size=4, exact: from 2 a 1 wins, a 5 or 6 stays on 2."""
    graph = BoardGraph.build(BoardTopology(4), 6, EXACT)
    assert graph.next_square(2, 1) == 3
    assert graph.next_square(2, 5) == 2
    assert graph.next_square(2, 6) == 2


def test_jump_applies_after_clamp():
    """Clamping onto a goal square that carries a jump follows the jump."""
    graph = BoardGraph.build(BoardTopology(6, (Jump(5, 0),)), 6, CLAMP)
    assert graph.next_square(4, 6) == 0


def test_zero_sides_rejected_by_builder():
    with pytest.raises(ConfigurationError):
        build_transitions((0, 1, 2), 3, 0, CLAMP)
