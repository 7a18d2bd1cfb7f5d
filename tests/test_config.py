"""Tests for chutes_sim.config."""

import pytest

from chutes_sim.board import OvershootPolicy
from chutes_sim.config import SimulationConfig, parse_weights
from chutes_sim.errors import ConfigurationError


def test_defaults():
    config = SimulationConfig(seed=1)
    assert config.die_sides == 6
    assert config.die_weights is None
    assert config.iterations == 10_000
    assert config.step_budget == 10_000
    assert config.overshoot is OvershootPolicy.CLAMP_TO_GOAL
    assert config.workers == 1


def test_missing_seed_is_filled_in():
    assert isinstance(SimulationConfig().seed, int)


def test_weights_stored_as_tuple():
    config = SimulationConfig(die_sides=3, die_weights=[1, 2, 3], seed=0)
    assert config.die_weights == (1, 2, 3)


@pytest.mark.parametrize("kwargs", [
    {"die_sides": 0},
    {"die_sides": 3, "die_weights": (1, 1)},
    {"die_weights": (0, 0, 0, 0, 0, 0)},
    {"iterations": -1},
    {"step_budget": 0},
    {"workers": 0},
    {"overshoot": "clamp"},
])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        SimulationConfig(seed=0, **kwargs)


def test_zero_iterations_allowed():
    assert SimulationConfig(iterations=0, seed=0).iterations == 0


def test_parse_weights():
    assert parse_weights("1, 2,0.5") == (1.0, 2.0, 0.5)


def test_parse_weights_rejects_garbage():
    with pytest.raises(ConfigurationError):
        parse_weights("1,two,3")
