"""Tests for GenerationConfig defaults and validation."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hexcrawl.config import GenerationConfig
from hexcrawl.core.enums import CollapsedState
from hexcrawl.core.errors import ConfigError


class TestDefaults:
    def test_defaults(self):
        cfg = GenerationConfig()
        assert cfg.seed == 0xDEADBEEF
        assert cfg.map_radius == 5
        assert cfg.marker_state == CollapsedState.RED
        assert cfg.carved_state == CollapsedState.GRAY
        cfg.validate()

    def test_walk_step_limit(self):
        assert GenerationConfig(map_radius=7).walk_step_limit == 15
        assert GenerationConfig(max_walk_steps=4).walk_step_limit == 4

    def test_with_seed_copies(self):
        cfg = GenerationConfig(map_radius=8)
        other = cfg.with_seed(3)
        assert other.seed == 3
        assert other.map_radius == 8
        assert cfg.seed == 0xDEADBEEF

    def test_frozen(self):
        cfg = GenerationConfig()
        with pytest.raises(Exception):
            cfg.seed = 1


class TestValidate:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"map_radius": -1},
            {"pillar_vertical_offset": -1},
            {"pillar_horizontal_y_offset": -2},
            {"room_weights": ()},
            {"room_weights": (("dragon", 1),)},
            {"room_weights": (("empty", -1), ("item", 3))},
            {"room_weights": (("empty", 0),)},
            {"max_monsters_per_room": 0},
            {"pit_damage_min": 5, "pit_damage_max": 5},
            {"pit_damage_min": -1},
            {"max_walk_steps": 0},
        ],
    )
    def test_rejects(self, overrides):
        with pytest.raises(ConfigError):
            GenerationConfig(**overrides).validate()

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)
