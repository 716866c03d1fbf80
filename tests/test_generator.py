"""End-to-end tests for the map generation pipeline."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hexcrawl.config import GenerationConfig
from hexcrawl.core.enums import OUTLINE_TEXTURE_INDEX, CellStatus
from hexcrawl.core.errors import ConfigError, PathCarvingError
from hexcrawl.core.hex import HexPos
from hexcrawl.core.rooms import Entrance, Pillar
from hexcrawl.core.snapshot import MapSnapshot
from hexcrawl.systems.generator import MapGenerator, generate_map
from hexcrawl.utils.event_log import EventLog


def _fingerprint(seed: int, radius: int = 5) -> str:
    return MapSnapshot.from_map(generate_map(GenerationConfig(map_radius=radius), seed)).fingerprint()


class TestDeterminism:
    def test_same_seed_same_map(self):
        assert _fingerprint(0xDEADBEEF) == _fingerprint(0xDEADBEEF)

    def test_same_seed_same_rooms(self):
        a = generate_map(seed=42)
        b = generate_map(seed=42)
        assert a.rooms() == b.rooms()
        assert a.rng_draws == b.rng_draws

    def test_different_seeds_differ(self):
        assert _fingerprint(0xDEADBEEF) != _fingerprint(0xDEADBEF0)

    def test_generator_reusable(self):
        gen = MapGenerator(GenerationConfig())
        first = MapSnapshot.from_map(gen.generate(7)).fingerprint()
        gen.generate(8)
        assert MapSnapshot.from_map(gen.generate(7)).fingerprint() == first


class TestScenarioDefaults:
    """Radius 5, seed 0xDEADBEEF."""

    def setup_method(self):
        self.generated = generate_map(GenerationConfig(), 0xDEADBEEF)

    def test_entrance_at_centre(self):
        assert self.generated.entrance == HexPos(5, 5)
        assert isinstance(self.generated.room_at(HexPos(5, 5)).room_type, Entrance)

    def test_exactly_four_pillars(self):
        pillars = [p for p, r in self.generated.rooms().items() if isinstance(r.room_type, Pillar)]
        assert len(pillars) == 4
        assert sorted(pillars) == sorted(self.generated.pillars)

    def test_pillars_stable_across_runs(self):
        again = generate_map(GenerationConfig(), 0xDEADBEEF)
        assert again.pillars == self.generated.pillars

    def test_room_count(self):
        carved = self.generated.carved_positions()
        assert len(self.generated.rooms()) == 5 + len(carved)

    def test_draw_accounting(self):
        g = self.generated
        assert g.rng_draws == 2 * g.collapse_steps + 12 + len(g.carved_positions())

    def test_no_open_cells(self):
        assert all(c.status != CellStatus.OPEN for c in self.generated.grid.cells())


class TestFootprint:
    @pytest.mark.parametrize("radius", [3, 4, 7, 10])
    def test_everything_inside_hexagon(self, radius):
        g = generate_map(GenerationConfig(map_radius=radius), 0x1234)
        centre = g.grid.center
        for pos in g.rooms():
            assert pos in g.grid
            assert centre.hex_distance(pos) <= radius
        for walk in g.walks:
            assert all(pos in g.grid for pos in walk.path)

    def test_exhausted_cells_uncoloured(self):
        for seed in range(30):
            g = generate_map(GenerationConfig(map_radius=6), seed)
            for pos in g.exhausted_positions():
                assert g.grid.color_of(pos) is None
                assert g.grid.texture_index(pos) == OUTLINE_TEXTURE_INDEX

    def test_texture_indices(self):
        g = generate_map(seed=3)
        for cell in g.grid.cells():
            if cell.color is not None:
                assert cell.texture_index == int(cell.color)
            else:
                assert cell.texture_index == OUTLINE_TEXTURE_INDEX


class TestConfigHandling:
    def test_invalid_config_rejected(self):
        with pytest.raises(ConfigError):
            MapGenerator(GenerationConfig(map_radius=2))

    def test_seed_override(self):
        g = MapGenerator(GenerationConfig(seed=1)).generate(99)
        assert g.seed == 99
        assert g.config.seed == 99

    def test_default_seed_used(self):
        g = MapGenerator(GenerationConfig(seed=0xBEEF)).generate()
        assert g.seed == 0xBEEF


class TestEvents:
    def test_phases_recorded(self):
        g = generate_map(seed=0xDEADBEEF)
        phases = {e.phase for e in g.events}
        assert {"collapse", "pillar", "carve", "done"} <= phases
        assert g.events[-1].phase == "done"

    def test_steps_sequential(self):
        g = generate_map(seed=5)
        assert [e.step for e in g.events] == list(range(len(g.events)))

    def test_published_to_log(self):
        log = EventLog()
        gen = MapGenerator(GenerationConfig(), event_log=log)
        g = gen.generate(1)
        assert len(log) == len(g.events)
        gen.generate(2)
        assert log.latest(1)[0].phase == "done"
        assert len(log.by_phase("done")) == 1

    def test_recording_disabled(self):
        log = EventLog()
        gen = MapGenerator(GenerationConfig(record_events=False), event_log=log)
        g = gen.generate(1)
        assert g.events == ()
        assert len(log) == 0

    def test_failed_run_publishes_nothing(self):
        log = EventLog()
        gen = MapGenerator(GenerationConfig(max_walk_steps=1), event_log=log)
        with pytest.raises(PathCarvingError):
            gen.generate(1)
        assert len(log) == 0
