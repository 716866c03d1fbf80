"""Tests for the REST layer: MapManager plus the route functions.

Routes are called directly with a manager, no server involved.
"""

import sys
import os
import threading
import time
import unittest

import pytest
from fastapi import HTTPException

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hexcrawl.api.app import create_app
from hexcrawl.api.dependencies import get_map_manager, set_map_manager
from hexcrawl.api.map_manager import MapManager
from hexcrawl.api.routes.config import get_config
from hexcrawl.api.routes.control import ControlAction, control
from hexcrawl.api.routes.events import get_events
from hexcrawl.api.routes.map import get_map
from hexcrawl.api.routes.rooms import clear_room, list_rooms
from hexcrawl.config import GenerationConfig
from hexcrawl.core.hex import HexPos
from hexcrawl.core.snapshot import MapSnapshot


def _build_manager(**overrides) -> MapManager:
    return MapManager(GenerationConfig(**overrides))


class TestMapManager(unittest.TestCase):
    def setUp(self):
        self.mgr = _build_manager()

    def test_builds_on_init(self):
        self.assertIsNotNone(self.mgr.get_map())
        self.assertIsNotNone(self.mgr.get_snapshot())
        self.assertEqual(self.mgr.generations, 1)

    def test_regenerate_with_seed(self):
        snap = self.mgr.regenerate(0xABC)
        self.assertEqual(snap.seed, 0xABC)
        self.assertEqual(self.mgr.generations, 2)
        self.assertIs(self.mgr.get_snapshot(), snap)

    def test_regenerate_without_seed_keeps_current(self):
        self.mgr.regenerate(0xABC)
        snap = self.mgr.regenerate()
        self.assertEqual(snap.seed, 0xABC)

    def test_reset(self):
        self.mgr.regenerate(0xABC)
        snap = self.mgr.reset()
        self.assertEqual(snap.seed, 0xDEADBEEF)

    def test_mark_cleared_refreshes_snapshot(self):
        entrance = self.mgr.get_map().entrance
        old = self.mgr.get_snapshot()
        info = self.mgr.mark_cleared(entrance)
        self.assertTrue(info.cleared)
        self.assertFalse(old.rooms[entrance].cleared)
        self.assertTrue(self.mgr.get_snapshot().rooms[entrance].cleared)

    def test_mark_cleared_missing(self):
        with self.assertRaises(KeyError):
            self.mgr.mark_cleared(HexPos(0, 0))


class TestConcurrentRegenerate:
    def test_event_log_matches_published_map(self, monkeypatch):
        mgr = _build_manager(map_radius=3)
        original = MapSnapshot.from_map
        slow_started = threading.Event()

        def slow_from_map(generated):
            if generated.seed == 1:
                slow_started.set()
                time.sleep(0.3)
            return original(generated)

        monkeypatch.setattr(MapSnapshot, "from_map", staticmethod(slow_from_map))
        worker = threading.Thread(target=mgr.regenerate, args=(1,))
        worker.start()
        assert slow_started.wait(5)
        mgr.regenerate(2)
        worker.join()

        published = mgr.get_map()
        assert published.seed == 2
        assert mgr.generations == 3
        assert mgr.event_log.since_step(0) == list(published.events)

    def test_log_replaced_not_appended(self):
        mgr = _build_manager(map_radius=3)
        mgr.regenerate(0x1)
        mgr.regenerate(0x2)
        assert len(mgr.event_log) == len(mgr.get_map().events)


class TestDependencies:
    def test_unset_manager_raises(self):
        set_map_manager(None)
        with pytest.raises(RuntimeError):
            get_map_manager()

    def test_set_and_get(self):
        mgr = _build_manager(map_radius=3)
        set_map_manager(mgr)
        try:
            assert get_map_manager() is mgr
        finally:
            set_map_manager(None)


class TestMapRoute:
    def test_map_payload(self):
        mgr = _build_manager()
        resp = get_map(manager=mgr)
        assert resp.seed == "0xdeadbeef"
        assert resp.radius == 5
        assert resp.width == resp.height == 11
        assert resp.entrance == (5, 5)
        assert len(resp.pillars) == 4
        assert len(resp.cells) == 91
        assert resp.fingerprint == mgr.get_snapshot().fingerprint()

    def test_cell_fields(self):
        resp = get_map(manager=_build_manager())
        centre = next(c for c in resp.cells if (c.x, c.y) == (5, 5))
        assert centre.color == "RED"
        assert centre.status == "COLLAPSED"
        assert centre.texture_index == 1
        assert (centre.col, centre.row) == HexPos(5, 5).to_offset()

    def test_no_map_is_503(self):
        mgr = _build_manager()
        mgr._snapshot = None
        with pytest.raises(HTTPException) as exc:
            get_map(manager=mgr)
        assert exc.value.status_code == 503


class TestRoomRoutes:
    def test_list_rooms(self):
        mgr = _build_manager()
        resp = list_rooms(kind=None, manager=mgr)
        assert resp.count == len(mgr.get_map().rooms())
        kinds = [r.kind for r in resp.rooms]
        assert kinds.count("entrance") == 1
        assert kinds.count("pillar") == 4

    def test_filter_by_kind(self):
        resp = list_rooms(kind="pillar", manager=_build_manager())
        assert resp.count == 4
        assert all(r.room_type == {"kind": "pillar"} for r in resp.rooms)

    def test_clear_room(self):
        mgr = _build_manager()
        resp = clear_room(5, 5, manager=mgr)
        assert resp.cleared is True
        assert resp.kind == "entrance"
        assert resp.rng_seed == 0xDEADBEEF
        listed = list_rooms(kind="entrance", manager=mgr)
        assert listed.rooms[0].cleared is True

    def test_clear_missing_room_is_404(self):
        with pytest.raises(HTTPException) as exc:
            clear_room(0, 0, manager=_build_manager())
        assert exc.value.status_code == 404


class TestControlRoute:
    def test_generate_with_seed(self):
        mgr = _build_manager()
        resp = control(action=ControlAction.generate, seed="0xBEEF", manager=mgr)
        assert resp.status == "ok"
        assert resp.seed == "0xbeef"
        assert resp.generation == 2
        assert get_map(manager=mgr).seed == "0xbeef"

    def test_generate_random_seed(self):
        mgr = _build_manager()
        resp = control(action=ControlAction.generate, seed=None, manager=mgr)
        assert resp.status == "ok"
        assert resp.seed.startswith("0x")

    def test_bad_seed_rejected(self):
        with pytest.raises(HTTPException) as exc:
            control(action=ControlAction.generate, seed="zzz", manager=_build_manager())
        assert exc.value.status_code == 422

    def test_reset(self):
        mgr = _build_manager()
        control(action=ControlAction.generate, seed="1", manager=mgr)
        resp = control(action=ControlAction.reset, seed=None, manager=mgr)
        assert resp.seed == "0xdeadbeef"
        assert resp.generation == 3


class TestConfigRoute:
    def test_config_payload(self):
        resp = get_config(manager=_build_manager(map_radius=6))
        assert resp.map_radius == 6
        assert resp.seed == "0xdeadbeef"
        assert resp.walk_step_limit == 13
        assert resp.marker_state == "RED"
        assert resp.room_weights == {"empty": 4, "combat": 3, "pit": 2, "item": 1}


class TestEventsRoute:
    def test_all_events(self):
        mgr = _build_manager()
        resp = get_events(since=0, phase=None, manager=mgr)
        assert resp.total == len(mgr.get_map().events)
        assert len(resp.events) == resp.total

    def test_since_and_phase(self):
        mgr = _build_manager()
        pillars = get_events(since=0, phase="pillar", manager=mgr)
        assert len(pillars.events) == 4
        tail = get_events(since=pillars.events[-1].step, phase=None, manager=mgr)
        assert tail.events[0].phase == "pillar"
        assert tail.events[-1].phase == "done"


class TestApp:
    def test_routes_registered(self):
        app = create_app(GenerationConfig(map_radius=3))
        paths = set(app.openapi()["paths"])
        for path in (
            "/api/v1/map",
            "/api/v1/rooms",
            "/api/v1/rooms/{x}/{y}/clear",
            "/api/v1/control/{action}",
            "/api/v1/config",
            "/api/v1/events",
        ):
            assert path in paths
