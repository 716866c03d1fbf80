"""Tests for the read-only map snapshot."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hexcrawl.core.enums import CellStatus, CollapsedState
from hexcrawl.core.hex import HexPos
from hexcrawl.core.snapshot import MapSnapshot
from hexcrawl.systems.generator import generate_map


def _snapshot(seed: int = 0xDEADBEEF):
    generated = generate_map(seed=seed)
    return generated, MapSnapshot.from_map(generated)


class TestMapSnapshot:
    def test_header(self):
        generated, snap = _snapshot()
        assert snap.seed == 0xDEADBEEF
        assert snap.radius == 5
        assert snap.entrance == generated.entrance
        assert snap.pillars == generated.pillars

    def test_cells_mirror_grid(self):
        generated, snap = _snapshot()
        assert len(snap.cells) == len(generated.grid)
        centre = snap.cell_at(HexPos(5, 5))
        assert centre.status == CellStatus.COLLAPSED
        assert centre.color == CollapsedState.RED
        assert snap.cell_at(HexPos(0, 0)) is None

    def test_rooms_read_only(self):
        _, snap = _snapshot()
        with pytest.raises(TypeError):
            snap.rooms[HexPos(0, 0)] = None

    def test_rooms_detached_from_grid(self):
        generated, snap = _snapshot()
        generated.room_at(generated.entrance).mark_cleared()
        assert snap.rooms[generated.entrance].cleared is False

    def test_fingerprint_tracks_cleared(self):
        generated, snap = _snapshot()
        generated.room_at(generated.entrance).mark_cleared()
        assert MapSnapshot.from_map(generated).fingerprint() != snap.fingerprint()

    def test_fingerprint_stable(self):
        _, a = _snapshot(9)
        _, b = _snapshot(9)
        assert a.fingerprint() == b.fingerprint()
