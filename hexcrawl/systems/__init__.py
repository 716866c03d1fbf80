"""Generation systems: RNG, collapse, pillar placement, carving."""

from hexcrawl.systems.rng import SeededRNG
from hexcrawl.systems.collapse import CollapseEngine
from hexcrawl.systems.generator import GeneratedMap, MapGenerator

__all__ = ["CollapseEngine", "GeneratedMap", "MapGenerator", "SeededRNG"]
