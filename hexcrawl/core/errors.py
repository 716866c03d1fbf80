"""Exception hierarchy for map generation and save handling."""

from __future__ import annotations


class GenerationError(RuntimeError):
    """A generation run hit an unrecoverable invariant violation.

    The grid being built must be discarded; there is no partial result.
    """


class MissingCellError(GenerationError):
    """A cell the pipeline relies on (entrance, pillar) is not in the grid."""

    def __init__(self, pos: object, role: str = "cell") -> None:
        super().__init__(f"{role} at {pos} is outside the map footprint")
        self.pos = pos
        self.role = role


class PathCarvingError(GenerationError):
    """A greedy walk did not reach its pillar within the step ceiling."""

    def __init__(self, target: object, steps: int) -> None:
        super().__init__(f"walk toward pillar {target} exceeded {steps} steps")
        self.target = target
        self.steps = steps


class ConfigError(ValueError):
    """Generation parameters are inconsistent."""


class SaveNotFoundError(LookupError):
    """No save file exists for the requested game id."""
