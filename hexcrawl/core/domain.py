"""Per-cell constraint domain for the collapse pass."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hexcrawl.core.enums import CollapsedState

if TYPE_CHECKING:
    from hexcrawl.systems.rng import SeededRNG

_ALL = tuple(CollapsedState)


class ConstraintDomain:
    """Six independent flags, one per admissible colour.

    Flags can only be cleared, so entropy never increases.
    """

    __slots__ = ("_flags",)

    def __init__(self) -> None:
        self._flags: dict[CollapsedState, bool] = {state: True for state in _ALL}

    def allows(self, state: CollapsedState) -> bool:
        return self._flags[state]

    def remove(self, state: CollapsedState) -> bool:
        """Clear *state*; return True if the flag was set."""
        if not self._flags[state]:
            return False
        self._flags[state] = False
        return True

    def entropy(self) -> int:
        return sum(self._flags.values())

    def admissible(self) -> list[CollapsedState]:
        """Colours still allowed, in enum order."""
        return [state for state in _ALL if self._flags[state]]

    def collapse(self, rng: SeededRNG) -> CollapsedState | None:
        """Pick one admissible colour uniformly; None when nothing is left."""
        options = self.admissible()
        if not options:
            return None
        return options[rng.next_below(len(options))]

    def copy(self) -> ConstraintDomain:
        new = ConstraintDomain.__new__(ConstraintDomain)
        new._flags = dict(self._flags)
        return new

    def __repr__(self) -> str:
        names = ",".join(s.name for s in self.admissible())
        return f"ConstraintDomain({names})"
