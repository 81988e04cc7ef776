"""State-dependent colors.

A ColorStateList is an ordered list of (state spec, color) entries. The first
entry whose spec matches the current state wins. A spec is a set of state
names; a name prefixed with "!" must be absent. The empty spec matches any
state and is normally the last (fallback) entry.

State names: "pressed", "focused", "enabled", "checked", "selected", "hovered".
"""

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Optional, Sequence, Tuple

from ..utils.color import parse_color

STATE_PRESSED = "pressed"
STATE_FOCUSED = "focused"
STATE_ENABLED = "enabled"
STATE_CHECKED = "checked"
STATE_SELECTED = "selected"
STATE_HOVERED = "hovered"

StateSpec = Tuple[str, ...]


def state_matches(spec: Iterable[str], state: AbstractSet[str]) -> bool:
    """True if every requirement of ``spec`` holds for ``state``."""
    for required in spec:
        if required.startswith('!'):
            if required[1:] in state:
                return False
        elif required not in state:
            return False
    return True


@dataclass(frozen=True)
class ColorStateList:
    """Immutable ordered state → color mapping (value equality)."""

    entries: Tuple[Tuple[StateSpec, int], ...]

    def __post_init__(self):
        if not self.entries:
            raise ValueError("ColorStateList needs at least one entry")

    @classmethod
    def value_of(cls, color: int) -> "ColorStateList":
        """Single-color list that ignores state."""
        entry = ((), parse_color(color))
        return cls((entry,))

    @classmethod
    def of(cls, entries: Sequence[Tuple[Iterable[str], int]]) -> "ColorStateList":
        """Build from ``[(states, color), ...]`` pairs."""
        return cls(tuple((tuple(spec), parse_color(c)) for spec, c in entries))

    @classmethod
    def from_entries(cls, entries) -> Optional["ColorStateList"]:
        """Build from validated style entries (objects with ``states``/``color``)."""
        if entries is None:
            return None
        return cls(tuple((tuple(e.states), e.color) for e in entries))

    @property
    def is_stateful(self) -> bool:
        return any(spec for spec, _ in self.entries)

    @property
    def default_color(self) -> int:
        """Color of the first catch-all entry, else of the first entry."""
        for spec, color in self.entries:
            if not spec:
                return color
        return self.entries[0][1]

    def get_color_for_state(self, state: Iterable[str], default: int) -> int:
        """Resolve the color for ``state``; ``default`` if no entry matches."""
        state_set = frozenset(state)
        for spec, color in self.entries:
            if state_matches(spec, state_set):
                return color
        return default
