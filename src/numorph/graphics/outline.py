"""Host-facing outline used for native elevation shadows and ripple clipping."""

from dataclasses import dataclass
from typing import Optional

from ..utils.geometry import Rect


@dataclass
class Outline:
    """Mutable outline filled in by ``Drawable.get_outline``.

    Attributes
    ----------
    kind : str or None
        "oval", "round_rect", or None when empty
    rect : Rect or None
        Outline bounds
    radius : float
        Uniform corner radius for "round_rect"
    alpha : float
        Opacity hint for the host shadow, range [0, 1]
    """

    kind: Optional[str] = None
    rect: Optional[Rect] = None
    radius: float = 0.0
    alpha: float = 1.0

    def set_empty(self) -> None:
        self.kind = None
        self.rect = None
        self.radius = 0.0

    def set_oval(self, rect: Rect) -> None:
        if rect.is_empty():
            self.set_empty()
            return
        self.kind = "oval"
        self.rect = rect
        self.radius = 0.0

    def set_round_rect(self, rect: Rect, radius: float) -> None:
        if rect.is_empty():
            self.set_empty()
            return
        self.kind = "round_rect"
        self.rect = rect
        self.radius = radius

    def is_empty(self) -> bool:
        return self.kind is None
