"""Basin (carved) shadow: outer halo plus inner shade."""

from ..graphics.canvas import Canvas
from ..graphics.path import OutlinePath
from ..utils.geometry import Rect
from .base import Shape
from .flat import FlatShape
from .pressed import PressedShape


class BasinShape(Shape):
    """Flat outer shadow combined with the Pressed inner shadow."""

    def __init__(self, drawable_state):
        super().__init__(drawable_state)
        self.outer = FlatShape(drawable_state)
        self.inner = PressedShape(drawable_state)

    def set_drawable_state(self, drawable_state) -> None:
        super().set_drawable_state(drawable_state)
        self.outer.set_drawable_state(drawable_state)
        self.inner.set_drawable_state(drawable_state)

    def update_shadow_bitmap(self, bounds: Rect) -> None:
        self.outer.update_shadow_bitmap(bounds)
        self.inner.update_shadow_bitmap(bounds)
        self.generation += 1

    def draw(self, canvas: Canvas, outline_path: OutlinePath) -> None:
        self.outer.draw(canvas, outline_path)
        self.inner.draw(canvas, outline_path)
