"""Pressed (sunken) shadow: inner shade and highlight over the fill."""

import logging

from ..graphics.canvas import Canvas
from ..graphics.path import OutlinePath
from ..utils.geometry import Rect
from .base import Shape, blur_margin, shift_mask, tint

logger = logging.getLogger(__name__)


class PressedShape(Shape):
    """Inset dual shadow.

    Built from the inverse of the outline mask. Shifting the outside region
    down-right by the elevation leaves a band along the top-left inner edge
    (dark shade); shifting it up-left leaves a band along the bottom-right
    inner edge (light highlight). Both are blurred, cut back to the inside
    of the outline and drawn clipped to the outline, over the fill.

    The offset is the elevation only; translation_z moves raised shapes and
    does not apply here.
    """

    def __init__(self, drawable_state):
        super().__init__(drawable_state)
        self.light_bitmap = None
        self.dark_bitmap = None
        self.origin = (0.0, 0.0)

    def update_shadow_bitmap(self, bounds: Rect) -> None:
        state = self.drawable_state
        elevation = state.shadow_elevation
        margin = blur_margin(elevation) + int(round(elevation))

        mask, self.origin = self._local_mask(bounds, margin)
        if mask is None:
            self.light_bitmap = None
            self.dark_bitmap = None
            self.generation += 1
            return

        outside = 1.0 - mask
        dark = self._blur(shift_mask(outside, elevation, elevation, 1.0), elevation) * mask
        light = self._blur(shift_mask(outside, -elevation, -elevation, 1.0), elevation) * mask
        self.dark_bitmap = tint(dark, state.shadow_color_dark)
        self.light_bitmap = tint(light, state.shadow_color_light)
        self.generation += 1

    def draw(self, canvas: Canvas, outline_path: OutlinePath) -> None:
        if self.light_bitmap is None or outline_path.is_empty():
            return
        left, top = self.origin
        with canvas.clipped(outline_path):
            canvas.draw_bitmap(self.light_bitmap, left, top)
            canvas.draw_bitmap(self.dark_bitmap, left, top)
