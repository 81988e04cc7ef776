"""Flat (raised) shadow: outer light/dark halo behind the shape."""

import logging

from ..graphics.canvas import Canvas
from ..graphics.path import OutlinePath
from ..utils.geometry import Rect
from .base import Shape, blur_margin, tint

logger = logging.getLogger(__name__)


class FlatShape(Shape):
    """Outer dual shadow.

    The outline mask is tinted with each shadow color and blurred by the
    elevation. At draw time the light copy is offset up-left and the dark
    copy down-right by ``z = elevation + translation_z``, both clipped to the
    outside of the outline.
    """

    def __init__(self, drawable_state):
        super().__init__(drawable_state)
        self.light_bitmap = None
        self.dark_bitmap = None
        self.origin = (0.0, 0.0)

    def update_shadow_bitmap(self, bounds: Rect) -> None:
        state = self.drawable_state
        elevation = state.shadow_elevation
        margin = blur_margin(elevation)

        mask, self.origin = self._local_mask(bounds, margin)
        if mask is None:
            self.light_bitmap = None
            self.dark_bitmap = None
        else:
            self.light_bitmap = self._blur(tint(mask, state.shadow_color_light), elevation)
            self.dark_bitmap = self._blur(tint(mask, state.shadow_color_dark), elevation)
        self.generation += 1

    def draw(self, canvas: Canvas, outline_path: OutlinePath) -> None:
        if self.light_bitmap is None or outline_path.is_empty():
            return
        state = self.drawable_state
        z = state.shadow_elevation + state.translation_z
        left, top = self.origin
        with canvas.clipped_out(outline_path):
            canvas.draw_bitmap(self.light_bitmap, left - z, top - z)
            canvas.draw_bitmap(self.dark_bitmap, left + z, top + z)
