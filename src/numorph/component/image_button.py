"""Headless image button backed by a NumorphShapeDrawable.

The button owns its background drawable: a custom background cannot be set.
Images given to the button are drawn by the drawable (clipped to the
outline, over the shadow) instead of on top of the whole widget.

Usage:
    style = load_style_config("configs/styles/default.v1.yaml")
    button = NumorphImageButton(style, width=160, height=160)
    button.set_pressed(True)
    bitmap = button.render()
"""

import logging
from typing import Iterable, Optional

import numpy as np

from ..blur.blur_provider import BlurProvider
from ..drawable.shape_drawable import ColorInput, NumorphShapeDrawable
from ..graphics.bitmap import create_bitmap
from ..graphics.canvas import Canvas
from ..graphics.color_state_list import STATE_ENABLED, STATE_FOCUSED, STATE_PRESSED
from ..graphics.outline import Outline
from ..graphics.rasterizer import drawable_to_bitmap
from ..model.shape_appearance_model import CornerFamily, ShapeAppearanceModel
from ..shape import ShapeType
from ..utils import color as color_utils
from ..utils.geometry import Rect
from ..utils.validators import NumorphStyleV1

logger = logging.getLogger(__name__)


class NumorphImageButton:
    """Image button with a neumorphic background.

    Parameters
    ----------
    style : NumorphStyleV1, optional
        Validated style; defaults are used when None
    width, height : int
        Initial size in px
    blur_provider : BlurProvider, optional
        Shared blur service; built from ``style.blur`` when None
    """

    def __init__(
        self,
        style: Optional[NumorphStyleV1] = None,
        width: int = 0,
        height: int = 0,
        blur_provider: Optional[BlurProvider] = None
    ):
        style = style or NumorphStyleV1()
        self._shadow_color_light = style.shadow_color_light
        self._shadow_color_dark = style.shadow_color_dark
        self._inset = (0, 0, 0, 0)

        self.shape_drawable = NumorphShapeDrawable.from_style(style, blur_provider)
        self._set_inset_internal(*style.resolved_insets())
        self._state = {STATE_ENABLED}
        self.shape_drawable.set_state(self._state)
        self.set_no_shadow(style.no_shadow)

        self.width = 0
        self.height = 0
        self.layout(width, height)
        self.invalidate_count = 0
        self.shape_drawable.set_callback(self._on_drawable_invalidated)

    def _on_drawable_invalidated(self, drawable: NumorphShapeDrawable) -> None:
        self.invalidate_count += 1

    # ------------------------------------------------------------------
    # Layout and rendering
    # ------------------------------------------------------------------

    def layout(self, width: int, height: int) -> None:
        """Resize the widget; the drawable covers the whole widget."""
        self.width = width
        self.height = height
        self.shape_drawable.set_bounds(Rect(0, 0, width, height))

    def render(self) -> np.ndarray:
        """Draw the widget into a new bitmap, shape (height, width, 4)."""
        bitmap = create_bitmap(self.width, self.height)
        if self.width > 0 and self.height > 0:
            self.shape_drawable.draw(Canvas(bitmap))
        return bitmap

    def get_outline(self) -> Outline:
        outline = Outline()
        self.shape_drawable.get_outline(outline)
        return outline

    # ------------------------------------------------------------------
    # Shadow toggle
    # ------------------------------------------------------------------

    def set_no_shadow(self, flag: bool) -> None:
        if flag:
            self.hide_shadow()
        else:
            self.show_shadow()

    def show_shadow(self) -> None:
        """Restore the style's shadow colors."""
        self.shape_drawable.set_shadow_color_light(self._shadow_color_light)
        self.shape_drawable.set_shadow_color_dark(self._shadow_color_dark)

    def hide_shadow(self) -> None:
        self.shape_drawable.set_shadow_color_light(color_utils.TRANSPARENT)
        self.shape_drawable.set_shadow_color_dark(color_utils.TRANSPARENT)

    def set_shadow_color_light(self, shadow_color) -> None:
        self.shape_drawable.set_shadow_color_light(shadow_color)

    def set_shadow_color_dark(self, shadow_color) -> None:
        self.shape_drawable.set_shadow_color_dark(shadow_color)

    def set_shadow_elevation(self, shadow_elevation: float) -> None:
        self.shape_drawable.set_shadow_elevation(shadow_elevation)

    def get_shadow_elevation(self) -> float:
        return self.shape_drawable.get_shadow_elevation()

    def set_translation_z(self, translation_z: float) -> None:
        self.shape_drawable.set_translation_z(translation_z)

    # ------------------------------------------------------------------
    # Images and background
    # ------------------------------------------------------------------

    def set_image_bitmap(self, bitmap) -> None:
        self.shape_drawable.set_image_bitmap(bitmap)

    def set_image_drawable(self, drawable) -> None:
        """Rasterize ``drawable`` at its own bounds size (or the widget size)."""
        if drawable is None:
            self.shape_drawable.set_image_bitmap(None)
            return
        bounds = drawable.get_bounds()
        width = int(bounds.width) or self.width
        height = int(bounds.height) or self.height
        if width <= 0 or height <= 0:
            logger.debug("Ignoring image drawable without a size")
            return
        self.shape_drawable.set_image_bitmap(drawable_to_bitmap(drawable, width, height))

    def set_background_drawable(self, drawable) -> None:
        logger.info("Setting a custom background is not supported.")

    # ------------------------------------------------------------------
    # Pass-through configuration
    # ------------------------------------------------------------------

    def set_shape_appearance_model(self, shape_appearance_model: ShapeAppearanceModel) -> None:
        self.shape_drawable.set_shape_appearance_model(shape_appearance_model)

    def get_shape_appearance_model(self) -> ShapeAppearanceModel:
        return self.shape_drawable.get_shape_appearance_model()

    def set_background_color(self, color: ColorInput) -> None:
        self.shape_drawable.set_fill_color(color)

    def get_background_color(self):
        return self.shape_drawable.get_fill_color()

    def set_stroke_color(self, stroke_color: ColorInput) -> None:
        self.shape_drawable.set_stroke_color(stroke_color)

    def get_stroke_color(self):
        return self.shape_drawable.get_stroke_color()

    def set_stroke_width(self, stroke_width: float) -> None:
        self.shape_drawable.set_stroke_width(stroke_width)

    def get_stroke_width(self) -> float:
        return self.shape_drawable.get_stroke_width()

    def set_shape_type(self, shape_type) -> None:
        self.shape_drawable.set_shape_type(shape_type)

    def get_shape_type(self) -> ShapeType:
        return self.shape_drawable.get_shape_type()

    def set_inset(self, left: int, top: int, right: int, bottom: int) -> None:
        self._set_inset_internal(left, top, right, bottom)

    def get_inset(self) -> tuple:
        return self._inset

    def _set_inset_internal(self, left: int, top: int, right: int, bottom: int) -> None:
        if self._inset != (left, top, right, bottom):
            self.shape_drawable.set_inset(left, top, right, bottom)
            self._inset = (left, top, right, bottom)

    def set_corner(
        self,
        corner_radius: float,
        top_left: Optional[float] = None,
        top_right: Optional[float] = None,
        bottom_right: Optional[float] = None,
        bottom_left: Optional[float] = None
    ) -> None:
        """Set all corners, or the global radius plus per-corner overrides."""
        model = (
            ShapeAppearanceModel.builder(self.get_shape_appearance_model())
            .set_corner(corner_radius, top_left, top_right, bottom_right, bottom_left)
            .build()
        )
        self.set_shape_appearance_model(model)

    def set_corner_family(self, corner_family: CornerFamily) -> None:
        model = (
            ShapeAppearanceModel.builder(self.get_shape_appearance_model())
            .set_corner_family(corner_family)
            .build()
        )
        self.set_shape_appearance_model(model)

    # ------------------------------------------------------------------
    # Interaction state
    # ------------------------------------------------------------------

    def set_pressed(self, pressed: bool) -> None:
        self._toggle_state(STATE_PRESSED, pressed)

    def set_focused(self, focused: bool) -> None:
        self._toggle_state(STATE_FOCUSED, focused)

    def set_enabled(self, enabled: bool) -> None:
        self._toggle_state(STATE_ENABLED, enabled)

    def get_state(self) -> frozenset:
        return frozenset(self._state)

    def _toggle_state(self, name: str, on: bool) -> None:
        if on:
            self._state.add(name)
        else:
            self._state.discard(name)
        self.shape_drawable.set_state(self._state)

    def set_state(self, state: Iterable[str]) -> None:
        self._state = set(state)
        self.shape_drawable.set_state(self._state)
