"""Neumorphic shape drawable: outline, dual shadow, fill, stroke and image.

Provides:
    - NumorphShapeDrawable: paintable that composites
      fill → shadow → stroke → image inside its (inset) bounds
    - NumorphShapeDrawableState: shareable configuration, cloned on mutate()

Dirty tracking:
    - Geometry changes (bounds, appearance, inset, elevation, shape type,
      shadow colors, state-driven color changes, edit mode) mark the drawable
      dirty; the next draw() rebuilds the outline and shadow bitmaps once
    - Alpha, translation_z, paint style, stroke width and image changes only
      notify the host callback
    - regeneration_count reports how many rebuilds happened

Invariants:
    - Paint alphas are modulated for the duration of draw() only and are
      restored even if drawing fails
    - Shadow colors never affect fill/stroke paints
    - mutate() never changes what other drawables sharing the old state see

Usage:
    drawable = NumorphShapeDrawable(model)
    drawable.set_fill_color(0xFFECF0F3)
    drawable.set_shadow_elevation(6.0)
    drawable.set_bounds(Rect(0, 0, 120, 120))
    drawable.draw(canvas)
"""

import copy
import logging
from typing import Callable, Iterable, Optional, Union

import numpy as np

from ..blur.blur_provider import BlurProvider
from ..graphics.bitmap import as_bitmap
from ..graphics.canvas import Canvas
from ..graphics.color_state_list import ColorStateList
from ..graphics.outline import Outline
from ..graphics.paint import Paint, PaintStyle
from ..graphics.path import OutlinePath
from ..graphics.rasterizer import drawable_to_bitmap
from ..model.shape_appearance_model import CornerFamily, ShapeAppearanceModel, from_attributes
from ..shape import DEFAULT_SHAPE_TYPE, Shape, ShapeType, shadow_of, validate_shape_type
from ..utils import color as color_utils
from ..utils.geometry import Inset, Rect
from ..utils.profiler import TimerAccumulator
from .outline_builder import compute_outline

logger = logging.getLogger(__name__)

ColorInput = Union[int, str, ColorStateList, None]


def _as_color_state_list(color: ColorInput) -> Optional[ColorStateList]:
    if color is None or isinstance(color, ColorStateList):
        return color
    return ColorStateList.value_of(color)


class NumorphShapeDrawableState:
    """Configuration shared by drawables created from the same state.

    Attributes
    ----------
    shape_appearance_model : ShapeAppearanceModel
        Shared reference (immutable)
    blur_provider : BlurProvider
        Shared reference, never copied
    inset : Inset
        Per-edge insets in px; deep-copied on clone()
    fill_color, stroke_color : ColorStateList or None
        Immutable, shared
    stroke_width : float
    alpha : int
        0-255
    shape_type : ShapeType
    shadow_elevation : float
    shadow_color_light, shadow_color_dark : int
        ARGB, default opaque white / opaque black
    translation_z : float
    paint_style : PaintStyle
    in_edit_mode : bool
        Layout preview; shadows are built without blur
    """

    def __init__(
        self,
        shape_appearance_model: Optional[ShapeAppearanceModel] = None,
        blur_provider: Optional[BlurProvider] = None
    ):
        self.shape_appearance_model = shape_appearance_model or ShapeAppearanceModel()
        self.blur_provider = blur_provider or BlurProvider()
        self.in_edit_mode = False
        self.inset = Inset()
        self.fill_color: Optional[ColorStateList] = None
        self.stroke_color: Optional[ColorStateList] = None
        self.stroke_width = 0.0
        self.alpha = 255
        self.shape_type = DEFAULT_SHAPE_TYPE
        self.shadow_elevation = 0.0
        self.shadow_color_light = color_utils.WHITE
        self.shadow_color_dark = color_utils.BLACK
        self.translation_z = 0.0
        self.paint_style = PaintStyle.FILL_AND_STROKE

    def clone(self) -> "NumorphShapeDrawableState":
        """Independent copy; inset is deep-copied, everything else is immutable or shared."""
        other = copy.copy(self)
        other.inset = copy.copy(self.inset)
        return other

    def new_drawable(self) -> "NumorphShapeDrawable":
        """Drawable bound to this state, forced dirty so it builds its outline."""
        drawable = NumorphShapeDrawable(drawable_state=self)
        drawable._dirty = True
        return drawable


class NumorphShapeDrawable:
    """Soft-UI shape drawable.

    Parameters
    ----------
    shape_appearance_model : ShapeAppearanceModel, optional
        Corner family and radii (defaults: rounded, radius 0)
    blur_provider : BlurProvider, optional
        Shared blur service (defaults: max radius 25, no extra sampling)
    drawable_state : NumorphShapeDrawableState, optional
        Existing state to bind to; the other arguments are ignored when given
    """

    def __init__(
        self,
        shape_appearance_model: Optional[ShapeAppearanceModel] = None,
        blur_provider: Optional[BlurProvider] = None,
        drawable_state: Optional[NumorphShapeDrawableState] = None
    ):
        if drawable_state is None:
            drawable_state = NumorphShapeDrawableState(shape_appearance_model, blur_provider)
        self._drawable_state = drawable_state
        self._dirty = False

        self._fill_paint = Paint(color_utils.TRANSPARENT, PaintStyle.FILL)
        self._stroke_paint = Paint(color_utils.TRANSPARENT, PaintStyle.STROKE)

        self._bounds = Rect()
        self._outline_path = OutlinePath.empty()
        self._shape_shadow: Shape = shadow_of(drawable_state.shape_type, drawable_state)
        self._image_bitmap: Optional[np.ndarray] = None
        self._state = frozenset()
        self._callback: Optional[Callable[["NumorphShapeDrawable"], None]] = None
        self._regenerations = TimerAccumulator("shadow_regeneration")

        self._update_colors_for_state(self._state)

    @classmethod
    def from_style(cls, style, blur_provider: Optional[BlurProvider] = None) -> "NumorphShapeDrawable":
        """Drawable configured from a validated ``NumorphStyleV1``.

        ``no_shadow`` is a widget concern and is not applied here.
        """
        drawable = cls(
            from_attributes(style.shape_appearance),
            blur_provider or BlurProvider.from_settings(style.blur)
        )
        drawable.set_in_edit_mode(style.in_edit_mode)
        drawable.set_shape_type(ShapeType.from_name(style.shape_type))
        drawable.set_inset(*style.resolved_insets())
        drawable.set_shadow_elevation(style.shadow_elevation)
        drawable.set_shadow_color_light(style.shadow_color_light)
        drawable.set_shadow_color_dark(style.shadow_color_dark)
        drawable.set_fill_color(ColorStateList.from_entries(style.fill_color))
        drawable.set_stroke(style.stroke_width, ColorStateList.from_entries(style.stroke_color))
        drawable.set_paint_style(PaintStyle(style.paint_style))
        drawable.set_alpha(style.alpha)
        drawable.set_translation_z(style.translation_z)
        return drawable

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, canvas: Canvas) -> None:
        """Composite fill → shadow → stroke → image onto ``canvas``."""
        internal = self.get_bounds_internal()
        if internal.is_empty():
            logger.debug(f"Skipping draw, empty internal bounds {internal}")
            return

        state = self._drawable_state
        prev_alpha = self._fill_paint.alpha
        prev_stroke_alpha = self._stroke_paint.alpha
        self._fill_paint.alpha = color_utils.modulate_alpha(prev_alpha, state.alpha)
        self._stroke_paint.stroke_width = state.stroke_width
        self._stroke_paint.alpha = color_utils.modulate_alpha(prev_stroke_alpha, state.alpha)
        try:
            if self._dirty:
                self._regenerate(internal)

            if self._has_fill():
                canvas.draw_path(self._outline_path, self._fill_paint)

            self._shape_shadow.draw(canvas, self._outline_path)

            if self._has_stroke():
                canvas.draw_path(self._outline_path, self._stroke_paint)

            if self._has_image_bitmap():
                with canvas.clipped(self._outline_path):
                    canvas.draw_bitmap_rect(self._image_bitmap, internal)
        finally:
            self._fill_paint.alpha = prev_alpha
            self._stroke_paint.alpha = prev_stroke_alpha

    def _regenerate(self, internal: Rect) -> None:
        state = self._drawable_state
        with self._regenerations.measure():
            self._outline_path = compute_outline(
                internal, state.shape_appearance_model, state.shadow_elevation
            )
            self._shape_shadow.update_shadow_bitmap(internal)
        self._dirty = False
        logger.debug(
            f"Regenerated {type(self._shape_shadow).__name__} for {internal} "
            f"in {self._regenerations.last * 1000:.2f} ms"
        )

    def _has_fill(self) -> bool:
        return self._drawable_state.paint_style.fills

    def _has_stroke(self) -> bool:
        return self._drawable_state.paint_style.strokes and self._stroke_paint.stroke_width > 0

    def _has_image_bitmap(self) -> bool:
        return self._image_bitmap is not None

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def invalidate_self(self) -> None:
        """Mark dirty and ask the host to redraw."""
        self._dirty = True
        self._notify()

    def _invalidate_self_ignore_shape(self) -> None:
        self._notify()

    def _notify(self) -> None:
        if self._callback is not None:
            self._callback(self)

    def set_callback(self, callback: Optional[Callable[["NumorphShapeDrawable"], None]]) -> None:
        """Host hook called with this drawable on every invalidation."""
        self._callback = callback

    def get_callback(self) -> Optional[Callable[["NumorphShapeDrawable"], None]]:
        return self._callback

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def regeneration_count(self) -> int:
        """Number of outline/shadow rebuilds performed so far."""
        return self._regenerations.count

    @property
    def shape_shadow(self) -> Shape:
        """Active shadow variant."""
        return self._shape_shadow

    # ------------------------------------------------------------------
    # Bounds and outline
    # ------------------------------------------------------------------

    def set_bounds(self, bounds: Rect) -> None:
        if bounds != self._bounds:
            self._bounds = bounds
            self._dirty = True

    def get_bounds(self) -> Rect:
        return self._bounds

    def get_bounds_internal(self) -> Rect:
        """Bounds shrunk by the insets."""
        return self._bounds.inset(self._drawable_state.inset)

    @property
    def outline_path(self) -> OutlinePath:
        return self._outline_path

    def get_outline_path(self) -> OutlinePath:
        return self._outline_path

    def get_outline(self, outline: Outline) -> None:
        """Host outline over the internal bounds; radius is not inflated by elevation."""
        model = self._drawable_state.shape_appearance_model
        if model.corner_family == CornerFamily.OVAL:
            outline.set_oval(self.get_bounds_internal())
        else:
            outline.set_round_rect(self.get_bounds_internal(), model.corner_radius)

    # ------------------------------------------------------------------
    # Constant state
    # ------------------------------------------------------------------

    def get_constant_state(self) -> NumorphShapeDrawableState:
        return self._drawable_state

    def mutate(self) -> "NumorphShapeDrawable":
        """Detach from the shared state; later changes affect this drawable only."""
        self._drawable_state = self._drawable_state.clone()
        self._shape_shadow.set_drawable_state(self._drawable_state)
        return self

    # ------------------------------------------------------------------
    # Interaction state
    # ------------------------------------------------------------------

    def is_stateful(self) -> bool:
        fill_color = self._drawable_state.fill_color
        return fill_color is not None and fill_color.is_stateful

    def set_state(self, state: Iterable[str]) -> bool:
        """Set the interaction state (e.g. {"pressed", "enabled"}).

        Returns
        -------
        bool
            True if a resolved color changed and the drawable was invalidated
        """
        new_state = frozenset(state)
        if new_state == self._state:
            return False
        self._state = new_state
        return self.on_state_change(new_state)

    def get_state(self) -> frozenset:
        return self._state

    def on_state_change(self, state: Iterable[str]) -> bool:
        """Re-resolve fill/stroke colors; invalidates and returns True on change."""
        changed = self._update_colors_for_state(frozenset(state))
        if changed:
            self.invalidate_self()
        return changed

    def _update_colors_for_state(self, state: frozenset) -> bool:
        changed = False
        for color_list, paint in (
            (self._drawable_state.fill_color, self._fill_paint),
            (self._drawable_state.stroke_color, self._stroke_paint),
        ):
            previous = paint.color
            if color_list is None:
                new_color = color_utils.TRANSPARENT
            else:
                new_color = color_list.get_color_for_state(state, previous)
            if new_color != previous:
                paint.color = new_color
                changed = True
        return changed

    # ------------------------------------------------------------------
    # Appearance
    # ------------------------------------------------------------------

    def set_shape_appearance_model(self, shape_appearance_model: ShapeAppearanceModel) -> None:
        if self._drawable_state.shape_appearance_model != shape_appearance_model:
            self._drawable_state.shape_appearance_model = shape_appearance_model
            self.invalidate_self()

    def get_shape_appearance_model(self) -> ShapeAppearanceModel:
        return self._drawable_state.shape_appearance_model

    def set_fill_color(self, fill_color: ColorInput) -> None:
        """Fill color: ColorStateList, ARGB int / hex string, or None (no fill)."""
        fill_color = _as_color_state_list(fill_color)
        if self._drawable_state.fill_color != fill_color:
            self._drawable_state.fill_color = fill_color
            self.on_state_change(self._state)

    def get_fill_color(self) -> Optional[ColorStateList]:
        return self._drawable_state.fill_color

    def set_stroke_color(self, stroke_color: ColorInput) -> None:
        stroke_color = _as_color_state_list(stroke_color)
        if self._drawable_state.stroke_color != stroke_color:
            self._drawable_state.stroke_color = stroke_color
            self.on_state_change(self._state)

    def get_stroke_color(self) -> Optional[ColorStateList]:
        return self._drawable_state.stroke_color

    def set_stroke(self, stroke_width: float, stroke_color: ColorInput) -> None:
        self.set_stroke_width(stroke_width)
        self.set_stroke_color(stroke_color)

    def set_stroke_width(self, stroke_width: float) -> None:
        if stroke_width < 0:
            raise ValueError(f"Stroke width must be >= 0, got {stroke_width}")
        if self._drawable_state.stroke_width != stroke_width:
            self._drawable_state.stroke_width = stroke_width
            self._invalidate_self_ignore_shape()

    def get_stroke_width(self) -> float:
        return self._drawable_state.stroke_width

    def set_paint_style(self, paint_style: Union[PaintStyle, str]) -> None:
        paint_style = PaintStyle(paint_style)
        if self._drawable_state.paint_style != paint_style:
            self._drawable_state.paint_style = paint_style
            self._invalidate_self_ignore_shape()

    def get_paint_style(self) -> PaintStyle:
        return self._drawable_state.paint_style

    def set_alpha(self, alpha: int) -> None:
        if not 0 <= alpha <= 255:
            raise ValueError(f"Alpha must be in [0, 255], got {alpha}")
        if self._drawable_state.alpha != alpha:
            self._drawable_state.alpha = alpha
            self._invalidate_self_ignore_shape()

    def get_alpha(self) -> int:
        return self._drawable_state.alpha

    def set_inset(self, left: int, top: int, right: int, bottom: int) -> None:
        if min(left, top, right, bottom) < 0:
            raise ValueError(f"Insets must be >= 0, got {(left, top, right, bottom)}")
        inset = self._drawable_state.inset
        if inset.as_tuple() != (left, top, right, bottom):
            inset.set(left, top, right, bottom)
            self.invalidate_self()

    def get_inset(self) -> tuple:
        """(left, top, right, bottom)."""
        return self._drawable_state.inset.as_tuple()

    def set_in_edit_mode(self, in_edit_mode: bool) -> None:
        if self._drawable_state.in_edit_mode != in_edit_mode:
            self._drawable_state.in_edit_mode = in_edit_mode
            self.invalidate_self()

    def is_in_edit_mode(self) -> bool:
        return self._drawable_state.in_edit_mode

    # ------------------------------------------------------------------
    # Shadow
    # ------------------------------------------------------------------

    def set_shape_type(self, shape_type: Union[ShapeType, int]) -> None:
        """Swap the shadow variant; raises ValueError for unknown types.

        Drawables sharing this state see the new type but keep their own
        variant, so call mutate() first when the state is shared.
        """
        shape_type = validate_shape_type(shape_type)
        if self._drawable_state.shape_type != shape_type:
            self._drawable_state.shape_type = shape_type
            self._shape_shadow = shadow_of(shape_type, self._drawable_state)
            self.invalidate_self()

    def get_shape_type(self) -> ShapeType:
        return self._drawable_state.shape_type

    def set_shadow_elevation(self, shadow_elevation: float) -> None:
        if shadow_elevation < 0:
            raise ValueError(f"Shadow elevation must be >= 0, got {shadow_elevation}")
        if self._drawable_state.shadow_elevation != shadow_elevation:
            self._drawable_state.shadow_elevation = shadow_elevation
            self.invalidate_self()

    def get_shadow_elevation(self) -> float:
        return self._drawable_state.shadow_elevation

    def set_shadow_color_light(self, shadow_color) -> None:
        shadow_color = color_utils.parse_color(shadow_color)
        if self._drawable_state.shadow_color_light != shadow_color:
            self._drawable_state.shadow_color_light = shadow_color
            self.invalidate_self()

    def get_shadow_color_light(self) -> int:
        return self._drawable_state.shadow_color_light

    def set_shadow_color_dark(self, shadow_color) -> None:
        shadow_color = color_utils.parse_color(shadow_color)
        if self._drawable_state.shadow_color_dark != shadow_color:
            self._drawable_state.shadow_color_dark = shadow_color
            self.invalidate_self()

    def get_shadow_color_dark(self) -> int:
        return self._drawable_state.shadow_color_dark

    def set_translation_z(self, translation_z: float) -> None:
        if self._drawable_state.translation_z != translation_z:
            self._drawable_state.translation_z = translation_z
            self._invalidate_self_ignore_shape()

    def get_translation_z(self) -> float:
        return self._drawable_state.translation_z

    def get_z(self) -> float:
        """Shadow elevation plus translation_z."""
        return self.get_shadow_elevation() + self.get_translation_z()

    def set_z(self, z: float) -> None:
        self.set_translation_z(z - self.get_shadow_elevation())

    # ------------------------------------------------------------------
    # Image
    # ------------------------------------------------------------------

    def set_image_bitmap(self, bitmap) -> None:
        """Image drawn over everything, scaled to the internal bounds and clipped to the outline.

        Accepts a premultiplied float bitmap, a Pillow image, or None.
        """
        self._image_bitmap = None if bitmap is None else as_bitmap(bitmap)
        self._invalidate_self_ignore_shape()

    def get_image_bitmap(self) -> Optional[np.ndarray]:
        return self._image_bitmap

    def set_background_drawable(self, drawable, width: int, height: int) -> None:
        """Rasterize ``drawable`` at width × height and use it as the image.

        Zero or negative dimensions leave the current image untouched.
        """
        if width <= 0 or height <= 0:
            logger.debug(f"Ignoring background drawable with size {width}x{height}")
            return
        self.set_image_bitmap(drawable_to_bitmap(drawable, width, height))

    def __repr__(self) -> str:
        state = self._drawable_state
        return (
            f"NumorphShapeDrawable(shape_type={ShapeType(state.shape_type).name}, "
            f"elevation={state.shadow_elevation}, bounds={self._bounds})"
        )
