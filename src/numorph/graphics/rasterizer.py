"""Paintable capability and drawable rasterization.

Anything with ``set_bounds``/``get_bounds``/``draw(canvas)`` can be rasterized
into a bitmap with ``drawable_to_bitmap``. Two simple paintables are provided
for hosts that want to hand a plain color or an existing bitmap to
``NumorphShapeDrawable.set_background_drawable``.
"""

import logging
from typing import Optional, Protocol

import numpy as np

from ..utils.geometry import Rect
from .bitmap import as_bitmap, create_bitmap
from .canvas import Canvas
from .outline import Outline
from .path import OutlinePath

logger = logging.getLogger(__name__)


class Paintable(Protocol):
    """Drawing capability shared by all drawables."""

    def draw(self, canvas: Canvas) -> None: ...

    def set_bounds(self, bounds: Rect) -> None: ...

    def get_bounds(self) -> Rect: ...

    def get_outline(self, outline: Outline) -> None: ...

    def invalidate_self(self) -> None: ...


class _BasePaintable:
    """Bounds storage and a no-op invalidation hook."""

    def __init__(self):
        self._bounds = Rect()

    def set_bounds(self, bounds: Rect) -> None:
        self._bounds = bounds

    def get_bounds(self) -> Rect:
        return self._bounds

    def get_outline(self, outline: Outline) -> None:
        outline.set_round_rect(self._bounds, 0.0)

    def invalidate_self(self) -> None:
        pass


class ColorDrawable(_BasePaintable):
    """Fills its bounds with a single ARGB color."""

    def __init__(self, color: int):
        super().__init__()
        self.color = color

    def draw(self, canvas: Canvas) -> None:
        if self._bounds.is_empty():
            return
        with canvas.clipped(OutlinePath.round_rect(self._bounds, (0, 0, 0, 0))):
            canvas.draw_color(self.color)


class BitmapDrawable(_BasePaintable):
    """Draws a bitmap (or Pillow image) scaled to its bounds."""

    def __init__(self, bitmap):
        super().__init__()
        self.bitmap = as_bitmap(bitmap)

    def draw(self, canvas: Canvas) -> None:
        canvas.draw_bitmap_rect(self.bitmap, self._bounds)


def drawable_to_bitmap(drawable: Optional[Paintable], width: int, height: int) -> Optional[np.ndarray]:
    """Rasterize ``drawable`` into a new (height, width) bitmap.

    The drawable is laid out at (0, 0, width, height) for the duration of the
    draw; its previous bounds are restored afterwards.

    Parameters
    ----------
    drawable : Paintable or None
        Drawable to render; None yields None
    width, height : int
        Output size in px, both > 0

    Returns
    -------
    np.ndarray or None
        Premultiplied RGBA float32 bitmap, shape (height, width, 4)

    Raises
    ------
    ValueError
        If width or height is not positive
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Bitmap size must be positive, got {width}x{height}")
    if drawable is None:
        return None

    bitmap = create_bitmap(width, height)
    old_bounds = drawable.get_bounds()
    drawable.set_bounds(Rect(0, 0, width, height))
    try:
        drawable.draw(Canvas(bitmap))
    finally:
        drawable.set_bounds(old_bounds)
    logger.debug(f"Rasterized {type(drawable).__name__} to {width}x{height}")
    return bitmap
