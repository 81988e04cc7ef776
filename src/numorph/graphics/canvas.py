"""Raster canvas with a clip stack and source-over compositing.

Architecture:
    - Target: premultiplied float RGBA bitmap (H, W, 4), modified in place
    - Clip: float coverage mask (H, W) or None (no clip); clip_path /
      clip_out_path multiply the current clip by a path mask
    - save()/restore() push and pop the clip; clipped()/clipped_out() are
      context managers wrapping that pair
    - draw_path: path coverage × clip → source-over with a solid color
    - draw_bitmap: integer-placed bitmap (cropped to canvas) → source-over

Source-over on premultiplied values:
    out = src * cov + dst * (1 - src_a * cov)
"""

from contextlib import contextmanager
from typing import List, Optional

import numpy as np

from ..utils import color as color_utils
from ..utils.geometry import Rect
from .bitmap import bitmap_size, scale_bitmap, validate_bitmap
from .paint import Paint


class Canvas:
    """Draws into a bitmap.

    Attributes
    ----------
    bitmap : np.ndarray
        Target bitmap, premultiplied RGBA float32, shape (H, W, 4)
    """

    def __init__(self, bitmap: np.ndarray):
        self.bitmap = validate_bitmap(bitmap)
        self._clip: Optional[np.ndarray] = None
        self._stack: List[Optional[np.ndarray]] = []

    @property
    def width(self) -> int:
        return self.bitmap.shape[1]

    @property
    def height(self) -> int:
        return self.bitmap.shape[0]

    @property
    def save_count(self) -> int:
        return len(self._stack)

    # ------------------------------------------------------------------
    # Clip stack
    # ------------------------------------------------------------------

    def save(self) -> int:
        self._stack.append(self._clip)
        return len(self._stack)

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("Canvas.restore() called without matching save()")
        self._clip = self._stack.pop()

    def clip_path(self, path) -> None:
        """Intersect the clip with the path interior."""
        self._intersect_clip(path.coverage(self.width, self.height))

    def clip_out_path(self, path) -> None:
        """Intersect the clip with the path exterior."""
        self._intersect_clip(1.0 - path.coverage(self.width, self.height))

    def _intersect_clip(self, mask: np.ndarray) -> None:
        self._clip = mask if self._clip is None else self._clip * mask

    @contextmanager
    def clipped(self, path):
        self.save()
        try:
            self.clip_path(path)
            yield self
        finally:
            self.restore()

    @contextmanager
    def clipped_out(self, path):
        self.save()
        try:
            self.clip_out_path(path)
            yield self
        finally:
            self.restore()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw_color(self, color: int) -> None:
        """Source-over a solid color over the whole (clipped) canvas."""
        coverage = np.ones((self.height, self.width), dtype=np.float32)
        self._blend_solid(color_utils.to_premultiplied(color), coverage)

    def draw_path(self, path, paint: Paint) -> None:
        """Fill and/or stroke ``path`` according to ``paint.style``."""
        if path.is_empty() or paint.alpha == 0:
            return
        coverage = path.coverage(
            self.width, self.height,
            style=paint.style,
            stroke_width=paint.stroke_width,
            anti_alias=paint.anti_alias
        )
        self._blend_solid(paint.premultiplied(), coverage)

    def draw_bitmap(self, bitmap: np.ndarray, left: float, top: float) -> None:
        """Source-over ``bitmap`` with its top-left corner at (left, top).

        Positions are rounded to whole pixels; parts outside the canvas are
        dropped.
        """
        src_w, src_h = bitmap_size(bitmap)
        x0 = int(round(left))
        y0 = int(round(top))

        dx0 = max(0, x0)
        dy0 = max(0, y0)
        dx1 = min(self.width, x0 + src_w)
        dy1 = min(self.height, y0 + src_h)
        if dx1 <= dx0 or dy1 <= dy0:
            return

        src = bitmap[dy0 - y0:dy1 - y0, dx0 - x0:dx1 - x0]
        if self._clip is not None:
            src = src * self._clip[dy0:dy1, dx0:dx1, np.newaxis]

        dst = self.bitmap[dy0:dy1, dx0:dx1]
        dst *= 1.0 - src[..., 3:4]
        dst += src

    def draw_bitmap_rect(self, bitmap: np.ndarray, dst: Rect) -> None:
        """Scale ``bitmap`` to fill ``dst`` and draw it."""
        if dst.is_empty():
            return
        left, top, right, bottom = (int(round(v)) for v in (dst.left, dst.top, dst.right, dst.bottom))
        scaled = scale_bitmap(bitmap, right - left, bottom - top)
        self.draw_bitmap(scaled, left, top)

    def _blend_solid(self, src_premul: np.ndarray, coverage: np.ndarray) -> None:
        if self._clip is not None:
            coverage = coverage * self._clip
        cov = coverage[..., np.newaxis]
        self.bitmap *= 1.0 - src_premul[3] * cov
        self.bitmap += src_premul[np.newaxis, np.newaxis, :] * cov
