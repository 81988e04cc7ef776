"""Shadow variant contract and shared bitmap helpers.

A shadow variant owns the light and dark shadow bitmaps of one drawable
state. ``update_shadow_bitmap`` rebuilds them (called by the drawable only
when dirty); ``draw`` composites them relative to the outline path.

Bitmap frame: shadow bitmaps cover the internal bounds plus ``margin`` px on
every side; ``origin`` is the canvas position of the bitmap's top-left pixel.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import cv2
import numpy as np

from ..blur.blur_provider import radius_to_sigma
from ..drawable.outline_builder import compute_outline
from ..graphics.canvas import Canvas
from ..graphics.path import OutlinePath
from ..utils.color import to_premultiplied
from ..utils.geometry import Rect

logger = logging.getLogger(__name__)


def blur_margin(radius: float) -> int:
    """Padding (px) that keeps a blur of ``radius`` from being truncated."""
    if radius <= 0:
        return 0
    return int(math.ceil(3.0 * radius_to_sigma(radius)))


def tint(mask: np.ndarray, color: int) -> np.ndarray:
    """Coverage mask (H, W) × ARGB color → premultiplied bitmap (H, W, 4)."""
    return mask[..., np.newaxis] * to_premultiplied(color)[np.newaxis, np.newaxis, :]


def shift_mask(mask: np.ndarray, dx: float, dy: float, fill: float) -> np.ndarray:
    """Translate a mask by (dx, dy) px; uncovered pixels take ``fill``."""
    if dx == 0 and dy == 0:
        return mask
    h, w = mask.shape
    m = np.float32([[1, 0, dx], [0, 1, dy]])
    return cv2.warpAffine(
        mask, m, (w, h),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=float(fill)
    )


class Shape(ABC):
    """Shadow variant bound to a drawable state.

    Attributes
    ----------
    drawable_state : NumorphShapeDrawableState
        Source of elevation, colors, appearance and blur provider
    generation : int
        Incremented every time the shadow bitmaps are rebuilt
    """

    def __init__(self, drawable_state):
        self.drawable_state = drawable_state
        self.generation = 0

    def set_drawable_state(self, drawable_state) -> None:
        """Rebind after copy-on-write; cached bitmaps are kept."""
        self.drawable_state = drawable_state

    @abstractmethod
    def update_shadow_bitmap(self, bounds: Rect) -> None:
        """Rebuild the shadow bitmaps for internal ``bounds``."""

    @abstractmethod
    def draw(self, canvas: Canvas, outline_path: OutlinePath) -> None:
        """Composite the shadow bitmaps onto ``canvas``."""

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    def _blur(self, bitmap: np.ndarray, radius: float) -> np.ndarray:
        if self.drawable_state.in_edit_mode:
            return bitmap
        return self.drawable_state.blur_provider.blur(bitmap, radius)

    def _local_mask(self, bounds: Rect, margin: int) -> Tuple[Optional[np.ndarray], Tuple[float, float]]:
        """Outline coverage in the padded local frame, plus the frame origin."""
        width = int(math.ceil(bounds.width)) + 2 * margin
        height = int(math.ceil(bounds.height)) + 2 * margin
        origin = (bounds.left - margin, bounds.top - margin)
        if bounds.is_empty():
            return None, origin

        local = Rect(margin, margin, margin + bounds.width, margin + bounds.height)
        state = self.drawable_state
        path = compute_outline(local, state.shape_appearance_model, state.shadow_elevation)
        return path.coverage(width, height), origin

    def __repr__(self) -> str:
        return f"{type(self).__name__}(generation={self.generation})"
