"""Closed outline paths and their rasterization.

An OutlinePath is an immutable description of a closed shape boundary:
either an axis-aligned ellipse or a rounded rectangle with independent
per-corner radii. The radii stored on the path are the requested ones;
overlapping radii are only scaled down when the path is flattened.

Rasterization flattens the path to a clockwise polyline
(utils.geometry) and fills/strokes it with OpenCV at 1/16 px sub-pixel
precision, producing a float coverage mask in [0, 1].

Pixel convention: pixel (i, j) covers [j, j+1) × [i, i+1); polygon
vertices are shifted by -0.5 px before rasterizing because OpenCV samples
at pixel centers.
"""

import enum
from dataclasses import dataclass
from typing import Tuple

import cv2
import numpy as np

from ..utils import geometry
from ..utils.geometry import Rect
from .paint import PaintStyle

# OpenCV fixed-point shift (1/16 px)
_SHIFT = 4
_ONE = 1 << _SHIFT


class PathKind(enum.Enum):
    EMPTY = "empty"
    OVAL = "oval"
    ROUND_RECT = "round_rect"


@dataclass(frozen=True)
class OutlinePath:
    """Closed shape boundary (oval or rounded rect), clockwise."""

    kind: PathKind = PathKind.EMPTY
    rect: Rect = Rect()
    radii: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)

    @classmethod
    def empty(cls) -> "OutlinePath":
        return cls()

    @classmethod
    def oval(cls, rect: Rect) -> "OutlinePath":
        return cls(PathKind.OVAL, rect)

    @classmethod
    def round_rect(
        cls,
        rect: Rect,
        radii: Tuple[float, float, float, float]
    ) -> "OutlinePath":
        """Rounded rect; radii ordered (top_left, top_right, bottom_right, bottom_left)."""
        if any(r < 0 for r in radii):
            raise ValueError(f"Corner radii must be >= 0, got {radii}")
        return cls(PathKind.ROUND_RECT, rect, tuple(float(r) for r in radii))

    def is_empty(self) -> bool:
        return self.kind is PathKind.EMPTY or self.rect.is_empty()

    @property
    def bounds(self) -> Rect:
        return self.rect

    def offset(self, dx: float, dy: float) -> "OutlinePath":
        return OutlinePath(self.kind, self.rect.offset(dx, dy), self.radii)

    def vertices(self, max_err_px: float = 0.25) -> np.ndarray:
        """Flatten to a clockwise polyline, shape (N, 2); empty path → (0, 2)."""
        if self.is_empty():
            return np.zeros((0, 2), dtype=np.float64)
        if self.kind is PathKind.OVAL:
            return geometry.ellipse_polyline(self.rect, max_err_px)
        return geometry.round_rect_polyline(self.rect, self.radii, max_err_px)

    def coverage(
        self,
        width: int,
        height: int,
        style: PaintStyle = PaintStyle.FILL,
        stroke_width: float = 0.0,
        anti_alias: bool = True
    ) -> np.ndarray:
        """Rasterize into a coverage mask.

        Parameters
        ----------
        width, height : int
            Mask size in px
        style : PaintStyle
            FILL: interior; STROKE: band of ``stroke_width`` centered on the
            boundary; FILL_AND_STROKE: union of both
        stroke_width : float
            Stroke width in px (ignored for FILL)
        anti_alias : bool
            Anti-aliased edges, default True

        Returns
        -------
        np.ndarray
            Coverage, shape (height, width), float32, range [0, 1]
        """
        mask = np.zeros((max(height, 0), max(width, 0)), dtype=np.uint8)
        if self.is_empty() or mask.size == 0:
            return mask.astype(np.float32)

        pts = self.vertices() - 0.5
        fixed = np.round(pts * _ONE).astype(np.int32)
        line_type = cv2.LINE_AA if anti_alias else cv2.LINE_8

        if style.fills:
            cv2.fillPoly(mask, [fixed], 255, lineType=line_type, shift=_SHIFT)
        if style.strokes and stroke_width > 0:
            thickness = max(1, int(round(stroke_width)))
            cv2.polylines(mask, [fixed], True, 255, thickness=thickness,
                          lineType=line_type, shift=_SHIFT)

        return mask.astype(np.float32) / 255.0

    def contains(self, x: float, y: float) -> bool:
        """Point-in-outline test (boundary counts as inside)."""
        if self.is_empty():
            return False
        contour = self.vertices().astype(np.float32).reshape(-1, 1, 2)
        return cv2.pointPolygonTest(contour, (float(x), float(y)), False) >= 0
