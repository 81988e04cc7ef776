"""Geometric operations for rectangles and closed outlines.

Provides:
    - Rect (immutable, float edges) and Inset (mutable, int edges)
    - Corner-radius scaling so that adjacent radii never overlap
    - Adaptive flattening of quarter arcs and ellipses to polylines
    - Rounded-rectangle polyline with independent per-corner radii
    - Polygon signed area / winding direction

Used by:
    - Outline builder: outline paths for the drawable and shadows
    - OutlinePath: rasterization via OpenCV
    - Tests: winding and hard-corner checks

All coordinates are device pixels in image frame (top-left origin, +Y down).
In this frame a polygon visited top-left → top-right → bottom-right →
bottom-left is clockwise and has positive shoelace area.

Adaptive flattening uses a chord-error tolerance ``max_err_px``
(default: 0.25 px) like every other curve flattening in the package.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, edges in pixels."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def is_empty(self) -> bool:
        return self.right <= self.left or self.bottom <= self.top

    def inset(self, inset: "Inset") -> "Rect":
        """Shrink by per-edge insets."""
        return Rect(
            self.left + inset.left,
            self.top + inset.top,
            self.right - inset.right,
            self.bottom - inset.bottom,
        )

    def offset(self, dx: float, dy: float) -> "Rect":
        return Rect(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def round_out(self) -> Tuple[int, int, int, int]:
        """Smallest integer rect containing this one."""
        return (
            int(math.floor(self.left)),
            int(math.floor(self.top)),
            int(math.ceil(self.right)),
            int(math.ceil(self.bottom)),
        )


@dataclass
class Inset:
    """Per-edge insets in pixels (extra internal padding)."""

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    def set(self, left: int, top: int, right: int, bottom: int) -> None:
        self.left = left
        self.top = top
        self.right = right
        self.bottom = bottom

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.left, self.top, self.right, self.bottom)


def scale_corner_radii(
    width: float,
    height: float,
    radii: Sequence[float]
) -> Tuple[float, float, float, float]:
    """Scale corner radii down so that no two adjacent corners overlap.

    Parameters
    ----------
    width, height : float
        Rectangle size in px
    radii : sequence of 4 floats
        (top_left, top_right, bottom_right, bottom_left)

    Returns
    -------
    tuple of 4 floats
        Radii multiplied by a single common factor in (0, 1]

    Notes
    -----
    Same rule as the platform rounded rect: for each side, if the sum of the
    two radii touching it exceeds the side, all radii are scaled by
    side / sum (smallest factor wins). Zero radii stay zero.
    """
    tl, tr, br, bl = (float(r) for r in radii)
    scale = 1.0
    for side, a, b in (
        (width, tl, tr),
        (height, tr, br),
        (width, br, bl),
        (height, bl, tl),
    ):
        total = a + b
        if total > side and total > 0:
            scale = min(scale, max(side, 0.0) / total)
    return (tl * scale, tr * scale, br * scale, bl * scale)


def arc_segments(radius: float, sweep_rad: float, max_err_px: float = 0.25) -> int:
    """Number of chords needed to flatten an arc within ``max_err_px``.

    Notes
    -----
    Sagitta of a chord spanning angle θ is r(1 - cos(θ/2)); solving for the
    largest θ with sagitta ≤ max_err_px gives the step.
    """
    if radius <= max_err_px:
        return 1
    step = 2.0 * math.acos(1.0 - max_err_px / radius)
    return max(1, int(math.ceil(abs(sweep_rad) / step)))


def _arc(
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    start_rad: float,
    sweep_rad: float,
    max_err_px: float,
    include_end: bool = True
) -> np.ndarray:
    n = arc_segments(max(rx, ry), sweep_rad, max_err_px)
    t = np.linspace(start_rad, start_rad + sweep_rad, n + 1)
    if not include_end:
        t = t[:-1]
    return np.stack([cx + rx * np.cos(t), cy + ry * np.sin(t)], axis=1)


def round_rect_polyline(
    rect: Rect,
    radii: Sequence[float],
    max_err_px: float = 0.25
) -> np.ndarray:
    """Flatten a rounded rectangle into a clockwise closed polyline.

    Parameters
    ----------
    rect : Rect
        Outer rectangle
    radii : sequence of 4 floats
        (top_left, top_right, bottom_right, bottom_left) in px
    max_err_px : float
        Maximum chord deviation, default 0.25 px

    Returns
    -------
    np.ndarray
        Vertices, shape (N, 2), first vertex not repeated at the end

    Notes
    -----
    A zero radius produces the exact rectangle corner vertex (hard corner).
    Radii are scaled with scale_corner_radii before flattening.
    """
    tl, tr, br, bl = scale_corner_radii(rect.width, rect.height, radii)
    l, t, r, b = rect.left, rect.top, rect.right, rect.bottom
    half_pi = 0.5 * math.pi

    parts = []
    # Angles measured in image frame: 0 → +x, π/2 → +y (down)
    for radius, cx, cy, start in (
        (tl, l + tl, t + tl, math.pi),
        (tr, r - tr, t + tr, 1.5 * math.pi),
        (br, r - br, b - br, 0.0),
        (bl, l + bl, b - bl, half_pi),
    ):
        if radius <= 0:
            parts.append(np.array([[cx, cy]], dtype=np.float64))
        else:
            parts.append(_arc(cx, cy, radius, radius, start, half_pi, max_err_px))
    return np.concatenate(parts, axis=0)


def ellipse_polyline(rect: Rect, max_err_px: float = 0.25) -> np.ndarray:
    """Flatten the ellipse inscribed in ``rect`` into a clockwise polyline.

    Returns
    -------
    np.ndarray
        Vertices, shape (N, 2), starting at the leftmost point
    """
    rx = 0.5 * rect.width
    ry = 0.5 * rect.height
    cx = rect.left + rx
    cy = rect.top + ry
    pts = _arc(cx, cy, rx, ry, math.pi, 2.0 * math.pi, max_err_px, include_end=False)
    if len(pts) < 8:
        pts = _arc_fixed(cx, cy, rx, ry, 8)
    return pts


def _arc_fixed(cx: float, cy: float, rx: float, ry: float, n: int) -> np.ndarray:
    t = math.pi + np.linspace(0.0, 2.0 * math.pi, n, endpoint=False)
    return np.stack([cx + rx * np.cos(t), cy + ry * np.sin(t)], axis=1)


def polygon_signed_area(points: np.ndarray) -> float:
    """Shoelace area of a closed polygon.

    Parameters
    ----------
    points : np.ndarray
        Vertices, shape (N, 2)

    Returns
    -------
    float
        Positive for clockwise winding in image frame (+Y down)
    """
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def is_clockwise(points: np.ndarray) -> bool:
    return polygon_signed_area(points) > 0.0


def polygon_bbox(points: np.ndarray) -> Rect:
    """Bounding box of a polyline."""
    if len(points) == 0:
        return Rect()
    mins = points.min(axis=0)
    maxs = points.max(axis=0)
    return Rect(float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))
