"""Gaussian blur for shadow bitmaps.

Blur radius maps to a Gaussian sigma the same way the platform intrinsic
does: ``sigma = 0.4 * radius + 0.6``. Radii above ``max_radius`` are blurred
on a downsampled copy (factor ``ceil(radius / max_radius)``) and scaled back;
``sampling`` adds a fixed extra downsampling factor for cheap previews.

Radius <= 0 is a no-op and returns the very same array.
"""

import logging
import math

import cv2
import numpy as np

from ..graphics.bitmap import bitmap_size, scale_bitmap

logger = logging.getLogger(__name__)

DEFAULT_MAX_RADIUS = 25.0
DEFAULT_SAMPLING = 1


def radius_to_sigma(radius: float) -> float:
    return 0.4 * radius + 0.6


class BlurProvider:
    """Synchronous bitmap blur service.

    Parameters
    ----------
    max_radius : float
        Largest radius blurred at full resolution, > 0
    sampling : int
        Extra downsampling factor, >= 1

    Notes
    -----
    Stateless apart from its settings; a single instance is shared by every
    clone of a drawable state.
    """

    def __init__(self, max_radius: float = DEFAULT_MAX_RADIUS, sampling: int = DEFAULT_SAMPLING):
        if max_radius <= 0:
            raise ValueError(f"max_radius must be > 0, got {max_radius}")
        if sampling < 1:
            raise ValueError(f"sampling must be >= 1, got {sampling}")
        self.max_radius = float(max_radius)
        self.sampling = int(sampling)

    @classmethod
    def from_settings(cls, settings) -> "BlurProvider":
        """Build from a validated ``BlurV1`` style section."""
        return cls(max_radius=settings.max_radius, sampling=settings.sampling)

    def downsample_factor(self, radius: float) -> int:
        return max(1, math.ceil(radius / self.max_radius)) * self.sampling

    def blur(self, bitmap: np.ndarray, radius: float) -> np.ndarray:
        """Blur ``bitmap`` by ``radius`` px.

        Parameters
        ----------
        bitmap : np.ndarray
            Premultiplied RGBA float32, shape (H, W, 4), or a single-channel
            float32 mask, shape (H, W)
        radius : float
            Blur radius in px

        Returns
        -------
        np.ndarray
            New blurred bitmap of the same shape, or ``bitmap`` itself when
            ``radius <= 0`` or the bitmap is empty
        """
        if radius <= 0 or bitmap.size == 0:
            return bitmap

        width, height = bitmap_size(bitmap)
        factor = self.downsample_factor(radius)
        if factor == 1:
            return self._gaussian(bitmap, radius)

        small_w = max(1, math.ceil(width / factor))
        small_h = max(1, math.ceil(height / factor))
        small = scale_bitmap(bitmap, small_w, small_h)
        blurred = self._gaussian(small, radius / factor)
        logger.debug(f"Blur r={radius:.1f} at 1/{factor} scale ({small_w}x{small_h})")
        return scale_bitmap(blurred, width, height)

    @staticmethod
    def _gaussian(bitmap: np.ndarray, radius: float) -> np.ndarray:
        sigma = radius_to_sigma(radius)
        return cv2.GaussianBlur(
            bitmap, (0, 0), sigmaX=sigma, sigmaY=sigma,
            borderType=cv2.BORDER_REPLICATE
        )

    def __repr__(self) -> str:
        return f"BlurProvider(max_radius={self.max_radius}, sampling={self.sampling})"
