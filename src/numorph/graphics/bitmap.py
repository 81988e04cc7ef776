"""Bitmap arrays and conversions.

A bitmap is a numpy array of shape (H, W, 4), dtype float32, holding
premultiplied RGBA in [0, 1]. Premultiplied storage keeps blur and
source-over compositing linear (no dark fringes around soft edges).

Conversions to/from 8-bit straight RGBA happen only at I/O boundaries
(PNG export, Pillow images).
"""

from typing import Union

import cv2
import numpy as np
from PIL import Image


def create_bitmap(width: int, height: int) -> np.ndarray:
    """Transparent bitmap, shape (height, width, 4)."""
    if width < 0 or height < 0:
        raise ValueError(f"Bitmap size must be non-negative, got {width}x{height}")
    return np.zeros((height, width, 4), dtype=np.float32)


def bitmap_size(bitmap: np.ndarray) -> tuple:
    """(width, height) of a bitmap."""
    return bitmap.shape[1], bitmap.shape[0]


def validate_bitmap(bitmap: np.ndarray) -> np.ndarray:
    """Check shape and dtype; returns the bitmap unchanged."""
    if not isinstance(bitmap, np.ndarray):
        raise TypeError(f"Bitmap must be np.ndarray, got {type(bitmap).__name__}")
    if bitmap.ndim != 3 or bitmap.shape[2] != 4:
        raise ValueError(f"Bitmap must have shape (H, W, 4), got {bitmap.shape}")
    if bitmap.dtype != np.float32:
        raise TypeError(f"Bitmap must be float32, got {bitmap.dtype}")
    return bitmap


def from_rgba_u8(rgba: np.ndarray) -> np.ndarray:
    """Straight 8-bit RGBA (H, W, 4) → premultiplied float bitmap."""
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"Expected (H, W, 4) RGBA, got {rgba.shape}")
    out = rgba.astype(np.float32) / 255.0
    out[..., :3] *= out[..., 3:4]
    return out


def to_rgba_u8(bitmap: np.ndarray) -> np.ndarray:
    """Premultiplied float bitmap → straight 8-bit RGBA (H, W, 4)."""
    validate_bitmap(bitmap)
    a = bitmap[..., 3:4]
    rgb = np.divide(
        bitmap[..., :3], a,
        out=np.zeros_like(bitmap[..., :3]),
        where=a > 1e-6
    )
    straight = np.concatenate([rgb, a], axis=2)
    return (np.clip(straight, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)


def from_image(image: Image.Image) -> np.ndarray:
    """Pillow image (any mode) → premultiplied float bitmap."""
    return from_rgba_u8(np.asarray(image.convert('RGBA'), dtype=np.uint8))


def to_image(bitmap: np.ndarray) -> Image.Image:
    """Premultiplied float bitmap → Pillow RGBA image."""
    return Image.fromarray(to_rgba_u8(bitmap))


def as_bitmap(source: Union[np.ndarray, Image.Image]) -> np.ndarray:
    """Accept a float bitmap or a Pillow image."""
    if isinstance(source, Image.Image):
        return from_image(source)
    return validate_bitmap(source)


def scale_bitmap(bitmap: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize to (width, height); area filter when shrinking, bilinear otherwise."""
    src_w, src_h = bitmap_size(bitmap)
    if (src_w, src_h) == (width, height):
        return bitmap
    if width <= 0 or height <= 0:
        return create_bitmap(max(width, 0), max(height, 0))
    shrinking = width < src_w or height < src_h
    interpolation = cv2.INTER_AREA if shrinking else cv2.INTER_LINEAR
    return cv2.resize(bitmap, (width, height), interpolation=interpolation)
