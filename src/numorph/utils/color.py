"""ARGB color packing, parsing and alpha arithmetic.

Provides:
    - Packing/unpacking of 32-bit ARGB color ints (0xAARRGGBB)
    - Parsing of "#RRGGBB" / "#AARRGGBB" strings from style files
    - Conversion to premultiplied float RGBA for compositing
    - Integer alpha modulation matching the platform paint pipeline

Used by:
    - Paint and ColorStateList: stored colors are ARGB ints
    - Shadow variants: tinting of blurred masks
    - Validators: color fields in style YAML

Invariants:
    - Color ints are unsigned, range [0, 0xFFFFFFFF]
    - Float RGBA is premultiplied, range [0, 1], dtype float32
    - Alpha arithmetic stays in integers (no float rounding drift)
"""

from typing import Union

import numpy as np

TRANSPARENT = 0x00000000
BLACK = 0xFF000000
WHITE = 0xFFFFFFFF

ColorLike = Union[int, str]


def argb(a: int, r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into an ARGB color int.

    Parameters
    ----------
    a, r, g, b : int
        Channel values, range [0, 255]

    Returns
    -------
    int
        Packed color 0xAARRGGBB
    """
    for name, v in (('a', a), ('r', r), ('g', g), ('b', b)):
        if not 0 <= v <= 255:
            raise ValueError(f"Channel {name}={v} out of range [0, 255]")
    return (a << 24) | (r << 16) | (g << 8) | b


def alpha(color: int) -> int:
    return (color >> 24) & 0xFF


def red(color: int) -> int:
    return (color >> 16) & 0xFF


def green(color: int) -> int:
    return (color >> 8) & 0xFF


def blue(color: int) -> int:
    return color & 0xFF


def with_alpha(color: int, a: int) -> int:
    """Return ``color`` with its alpha channel replaced by ``a``."""
    if not 0 <= a <= 255:
        raise ValueError(f"Alpha {a} out of range [0, 255]")
    return (color & 0x00FFFFFF) | (a << 24)


def parse_color(value: ColorLike) -> int:
    """Parse a color from a style value.

    Parameters
    ----------
    value : int or str
        ARGB int, or hex string "#RRGGBB" (opaque) / "#AARRGGBB"

    Returns
    -------
    int
        Packed ARGB color

    Raises
    ------
    ValueError
        If the string is not a recognized hex color or the int is out of range
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid color: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"Color int {value:#x} out of range [0, 0xFFFFFFFF]")
        return value

    text = str(value).strip()
    if not text.startswith('#'):
        raise ValueError(f"Color must start with '#', got {value!r}")
    digits = text[1:]
    if len(digits) not in (6, 8):
        raise ValueError(f"Color must be #RRGGBB or #AARRGGBB, got {value!r}")
    try:
        packed = int(digits, 16)
    except ValueError as e:
        raise ValueError(f"Invalid hex color {value!r}") from e

    if len(digits) == 6:
        packed |= 0xFF000000
    return packed


def to_hex(color: int) -> str:
    """Format an ARGB int as "#AARRGGBB"."""
    return f"#{color & 0xFFFFFFFF:08X}"


def to_premultiplied(color: int) -> np.ndarray:
    """Convert an ARGB int to premultiplied float RGBA.

    Parameters
    ----------
    color : int
        Packed ARGB color

    Returns
    -------
    np.ndarray
        (r*a, g*a, b*a, a), shape (4,), float32, range [0, 1]
    """
    a = alpha(color) / 255.0
    rgb = np.array([red(color), green(color), blue(color)], dtype=np.float32) / 255.0
    return np.concatenate([rgb * a, [a]]).astype(np.float32)


def modulate_alpha(paint_alpha: int, alpha: int) -> int:
    """Scale a paint alpha by a drawable alpha.

    Parameters
    ----------
    paint_alpha : int
        Alpha of the paint, range [0, 255]
    alpha : int
        Drawable alpha, range [0, 255]

    Returns
    -------
    int
        ``(paint_alpha * (alpha + (alpha >> 7))) >> 8``

    Notes
    -----
    ``alpha + (alpha >> 7)`` maps [0, 255] onto [0, 256] so that 255 is an
    exact identity and the division is a shift.
    """
    scale = alpha + (alpha >> 7)
    return (paint_alpha * scale) >> 8
