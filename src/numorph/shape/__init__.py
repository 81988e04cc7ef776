"""Shadow variants (Flat, Pressed, Basin) and their selection.

Modules:
    - base: Shape contract and bitmap helpers
    - flat: raised shape, outer halo behind the fill
    - pressed: sunken shape, inner shade over the fill
    - basin: carved shape, both of the above

Invariants:
    - Unknown shape types fail at selection time, never at draw time
    - A variant rebuilds its bitmaps only through update_shadow_bitmap
"""

import enum

from .base import Shape
from .basin import BasinShape
from .flat import FlatShape
from .pressed import PressedShape


class ShapeType(enum.IntEnum):
    FLAT = 0
    PRESSED = 1
    BASIN = 2

    @classmethod
    def from_name(cls, name: str) -> "ShapeType":
        """Parse "flat"/"pressed"/"basin" (case-insensitive)."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown shape type '{name}'") from None


DEFAULT_SHAPE_TYPE = ShapeType.FLAT

_VARIANTS = {
    ShapeType.FLAT: FlatShape,
    ShapeType.PRESSED: PressedShape,
    ShapeType.BASIN: BasinShape,
}


def validate_shape_type(shape_type) -> ShapeType:
    """Coerce to ShapeType; raises ValueError("ShapeType(<v>) is invalid.")."""
    try:
        return ShapeType(shape_type)
    except ValueError:
        raise ValueError(f"ShapeType({shape_type}) is invalid.") from None


def shadow_of(shape_type, drawable_state) -> Shape:
    """Shadow variant for ``shape_type`` bound to ``drawable_state``."""
    return _VARIANTS[validate_shape_type(shape_type)](drawable_state)


__all__ = [
    'BasinShape',
    'DEFAULT_SHAPE_TYPE',
    'FlatShape',
    'PressedShape',
    'Shape',
    'ShapeType',
    'shadow_of',
    'validate_shape_type',
]
