"""Host graphics primitives: paths, paints, canvas and bitmaps.

Bitmaps are premultiplied RGBA float32 arrays, shape (H, W, 4).
"""

from .bitmap import create_bitmap, from_image, from_rgba_u8, scale_bitmap, to_image, to_rgba_u8
from .canvas import Canvas
from .color_state_list import ColorStateList
from .outline import Outline
from .paint import Paint, PaintStyle
from .path import OutlinePath, PathKind
from .rasterizer import BitmapDrawable, ColorDrawable, Paintable, drawable_to_bitmap

__all__ = [
    'BitmapDrawable',
    'Canvas',
    'ColorDrawable',
    'ColorStateList',
    'Outline',
    'OutlinePath',
    'Paint',
    'PaintStyle',
    'Paintable',
    'PathKind',
    'create_bitmap',
    'drawable_to_bitmap',
    'from_image',
    'from_rgba_u8',
    'scale_bitmap',
    'to_image',
    'to_rgba_u8',
]
