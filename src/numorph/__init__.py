"""numorph: neumorphic (soft-UI) shape and shadow rendering.

Renders rounded-rect or oval shapes with soft dual shadows (light source
above-left, dark source below-right) into numpy bitmaps.

Architecture layers (strict one-way dependency):
    component/ → drawable/ → shape/ → {blur, model, graphics}/ → utils/

Key invariants:
    - Bitmaps are premultiplied RGBA float32, shape (H, W, 4), range [0, 1]
    - Colors are packed ARGB ints (0xAARRGGBB)
    - Outline and shadow bitmaps are rebuilt only when geometry changes
    - YAML-only style files, validated with pydantic
"""

__version__ = "1.0.0"

from .drawable.shape_drawable import NumorphShapeDrawable, NumorphShapeDrawableState
from .model.shape_appearance_model import CornerFamily, ShapeAppearanceModel
from .shape import ShapeType

__all__ = [
    'CornerFamily',
    'NumorphShapeDrawable',
    'NumorphShapeDrawableState',
    'ShapeAppearanceModel',
    'ShapeType',
]
