"""Shape appearance model."""

from .shape_appearance_model import Builder, CornerFamily, ShapeAppearanceModel, from_attributes

__all__ = ['Builder', 'CornerFamily', 'ShapeAppearanceModel', 'from_attributes']
