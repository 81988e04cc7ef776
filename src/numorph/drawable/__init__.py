"""Shape drawable and outline builder.

Modules:
    - outline_builder: compute_outline (bounds, appearance, elevation) → OutlinePath
    - shape_drawable: NumorphShapeDrawable, NumorphShapeDrawableState

Paint order: fill → shadow → stroke → image. Outline and shadow bitmaps are
rebuilt lazily, only on the first draw after a geometry change.
"""
