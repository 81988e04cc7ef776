"""Headless widgets built on NumorphShapeDrawable.

Modules:
    - image_button: NumorphImageButton (style resolution, shadow toggle,
      corner helpers, layout and rendering)
"""
