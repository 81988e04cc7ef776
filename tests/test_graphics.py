"""Tests for numorph.graphics: paints, color state lists, paths, canvas, bitmaps.

Test suites:
1. Paint / PaintStyle
2. ColorStateList resolution
3. OutlinePath rasterization and hit testing
4. Canvas clipping and compositing
5. Bitmap conversions
6. Rasterizer (drawable_to_bitmap)

Fixtures:
- canvas: 40×40 transparent canvas
- square: 20×20 square outline at (10, 10)

Run:
    pytest tests/test_graphics.py -v
"""

import numpy as np
import pytest
from PIL import Image

from numorph.graphics import (
    BitmapDrawable,
    Canvas,
    ColorDrawable,
    ColorStateList,
    Outline,
    OutlinePath,
    Paint,
    PaintStyle,
    PathKind,
    create_bitmap,
    drawable_to_bitmap,
    from_image,
    from_rgba_u8,
    scale_bitmap,
    to_image,
    to_rgba_u8,
)
from numorph.utils.geometry import Rect


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def canvas():
    """40×40 transparent canvas."""
    return Canvas(create_bitmap(40, 40))


@pytest.fixture
def square():
    """Square outline covering [10, 30) × [10, 30)."""
    return OutlinePath.round_rect(Rect(10, 10, 30, 30), (0, 0, 0, 0))


# ============================================================================
# PAINT
# ============================================================================

def test_paint_style_flags():
    assert PaintStyle.FILL.fills and not PaintStyle.FILL.strokes
    assert PaintStyle.STROKE.strokes and not PaintStyle.STROKE.fills
    assert PaintStyle.FILL_AND_STROKE.fills and PaintStyle.FILL_AND_STROKE.strokes
    assert PaintStyle("fill_and_stroke") is PaintStyle.FILL_AND_STROKE


def test_paint_alpha_property():
    paint = Paint(0xFF102030)
    assert paint.alpha == 255
    paint.alpha = 64
    assert paint.color == 0x40102030


# ============================================================================
# COLOR STATE LIST
# ============================================================================

def test_value_of_is_not_stateful():
    csl = ColorStateList.value_of(0xFF112233)
    assert not csl.is_stateful
    assert csl.get_color_for_state({"pressed"}, 0) == 0xFF112233
    assert csl.default_color == 0xFF112233


def test_state_resolution_first_match_wins():
    csl = ColorStateList.of([
        (["pressed"], 0xFF000001),
        (["focused"], 0xFF000002),
        ([], 0xFF000003),
    ])
    assert csl.is_stateful
    assert csl.get_color_for_state({"pressed", "focused"}, 0) == 0xFF000001
    assert csl.get_color_for_state({"focused"}, 0) == 0xFF000002
    assert csl.get_color_for_state(set(), 0) == 0xFF000003
    assert csl.default_color == 0xFF000003


def test_state_negation_and_default():
    csl = ColorStateList.of([(["!enabled"], 0xFF888888)])
    assert csl.get_color_for_state(set(), 0xFF000000) == 0xFF888888
    # No entry matches → caller's default
    assert csl.get_color_for_state({"enabled"}, 0xFF000000) == 0xFF000000


def test_color_state_list_value_equality():
    assert ColorStateList.value_of("#ECF0F3") == ColorStateList.value_of(0xFFECF0F3)
    assert ColorStateList.value_of(0xFF000000) != ColorStateList.value_of(0xFF000001)


def test_color_state_list_requires_entries():
    with pytest.raises(ValueError):
        ColorStateList(())


def test_from_entries_none():
    assert ColorStateList.from_entries(None) is None


# ============================================================================
# OUTLINE PATH
# ============================================================================

def test_empty_path(canvas):
    path = OutlinePath.empty()
    assert path.is_empty()
    assert path.vertices().shape == (0, 2)
    assert not path.coverage(10, 10).any()
    assert not path.contains(0, 0)


def test_round_rect_rejects_negative_radius():
    with pytest.raises(ValueError):
        OutlinePath.round_rect(Rect(0, 0, 10, 10), (1, -1, 0, 0))


def test_round_rect_keeps_requested_radii():
    path = OutlinePath.round_rect(Rect(0, 0, 20, 20), (30, 30, 30, 30))
    assert path.kind is PathKind.ROUND_RECT
    assert path.radii == (30.0, 30.0, 30.0, 30.0)


def test_fill_coverage_inside_outside(square):
    mask = square.coverage(40, 40)
    assert mask.shape == (40, 40)
    assert mask.dtype == np.float32
    assert mask[20, 20] == pytest.approx(1.0)
    assert mask[2, 2] == 0.0
    assert mask[35, 35] == 0.0


def test_stroke_coverage_is_a_band(square):
    mask = square.coverage(40, 40, style=PaintStyle.STROKE, stroke_width=2)
    assert mask[20, 20] == 0.0
    assert mask[20, 8:12].max() > 0.5


def test_oval_contains(square):
    oval = OutlinePath.oval(Rect(0, 0, 40, 20))
    assert oval.contains(20, 10)
    assert not oval.contains(1, 1)
    assert square.contains(10, 10)
    assert not square.contains(31, 20)


def test_path_offset():
    path = OutlinePath.oval(Rect(0, 0, 10, 10)).offset(5, 6)
    assert path.bounds == Rect(5, 6, 15, 16)


# ============================================================================
# CANVAS
# ============================================================================

def test_draw_path_fill(canvas, square):
    canvas.draw_path(square, Paint(0xFFFF0000, PaintStyle.FILL))
    np.testing.assert_allclose(canvas.bitmap[20, 20], [1, 0, 0, 1], atol=1e-6)
    np.testing.assert_array_equal(canvas.bitmap[2, 2], [0, 0, 0, 0])


def test_draw_path_transparent_paint_is_noop(canvas, square):
    canvas.draw_path(square, Paint(0x00FF0000, PaintStyle.FILL))
    assert not canvas.bitmap.any()


def test_clipped_out_excludes_path(canvas, square):
    with canvas.clipped_out(square):
        canvas.draw_color(0xFF0000FF)
    assert canvas.save_count == 0
    np.testing.assert_allclose(canvas.bitmap[20, 20], [0, 0, 0, 0], atol=1e-6)
    np.testing.assert_allclose(canvas.bitmap[2, 2], [0, 0, 1, 1], atol=1e-6)


def test_clipped_restricts_to_path(canvas, square):
    with canvas.clipped(square):
        canvas.draw_color(0xFF00FF00)
    np.testing.assert_allclose(canvas.bitmap[20, 20], [0, 1, 0, 1], atol=1e-6)
    np.testing.assert_array_equal(canvas.bitmap[2, 2], [0, 0, 0, 0])


def test_nested_clips_intersect(canvas, square):
    with canvas.clipped(square):
        with canvas.clipped_out(OutlinePath.round_rect(Rect(15, 15, 25, 25), (0, 0, 0, 0))):
            canvas.draw_color(0xFFFFFFFF)
    assert canvas.bitmap[20, 20, 3] == pytest.approx(0.0, abs=1e-6)
    assert canvas.bitmap[12, 12, 3] == pytest.approx(1.0)
    assert canvas.bitmap[2, 2, 3] == 0.0


def test_restore_without_save_raises(canvas):
    with pytest.raises(RuntimeError):
        canvas.restore()


def test_draw_bitmap_crops_offscreen(canvas):
    src = np.ones((10, 10, 4), dtype=np.float32)
    canvas.draw_bitmap(src, -5, -5)
    assert canvas.bitmap[:5, :5, 3].min() == 1.0
    assert canvas.bitmap[5:, :, 3].max() == 0.0
    assert canvas.bitmap[:, 5:, 3].max() == 0.0


def test_draw_bitmap_fully_offscreen_is_noop(canvas):
    canvas.draw_bitmap(np.ones((4, 4, 4), dtype=np.float32), 100, 100)
    assert not canvas.bitmap.any()


def test_draw_bitmap_source_over(canvas):
    canvas.draw_color(0xFF0000FF)
    src = np.zeros((40, 40, 4), dtype=np.float32)
    src[...] = [0.5, 0.0, 0.0, 0.5]  # 50% red, premultiplied
    canvas.draw_bitmap(src, 0, 0)
    np.testing.assert_allclose(canvas.bitmap[0, 0], [0.5, 0.0, 0.5, 1.0], atol=1e-6)


def test_draw_bitmap_rect_scales(canvas):
    src = np.ones((2, 2, 4), dtype=np.float32)
    canvas.draw_bitmap_rect(src, Rect(0, 0, 20, 10))
    assert canvas.bitmap[:10, :20, 3].min() == pytest.approx(1.0)
    assert canvas.bitmap[10:, :, 3].max() == 0.0


def test_canvas_rejects_wrong_dtype():
    with pytest.raises(TypeError):
        Canvas(np.zeros((4, 4, 4), dtype=np.uint8))


# ============================================================================
# BITMAPS
# ============================================================================

def test_u8_roundtrip():
    rgba = np.zeros((2, 3, 4), dtype=np.uint8)
    rgba[0, 0] = [10, 20, 30, 255]
    rgba[0, 1] = [200, 100, 50, 128]
    back = to_rgba_u8(from_rgba_u8(rgba))
    np.testing.assert_array_equal(back[0, 0], rgba[0, 0])
    assert np.abs(back[0, 1].astype(int) - rgba[0, 1].astype(int)).max() <= 1
    np.testing.assert_array_equal(back[1, 2], [0, 0, 0, 0])


def test_from_rgba_u8_premultiplies():
    rgba = np.array([[[255, 255, 255, 0]]], dtype=np.uint8)
    assert not from_rgba_u8(rgba).any()


def test_pillow_roundtrip():
    img = Image.new('RGBA', (5, 4), (255, 0, 0, 255))
    bitmap = from_image(img)
    assert bitmap.shape == (4, 5, 4)
    out = to_image(bitmap)
    assert out.size == (5, 4)
    assert out.getpixel((0, 0)) == (255, 0, 0, 255)


def test_create_bitmap_negative_size():
    with pytest.raises(ValueError):
        create_bitmap(-1, 4)


def test_scale_bitmap_identity_returns_same_object():
    bitmap = create_bitmap(4, 4)
    assert scale_bitmap(bitmap, 4, 4) is bitmap
    assert scale_bitmap(bitmap, 8, 2).shape == (2, 8, 4)


# ============================================================================
# RASTERIZER
# ============================================================================

def test_drawable_to_bitmap_color():
    drawable = ColorDrawable(0xFFFF0000)
    drawable.set_bounds(Rect(3, 3, 7, 7))
    bitmap = drawable_to_bitmap(drawable, 8, 6)
    assert bitmap.shape == (6, 8, 4)
    np.testing.assert_allclose(bitmap[3, 4], [1, 0, 0, 1], atol=1e-6)
    # Bounds restored after rasterization
    assert drawable.get_bounds() == Rect(3, 3, 7, 7)


def test_drawable_to_bitmap_bitmap_drawable():
    src = np.zeros((2, 2, 4), dtype=np.float32)
    src[...] = [0, 1, 0, 1]
    bitmap = drawable_to_bitmap(BitmapDrawable(src), 6, 6)
    np.testing.assert_allclose(bitmap[3, 3], [0, 1, 0, 1], atol=1e-6)


@pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (-1, -1)])
def test_drawable_to_bitmap_rejects_non_positive(width, height):
    with pytest.raises(ValueError):
        drawable_to_bitmap(ColorDrawable(0xFF000000), width, height)


def test_drawable_to_bitmap_none():
    assert drawable_to_bitmap(None, 4, 4) is None


def test_outline_setters():
    outline = Outline()
    assert outline.is_empty()
    outline.set_round_rect(Rect(0, 0, 10, 10), 4.0)
    assert outline.kind == "round_rect"
    assert outline.radius == 4.0
    outline.set_oval(Rect(0, 0, 0, 10))
    assert outline.is_empty()
