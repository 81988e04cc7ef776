"""Tests for style validation (numorph.utils.validators).

Test suites:
1. Shipped default style loads
2. Defaults and normalization (bare colors, inset sentinel)
3. Rejection of invalid values with clear messages
4. File-level errors

Run:
    pytest tests/test_validators.py -v
"""

from pathlib import Path

import pytest
import yaml

from numorph.utils import validators


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(scope="module")
def project_root():
    """Project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def write_style(tmp_path):
    """Write a style mapping to YAML and return its path."""
    def _write(data, name="style.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data))
        return path
    return _write


# ============================================================================
# DEFAULT STYLE
# ============================================================================

def test_load_default_style(project_root):
    style = validators.load_style_config(project_root / "configs" / "styles" / "default.v1.yaml")
    assert style.schema_version == "numorph_style.v1"
    assert style.shape_type == "flat"
    assert style.shape_appearance.corner_family == "rounded"
    assert style.shape_appearance.corner_radius == 24.0
    assert style.shadow_color_dark == 0xFFA3B1C6
    assert style.fill_color[0].states == ["pressed"]
    assert style.fill_color[1].color == 0xFFECF0F3
    assert style.resolved_insets() == (12, 12, 12, 12)


def test_empty_mapping_uses_defaults():
    style = validators.validate_style({})
    assert style.shape_type == "flat"
    assert style.shadow_elevation == 0.0
    assert style.shadow_color_light == 0xFFFFFFFF
    assert style.paint_style == "fill_and_stroke"
    assert style.alpha == 255
    assert style.fill_color is None
    assert style.blur.max_radius == 25.0
    assert style.blur.sampling == 1


# ============================================================================
# NORMALIZATION
# ============================================================================

def test_bare_color_becomes_single_entry_list():
    style = validators.validate_style({'fill_color': "#ECF0F3"})
    assert len(style.fill_color) == 1
    assert style.fill_color[0].states == []
    assert style.fill_color[0].color == 0xFFECF0F3


def test_state_entries_accept_negation():
    style = validators.validate_style({
        'stroke_color': [
            {'states': ['!enabled'], 'color': '#FF888888'},
            {'color': 0xFF000000},
        ]
    })
    assert style.stroke_color[0].states == ['!enabled']
    assert style.stroke_color[1].states == []


def test_inset_sentinel_resolves_to_global_inset():
    style = validators.validate_style({'inset': 8, 'inset_top': 2, 'inset_end': 0})
    assert style.resolved_insets() == (8, 2, 0, 8)


# ============================================================================
# REJECTION
# ============================================================================

@pytest.mark.parametrize("data, key", [
    ({'shape_type': 'convex'}, 'shape_type'),
    ({'paint_style': 'outline'}, 'paint_style'),
    ({'alpha': 256}, 'alpha'),
    ({'shadow_elevation': -1.0}, 'shadow_elevation'),
    ({'inset_start': -2}, 'inset_start'),
    ({'shape_appearance': {'corner_family': 'square'}}, 'corner_family'),
    ({'shape_appearance': {'corner_radius': -4}}, 'corner_radius'),
    ({'fill_color': [{'states': ['dragged'], 'color': '#FFFFFF'}]}, 'states'),
    ({'shadow_color_dark': 'A3B1C6'}, 'shadow_color_dark'),
    ({'schema': 'numorph_style.v2'}, 'schema'),
    ({'unknown_key': 1}, 'unknown_key'),
    ({'blur': {'sampling': 0}}, 'sampling'),
])
def test_invalid_values_rejected(data, key):
    with pytest.raises(ValueError) as exc_info:
        validators.validate_style(data)
    assert key in str(exc_info.value)


# ============================================================================
# FILES
# ============================================================================

def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        validators.load_style_config(tmp_path / "missing.yaml")


def test_load_invalid_file_names_path(write_style):
    path = write_style({'schema': 'numorph_style.v1', 'shape_type': 'convex'})
    with pytest.raises(ValueError) as exc_info:
        validators.load_style_config(path)
    assert str(path) in str(exc_info.value)


def test_load_minimal_file(write_style):
    path = write_style({'schema': 'numorph_style.v1', 'shape_type': 'basin', 'shadow_elevation': 4})
    style = validators.load_style_config(path)
    assert style.shape_type == "basin"
    assert style.shadow_elevation == 4.0
