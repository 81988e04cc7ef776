"""YAML schema validation and style loading.

Provides centralized validation for style files using pydantic:
    - Shape appearance (corner family, global and per-corner radii)
    - Color state lists (single color or ordered state → color entries)
    - Drawable style (numorph_style.v1): shape type, shadow, fill/stroke,
      insets, alpha, translation Z, flags, blur settings

This is the library's styled-attribute source: widgets and scripts load a
style once and apply it; every range check happens here so that a bad file
fails fast with the offending key and expected range.

Units:
    - Lengths: device pixels (px)
    - Colors: "#RRGGBB", "#AARRGGBB" or ARGB int
    - Alpha: [0, 255]

Usage:
    from numorph.utils import validators
    style = validators.load_style_config("configs/styles/default.v1.yaml")
"""

from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .color import parse_color

SHAPE_TYPES = ("flat", "pressed", "basin")
CORNER_FAMILIES = ("rounded", "oval")
PAINT_STYLES = ("fill", "stroke", "fill_and_stroke")
KNOWN_STATES = ("pressed", "focused", "enabled", "checked", "selected", "hovered")

# Per-edge inset value meaning "use the global inset"
INSET_UNSET = -1


# ============================================================================
# COLORS
# ============================================================================

class StateColorEntry(BaseModel):
    """One entry of a color state list.

    ``states`` lists required states; a leading "!" requires the state to be
    absent. An empty list matches every state (use it for the fallback entry).
    """
    states: List[str] = Field(default_factory=list, description="Required states")
    color: int = Field(..., description="ARGB color")

    @field_validator('color', mode='before')
    @classmethod
    def parse_color_value(cls, v: Any) -> int:
        return parse_color(v)

    @field_validator('states')
    @classmethod
    def validate_states(cls, v: List[str]) -> List[str]:
        for state in v:
            name = state[1:] if state.startswith('!') else state
            if name not in KNOWN_STATES:
                raise ValueError(f"Unknown state '{state}', expected one of {KNOWN_STATES}")
        return v


def _normalize_state_colors(v: Any) -> Any:
    """Accept a bare color as a one-entry state list."""
    if v is None or isinstance(v, list):
        return v
    return [{'states': [], 'color': v}]


# ============================================================================
# SHAPE APPEARANCE
# ============================================================================

class ShapeAppearanceV1(BaseModel):
    """Corner family and radii. Unset per-corner radii inherit ``corner_radius``."""
    model_config = ConfigDict(extra='forbid')

    corner_family: str = Field("rounded", description="rounded | oval")
    corner_radius: Optional[float] = Field(None, ge=0.0, description="Global radius (px)")
    corner_radius_top_left: Optional[float] = Field(None, ge=0.0)
    corner_radius_top_right: Optional[float] = Field(None, ge=0.0)
    corner_radius_bottom_right: Optional[float] = Field(None, ge=0.0)
    corner_radius_bottom_left: Optional[float] = Field(None, ge=0.0)

    @field_validator('corner_family')
    @classmethod
    def validate_corner_family(cls, v: str) -> str:
        if v not in CORNER_FAMILIES:
            raise ValueError(f"corner_family must be one of {CORNER_FAMILIES}, got '{v}'")
        return v


# ============================================================================
# BLUR
# ============================================================================

class BlurV1(BaseModel):
    """Blur provider settings."""
    model_config = ConfigDict(extra='forbid')

    max_radius: float = Field(25.0, gt=0.0, description="Largest radius blurred at full resolution")
    sampling: int = Field(1, ge=1, description="Extra downsampling factor")


# ============================================================================
# STYLE V1
# ============================================================================

class NumorphStyleV1(BaseModel):
    """Complete drawable/widget style (numorph_style.v1 schema)."""
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    schema_version: str = Field("numorph_style.v1", alias="schema")
    shape_appearance: ShapeAppearanceV1 = Field(default_factory=ShapeAppearanceV1)
    shape_type: str = Field("flat", description="flat | pressed | basin")
    shadow_elevation: float = Field(0.0, ge=0.0, description="Shadow elevation (px)")
    shadow_color_light: int = Field(0xFFFFFFFF, description="Light shadow ARGB")
    shadow_color_dark: int = Field(0xFFA3B1C6, description="Dark shadow ARGB")
    fill_color: Optional[List[StateColorEntry]] = None
    stroke_color: Optional[List[StateColorEntry]] = None
    stroke_width: float = Field(0.0, ge=0.0, description="Stroke width (px)")
    paint_style: str = Field("fill_and_stroke", description="fill | stroke | fill_and_stroke")
    inset: int = Field(0, ge=0, description="Global inset (px)")
    inset_start: int = Field(INSET_UNSET, ge=INSET_UNSET)
    inset_top: int = Field(INSET_UNSET, ge=INSET_UNSET)
    inset_end: int = Field(INSET_UNSET, ge=INSET_UNSET)
    inset_bottom: int = Field(INSET_UNSET, ge=INSET_UNSET)
    alpha: int = Field(255, ge=0, le=255)
    translation_z: float = 0.0
    no_shadow: bool = False
    in_edit_mode: bool = False
    blur: BlurV1 = Field(default_factory=BlurV1)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "numorph_style.v1":
            raise ValueError(f"Expected schema 'numorph_style.v1', got '{v}'")
        return v

    @field_validator('shape_type')
    @classmethod
    def validate_shape_type(cls, v: str) -> str:
        if v not in SHAPE_TYPES:
            raise ValueError(f"shape_type must be one of {SHAPE_TYPES}, got '{v}'")
        return v

    @field_validator('paint_style')
    @classmethod
    def validate_paint_style(cls, v: str) -> str:
        if v not in PAINT_STYLES:
            raise ValueError(f"paint_style must be one of {PAINT_STYLES}, got '{v}'")
        return v

    @field_validator('shadow_color_light', 'shadow_color_dark', mode='before')
    @classmethod
    def parse_shadow_color(cls, v: Any) -> int:
        return parse_color(v)

    @field_validator('fill_color', 'stroke_color', mode='before')
    @classmethod
    def normalize_state_colors(cls, v: Any) -> Any:
        return _normalize_state_colors(v)

    def resolved_insets(self) -> tuple:
        """(left, top, right, bottom) with the -1 sentinel replaced by ``inset``."""
        return tuple(
            edge if edge >= 0 else self.inset
            for edge in (self.inset_start, self.inset_top, self.inset_end, self.inset_bottom)
        )


def validate_style(data: Union[dict, None]) -> NumorphStyleV1:
    """Validate an in-memory style mapping.

    Raises
    ------
    ValueError
        If validation fails (pydantic message included)
    """
    try:
        return NumorphStyleV1(**(data or {}))
    except ValidationError as e:
        raise ValueError(f"Style validation failed: {e}") from e


def load_style_config(path: Union[str, Path]) -> NumorphStyleV1:
    """Load and validate a style file from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to a numorph_style.v1 YAML file

    Returns
    -------
    NumorphStyleV1
        Validated style

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Style config not found: {path}")

    data = fs.load_yaml(path)
    try:
        return NumorphStyleV1(**data)
    except ValidationError as e:
        raise ValueError(f"Style config validation failed at {path}: {e}") from e
