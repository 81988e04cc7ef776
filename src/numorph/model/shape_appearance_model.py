"""Shape appearance: corner family and per-corner radii.

Provides:
    - CornerFamily: ROUNDED (rounded rectangle) or OVAL (inscribed ellipse)
    - ShapeAppearanceModel: immutable value, built through Builder
    - from_attributes: model from a validated ``shape_appearance`` style section

Invariants:
    - All radii are >= 0 (ValueError otherwise)
    - Per-corner radii inherit the global radius only at the moment
      ``set_corner``/``set`` is called; changing the global radius later does
      not rewrite corners that were already set
    - OVAL ignores the per-corner radii when outlines are built

Usage:
    model = (ShapeAppearanceModel.builder()
             .set_corner_family(CornerFamily.ROUNDED)
             .set_corner(20.0, bottom_right=0.0)
             .build())
"""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_CORNER_RADIUS = 0.0


class CornerFamily(enum.IntEnum):
    ROUNDED = 0
    OVAL = 1

    @classmethod
    def from_name(cls, name: str) -> "CornerFamily":
        """Parse "rounded"/"oval" (case-insensitive)."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown corner family '{name}'") from None


DEFAULT_CORNER_FAMILY = CornerFamily.ROUNDED


def _check_radius(name: str, value: float) -> float:
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return float(value)


@dataclass(frozen=True)
class ShapeAppearanceModel:
    """Immutable corner description.

    Attributes
    ----------
    corner_family : CornerFamily
        ROUNDED or OVAL
    corner_radius : float
        Global radius in px
    corner_radius_top_left, corner_radius_top_right,
    corner_radius_bottom_right, corner_radius_bottom_left : float
        Per-corner radii in px
    """

    corner_family: CornerFamily = DEFAULT_CORNER_FAMILY
    corner_radius: float = DEFAULT_CORNER_RADIUS
    corner_radius_top_left: float = DEFAULT_CORNER_RADIUS
    corner_radius_top_right: float = DEFAULT_CORNER_RADIUS
    corner_radius_bottom_right: float = DEFAULT_CORNER_RADIUS
    corner_radius_bottom_left: float = DEFAULT_CORNER_RADIUS

    def __post_init__(self):
        object.__setattr__(self, 'corner_family', CornerFamily(self.corner_family))
        for name in ('corner_radius', 'corner_radius_top_left', 'corner_radius_top_right',
                     'corner_radius_bottom_right', 'corner_radius_bottom_left'):
            object.__setattr__(self, name, _check_radius(name, getattr(self, name)))

    @property
    def corner_radii(self) -> Tuple[float, float, float, float]:
        """(top_left, top_right, bottom_right, bottom_left)."""
        return (
            self.corner_radius_top_left,
            self.corner_radius_top_right,
            self.corner_radius_bottom_right,
            self.corner_radius_bottom_left,
        )

    @staticmethod
    def builder(model: Optional["ShapeAppearanceModel"] = None) -> "Builder":
        """New builder, seeded from ``model`` when given."""
        builder = Builder()
        if model is not None:
            builder.set(
                model.corner_family,
                model.corner_radius,
                top_left=model.corner_radius_top_left,
                top_right=model.corner_radius_top_right,
                bottom_right=model.corner_radius_bottom_right,
                bottom_left=model.corner_radius_bottom_left,
            )
        return builder

    def to_builder(self) -> "Builder":
        return ShapeAppearanceModel.builder(self)


class Builder:
    """Mutable builder for ShapeAppearanceModel."""

    def __init__(self):
        self.corner_family = DEFAULT_CORNER_FAMILY
        self.corner_radius = DEFAULT_CORNER_RADIUS
        self.corner_radius_top_left = DEFAULT_CORNER_RADIUS
        self.corner_radius_top_right = DEFAULT_CORNER_RADIUS
        self.corner_radius_bottom_right = DEFAULT_CORNER_RADIUS
        self.corner_radius_bottom_left = DEFAULT_CORNER_RADIUS

    def set(
        self,
        corner_family: CornerFamily,
        corner_radius: float,
        top_left: Optional[float] = None,
        top_right: Optional[float] = None,
        bottom_right: Optional[float] = None,
        bottom_left: Optional[float] = None
    ) -> "Builder":
        """Set family and radii in one call."""
        return self.set_corner_family(corner_family).set_corner(
            corner_radius, top_left, top_right, bottom_right, bottom_left
        )

    def set_corner_family(self, corner_family: CornerFamily) -> "Builder":
        self.corner_family = CornerFamily(corner_family)
        return self

    def set_corner(
        self,
        corner_radius: float = DEFAULT_CORNER_RADIUS,
        top_left: Optional[float] = None,
        top_right: Optional[float] = None,
        bottom_right: Optional[float] = None,
        bottom_left: Optional[float] = None
    ) -> "Builder":
        """Set the global radius; corners left as None take ``corner_radius``."""
        self.corner_radius = corner_radius
        self.corner_radius_top_left = corner_radius if top_left is None else top_left
        self.corner_radius_top_right = corner_radius if top_right is None else top_right
        self.corner_radius_bottom_right = corner_radius if bottom_right is None else bottom_right
        self.corner_radius_bottom_left = corner_radius if bottom_left is None else bottom_left
        return self

    def build(self) -> ShapeAppearanceModel:
        return ShapeAppearanceModel(
            corner_family=self.corner_family,
            corner_radius=self.corner_radius,
            corner_radius_top_left=self.corner_radius_top_left,
            corner_radius_top_right=self.corner_radius_top_right,
            corner_radius_bottom_right=self.corner_radius_bottom_right,
            corner_radius_bottom_left=self.corner_radius_bottom_left,
        )


def from_attributes(attrs, default_corner_radius: float = DEFAULT_CORNER_RADIUS) -> ShapeAppearanceModel:
    """Build a model from a validated ``ShapeAppearanceV1`` section.

    Parameters
    ----------
    attrs : ShapeAppearanceV1 or None
        Style section; None yields the defaults
    default_corner_radius : float
        Global radius used when the section leaves ``corner_radius`` unset

    Returns
    -------
    ShapeAppearanceModel
    """
    if attrs is None:
        return ShapeAppearanceModel.builder().set_corner(default_corner_radius).build()

    radius = attrs.corner_radius if attrs.corner_radius is not None else default_corner_radius
    return (
        ShapeAppearanceModel.builder()
        .set(
            CornerFamily.from_name(attrs.corner_family),
            radius,
            top_left=attrs.corner_radius_top_left,
            top_right=attrs.corner_radius_top_right,
            bottom_right=attrs.corner_radius_bottom_right,
            bottom_left=attrs.corner_radius_bottom_left,
        )
        .build()
    )
