"""Paint: color, style and stroke width used to draw a path."""

import enum

import numpy as np

from ..utils import color as color_utils


class PaintStyle(enum.Enum):
    """How a path is painted. Values match the style-file strings."""
    FILL = "fill"
    STROKE = "stroke"
    FILL_AND_STROKE = "fill_and_stroke"

    @property
    def fills(self) -> bool:
        return self in (PaintStyle.FILL, PaintStyle.FILL_AND_STROKE)

    @property
    def strokes(self) -> bool:
        return self in (PaintStyle.STROKE, PaintStyle.FILL_AND_STROKE)


class Paint:
    """Mutable paint state.

    Attributes
    ----------
    color : int
        ARGB color; ``alpha`` reads and writes its top byte
    style : PaintStyle
        Fill, stroke or both
    stroke_width : float
        Stroke width in px (centered on the path)
    anti_alias : bool
        Rasterize with anti-aliased edges
    """

    def __init__(
        self,
        color: int = color_utils.TRANSPARENT,
        style: PaintStyle = PaintStyle.FILL,
        stroke_width: float = 0.0,
        anti_alias: bool = True
    ):
        self.color = color
        self.style = style
        self.stroke_width = stroke_width
        self.anti_alias = anti_alias

    @property
    def alpha(self) -> int:
        return color_utils.alpha(self.color)

    @alpha.setter
    def alpha(self, value: int) -> None:
        self.color = color_utils.with_alpha(self.color, value)

    def premultiplied(self) -> np.ndarray:
        """Paint color as premultiplied float RGBA, shape (4,)."""
        return color_utils.to_premultiplied(self.color)

    def __repr__(self) -> str:
        return (
            f"Paint(color={color_utils.to_hex(self.color)}, style={self.style.name}, "
            f"stroke_width={self.stroke_width})"
        )
