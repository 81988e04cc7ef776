"""Outline builder: (bounds, appearance, elevation) → closed outline path.

Rounded corners grow by the shadow elevation so the blurred halo follows the
corner instead of being cut by a too-tight curve. Hard corners (radius 0)
stay hard.
"""

from ..graphics.path import OutlinePath
from ..model.shape_appearance_model import CornerFamily, ShapeAppearanceModel
from ..utils.geometry import Rect


def inflate_radius(radius: float, elevation: float) -> float:
    """0 stays 0; any other radius grows by ``elevation``."""
    return radius if radius == 0 else radius + elevation


def compute_outline(bounds: Rect, appearance: ShapeAppearanceModel, elevation: float) -> OutlinePath:
    """Build the clockwise outline for ``bounds``.

    Parameters
    ----------
    bounds : Rect
        Internal bounds (insets already applied)
    appearance : ShapeAppearanceModel
        Corner family and radii
    elevation : float
        Shadow elevation in px

    Returns
    -------
    OutlinePath
        Oval inscribed in ``bounds`` or rounded rect with inflated radii;
        empty path for empty bounds
    """
    if bounds.is_empty():
        return OutlinePath.empty()

    if appearance.corner_family == CornerFamily.OVAL:
        return OutlinePath.oval(bounds)

    radii = tuple(inflate_radius(r, elevation) for r in appearance.corner_radii)
    return OutlinePath.round_rect(bounds, radii)
