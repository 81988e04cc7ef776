"""Bitmap blur service."""

from .blur_provider import BlurProvider, radius_to_sigma

__all__ = ['BlurProvider', 'radius_to_sigma']
