"""Reusable widgets for the iFilter window."""

from .filtered_image_view import FilteredImageView

__all__ = ["FilteredImageView"]
