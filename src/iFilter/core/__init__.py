"""Core, toolkit independent parts of the filter pipeline."""

from .geometry import Extent
from .images import RecipeImage, RenderedImage, SourceImage, load_asset
from .lifecycle import OnReadyHook
from .pipeline import FilterSpec, apply_filter, try_apply_filter
from .render import RenderContext

__all__ = [
    "Extent",
    "FilterSpec",
    "OnReadyHook",
    "RecipeImage",
    "RenderContext",
    "RenderedImage",
    "SourceImage",
    "apply_filter",
    "load_asset",
    "try_apply_filter",
]
