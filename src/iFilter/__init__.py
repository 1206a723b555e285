"""Load a bundled image, run it through one filter and display the result."""

from __future__ import annotations

from .core.images import RecipeImage, RenderedImage, SourceImage
from .core.pipeline import FilterSpec, apply_filter, try_apply_filter
from .errors import FilterError

__version__ = "0.1.0"

__all__ = [
    "FilterError",
    "FilterSpec",
    "RecipeImage",
    "RenderedImage",
    "SourceImage",
    "__version__",
    "apply_filter",
    "try_apply_filter",
]
