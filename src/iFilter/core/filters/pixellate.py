"""Pixellate filter: square cells filled with the colour at their centre."""

from __future__ import annotations

import numpy as np

from ..geometry import Extent
from ..images import RecipeImage
from .base import CENTER, SCALE, ImageFilter
from .registry import register_filter
from .sampling import pixel_centres, sample_nearest


def apply_pixellate(
    source: np.ndarray,
    bounds: Extent,
    region: Extent,
    scale: float,
    center: tuple[float, float],
) -> np.ndarray:
    """Return *region* of *source* rendered as cells of side *scale*.

    The cell grid is anchored at *center*.  Cell samples are clamped into
    *bounds* so edge cells never pick up transparent padding.
    """

    size = max(1.0, float(scale))
    cx, cy = center
    ys, xs = pixel_centres(region)

    cell_x = np.floor((xs - cx) / size)
    cell_y = np.floor((ys - cy) / size)
    sample_x = np.floor(cx + (cell_x + 0.5) * size - 0.5)
    sample_y = np.floor(cy + (cell_y + 0.5) * size - 0.5)
    sample_x = np.clip(sample_x, bounds.x, bounds.right - 1)
    sample_y = np.clip(sample_y, bounds.y, bounds.bottom - 1)
    return sample_nearest(source, bounds, sample_y, sample_x)


@register_filter("pixellate")
class Pixellate(ImageFilter):
    """Enlarge pixels into a grid of uniformly coloured squares."""

    parameter_defaults = {SCALE: 8.0, CENTER: None}

    def _build_output(self, image: RecipeImage) -> RecipeImage:
        scale = self._values[SCALE]
        center = self._center_for(image)
        bounds = image.extent

        def produce(region: Extent) -> np.ndarray:
            return apply_pixellate(image.materialize(bounds), bounds, region, scale, center)

        return RecipeImage(
            bounds,
            produce,
            description=f"{image.description} | pixellate(scale={scale:g})",
        )


__all__ = ["Pixellate", "apply_pixellate"]
