"""Twirl distortion filter."""

from __future__ import annotations

import math

import numpy as np

from ..geometry import Extent
from ..images import RecipeImage
from .base import ANGLE, CENTER, RADIUS, ImageFilter
from .registry import register_filter
from .sampling import pixel_centres, sample_nearest


def twirl_extent(bounds: Extent, center: tuple[float, float], radius: float) -> Extent:
    """Return *bounds* grown to cover the disc the twirl can write into."""

    if radius <= 0.0:
        return bounds
    cx, cy = center
    left = int(math.floor(cx - radius))
    top = int(math.floor(cy - radius))
    right = int(math.ceil(cx + radius))
    bottom = int(math.ceil(cy + radius))
    return bounds.union(Extent(left, top, right - left, bottom - top))


def apply_twirl(
    source: np.ndarray,
    bounds: Extent,
    region: Extent,
    center: tuple[float, float],
    radius: float,
    angle: float,
) -> np.ndarray:
    """Return *region* of the twirled *source*.

    Each output pixel at distance ``d < radius`` from *center* samples the
    input rotated by ``angle * (1 - d / radius)``; the rotation fades to zero at
    the rim so the distortion blends into the untouched surroundings.
    """

    ys, xs = pixel_centres(region)
    if radius <= 0.0:
        return sample_nearest(source, bounds, np.floor(ys), np.floor(xs))

    cx, cy = center
    dx = xs - cx
    dy = ys - cy
    distance = np.hypot(dx, dy)
    falloff = np.clip(1.0 - distance / radius, 0.0, 1.0)
    theta = angle * falloff

    cos_t = np.cos(theta)
    sin_t = np.sin(theta)
    sample_x = cx + dx * cos_t - dy * sin_t
    sample_y = cy + dx * sin_t + dy * cos_t
    return sample_nearest(source, bounds, np.floor(sample_y), np.floor(sample_x))


@register_filter("twirl")
class TwirlDistortion(ImageFilter):
    """Rotate pixels around a centre point, strongest at the centre."""

    parameter_defaults = {RADIUS: 300.0, ANGLE: math.pi, CENTER: None}

    def _build_output(self, image: RecipeImage) -> RecipeImage:
        radius = max(0.0, self._values[RADIUS])
        angle = self._values[ANGLE]
        center = self._center_for(image)
        bounds = image.extent

        def produce(region: Extent) -> np.ndarray:
            return apply_twirl(image.materialize(bounds), bounds, region, center, radius, angle)

        return RecipeImage(
            twirl_extent(bounds, center, radius),
            produce,
            description=(
                f"{image.description} | twirl(radius={radius:g}, angle={angle:g}, "
                f"center=({center[0]:g}, {center[1]:g}))"
            ),
        )


__all__ = ["TwirlDistortion", "apply_twirl", "twirl_extent"]
