"""Crystallize filter: Voronoi cells coloured from their seed pixel.

Seeds sit on a jittered grid of spacing ``radius`` anchored at the centre
parameter.  The jitter comes from an integer hash of the cell coordinates, so
the tessellation is identical on every run.
"""

from __future__ import annotations

import math

import numpy as np
from numba import jit

from ..geometry import Extent
from ..images import RecipeImage
from .base import CENTER, RADIUS, ImageFilter
from .registry import register_filter


@jit(nopython=True, inline="always")
def _hash01(i: int, j: int, salt: int) -> float:
    """Map the lattice cell ``(i, j)`` onto a pseudo random value in ``[0, 1)``."""

    h = (i * 374761393 + j * 668265263 + salt * 2246822519) & 0xFFFFFFFF
    h = ((h ^ (h >> 13)) * 1274126177) & 0xFFFFFFFF
    h = h ^ (h >> 16)
    return h / 4294967296.0


@jit(nopython=True, cache=True)
def _crystallize_kernel(
    source: np.ndarray,
    bounds_x: int,
    bounds_y: int,
    out: np.ndarray,
    region_x: int,
    region_y: int,
    radius: float,
    cx: float,
    cy: float,
) -> None:
    """Fill *out* with the colour of the nearest seed for every pixel."""

    src_h = source.shape[0]
    src_w = source.shape[1]
    out_h = out.shape[0]
    out_w = out.shape[1]
    if src_h <= 0 or src_w <= 0:
        return

    for oy in range(out_h):
        py = region_y + oy + 0.5
        cell_j = int(math.floor((py - cy) / radius))
        for ox in range(out_w):
            px = region_x + ox + 0.5
            cell_i = int(math.floor((px - cx) / radius))

            best = 1.0e300
            seed_x = px
            seed_y = py
            for dj in range(-1, 2):
                for di in range(-1, 2):
                    gi = cell_i + di
                    gj = cell_j + dj
                    sx = cx + (gi + _hash01(gi, gj, 0)) * radius
                    sy = cy + (gj + _hash01(gi, gj, 1)) * radius
                    distance = (sx - px) * (sx - px) + (sy - py) * (sy - py)
                    if distance < best:
                        best = distance
                        seed_x = sx
                        seed_y = sy

            ix = int(math.floor(seed_x)) - bounds_x
            iy = int(math.floor(seed_y)) - bounds_y
            if ix < 0:
                ix = 0
            elif ix >= src_w:
                ix = src_w - 1
            if iy < 0:
                iy = 0
            elif iy >= src_h:
                iy = src_h - 1

            for channel in range(4):
                out[oy, ox, channel] = source[iy, ix, channel]


def apply_crystallize(
    source: np.ndarray,
    bounds: Extent,
    region: Extent,
    radius: float,
    center: tuple[float, float],
) -> np.ndarray:
    """Return *region* of *source* tessellated into cells of roughly *radius*."""

    out = np.zeros((region.height, region.width, 4), dtype=np.uint8)
    if region.is_empty() or bounds.is_empty():
        return out
    _crystallize_kernel(
        np.ascontiguousarray(source, dtype=np.uint8),
        int(bounds.x),
        int(bounds.y),
        out,
        int(region.x),
        int(region.y),
        float(max(1.0, radius)),
        float(center[0]),
        float(center[1]),
    )
    return out


@register_filter("crystallize")
class Crystallize(ImageFilter):
    """Break the image into polygonal, single coloured crystals."""

    parameter_defaults = {RADIUS: 20.0, CENTER: None}

    def _build_output(self, image: RecipeImage) -> RecipeImage:
        radius = self._values[RADIUS]
        center = self._center_for(image)
        bounds = image.extent

        def produce(region: Extent) -> np.ndarray:
            return apply_crystallize(image.materialize(bounds), bounds, region, radius, center)

        return RecipeImage(
            bounds,
            produce,
            description=f"{image.description} | crystallize(radius={radius:g})",
        )


__all__ = ["Crystallize", "apply_crystallize"]
