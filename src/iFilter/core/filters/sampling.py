"""Nearest-neighbour sampling shared by the geometric filters."""

from __future__ import annotations

import numpy as np

from ..geometry import Extent


def pixel_centres(region: Extent) -> tuple[np.ndarray, np.ndarray]:
    """Return broadcastable ``(ys, xs)`` grids of pixel centre coordinates."""

    ys = np.arange(region.y, region.bottom, dtype=np.float64) + 0.5
    xs = np.arange(region.x, region.right, dtype=np.float64) + 0.5
    return ys[:, None], xs[None, :]


def sample_nearest(
    source: np.ndarray,
    bounds: Extent,
    ys: np.ndarray,
    xs: np.ndarray,
) -> np.ndarray:
    """Gather the pixels of *source* at integer coordinates ``(ys, xs)``.

    *source* covers *bounds*; coordinates are absolute.  Samples that fall
    outside *bounds* are transparent black.
    """

    ys, xs = np.broadcast_arrays(np.asarray(ys, dtype=np.int64), np.asarray(xs, dtype=np.int64))
    local_y = ys - bounds.y
    local_x = xs - bounds.x
    valid = (local_y >= 0) & (local_y < bounds.height) & (local_x >= 0) & (local_x < bounds.width)

    out = np.zeros(ys.shape + (4,), dtype=np.uint8)
    if bounds.is_empty():
        return out
    out[valid] = source[local_y[valid], local_x[valid]]
    return out


__all__ = ["pixel_centres", "sample_nearest"]
