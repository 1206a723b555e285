"""Sepia tone filter."""

from __future__ import annotations

import numpy as np

from ..geometry import Extent
from ..images import RecipeImage
from .base import INTENSITY, ImageFilter
from .registry import register_filter

_SEPIA_MATRIX = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float32,
)


def apply_sepia(pixels: np.ndarray, intensity: float) -> np.ndarray:
    """Return *pixels* blended towards sepia by *intensity* in ``[0, 1]``.

    Alpha is copied through untouched.
    """

    amount = float(max(0.0, min(1.0, intensity)))
    out = np.array(pixels, dtype=np.uint8, copy=True)
    if amount <= 0.0 or out.size == 0:
        return out

    rgb = out[..., :3].astype(np.float32)
    toned = rgb @ _SEPIA_MATRIX.T
    mixed = rgb * np.float32(1.0 - amount) + toned * np.float32(amount)
    out[..., :3] = np.clip(np.rint(mixed), 0.0, 255.0).astype(np.uint8)
    return out


@register_filter("sepia")
class SepiaTone(ImageFilter):
    """Map colours through a sepia tone matrix."""

    parameter_defaults = {INTENSITY: 1.0}

    def _build_output(self, image: RecipeImage) -> RecipeImage:
        intensity = self._values[INTENSITY]

        def produce(region: Extent) -> np.ndarray:
            return apply_sepia(image.materialize(region), intensity)

        return RecipeImage(
            image.extent,
            produce,
            description=f"{image.description} | sepia(intensity={intensity:g})",
        )


__all__ = ["SepiaTone", "apply_sepia"]
