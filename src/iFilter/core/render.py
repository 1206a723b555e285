"""Render context turning lazy recipes into concrete pixel buffers."""

from __future__ import annotations

import logging

import numpy as np

from ..errors import RenderFailedError
from .geometry import Extent
from .images import RecipeImage, RenderedImage

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_PIXELS = 64 * 1024 * 1024
"""Largest extent (in pixels) a context agrees to materialise."""


class RenderContext:
    """Materialise :class:`RecipeImage` instances into :class:`RenderedImage`.

    The context is stateless apart from its pixel budget, so a single instance
    can be reused for every pipeline run.
    """

    def __init__(self, max_pixels: int = DEFAULT_MAX_PIXELS) -> None:
        if max_pixels <= 0:
            raise ValueError("max_pixels must be positive")
        self._max_pixels = int(max_pixels)

    @property
    def max_pixels(self) -> int:
        return self._max_pixels

    def render(self, recipe: RecipeImage, extent: Extent | None = None) -> RenderedImage:
        """Return the pixels of *recipe* bounded by *extent*.

        *extent* defaults to the recipe's natural extent.

        Raises
        ------
        RenderFailedError
            Raised for empty or oversized extents, when the producer runs out
            of memory, or when it returns a buffer of the wrong shape.
        """

        target = recipe.extent if extent is None else extent
        if target.is_empty():
            raise RenderFailedError(f"Cannot render an empty extent: {target}")
        if target.area > self._max_pixels:
            raise RenderFailedError(
                f"Extent {target.width}x{target.height} exceeds the render budget "
                f"of {self._max_pixels} pixels"
            )

        try:
            pixels = recipe.materialize(target)
        except MemoryError as exc:
            raise RenderFailedError(
                f"Out of memory while rendering {recipe.description!r}"
            ) from exc

        pixels = np.asarray(pixels)
        expected = (target.height, target.width, 4)
        if pixels.shape != expected:
            raise RenderFailedError(
                f"Renderer produced a {pixels.shape} buffer, expected {expected}"
            )
        if pixels.dtype != np.uint8:
            raise RenderFailedError(f"Renderer produced {pixels.dtype} pixels, expected uint8")

        _LOGGER.debug("Rendered %s over %s", recipe.description, target)
        return RenderedImage(pixels, target)


__all__ = ["DEFAULT_MAX_PIXELS", "RenderContext"]
