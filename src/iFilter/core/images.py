"""Image representations flowing through the filter pipeline.

Three value types keep the stages apart:

- :class:`SourceImage` owns the decoded asset pixels and never changes.
- :class:`RecipeImage` only *describes* pixel content.  It references its
  inputs and a producer callable, and computes nothing until
  :meth:`RecipeImage.materialize` is called for a region.
- :class:`RenderedImage` is the concrete buffer a render context produced
  from a recipe.

All buffers are ``uint8`` RGBA arrays shaped ``(height, width, 4)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Callable, Union

import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from ..errors import SourceLoadFailedError
from .geometry import Extent

_LOGGER = logging.getLogger(__name__)

Producer = Callable[[Extent], np.ndarray]
"""Callable returning the RGBA pixels of a recipe for the requested region."""


def _freeze(pixels: np.ndarray) -> np.ndarray:
    array = np.array(pixels, dtype=np.uint8, order="C")
    if array.ndim != 3 or array.shape[2] != 4:
        raise ValueError(f"Expected an RGBA buffer shaped (H, W, 4), got {array.shape}")
    array.flags.writeable = False
    return array


def transparent(region: Extent) -> np.ndarray:
    """Return a fully transparent buffer covering *region*."""

    return np.zeros((max(0, region.height), max(0, region.width), 4), dtype=np.uint8)


def crop_with_padding(pixels: np.ndarray, bounds: Extent, region: Extent) -> np.ndarray:
    """Copy *region* out of *pixels* (which cover *bounds*).

    Parts of *region* that fall outside *bounds* come back transparent.
    """

    out = transparent(region)
    overlap = bounds.intersection(region)
    if overlap.is_empty():
        return out
    src_y = overlap.y - bounds.y
    src_x = overlap.x - bounds.x
    dst_y = overlap.y - region.y
    dst_x = overlap.x - region.x
    out[dst_y : dst_y + overlap.height, dst_x : dst_x + overlap.width] = pixels[
        src_y : src_y + overlap.height, src_x : src_x + overlap.width
    ]
    return out


@dataclass(frozen=True, eq=False)
class SourceImage:
    """Immutable RGBA raster decoded from a bundled asset."""

    pixels: np.ndarray
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels", _freeze(self.pixels))

    @classmethod
    def from_pil(cls, image: PILImage.Image, name: str = "") -> "SourceImage":
        """Return a :class:`SourceImage` holding an RGBA copy of *image*."""

        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        return cls(np.array(rgba, dtype=np.uint8), name=name)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def extent(self) -> Extent:
        return Extent.from_size(self.width, self.height)


@dataclass(frozen=True, eq=False)
class RecipeImage:
    """Lazy description of pixel content over :attr:`extent`."""

    extent: Extent
    producer: Producer = field(repr=False)
    description: str = ""

    @classmethod
    def from_source(cls, source: SourceImage) -> "RecipeImage":
        """Wrap *source* without copying its pixels."""

        pixels = source.pixels
        bounds = source.extent

        def produce(region: Extent) -> np.ndarray:
            return crop_with_padding(pixels, bounds, region)

        label = source.name or f"{source.width}x{source.height} image"
        return cls(bounds, produce, description=label)

    def materialize(self, region: Extent | None = None) -> np.ndarray:
        """Compute the pixels for *region* (defaults to the whole extent)."""

        target = self.extent if region is None else region
        return self.producer(target)


@dataclass(frozen=True, eq=False)
class RenderedImage:
    """Concrete pixel buffer materialised from a recipe."""

    pixels: np.ndarray
    extent: Extent

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixels", _freeze(self.pixels))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def to_pil(self) -> PILImage.Image:
        """Return a Pillow copy of the rendered pixels."""

        return PILImage.fromarray(np.array(self.pixels))

    def same_pixels(self, other: "RenderedImage") -> bool:
        """Return ``True`` when *other* covers the same extent with identical pixels."""

        return self.extent == other.extent and np.array_equal(self.pixels, other.pixels)


# ----------------------------------------------------------------------
# Loading
# ----------------------------------------------------------------------
def load_source_image(path: Union[str, Path]) -> SourceImage:
    """Decode the image at *path* into a :class:`SourceImage`."""

    path = Path(path)
    try:
        with PILImage.open(path) as handle:
            handle.load()
            source = SourceImage.from_pil(handle, name=path.name)
    except FileNotFoundError as exc:
        raise SourceLoadFailedError(f"Image not found: {path}") from exc
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise SourceLoadFailedError(f"Image could not be decoded: {path}") from exc
    _LOGGER.debug("Loaded %s (%dx%d)", path, source.width, source.height)
    return source


def load_bundled_image(name: str) -> SourceImage:
    """Decode the asset *name* shipped in the package ``resources`` directory."""

    resource = resources.files("iFilter").joinpath("resources").joinpath(name)
    if not resource.is_file():
        raise SourceLoadFailedError(f"Bundled asset not found: {name}")
    with resources.as_file(resource) as path:
        return load_source_image(path)


def load_asset(asset: Union[str, Path]) -> SourceImage:
    """Load *asset* from the filesystem when it exists, otherwise from the bundle."""

    candidate = Path(asset)
    if candidate.is_file():
        return load_source_image(candidate)
    return load_bundled_image(str(asset))


__all__ = [
    "Producer",
    "RecipeImage",
    "RenderedImage",
    "SourceImage",
    "crop_with_padding",
    "load_asset",
    "load_bundled_image",
    "load_source_image",
    "transparent",
]
