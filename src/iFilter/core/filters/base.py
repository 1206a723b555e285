"""Base class for filters whose parameters are discovered at runtime.

Callers never branch on the concrete filter type.  They ask
:meth:`ImageFilter.supported_parameters` which keys the filter understands and
only assign those, mirroring the key/value coding interface of the vendor
image frameworks this package imitates.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping, Optional

from ..images import RecipeImage

_LOGGER = logging.getLogger(__name__)

INPUT_IMAGE = "inputImage"
INTENSITY = "inputIntensity"
RADIUS = "inputRadius"
SCALE = "inputScale"
CENTER = "inputCenter"
ANGLE = "inputAngle"


def _coerce(key: str, value: Any) -> Any:
    """Normalise *value* for *key*, raising ``TypeError``/``ValueError`` when unusable."""

    if key == INPUT_IMAGE:
        if value is not None and not isinstance(value, RecipeImage):
            raise TypeError(f"{INPUT_IMAGE} expects a RecipeImage, got {type(value).__name__}")
        return value
    if key == CENTER:
        if value is None:
            return None
        x, y = value
        return (float(x), float(y))
    return float(value)


class ImageFilter(ABC):
    """A named transformation from one recipe image to another.

    Sub-classes declare ``name`` and ``parameter_defaults``; every key in the
    defaults mapping, plus :data:`INPUT_IMAGE`, is advertised as supported.
    A ``None`` default for :data:`CENTER` means "centre of the input extent".
    """

    name: ClassVar[str] = ""
    parameter_defaults: ClassVar[Mapping[str, Any]] = {}

    def __init__(self) -> None:
        self._values: dict[str, Any] = {INPUT_IMAGE: None}
        self._values.update(self.parameter_defaults)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

    # ------------------------------------------------------------------
    # Parameter access
    # ------------------------------------------------------------------
    @classmethod
    def supported_parameters(cls) -> frozenset[str]:
        """Return the keys this filter accepts through :meth:`set_value`."""

        return frozenset({INPUT_IMAGE, *cls.parameter_defaults})

    def set_value(self, key: str, value: Any) -> None:
        """Assign *value* to the parameter *key*.

        Raises ``KeyError`` for keys outside :meth:`supported_parameters`.
        """

        if key not in self.supported_parameters():
            raise KeyError(f"{self.name} does not support {key!r}")
        self._values[key] = _coerce(key, value)

    def value(self, key: str) -> Any:
        """Return the current value of *key*."""

        if key not in self.supported_parameters():
            raise KeyError(f"{self.name} does not support {key!r}")
        return self._values[key]

    def values(self) -> dict[str, Any]:
        """Return a snapshot of every scalar parameter (the input image excluded)."""

        return {key: value for key, value in self._values.items() if key != INPUT_IMAGE}

    @property
    def input_image(self) -> Optional[RecipeImage]:
        return self._values[INPUT_IMAGE]

    @input_image.setter
    def input_image(self, image: Optional[RecipeImage]) -> None:
        self.set_value(INPUT_IMAGE, image)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    @property
    def output_image(self) -> Optional[RecipeImage]:
        """Return the recipe describing the filtered image.

        ``None`` when no input is attached or the input covers no pixels.
        """

        image = self.input_image
        if image is None or image.extent.is_empty():
            _LOGGER.debug("%s has no usable input image", self.name)
            return None
        return self._build_output(image)

    def _center_for(self, image: RecipeImage) -> tuple[float, float]:
        center = self._values.get(CENTER)
        if center is None:
            return image.extent.center
        return center

    @abstractmethod
    def _build_output(self, image: RecipeImage) -> RecipeImage:
        """Describe the output for a non-empty *image*."""


__all__ = [
    "ANGLE",
    "CENTER",
    "INPUT_IMAGE",
    "INTENSITY",
    "ImageFilter",
    "RADIUS",
    "SCALE",
]
