"""Built-in image filters.

Importing this package registers every filter with
:mod:`iFilter.core.filters.registry`:

- ``sepia``: :class:`SepiaTone` (intensity)
- ``pixellate``: :class:`Pixellate` (scale, center)
- ``crystallize``: :class:`Crystallize` (radius, center)
- ``twirl``: :class:`TwirlDistortion` (radius, angle, center)
"""

from __future__ import annotations

from .base import ANGLE, CENTER, INPUT_IMAGE, INTENSITY, RADIUS, SCALE, ImageFilter
from .registry import available_filters, create_filter, filter_class, register_filter
from .sepia import SepiaTone
from .pixellate import Pixellate
from .crystallize import Crystallize
from .twirl import TwirlDistortion

__all__ = [
    "ANGLE",
    "CENTER",
    "Crystallize",
    "INPUT_IMAGE",
    "INTENSITY",
    "ImageFilter",
    "Pixellate",
    "RADIUS",
    "SCALE",
    "SepiaTone",
    "TwirlDistortion",
    "available_filters",
    "create_filter",
    "filter_class",
    "register_filter",
]
