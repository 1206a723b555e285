"""Convert a source image and run it through one runtime-introspected filter.

The pipeline is strictly linear::

    SourceImage -> RecipeImage -> filter (parameters assigned) -> RenderedImage

Any failure raises a :class:`~iFilter.errors.FilterError` sub-class and no
partial result escapes.  :func:`try_apply_filter` is the UI-facing variant that
logs the failure kind and returns ``None`` instead.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from ..errors import FilterError, NoOutputError, UnsupportedFilterError
from .filters import INTENSITY, RADIUS, SCALE, ImageFilter, create_filter, filter_class
from .images import RecipeImage, RenderedImage, SourceImage
from .render import RenderContext

_LOGGER = logging.getLogger(__name__)

PARAMETER_ROLES: tuple[tuple[str, float], ...] = (
    (INTENSITY, 1.0),
    (RADIUS, 200.0),
    (SCALE, 10.0),
)
"""Generic parameter roles and the multiplier applied to ``FilterSpec.amount``."""


def _clamp_unit(value: float) -> float:
    value = float(value)
    if math.isnan(value):
        raise ValueError("amount must not be NaN")
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class FilterSpec:
    """Filter name plus a generic ``amount`` in ``[0, 1]``.

    Out-of-range amounts are clamped rather than rejected, matching how a
    slider bound to the value would behave.  NaN raises :class:`ValueError`.
    """

    name: str
    amount: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _clamp_unit(self.amount))


def driven_parameters(filter_type: type[ImageFilter] | ImageFilter) -> tuple[str, ...]:
    """Return the role keys the pipeline would set on *filter_type*."""

    supported = filter_type.supported_parameters()
    return tuple(key for key, _ in PARAMETER_ROLES if key in supported)


def ensure_parameterised(name: str) -> None:
    """Reject the filter *name* when it exposes none of the parameter roles.

    Raises :class:`UnknownFilterError` for unregistered names and
    :class:`UnsupportedFilterError` when the amount would have no effect.
    """

    if not driven_parameters(filter_class(name)):
        raise UnsupportedFilterError(
            f"Filter {name!r} exposes none of the parameters "
            f"{', '.join(key for key, _ in PARAMETER_ROLES)}"
        )


def assign_parameters(filter_: ImageFilter, amount: float) -> dict[str, float]:
    """Set every role *filter_* advertises to ``amount * multiplier``.

    Returns the keys that were assigned with their values; roles the filter
    does not support are skipped silently.
    """

    supported = filter_.supported_parameters()
    assigned: dict[str, float] = {}
    for key, multiplier in PARAMETER_ROLES:
        if key not in supported:
            continue
        value = amount * multiplier
        filter_.set_value(key, value)
        assigned[key] = value

    if assigned:
        _LOGGER.debug("Assigned %s to %s", assigned, filter_.name)
    else:
        _LOGGER.debug("%s exposes no amount-driven parameters; using defaults", filter_.name)
    return assigned


def apply_filter(
    source: SourceImage,
    spec: FilterSpec,
    *,
    context: Optional[RenderContext] = None,
) -> RenderedImage:
    """Return *source* filtered according to *spec*.

    Raises
    ------
    UnknownFilterError
        ``spec.name`` is not registered.
    NoOutputError
        The filter produced no output recipe.
    RenderFailedError
        The output recipe could not be materialised.
    """

    recipe = RecipeImage.from_source(source)

    filter_ = create_filter(spec.name)
    filter_.input_image = recipe
    assign_parameters(filter_, spec.amount)

    output = filter_.output_image
    if output is None:
        raise NoOutputError(f"Filter {spec.name!r} produced no output for {recipe.description!r}")

    renderer = context if context is not None else RenderContext()
    return renderer.render(output)


def try_apply_filter(
    source: SourceImage,
    spec: FilterSpec,
    *,
    context: Optional[RenderContext] = None,
    on_error: Optional[Callable[[FilterError], None]] = None,
) -> Optional[RenderedImage]:
    """Variant of :func:`apply_filter` returning ``None`` on failure.

    The failure kind is logged so the caller can simply keep showing its
    previous (or empty) state.  *on_error* receives the exception when given.
    """

    try:
        return apply_filter(source, spec, context=context)
    except FilterError as exc:
        _LOGGER.warning("Filter %r failed (%s): %s", spec.name, exc.kind, exc)
        if on_error is not None:
            on_error(exc)
        return None


__all__ = [
    "FilterSpec",
    "PARAMETER_ROLES",
    "apply_filter",
    "assign_parameters",
    "driven_parameters",
    "ensure_parameterised",
    "try_apply_filter",
]
