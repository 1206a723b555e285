"""Application configuration: which filter to run, how strongly, on what asset."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .core.filters import available_filters
from .core.pipeline import FilterSpec, ensure_parameterised
from .core.render import DEFAULT_MAX_PIXELS
from .errors import ConfigInvalidError
from .utils.jsonio import read_json

_LOGGER = logging.getLogger(__name__)

CONFIG_ENV = "IFILTER_CONFIG"
FILTER_ENV = "IFILTER_FILTER"
AMOUNT_ENV = "IFILTER_AMOUNT"

DEFAULT_FILTER = "twirl"
DEFAULT_AMOUNT = 1.0
DEFAULT_ASSET = "example.ppm"


@dataclass(frozen=True)
class FilterConfig:
    """Resolved configuration values."""

    filter_name: str = DEFAULT_FILTER
    amount: float = DEFAULT_AMOUNT
    asset: str = DEFAULT_ASSET
    reject_unparameterised: bool = False
    max_render_pixels: int = DEFAULT_MAX_PIXELS

    @property
    def spec(self) -> FilterSpec:
        return FilterSpec(self.filter_name, self.amount)

    def validate(self) -> "FilterConfig":
        """Return ``self`` after checking it against the filter registry.

        Raises :class:`ConfigInvalidError` for unknown filter names or a
        non-positive render budget, and :class:`UnsupportedFilterError` when
        ``reject_unparameterised`` is set and the filter ignores ``amount``.
        """

        if self.filter_name not in available_filters():
            raise ConfigInvalidError(
                f"Unknown filter {self.filter_name!r}; expected one of "
                f"{', '.join(available_filters())}"
            )
        if self.max_render_pixels <= 0:
            raise ConfigInvalidError("max_render_pixels must be positive")
        if self.reject_unparameterised:
            ensure_parameterised(self.filter_name)
        return self


def _parse_amount(value: Any, origin: str) -> float:
    if isinstance(value, bool):
        raise ConfigInvalidError(f"{origin}: amount must be a number, got {value!r}")
    try:
        amount = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigInvalidError(f"{origin}: amount must be a number, got {value!r}") from exc
    if amount != amount:
        raise ConfigInvalidError(f"{origin}: amount must not be NaN")
    clamped = max(0.0, min(1.0, amount))
    if clamped != amount:
        _LOGGER.warning("%s: amount %s clamped to %s", origin, amount, clamped)
    return clamped


def _from_mapping(base: FilterConfig, data: Mapping[str, Any], origin: str) -> FilterConfig:
    changes: dict[str, Any] = {}
    if "filter" in data:
        changes["filter_name"] = str(data["filter"])
    if "amount" in data:
        changes["amount"] = _parse_amount(data["amount"], origin)
    if "asset" in data:
        changes["asset"] = str(data["asset"])
    if "reject_unparameterised" in data:
        strict = data["reject_unparameterised"]
        if not isinstance(strict, bool):
            raise ConfigInvalidError(f"{origin}: reject_unparameterised must be a boolean")
        changes["reject_unparameterised"] = strict
    if "max_render_pixels" in data:
        try:
            changes["max_render_pixels"] = int(data["max_render_pixels"])
        except (TypeError, ValueError) as exc:
            raise ConfigInvalidError(f"{origin}: max_render_pixels must be an integer") from exc

    unknown = set(data) - {"filter", "amount", "asset", "reject_unparameterised", "max_render_pixels"}
    if unknown:
        _LOGGER.warning("%s: ignoring unknown keys %s", origin, ", ".join(sorted(unknown)))
    return replace(base, **changes)


def load_config(
    path: Optional[Union[str, Path]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> FilterConfig:
    """Resolve the configuration from defaults, a JSON file and the environment.

    Precedence, lowest first: built-in defaults, the JSON file at *path* (or
    the file named by ``IFILTER_CONFIG``), then the ``IFILTER_FILTER`` and
    ``IFILTER_AMOUNT`` variables.
    """

    env = os.environ if environ is None else environ
    config = FilterConfig()

    source = path if path is not None else env.get(CONFIG_ENV)
    if source:
        config_path = Path(source)
        config = _from_mapping(config, read_json(config_path), str(config_path))

    overrides: dict[str, Any] = {}
    if env.get(FILTER_ENV):
        overrides["filter"] = env[FILTER_ENV]
    if env.get(AMOUNT_ENV):
        overrides["amount"] = env[AMOUNT_ENV]
    if overrides:
        config = _from_mapping(config, overrides, "environment")

    return config.validate()


__all__ = [
    "AMOUNT_ENV",
    "CONFIG_ENV",
    "DEFAULT_AMOUNT",
    "DEFAULT_ASSET",
    "DEFAULT_FILTER",
    "FILTER_ENV",
    "FilterConfig",
    "load_config",
]
