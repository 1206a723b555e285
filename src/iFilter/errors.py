"""Exception hierarchy shared by the filter pipeline and its callers."""

from __future__ import annotations


class IFilterError(Exception):
    """Base class for every error raised by :mod:`iFilter`."""


class ConfigInvalidError(IFilterError):
    """Raised when the configuration file or an override cannot be used."""


class FilterError(IFilterError):
    """Base class for failures that terminate a single pipeline run.

    ``kind`` is a stable, machine friendly identifier so the UI layer can log
    the failure category without matching on exception types.
    """

    kind: str = "filter_error"


class SourceLoadFailedError(FilterError):
    """The bundled asset is missing or could not be decoded."""

    kind = "source_load_failed"


class UnknownFilterError(FilterError):
    """No filter is registered under the requested name."""

    kind = "unknown_filter"


class UnsupportedFilterError(FilterError):
    """The filter exposes none of the parameter roles the pipeline can drive."""

    kind = "unsupported_filter"


class NoOutputError(FilterError):
    """The filter did not produce an output recipe."""

    kind = "no_output"


class RenderFailedError(FilterError):
    """The render context could not materialise a pixel buffer."""

    kind = "render_failed"


__all__ = [
    "ConfigInvalidError",
    "FilterError",
    "IFilterError",
    "NoOutputError",
    "RenderFailedError",
    "SourceLoadFailedError",
    "UnknownFilterError",
    "UnsupportedFilterError",
]
