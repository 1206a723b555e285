"""Name based lookup for the built-in filters."""

from __future__ import annotations

from typing import Callable, Type

from ...errors import UnknownFilterError
from .base import ImageFilter

filter_registry: dict[str, Type[ImageFilter]] = {}


def register_filter(name: str) -> Callable[[Type[ImageFilter]], Type[ImageFilter]]:
    """Class decorator registering a filter under *name*."""

    def decorator(cls: Type[ImageFilter]) -> Type[ImageFilter]:
        if name in filter_registry and filter_registry[name] is not cls:
            raise ValueError(f"A filter named {name!r} is already registered")
        cls.name = name
        filter_registry[name] = cls
        return cls

    return decorator


def available_filters() -> tuple[str, ...]:
    """Return the registered filter names in registration order."""

    return tuple(filter_registry)


def filter_class(name: str) -> Type[ImageFilter]:
    """Return the class registered as *name*, raising :class:`UnknownFilterError`."""

    try:
        return filter_registry[name]
    except KeyError:
        known = ", ".join(available_filters()) or "none"
        raise UnknownFilterError(f"Unknown filter {name!r} (available: {known})") from None


def create_filter(name: str) -> ImageFilter:
    """Instantiate the filter registered as *name* with its default parameters."""

    return filter_class(name)()


__all__ = [
    "available_filters",
    "create_filter",
    "filter_class",
    "filter_registry",
    "register_filter",
]
