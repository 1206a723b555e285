"""Framework independent "on ready" hook."""

from __future__ import annotations

import logging
from typing import Callable

_LOGGER = logging.getLogger(__name__)


class OnReadyHook:
    """Invoke a callback exactly once, the first time :meth:`fire` is called.

    Views call :meth:`fire` from whatever appearance callback their toolkit
    offers; repeated appearances do not re-run the callback.
    """

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def fire(self) -> bool:
        """Run the callback if it has not run yet.

        Returns ``True`` when the callback ran during this call.  The hook
        counts as fired even if the callback raises, and the exception
        propagates to the caller.
        """

        if self._fired:
            return False
        self._fired = True
        _LOGGER.debug("Running on-ready callback %r", self._callback)
        self._callback()
        return True


__all__ = ["OnReadyHook"]
