"""Value/reason retention across lifecycle resets."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from .options import Defaults

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RetentionPolicy(Generic[T]):
    """Owns the last value and reason and decides what a write does.

    A write of ``None`` is a clearing write. In persistent mode it is
    ignored; in transient mode it restores the configured default. Every
    write is dropped while ``is_alive()`` is False.
    """

    def __init__(
        self,
        persistent: bool = False,
        defaults: Optional[Defaults] = None,
        is_alive: Callable[[], bool] = lambda: True,
    ) -> None:
        self.persistent = persistent
        self.defaults = defaults or Defaults()
        self._is_alive = is_alive
        self.value: Optional[T] = self.defaults.value
        self.reason: Any = self.defaults.reason

    def _resolve(self, incoming: Any, default: Any, current: Any) -> tuple[bool, Any]:
        if incoming is not None:
            return True, incoming
        if self.persistent:
            return False, current
        return True, default

    def write_value(self, value: Optional[T]) -> bool:
        """Apply a value write. Returns True if the write was applied."""
        if not self._is_alive():
            logger.debug("Dropping value write on disposed controller")
            return False
        applied, self.value = self._resolve(value, self.defaults.value, self.value)
        return applied

    def write_reason(self, reason: Any) -> bool:
        """Apply a reason write. Returns True if the write was applied."""
        if not self._is_alive():
            logger.debug("Dropping reason write on disposed controller")
            return False
        applied, self.reason = self._resolve(reason, self.defaults.reason, self.reason)
        return applied

    def clear(self) -> bool:
        """Clearing write on both slots."""
        value_applied = self.write_value(None)
        reason_applied = self.write_reason(None)
        return value_applied or reason_applied
