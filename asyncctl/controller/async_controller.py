"""Controller wrapping an asynchronous operation.

The controller owns three pieces of state: the lifecycle (idle, pending,
fulfilled, rejected), the retained value/reason pair and the promise it
currently listens to. Every ``trigger`` supersedes the previous promise.
Settlements are applied only while the host is alive and only when they
come from the promise of the current generation, so an abandoned
operation that finishes late cannot overwrite newer state.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from .host import ControllerSnapshot, Host, LocalHost
from .lifecycle import LifecycleState, StateController
from .options import ControllerOptions, Defaults, TriggerMode
from .promise import ControllablePromise, is_pending_operation
from .retention import RetentionPolicy

T = TypeVar("T")

logger = logging.getLogger(__name__)

Operation = Callable[..., Awaitable[T]]


class AsyncController(Generic[T]):
    """Explicit lifecycle and external control over an async operation.

    Usage:
        controller = AsyncController(fetch_profile)
        controller.activate()
        controller.trigger(user_id)
        ...
        if controller.is_fulfilled:
            render(controller.value)
    """

    def __init__(
        self,
        operation: Operation[T],
        options: Optional[ControllerOptions] = None,
        host: Optional[Host] = None,
        name: Optional[str] = None,
    ) -> None:
        """Create an idle controller.

        Args:
            operation: Callable returning an awaitable (or a plain value)
            options: Retention and activation options
            host: Liveness/change capability, a fresh LocalHost by default
            name: Label used in logs and published events
        """
        self.operation = operation
        self.options = options or ControllerOptions()
        self.name = name or getattr(operation, "__name__", None)
        self.host: Host = host if host is not None else LocalHost(name=self.name)

        self._state = StateController()
        self._retention: RetentionPolicy[T] = RetentionPolicy(
            persistent=self.options.persistent,
            defaults=self.options.defaults,
            is_alive=self.host.is_alive,
        )
        self._promise: Optional[ControllablePromise[T]] = None
        self._generation = 0
        self._activated = False

    @classmethod
    def autostart(
        cls,
        operation: Operation[T],
        *args: Any,
        persistent: bool = False,
        defaults: Optional[Defaults] = None,
        host: Optional[Host] = None,
        name: Optional[str] = None,
    ) -> "AsyncController[T]":
        """Controller that runs ``operation(*args)`` once on activation."""
        options = ControllerOptions(
            persistent=persistent,
            defaults=defaults or Defaults(),
            mode=TriggerMode.ON_ACTIVATE,
            initial_args=args,
        )
        return cls(operation, options=options, host=host, name=name)

    # --- Host lifecycle ---

    def activate(self) -> Optional[ControllablePromise[T]]:
        """Mark the host alive and run the activation trigger, if configured.

        Only the first successful call can trigger; the promise is returned
        when it does. The activation trigger needs a running event loop.
        """
        activate = getattr(self.host, "activate", None)
        if callable(activate):
            activate()
        if self._activated:
            return None
        promise = None
        if self.options.mode is TriggerMode.ON_ACTIVATE:
            # a failed trigger leaves activation retryable
            promise = self.trigger(*self.options.initial_args)
        self._activated = True
        return promise

    def dispose(self) -> None:
        """Tear down: every later settlement and write becomes a no-op."""
        dispose = getattr(self.host, "dispose", None)
        if callable(dispose):
            dispose()

    # --- Observable state ---

    @property
    def state(self) -> LifecycleState:
        return self._state.value

    @property
    def value(self) -> Optional[T]:
        return self._retention.value

    @property
    def reason(self) -> Any:
        return self._retention.reason

    @property
    def promise(self) -> Optional[ControllablePromise[T]]:
        """The promise currently listened to, if any."""
        return self._promise

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_idle(self) -> bool:
        return self._state.is_idle

    @property
    def is_pending(self) -> bool:
        return self._state.is_pending

    @property
    def is_unknown(self) -> bool:
        return self._state.is_unknown

    @property
    def is_fulfilled(self) -> bool:
        return self._state.is_fulfilled

    @property
    def is_rejected(self) -> bool:
        return self._state.is_rejected

    @property
    def is_settled(self) -> bool:
        return self._state.is_settled

    def snapshot(self) -> ControllerSnapshot:
        return ControllerSnapshot(
            state=self._state.value,
            value=self._retention.value,
            reason=self._retention.reason,
            generation=self._generation,
        )

    # --- Controls ---

    def trigger(self, *args: Any) -> Optional[ControllablePromise[T]]:
        """Start a new attempt and return its promise.

        Returns None while the host is not alive. An exception raised while
        calling the operation itself propagates and leaves state untouched.

        Raises:
            RuntimeError: If called without a running event loop; the
                operation is not invoked in that case
        """
        if not self.host.is_alive():
            logger.debug(f"{self._label}: trigger ignored, host not alive")
            return None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise RuntimeError(f"{self._label}: trigger() needs a running event loop") from None

        promise: ControllablePromise[T] = ControllablePromise(self.operation(*args), loop=loop)

        self._state.pending()
        self._retention.clear()
        self._follow(promise)
        self._notify()
        return promise

    def resolve(self, value: Any = None) -> bool:
        """Fulfil the current promise from outside. False if nothing changed."""
        if self._promise is None:
            return False
        return self._promise.resolve(value)

    def reject(self, reason: Any = None) -> bool:
        """Reject the current promise from outside. False if nothing changed."""
        if self._promise is None:
            return False
        return self._promise.reject(reason)

    def cancel(self) -> None:
        """Return to idle, abandoning the in-flight attempt.

        Whoever awaits the abandoned promise gets ``asyncio.CancelledError``;
        the operation itself is not interrupted. After disposal a pending
        attempt is still cancelled for its awaiters, but lifecycle, value
        and reason stay frozen.
        """
        if not self.host.is_alive():
            if self._state.is_pending and self._promise is not None:
                self._promise.cancel()
            return
        abandoned = self._reset()
        if abandoned is not None:
            abandoned.cancel()
        self._notify()

    def idle(self) -> None:
        """Return to idle from a settled state. No-op after disposal."""
        if not self.host.is_alive():
            return
        self._reset()
        self._notify()

    # --- Internals ---

    @property
    def _label(self) -> str:
        return self.name or f"controller@{id(self):x}"

    def _reset(self) -> Optional[ControllablePromise[T]]:
        self._state.idle()
        abandoned, self._promise = self._promise, None
        if abandoned is not None:
            # late settlements of the abandoned promise are now stale
            self._generation += 1
        self._retention.clear()
        return abandoned

    def _follow(self, promise: ControllablePromise[T]) -> None:
        self._promise = promise
        self._generation += 1
        generation = self._generation
        promise.subscribe(
            lambda value: self._on_fulfilled(generation, value),
            lambda reason: self._on_rejected(generation, reason),
        )

    def _accepts(self, generation: int, outcome: str) -> bool:
        if not self.host.is_alive():
            logger.debug(f"{self._label}: {outcome} dropped, host not alive")
            return False
        if generation != self._generation:
            logger.debug(
                f"{self._label}: stale {outcome} from generation {generation} "
                f"(current {self._generation}) ignored"
            )
            return False
        return True

    def _on_fulfilled(self, generation: int, value: Any) -> None:
        if not self._accepts(generation, "fulfilment"):
            return

        if is_pending_operation(value):
            # the operation handed back another operation; keep waiting
            self._state.pending()
            self._follow(ControllablePromise(value))
            self._notify()
            return

        self._state.fulfilled()
        self._retention.write_value(value)
        self._notify()

    def _on_rejected(self, generation: int, reason: Any) -> None:
        if not self._accepts(generation, "rejection"):
            return

        self._state.rejected()
        self._retention.write_reason(reason)
        self._notify()

    def _notify(self) -> None:
        if self.host.is_alive():
            self.host.on_change(self.snapshot())

    def __repr__(self) -> str:
        return (
            f"AsyncController({self._label!r}, state={self._state.value.value!r}, "
            f"generation={self._generation})"
        )
