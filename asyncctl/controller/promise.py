"""Promise whose settlement functions are exposed to whoever holds it."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Generator, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")

OnFulfilled = Callable[[Any], Any]
OnRejected = Callable[[Any], Any]

_NO_COMPUTATION = object()


class Rejection(Exception):
    """Carries a rejection reason that is not itself an exception."""

    def __init__(self, reason: Any) -> None:
        super().__init__(reason)
        self.reason = reason


def is_pending_operation(value: Any) -> bool:
    """True when ``value`` is something the controller still has to await."""
    return inspect.isawaitable(value)


def unwrap_reason(exc: BaseException) -> Any:
    if isinstance(exc, Rejection):
        return exc.reason
    return exc


class ControllablePromise(Generic[T]):
    """An eventual value that can be settled from the outside.

    The computation passed in starts right away. Its outcome settles the
    promise unless ``resolve``/``reject`` got there first; the first
    settlement wins and every later one is ignored.

    Usage:
        promise = ControllablePromise(fetch_user(42))
        promise.resolve(cached_user)   # short-circuits fetch_user
        user = await promise
    """

    def __init__(
        self,
        computation: Any = _NO_COMPUTATION,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        """Wrap ``computation`` and start it.

        Args:
            computation: An awaitable to run, or a plain value to resolve with
                immediately. Omit it for a promise settled only from outside.
            loop: Event loop to bind to, defaults to the running loop

        Raises:
            RuntimeError: If no loop is given and none is running
        """
        self._loop = loop if loop is not None else asyncio.get_running_loop()
        self._future: asyncio.Future = self._loop.create_future()
        self._task: Optional[asyncio.Future] = None

        if computation is _NO_COMPUTATION:
            return
        if inspect.isawaitable(computation):
            self._task = asyncio.ensure_future(computation, loop=self._loop)
            self._task.add_done_callback(self._adopt)
        else:
            self.resolve(computation)

    def _adopt(self, task: asyncio.Future) -> None:
        # always read the outcome so asyncio does not report it as unretrieved
        if task.cancelled():
            self._future.cancel()
            return
        exc = task.exception()
        if exc is not None:
            self.reject(exc)
        else:
            self.resolve(task.result())

    # --- Settlement ---

    def resolve(self, value: Any = None) -> bool:
        """Fulfil with ``value``. Returns False if already settled."""
        if self._future.done():
            return False
        self._future.set_result(value)
        return True

    def reject(self, reason: Any = None) -> bool:
        """Reject with ``reason``. Returns False if already settled.

        Non-exception reasons travel inside a :class:`Rejection`.
        """
        if self._future.done():
            return False
        # futures refuse StopIteration
        if not isinstance(reason, BaseException) or isinstance(reason, StopIteration):
            reason = Rejection(reason)
        self._future.set_exception(reason)
        return True

    def cancel(self) -> bool:
        """Cancel the promise; awaiters receive ``asyncio.CancelledError``.

        The wrapped computation keeps running, its outcome is ignored.
        """
        return self._future.cancel()

    # --- Observation ---

    def done(self) -> bool:
        return self._future.done()

    def cancelled(self) -> bool:
        return self._future.cancelled()

    def outcome(self) -> Tuple[bool, Any]:
        """``(True, value)`` or ``(False, reason)`` for a settled promise.

        Raises:
            asyncio.InvalidStateError: If the promise is still pending
        """
        if self._future.cancelled():
            return False, asyncio.CancelledError()
        exc = self._future.exception()
        if exc is not None:
            return False, unwrap_reason(exc)
        return True, self._future.result()

    def subscribe(self, on_fulfilled: OnFulfilled, on_rejected: OnRejected) -> None:
        """Call exactly one of the handlers once the promise settles."""
        def _dispatch(_: asyncio.Future) -> None:
            fulfilled, payload = self.outcome()
            if fulfilled:
                on_fulfilled(payload)
            else:
                on_rejected(payload)

        self._future.add_done_callback(_dispatch)

    def then(
        self,
        on_fulfilled: Optional[OnFulfilled] = None,
        on_rejected: Optional[OnRejected] = None,
    ) -> "ControllablePromise[Any]":
        """Chain handlers, returning a promise for the handler's result.

        A missing handler passes the outcome through unchanged. An awaitable
        returned by a handler is awaited and its outcome adopted. An exception
        raised by a handler rejects the returned promise.
        """
        chained: ControllablePromise[Any] = ControllablePromise(loop=self._loop)

        def _forward(handler: Optional[Callable[[Any], Any]], payload: Any, fulfilled: bool) -> None:
            if handler is None:
                if fulfilled:
                    chained.resolve(payload)
                else:
                    chained.reject(payload)
                return
            try:
                result = handler(payload)
            except Exception as exc:
                chained.reject(exc)
            else:
                self._settle_with(chained, result)

        self.subscribe(
            lambda value: _forward(on_fulfilled, value, True),
            lambda reason: _forward(on_rejected, reason, False),
        )
        return chained

    def _settle_with(self, chained: "ControllablePromise[Any]", result: Any) -> None:
        # a handler returning an awaitable hands its outcome to the chain
        if is_pending_operation(result):
            ControllablePromise(result, loop=self._loop).subscribe(
                lambda value: self._settle_with(chained, value),
                chained.reject,
            )
        else:
            chained.resolve(result)

    def __await__(self) -> Generator[Any, None, T]:
        return self._future.__await__()

    def __repr__(self) -> str:
        if not self._future.done():
            status = "pending"
        elif self._future.cancelled():
            status = "cancelled"
        elif self._future.exception() is not None:
            status = "rejected"
        else:
            status = "fulfilled"
        return f"<ControllablePromise {status}>"
