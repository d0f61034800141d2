"""Host capability consumed by the controller.

A host tells the controller whether it is still alive and receives a
snapshot every time observable state changes. Keeping this behind a small
protocol lets the controller run unchanged inside a UI framework, behind
an event bus, or in plain tests.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from asyncctl.shared.core import events
from asyncctl.shared.core.event_bus import EventPayload

from .lifecycle import LifecycleState

logger = logging.getLogger(__name__)


class ControllerSnapshot(BaseModel):
    """What observers see after every applied mutation."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    state: LifecycleState = LifecycleState.IDLE
    value: Any = None
    reason: Any = None
    generation: int = Field(default=0, ge=0)

    @property
    def is_unknown(self) -> bool:
        return self.state in (LifecycleState.IDLE, LifecycleState.PENDING)

    @property
    def is_settled(self) -> bool:
        return self.state in (LifecycleState.FULFILLED, LifecycleState.REJECTED)

    def to_payload(self, name: Optional[str] = None) -> EventPayload:
        return events.create_state_changed_event(
            state=self.state.value,
            value=self.value,
            reason=self.reason,
            generation=self.generation,
            name=name,
        )


SnapshotListener = Callable[[ControllerSnapshot], None]


@runtime_checkable
class Host(Protocol):
    """Liveness signal plus change sink."""

    def is_alive(self) -> bool: ...

    def on_change(self, snapshot: ControllerSnapshot) -> None: ...


class LocalHost:
    """In-process host with an explicit activate/dispose lifecycle.

    Usage:
        host = LocalHost()
        host.subscribe(lambda snap: print(snap.state))
        controller = AsyncController(load, host=host)
        controller.activate()
    """

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name
        self._alive = False
        self._disposed = False
        self._listeners: List[SnapshotListener] = []
        self.last_snapshot: Optional[ControllerSnapshot] = None

    def is_alive(self) -> bool:
        return self._alive

    @property
    def disposed(self) -> bool:
        return self._disposed

    def activate(self) -> bool:
        """Mark alive. Returns False if already alive or disposed."""
        if self._alive or self._disposed:
            return False
        self._alive = True
        logger.debug(f"Host {self.name or id(self)} activated")
        return True

    def dispose(self) -> bool:
        """Mark dead for good. Returns False on every call after the first."""
        if self._disposed:
            return False
        self._alive = False
        self._disposed = True
        logger.debug(f"Host {self.name or id(self)} disposed")
        return True

    def subscribe(self, listener: SnapshotListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def on_change(self, snapshot: ControllerSnapshot) -> None:
        self.last_snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                # one broken observer must not stop the others
                logger.exception(f"Snapshot listener {listener!r} failed")
