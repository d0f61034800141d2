"""asyncctl - explicit lifecycle control over asynchronous operations."""

from .controller import (
    AsyncController,
    ControllablePromise,
    ControllerOptions,
    ControllerSnapshot,
    Defaults,
    Host,
    LifecycleState,
    LocalHost,
    Rejection,
    StateController,
    TriggerMode,
)
from .shared.core.event_bus import EventBus

__all__ = [
    "AsyncController",
    "ControllablePromise",
    "ControllerOptions",
    "ControllerSnapshot",
    "Defaults",
    "EventBus",
    "Host",
    "LifecycleState",
    "LocalHost",
    "Rejection",
    "StateController",
    "TriggerMode",
]

__version__ = "0.3.0"
