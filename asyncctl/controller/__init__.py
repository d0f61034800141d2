"""
Controller Core
===============

Lifecycle state machine, controllable promise, retention policy and the
controller composing them.
"""

from .lifecycle import LifecycleState, StateController
from .promise import ControllablePromise, Rejection, is_pending_operation
from .options import ControllerOptions, Defaults, TriggerMode
from .retention import RetentionPolicy
from .host import ControllerSnapshot, Host, LocalHost
from .async_controller import AsyncController

__all__ = [
    # State machine
    "LifecycleState",
    "StateController",
    # Promise
    "ControllablePromise",
    "Rejection",
    "is_pending_operation",
    # Options & retention
    "ControllerOptions",
    "Defaults",
    "TriggerMode",
    "RetentionPolicy",
    # Host capability
    "ControllerSnapshot",
    "Host",
    "LocalHost",
    # Controller
    "AsyncController",
]
