"""Canonical event definitions for asyncctl."""

from __future__ import annotations

import time
from typing import Any

from .event_bus import EventPayload

# Event Topics
TOPIC_CONTROLLER_STATE = "controller.state"
TOPIC_CONTROLLER_DISPOSED = "controller.disposed"


def create_state_changed_event(
    state: str,
    value: Any,
    reason: Any,
    generation: int,
    name: str | None = None,
) -> EventPayload:
    """Create a controller state change event.

    Args:
        state: Lifecycle state name (e.g. "pending")
        value: Retained value after the change
        reason: Retained rejection reason after the change
        generation: Generation of the promise the controller listens to
        name: Optional label of the controller that emitted the change
    """
    return {
        "name": name,
        "state": state,
        "value": value,
        "reason": reason,
        "generation": generation,
        "ts": time.time(),
    }


def create_disposed_event(name: str | None = None) -> EventPayload:
    """Create a controller disposed event."""
    return {
        "name": name,
        "ts": time.time(),
    }
