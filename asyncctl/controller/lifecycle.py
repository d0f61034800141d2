"""Lifecycle state machine for a controlled operation."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Union

logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    """The four stored lifecycle states.

    ``unknown`` (idle or pending) and ``settled`` (fulfilled or rejected)
    are projections computed by :class:`StateController`, never stored.
    """
    IDLE = "idle"
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class StateController:
    """Holds exactly one :class:`LifecycleState` and answers projections.

    Any state may move to any other; the owning controller decides when.
    """

    def __init__(self, initial_state: Optional[Union[LifecycleState, str]] = None) -> None:
        """Create the machine.

        Args:
            initial_state: A state, or its name or value ("PENDING" or
                "pending"). Defaults to idle.

        Raises:
            ValueError: If the name does not match a state
        """
        self._state = self._coerce(initial_state) if initial_state is not None else LifecycleState.IDLE

    @staticmethod
    def _coerce(state: Union[LifecycleState, str]) -> LifecycleState:
        if isinstance(state, LifecycleState):
            return state
        try:
            return LifecycleState[state.upper()]
        except KeyError:
            raise ValueError(f"Unknown lifecycle state: {state!r}") from None

    @property
    def value(self) -> LifecycleState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return self._state is LifecycleState.IDLE

    @property
    def is_pending(self) -> bool:
        return self._state is LifecycleState.PENDING

    @property
    def is_unknown(self) -> bool:
        return self._state in (LifecycleState.IDLE, LifecycleState.PENDING)

    @property
    def is_fulfilled(self) -> bool:
        return self._state is LifecycleState.FULFILLED

    @property
    def is_rejected(self) -> bool:
        return self._state is LifecycleState.REJECTED

    @property
    def is_settled(self) -> bool:
        return self._state in (LifecycleState.FULFILLED, LifecycleState.REJECTED)

    # --- Transitions ---

    def transition(self, state: LifecycleState) -> LifecycleState:
        """Move to ``state`` and return the previous one."""
        previous, self._state = self._state, state
        if previous is not state:
            logger.debug(f"Lifecycle {previous.value} -> {state.value}")
        return previous

    def pending(self) -> None:
        self.transition(LifecycleState.PENDING)

    def fulfilled(self) -> None:
        self.transition(LifecycleState.FULFILLED)

    def rejected(self) -> None:
        self.transition(LifecycleState.REJECTED)

    def idle(self) -> None:
        self.transition(LifecycleState.IDLE)

    def __repr__(self) -> str:
        return f"StateController({self._state.value!r})"
