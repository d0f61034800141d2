"""Tests for the lifecycle state machine."""

import pytest

from asyncctl.controller.lifecycle import LifecycleState, StateController


def test_starts_idle():
    state = StateController()

    assert state.value is LifecycleState.IDLE
    assert state.is_idle
    assert state.is_unknown
    assert not state.is_settled


@pytest.mark.parametrize("initial", ["PENDING", "pending", LifecycleState.PENDING])
def test_initial_state_by_name_or_member(initial):
    assert StateController(initial).value is LifecycleState.PENDING


def test_unknown_initial_state_name():
    with pytest.raises(ValueError, match="Unknown lifecycle state"):
        StateController("SETTLED")


@pytest.mark.parametrize(
    "state, idle, pending, fulfilled, rejected",
    [
        (LifecycleState.IDLE, True, False, False, False),
        (LifecycleState.PENDING, False, True, False, False),
        (LifecycleState.FULFILLED, False, False, True, False),
        (LifecycleState.REJECTED, False, False, False, True),
    ],
)
def test_exactly_one_state_and_projections(state, idle, pending, fulfilled, rejected):
    controller = StateController(state)

    flags = [controller.is_idle, controller.is_pending, controller.is_fulfilled, controller.is_rejected]
    assert flags == [idle, pending, fulfilled, rejected]
    assert sum(flags) == 1
    assert controller.is_unknown == (idle or pending)
    assert controller.is_settled == (fulfilled or rejected)


def test_any_state_can_reach_any_other():
    state = StateController()

    state.fulfilled()
    assert state.is_fulfilled
    state.rejected()
    assert state.is_rejected
    state.pending()
    assert state.is_pending
    state.idle()
    assert state.is_idle


def test_transition_returns_previous_state():
    state = StateController()

    assert state.transition(LifecycleState.PENDING) is LifecycleState.IDLE
    assert state.transition(LifecycleState.PENDING) is LifecycleState.PENDING


def test_state_values_are_strings():
    assert LifecycleState.FULFILLED == "fulfilled"
    assert repr(StateController("rejected")) == "StateController('rejected')"
