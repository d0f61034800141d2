"""Tests for value/reason retention rules."""

from asyncctl.controller.options import Defaults
from asyncctl.controller.retention import RetentionPolicy


def test_starts_at_defaults():
    policy = RetentionPolicy(defaults=Defaults(value=0, reason="n/a"))

    assert policy.value == 0
    assert policy.reason == "n/a"


def test_transient_clearing_write_restores_default():
    policy = RetentionPolicy(defaults=Defaults(value=0, reason="n/a"))
    policy.write_value(5)
    policy.write_reason("boom")

    assert policy.write_value(None) is True
    assert policy.write_reason(None) is True
    assert policy.value == 0
    assert policy.reason == "n/a"


def test_transient_without_defaults_clears_to_none():
    policy = RetentionPolicy()
    policy.write_value("x")

    policy.clear()

    assert policy.value is None
    assert policy.reason is None


def test_persistent_ignores_clearing_writes():
    policy = RetentionPolicy(persistent=True, defaults=Defaults(value=0))
    policy.write_value(5)
    policy.write_reason("boom")

    assert policy.clear() is False
    assert policy.value == 5
    assert policy.reason == "boom"


def test_persistent_overwrites_with_non_null():
    policy = RetentionPolicy(persistent=True)
    policy.write_value(1)
    policy.write_value(2)

    assert policy.value == 2


def test_falsy_values_are_not_clearing_writes():
    policy = RetentionPolicy(defaults=Defaults(value=10))

    policy.write_value(0)

    assert policy.value == 0


def test_writes_dropped_when_not_alive():
    alive = {"flag": True}
    policy = RetentionPolicy(is_alive=lambda: alive["flag"])
    policy.write_value(1)

    alive["flag"] = False

    assert policy.write_value(2) is False
    assert policy.write_reason("late") is False
    assert policy.value == 1
    assert policy.reason is None
