"""Shared fixtures for asyncctl tests."""

import asyncio
from typing import List

import pytest

from asyncctl import ControllerSnapshot, LifecycleState, LocalHost


class RecordingHost(LocalHost):
    """LocalHost that keeps every snapshot it receives."""

    def __init__(self, name: str = "test") -> None:
        super().__init__(name=name)
        self.snapshots: List[ControllerSnapshot] = []

    def on_change(self, snapshot: ControllerSnapshot) -> None:
        super().on_change(snapshot)
        self.snapshots.append(snapshot)

    @property
    def states(self) -> List[LifecycleState]:
        return [snapshot.state for snapshot in self.snapshots]


@pytest.fixture
def host() -> RecordingHost:
    recording = RecordingHost()
    recording.activate()
    return recording


@pytest.fixture
def inactive_host() -> RecordingHost:
    return RecordingHost(name="inactive")


@pytest.fixture
def flush():
    """Let pending future callbacks and tasks run."""

    async def _flush(turns: int = 10) -> None:
        for _ in range(turns):
            await asyncio.sleep(0)

    return _flush


@pytest.fixture
def gate():
    """Factory for futures used as manually settled operations."""

    def _gate() -> asyncio.Future:
        return asyncio.get_running_loop().create_future()

    return _gate
