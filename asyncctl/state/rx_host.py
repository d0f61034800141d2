"""Reactive host backed by FletXr primitives.

Mirrors controller snapshots into Rx properties so Flet widgets bound to
them re-render whenever the controller changes state.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fletx.core import RxBool, RxDict, RxStr

from asyncctl.controller.host import ControllerSnapshot, LocalHost
from asyncctl.controller.lifecycle import LifecycleState


class RxHost(LocalHost):
    """Host whose liveness and snapshot live in reactive properties.

    Usage:
        host = RxHost(name="profile")
        controller = AsyncController(load_profile, host=host)
        ft.Text(host.state.value)   # bound widgets refresh on change
    """

    def __init__(self, name: Optional[str] = None) -> None:
        super().__init__(name=name)
        self.alive: RxBool = RxBool(False)
        self.state: RxStr = RxStr(LifecycleState.IDLE.value)
        self.snapshot: RxDict[str, Any] = RxDict(self._as_dict(ControllerSnapshot()))

    def activate(self) -> bool:
        if not super().activate():
            return False
        self.alive.value = True
        return True

    def dispose(self) -> bool:
        if not super().dispose():
            return False
        self.alive.value = False
        return True

    def on_change(self, snapshot: ControllerSnapshot) -> None:
        super().on_change(snapshot)
        self.state.value = snapshot.state.value
        self.snapshot.value = self._as_dict(snapshot)

    @staticmethod
    def _as_dict(snapshot: ControllerSnapshot) -> Dict[str, Any]:
        return {
            "state": snapshot.state.value,
            "value": snapshot.value,
            "reason": snapshot.reason,
            "generation": snapshot.generation,
        }
