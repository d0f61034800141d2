"""Controller configuration models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from asyncctl.shared.core.configuration import ControllerSettings


class TriggerMode(str, Enum):
    """When the controller first runs its operation."""
    MANUAL = "manual"              # only on an explicit trigger()
    ON_ACTIVATE = "on_activate"    # trigger(*initial_args) once at activation


class Defaults(BaseModel):
    """Placeholders used by transient retention when nothing is known."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    value: Any = Field(default=None, description="Value shown while idle or pending")
    reason: Any = Field(default=None, description="Reason shown while idle or pending")


class ControllerOptions(BaseModel):
    """Options for :class:`~asyncctl.controller.async_controller.AsyncController`."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    persistent: bool = Field(default=False, description="Ignore clearing writes")
    defaults: Defaults = Field(default_factory=Defaults)
    mode: TriggerMode = Field(default=TriggerMode.MANUAL)
    initial_args: Tuple[Any, ...] = Field(default=(), description="Arguments for the activation trigger")

    @model_validator(mode='after')
    def _check_initial_args(self) -> "ControllerOptions":
        if self.initial_args and self.mode is not TriggerMode.ON_ACTIVATE:
            raise ValueError("initial_args requires mode=TriggerMode.ON_ACTIVATE")
        return self

    @classmethod
    def from_settings(cls, settings: ControllerSettings, **overrides: Any) -> "ControllerOptions":
        """Build options from loaded configuration, ``overrides`` taking precedence."""
        data: dict[str, Any] = {
            "persistent": settings.persistent,
            "defaults": Defaults(value=settings.default_value, reason=settings.default_reason),
        }
        data.update(overrides)
        return cls(**data)
