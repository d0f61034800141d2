"""Host that republishes controller snapshots on the event bus."""

from __future__ import annotations

import logging
from typing import Optional

from asyncctl.controller.host import ControllerSnapshot, LocalHost
from asyncctl.shared.core import events
from asyncctl.shared.core.configuration import AsyncCtlConfig
from asyncctl.shared.core.event_bus import EventBus, EventPayload

logger = logging.getLogger(__name__)


class BusHost(LocalHost):
    """Host that republishes snapshots on an :class:`EventBus`."""

    def __init__(
        self,
        bus: EventBus,
        topic: str = events.TOPIC_CONTROLLER_STATE,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(name=name)
        self.bus = bus
        self.topic = topic

    @classmethod
    def from_config(cls, bus: EventBus, config: AsyncCtlConfig, name: Optional[str] = None) -> "BusHost":
        """Host publishing on the topic configured under ``events.state_topic``."""
        return cls(bus, topic=config.events.state_topic, name=name)

    def _publish(self, topic: str, payload: EventPayload) -> None:
        try:
            self.bus.publish_nowait(topic, payload)
        except RuntimeError:
            logger.debug(f"No running loop; '{topic}' event for {self.name} not published")

    def on_change(self, snapshot: ControllerSnapshot) -> None:
        super().on_change(snapshot)
        self._publish(self.topic, snapshot.to_payload(self.name))

    def dispose(self) -> bool:
        if not super().dispose():
            return False
        self._publish(events.TOPIC_CONTROLLER_DISPOSED, events.create_disposed_event(self.name))
        return True
