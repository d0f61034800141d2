"""Host adapters that surface controller state to observers.

- BusHost: republishes snapshots on the EventBus
- RxHost: mirrors snapshots into FletXr reactive properties
  (import from ``asyncctl.state.rx_host``; it pulls in Flet)
"""

from .bus_host import BusHost

__all__ = ["BusHost"]
