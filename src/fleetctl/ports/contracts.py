from __future__ import annotations
from typing import Any, Callable, List, Optional, Protocol

from fleetctl.domain import Event


class EventBus(Protocol):
    def subscribe(self, type_prefix: str, handler: Callable[[Event], Any]) -> None: ...
    def publish(self, event: Event) -> None: ...


class MembershipSource(Protocol):
    def list_hosts(self, tag: str) -> List[str]: ...


class ConfigProvider(Protocol):
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]: ...
