from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, List

from fleetctl.domain import ConfigurationError, ProcessDescriptor
from fleetctl.services.process.base import AnyProcess


class ProcessRegistry:
    """Name -> process table. Filled once at startup, read-only after freeze()."""

    def __init__(self, processes: Iterable[AnyProcess] = ()) -> None:
        self._items: Dict[str, AnyProcess] = {}
        self._frozen = False
        for p in processes:
            self.register(p)

    def register(self, process: AnyProcess) -> None:
        if self._frozen:
            raise RuntimeError("process registry is frozen")
        name = process.descriptor.name
        if name in self._items:
            raise ValueError(f"process '{name}' is already registered")
        self._items[name] = process

    def freeze(self) -> "ProcessRegistry":
        self._frozen = True
        self._items = MappingProxyType(dict(self._items))  # type: ignore[assignment]
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> AnyProcess:
        try:
            return self._items[name]
        except KeyError:
            raise ConfigurationError(f"unknown process '{name}' (known: {', '.join(self.names())})") from None

    def names(self) -> List[str]:
        return list(self._items)

    def descriptors(self) -> List[ProcessDescriptor]:
        return [p.descriptor for p in self._items.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __len__(self) -> int:
        return len(self._items)
