# src/fleetctl/domain/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from fleetctl.config import const
from fleetctl.domain.errors import ExecutionFailedError, RemoteExecutionError


@dataclass(frozen=True, slots=True)
class Event:
    type: str
    payload: Mapping[str, Any]
    source: str
    ts: float


class ProcessKind(str, Enum):
    LEAF = "leaf"
    COMPOSITE = "composite"


class ScopeKind(str, Enum):
    LOCAL = "local"
    ALL = "all"
    HOSTS = "hosts"


@dataclass(frozen=True, slots=True)
class Scope:
    """Logical target of an operation: `local`, `all` or an explicit host list."""

    kind: ScopeKind
    hosts: tuple[str, ...] = ()

    @classmethod
    def local(cls) -> "Scope":
        return cls(ScopeKind.LOCAL)

    @classmethod
    def all(cls) -> "Scope":
        return cls(ScopeKind.ALL)

    @classmethod
    def of(cls, hosts: Iterable[str]) -> "Scope":
        return cls(ScopeKind.HOSTS, tuple(h.strip() for h in hosts if h and h.strip()))

    @classmethod
    def parse(cls, text: str) -> "Scope":
        """`local` | `all` | comma separated host list."""
        value = text.strip()
        if value.lower() == ScopeKind.LOCAL.value:
            return cls.local()
        if value.lower() == ScopeKind.ALL.value:
            return cls.all()
        return cls.of(value.split(","))

    def __str__(self) -> str:
        if self.kind is ScopeKind.HOSTS:
            return ",".join(self.hosts)
        return self.kind.value


@dataclass(frozen=True, slots=True)
class ProcessDescriptor:
    name: str
    kind: ProcessKind
    help: str = ""
    default_scope: Scope = field(default_factory=Scope.local)


def _readonly(flags: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(flags or {}))


@dataclass(frozen=True, slots=True)
class StartRequest:
    scope: Scope
    flags: Mapping[str, Any] = field(default_factory=dict)
    command: str = const.START_COMMAND

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", _readonly(self.flags))


@dataclass(frozen=True, slots=True)
class StopRequest:
    scope: Scope
    flags: Mapping[str, Any] = field(default_factory=dict)
    command: str = const.STOP_COMMAND

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", _readonly(self.flags))


@dataclass(frozen=True, slots=True)
class HostSet:
    """Ordered, duplicate free set of host identifiers."""

    hosts: tuple[str, ...] = ()

    @classmethod
    def of(cls, hosts: Iterable[str]) -> "HostSet":
        return cls(tuple(dict.fromkeys(hosts)))

    def __iter__(self) -> Iterator[str]:
        return iter(self.hosts)

    def __len__(self) -> int:
        return len(self.hosts)

    def __contains__(self, host: object) -> bool:
        return host in self.hosts


@dataclass(frozen=True, slots=True)
class ExecutionOutcome:
    host: str
    exit_status: Optional[int]
    error: Optional[RemoteExecutionError] = None
    process: str = ""
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class AggregateResult:
    outcomes: tuple[ExecutionOutcome, ...] = ()

    @classmethod
    def merge(cls, results: Sequence["AggregateResult"]) -> "AggregateResult":
        return cls(tuple(o for r in results for o in r.outcomes))

    @property
    def success(self) -> bool:
        return all(o.ok for o in self.outcomes)

    @property
    def failures(self) -> list[ExecutionOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def failing_hosts(self) -> list[str]:
        return list(dict.fromkeys(o.host for o in self.outcomes if not o.ok))

    @property
    def error(self) -> Optional[ExecutionFailedError]:
        failures = self.failures
        return ExecutionFailedError(failures) if failures else None

    def raise_for_status(self) -> None:
        err = self.error
        if err is not None:
            raise err
