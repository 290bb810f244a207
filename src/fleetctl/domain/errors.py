"""Error taxonomy of the process orchestration core."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from fleetctl.domain.types import ExecutionOutcome

__all__ = [
    "FleetError",
    "ConfigurationError",
    "ScopeResolutionError",
    "UnknownHostError",
    "NoHostsConfiguredError",
    "RemoteExecutionError",
    "ExecutionFailedError",
]


class FleetError(Exception):
    """Base class for every error raised by fleetctl."""


class ConfigurationError(FleetError):
    """Bad or unknown flag, unknown process/tag or a missing required setting."""


class ScopeResolutionError(FleetError):
    """Scope could not be turned into a host set; nothing was dispatched."""


class UnknownHostError(ScopeResolutionError):
    def __init__(self, hosts: Iterable[str]) -> None:
        self.hosts = tuple(hosts)
        super().__init__(f"unknown host(s): {', '.join(self.hosts)}")


class NoHostsConfiguredError(ScopeResolutionError):
    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"no hosts configured for '{tag}'")


class RemoteExecutionError(FleetError):
    """A single host's command failed or could not be attempted."""

    def __init__(self, host: str, message: str, *, exit_status: Optional[int] = None) -> None:
        self.host = host
        self.reason = message
        self.exit_status = exit_status
        super().__init__(f"{host}: {message}")


class ExecutionFailedError(FleetError):
    """Aggregate failure; the message lists every failing host, not only the first."""

    def __init__(self, failures: Sequence["ExecutionOutcome"]) -> None:
        self.failures = tuple(failures)
        hosts = list(dict.fromkeys(o.host for o in self.failures))
        details = "; ".join(_describe(o) for o in self.failures)
        super().__init__(f"failed on {len(hosts)} host(s): {', '.join(hosts)} ({details})")

    @property
    def hosts(self) -> list[str]:
        return list(dict.fromkeys(o.host for o in self.failures))


def _describe(outcome: "ExecutionOutcome") -> str:
    reason = outcome.error.reason if outcome.error is not None else "failed"
    if outcome.process:
        return f"{outcome.process}@{outcome.host}: {reason}"
    return f"{outcome.host}: {reason}"
