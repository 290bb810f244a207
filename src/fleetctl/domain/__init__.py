from .types import (
    AggregateResult,
    Event,
    ExecutionOutcome,
    HostSet,
    ProcessDescriptor,
    ProcessKind,
    Scope,
    ScopeKind,
    StartRequest,
    StopRequest,
)
from .errors import (
    ConfigurationError,
    ExecutionFailedError,
    FleetError,
    NoHostsConfiguredError,
    RemoteExecutionError,
    ScopeResolutionError,
    UnknownHostError,
)

__all__ = [
    "AggregateResult",
    "Event",
    "ExecutionOutcome",
    "HostSet",
    "ProcessDescriptor",
    "ProcessKind",
    "Scope",
    "ScopeKind",
    "StartRequest",
    "StopRequest",
    "ConfigurationError",
    "ExecutionFailedError",
    "FleetError",
    "NoHostsConfiguredError",
    "RemoteExecutionError",
    "ScopeResolutionError",
    "UnknownHostError",
]
