from .base import AnyProcess, CompositeProcess, LeafProcess, Process, ProcessRuntime
from .catalog import build_default_registry
from .command import FlagSpec, START_FLAGS, STOP_FLAGS, build_command
from .dispatch import DispatchState, FanOutDispatcher, aggregate
from .registry import ProcessRegistry
from .scope import HostScopeResolver

__all__ = [
    "AnyProcess",
    "CompositeProcess",
    "LeafProcess",
    "Process",
    "ProcessRuntime",
    "build_default_registry",
    "FlagSpec",
    "START_FLAGS",
    "STOP_FLAGS",
    "build_command",
    "DispatchState",
    "FanOutDispatcher",
    "aggregate",
    "ProcessRegistry",
    "HostScopeResolver",
]
