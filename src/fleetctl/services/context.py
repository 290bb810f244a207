# src/fleetctl/services/context.py
from __future__ import annotations
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Dict, Optional

from fleetctl.ports import ConfigProvider, EventBus, ExecutionTransport, MembershipSource
from fleetctl.services.process import FanOutDispatcher, HostScopeResolver, ProcessRegistry, ProcessRuntime
from fleetctl.services.settings import Settings

_CTX: ContextVar[Optional["FleetContext"]] = ContextVar("fleetctl_ctx", default=None)


def set_ctx(ctx: "FleetContext") -> None:
    _CTX.set(ctx)


def get_ctx() -> "FleetContext":
    ctx = _CTX.get()
    if ctx is None:
        raise RuntimeError("FleetContext is not initialized. Call init_ctx(...) during app bootstrap.")
    return ctx


def clear_ctx() -> None:
    _CTX.set(None)


@contextmanager
def use_ctx(ctx: "FleetContext"):
    """Temporarily swap the current context (tests)."""
    token = _CTX.set(ctx)
    try:
        yield ctx
    finally:
        _CTX.reset(token)


@dataclass(slots=True)
class FleetContext:
    settings: Settings
    config: ConfigProvider
    membership: MembershipSource
    transport: ExecutionTransport
    bus: EventBus
    registry: ProcessRegistry
    # filled by Process.set_env_vars, snapshotted by the dispatcher
    env: Dict[str, str] = field(default_factory=dict)

    def runtime(self) -> ProcessRuntime:
        return ProcessRuntime(
            resolver=HostScopeResolver(self.membership, self.settings.local_host),
            dispatcher=FanOutDispatcher(
                self.transport,
                bus=self.bus,
                env=self.env,
                max_workers=self.settings.max_parallel,
            ),
            bus=self.bus,
        )
