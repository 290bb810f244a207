# src/fleetctl/apps/bootstrap.py
from __future__ import annotations
from threading import RLock
from typing import Optional

from fleetctl.adapters.config import EnvFileConfig
from fleetctl.adapters.membership import YamlMembershipSource
from fleetctl.adapters.transport import LocalShellTransport, RoutingTransport, SshTransport
from fleetctl.ports import ExecutionTransport
from fleetctl.services.context import FleetContext, get_ctx, set_ctx
from fleetctl.services.eventbus import LocalEventBus
from fleetctl.services.logging import attach_event_logger, setup_logging
from fleetctl.services.process import build_default_registry
from fleetctl.services.settings import Settings


def build_transport(settings: Settings) -> ExecutionTransport:
    launcher = settings.launcher_path
    local = LocalShellTransport(launcher, timeout_s=settings.exec_timeout_s)
    remote = SshTransport(
        launcher,
        user=settings.ssh_user,
        port=settings.ssh_port,
        connect_timeout=settings.ssh_connect_timeout,
        timeout_s=settings.exec_timeout_s,
    )
    return RoutingTransport(settings.local_host, local, remote)


class _CtxHolder:
    _ctx: Optional[FleetContext] = None
    _lock = RLock()

    @classmethod
    def init(cls, settings: Optional[Settings] = None) -> FleetContext:
        with cls._lock:
            cls._ctx = cls._build(settings or Settings.from_sources())
            set_ctx(cls._ctx)
            return cls._ctx

    @staticmethod
    def _build(settings: Settings) -> FleetContext:
        bus = LocalEventBus()
        root_logger = setup_logging(settings.logs_dir, level=settings.log_level)
        attach_event_logger(bus, root_logger.getChild("events"))

        return FleetContext(
            settings=settings,
            config=EnvFileConfig(settings.env_file),
            membership=YamlMembershipSource(settings.hosts_file),
            transport=build_transport(settings),
            bus=bus,
            registry=build_default_registry(),
        )


def init_ctx(settings: Optional[Settings] = None) -> FleetContext:
    return _CtxHolder.init(settings)


__all__ = ["build_transport", "init_ctx", "get_ctx"]
