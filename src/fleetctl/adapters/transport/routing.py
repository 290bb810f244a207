from __future__ import annotations
from typing import Mapping, Optional

from fleetctl.ports import ExecResult, ExecutionTransport


class RoutingTransport:
    """The local host goes through `local`, every other host through `remote`."""

    def __init__(self, local_host: str, local: ExecutionTransport, remote: ExecutionTransport) -> None:
        self.local_host = local_host
        self.local = local
        self.remote = remote

    def run_on_host(self, host: str, command: str, *, env: Optional[Mapping[str, str]] = None) -> ExecResult:
        target = self.local if host in (self.local_host, "localhost") else self.remote
        return target.run_on_host(host, command, env=env)
