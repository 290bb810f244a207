# tests/conftest.py
from __future__ import annotations
import logging
import threading
import time
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import pytest

from fleetctl.adapters.membership import InMemoryMembershipSource
from fleetctl.domain import RemoteExecutionError
from fleetctl.ports import ExecResult
from fleetctl.services.context import clear_ctx
from fleetctl.services.eventbus import LocalEventBus
from fleetctl.services.process import FanOutDispatcher, HostScopeResolver, ProcessRuntime

LOCAL_HOST = "local-host"


class ScriptedTransport:
    """
    Test transport:
      - `failing`: hosts answering with exit status 1
      - `failing_commands`: commands answered with exit status 1 on any host
      - `unreachable`: hosts where the command cannot be attempted
      - `delays`: seconds to sleep before answering, per host
    Every call is recorded (host, command, env, thread name); completion order too.
    """

    def __init__(
        self,
        *,
        failing: Iterable[str] = (),
        unreachable: Iterable[str] = (),
        failing_commands: Iterable[str] = (),
        delays: Optional[Dict[str, float]] = None,
        barrier: Optional[threading.Barrier] = None,
    ) -> None:
        self.failing = set(failing)
        self.unreachable = set(unreachable)
        self.failing_commands = set(failing_commands)
        self.delays = dict(delays or {})
        self.barrier = barrier
        self.calls: List[Tuple[str, str, Dict[str, str], str]] = []
        self.completed: List[str] = []
        self._lock = threading.Lock()

    def run_on_host(self, host: str, command: str, *, env: Optional[Mapping[str, str]] = None) -> ExecResult:
        with self._lock:
            self.calls.append((host, command, dict(env or {}), threading.current_thread().name))
        if self.barrier is not None:
            self.barrier.wait()
        time.sleep(self.delays.get(host, 0))
        try:
            if host in self.unreachable:
                raise ConnectionRefusedError("connection refused")
            if host in self.failing or command in self.failing_commands:
                return ExecResult(exit_code=1, stdout="", stderr="boom\n")
            return ExecResult(exit_code=0, stdout=f"{command} on {host}\n")
        finally:
            with self._lock:
                self.completed.append(host)

    @property
    def hosts_called(self) -> List[str]:
        return [c[0] for c in self.calls]

    def commands_for(self, host: str) -> List[str]:
        return [c[1] for c in self.calls if c[0] == host]


class RaisingTransport:
    def run_on_host(self, host, command, *, env=None):
        raise RemoteExecutionError(host, "unreachable: no route to host", exit_status=255)


@pytest.fixture
def membership() -> InMemoryMembershipSource:
    return InMemoryMembershipSource(masters=["m1", "m2"], workers=["w1", "w2", "m1"])


@pytest.fixture
def bus() -> LocalEventBus:
    return LocalEventBus()


@pytest.fixture
def events(bus) -> list:
    seen: list = []
    bus.subscribe("", seen.append)
    return seen


@pytest.fixture
def make_runtime(membership, bus):
    def _make(transport, *, env: Optional[Dict[str, str]] = None, members=None) -> ProcessRuntime:
        return ProcessRuntime(
            resolver=HostScopeResolver(members or membership, LOCAL_HOST),
            dispatcher=FanOutDispatcher(transport, bus=bus, env=env),
            bus=bus,
        )

    return _make


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("FLEETCTL_HOME", str(home))
    monkeypatch.setenv("FLEETCTL_LOCAL_HOST", LOCAL_HOST)
    for key in (
        "FLEETCTL_JAVA_OPTS",
        "FLEETCTL_MASTER_JAVA_OPTS",
        "FLEETCTL_LAUNCHER",
        "FLEETCTL_MAX_PARALLEL",
        "FLEETCTL_EXEC_TIMEOUT_S",
    ):
        monkeypatch.delenv(key, raising=False)
    try:
        yield home
    finally:
        clear_ctx()
        logger = logging.getLogger("fleetctl")
        for h in list(logger.handlers):
            h.close()
        logger.handlers.clear()
        logger.propagate = True
