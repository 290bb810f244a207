# tests/test_transports.py
from __future__ import annotations
import sys

import pytest

from fleetctl.adapters.transport import LocalShellTransport, RoutingTransport, SshTransport
from fleetctl.adapters.transport import ssh as ssh_mod
from fleetctl.domain import RemoteExecutionError
from fleetctl.ports import ExecResult

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell builtins")


@posix_only
def test_local_shell_runs_launcher_with_command():
    res = LocalShellTransport("echo").run_on_host("me", "process start master -a")
    assert res.exit_code == 0
    assert res.stdout.strip() == "process start master -a"


@posix_only
def test_local_shell_passes_env():
    t = LocalShellTransport('sh -c \'echo "$FLEETCTL_MASTER_JAVA_OPTS"\'')
    res = t.run_on_host("me", "", env={"FLEETCTL_MASTER_JAVA_OPTS": "-Xmx2g"})
    assert res.stdout.strip() == "-Xmx2g"


@posix_only
def test_local_shell_reports_exit_status():
    res = LocalShellTransport("sh -c 'echo nope >&2; exit 3' --").run_on_host("me", "process stop worker")
    assert res.exit_code == 3
    assert "nope" in res.stderr


@posix_only
def test_local_shell_timeout_kills_and_raises():
    t = LocalShellTransport("sleep 5 #", timeout_s=0.3)
    with pytest.raises(RemoteExecutionError) as ei:
        t.run_on_host("me", "process start master")
    assert "timed out" in ei.value.reason


def test_ssh_argv_and_remote_command():
    t = SshTransport("/opt/fleet/bin/fleetd", user="ops", port=2222, connect_timeout=5)
    argv = t.argv("w1", "process start worker -a", {"B": "2", "A": "x y"})
    assert argv[0] == "ssh"
    assert argv[-2] == "ops@w1"
    assert argv[-1] == "A='x y' B=2 /opt/fleet/bin/fleetd process start worker -a"
    assert "ConnectTimeout=5" in argv
    assert argv[argv.index("-p") + 1] == "2222"


def test_ssh_failure_is_unreachable(monkeypatch):
    def fake_run(host, args, *, shell, env=None, timeout_s=None):
        return ExecResult(exit_code=255, stderr="ssh: connect to host w1 port 22: Connection refused\n")

    monkeypatch.setattr(ssh_mod, "run_process", fake_run)
    with pytest.raises(RemoteExecutionError) as ei:
        SshTransport("fleetd").run_on_host("w1", "process stop worker")
    assert ei.value.exit_status == 255
    assert "Connection refused" in ei.value.reason


def test_ssh_command_failure_is_returned(monkeypatch):
    monkeypatch.setattr(ssh_mod, "run_process", lambda *a, **k: ExecResult(exit_code=1, stderr="bad\n"))
    assert SshTransport("fleetd").run_on_host("w1", "x").exit_code == 1


class _Recorder:
    def __init__(self, name):
        self.name = name
        self.hosts = []

    def run_on_host(self, host, command, *, env=None):
        self.hosts.append(host)
        return ExecResult(exit_code=0, stdout=self.name)


def test_routing_transport():
    local, remote = _Recorder("local"), _Recorder("remote")
    t = RoutingTransport("me", local, remote)
    assert t.run_on_host("me", "x").stdout == "local"
    assert t.run_on_host("localhost", "x").stdout == "local"
    assert t.run_on_host("w1", "x").stdout == "remote"
    assert remote.hosts == ["w1"]
