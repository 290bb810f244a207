# src/fleetctl/adapters/transport/ssh.py
from __future__ import annotations
import shlex
from typing import List, Mapping, Optional, Sequence

from fleetctl.domain import RemoteExecutionError
from fleetctl.ports import ExecResult
from fleetctl.adapters.transport.local_shell import run_process

# ssh reserves 255 for its own failures (connect, auth, host key)
SSH_FAILURE = 255


class SshTransport:
    def __init__(
        self,
        launcher: str,
        *,
        user: Optional[str] = None,
        port: int = 22,
        connect_timeout: int = 10,
        timeout_s: Optional[float] = None,
        extra_options: Sequence[str] = (),
        ssh_binary: str = "ssh",
    ) -> None:
        self.launcher = launcher
        self.user = user
        self.port = port
        self.connect_timeout = connect_timeout
        self.timeout_s = timeout_s
        self.extra_options = list(extra_options)
        self.ssh_binary = ssh_binary

    def remote_command(self, command: str, env: Optional[Mapping[str, str]] = None) -> str:
        exports = [f"{k}={shlex.quote(v)}" for k, v in sorted((env or {}).items())]
        return " ".join([*exports, self.launcher, command])

    def argv(self, host: str, command: str, env: Optional[Mapping[str, str]] = None) -> List[str]:
        target = f"{self.user}@{host}" if self.user else host
        return [
            self.ssh_binary,
            "-o", "BatchMode=yes",
            "-o", "StrictHostKeyChecking=no",
            "-o", f"ConnectTimeout={self.connect_timeout}",
            "-p", str(self.port),
            *self.extra_options,
            target,
            self.remote_command(command, env),
        ]

    def run_on_host(self, host: str, command: str, *, env: Optional[Mapping[str, str]] = None) -> ExecResult:
        res = run_process(host, self.argv(host, command, env), shell=False, timeout_s=self.timeout_s)
        if res.exit_code == SSH_FAILURE:
            detail = res.stderr.strip().splitlines()
            raise RemoteExecutionError(
                host,
                "unreachable" + (f": {detail[-1]}" if detail else ""),
                exit_status=res.exit_code,
            )
        return res
