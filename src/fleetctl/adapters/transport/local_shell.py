# src/fleetctl/adapters/transport/local_shell.py
from __future__ import annotations
import os
import subprocess
from typing import Mapping, Optional, Sequence, Union

import psutil

from fleetctl.domain import RemoteExecutionError
from fleetctl.ports import ExecResult


def _kill_tree(pid: int) -> None:
    try:
        proc = psutil.Process(pid)
    except psutil.NoSuchProcess:
        return
    for child in proc.children(recursive=True):
        try:
            child.kill()
        except psutil.NoSuchProcess:
            pass
    try:
        proc.kill()
    except psutil.NoSuchProcess:
        pass


def run_process(
    host: str,
    args: Union[str, Sequence[str]],
    *,
    shell: bool,
    env: Optional[Mapping[str, str]] = None,
    timeout_s: Optional[float] = None,
) -> ExecResult:
    """Popen + communicate; on timeout the whole process tree is killed."""
    try:
        p = subprocess.Popen(
            args,
            shell=shell,
            env=dict(env) if env is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise RemoteExecutionError(host, f"cannot spawn: {e}") from e

    try:
        out, err = p.communicate(timeout=timeout_s)
    except subprocess.TimeoutExpired:
        _kill_tree(p.pid)
        p.communicate()
        raise RemoteExecutionError(host, f"timed out after {timeout_s}s") from None
    return ExecResult(exit_code=p.returncode, stdout=out or "", stderr=err or "")


class LocalShellTransport:
    """Runs `<launcher> <command>` through the local shell."""

    def __init__(self, launcher: str, *, timeout_s: Optional[float] = None) -> None:
        self.launcher = launcher
        self.timeout_s = timeout_s

    def run_on_host(self, host: str, command: str, *, env: Optional[Mapping[str, str]] = None) -> ExecResult:
        merged = dict(os.environ)
        if env:
            merged.update(env)
        return run_process(host, f"{self.launcher} {command}", shell=True, env=merged, timeout_s=self.timeout_s)
