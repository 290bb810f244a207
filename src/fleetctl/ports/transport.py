from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol


@dataclass
class ExecResult:
    exit_code: int
    stdout: str = ""
    stderr: str = ""


class ExecutionTransport(Protocol):
    """Runs one command line on one host; blocks until it finishes.

    Raises when the command cannot be attempted at all (unreachable host,
    missing launcher, transport timeout).
    """

    def run_on_host(
        self,
        host: str,
        command: str,
        *,
        env: Optional[Mapping[str, str]] = None,
    ) -> ExecResult: ...
