# src/fleetctl/services/process/dispatch.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional

from fleetctl.domain import AggregateResult, ExecutionOutcome, HostSet, RemoteExecutionError
from fleetctl.ports import EventBus, ExecutionTransport
from fleetctl.services.eventbus import emit

_SOURCE = "dispatch"
_log = logging.getLogger("fleetctl.dispatch")


class DispatchState(str, Enum):
    RESOLVING = "resolving"
    DISPATCHING = "dispatching"
    COLLECTING = "collecting"
    AGGREGATED = "aggregated"


def publish_state(bus: Optional[EventBus], state: DispatchState, payload: dict) -> None:
    emit(bus, f"process.{state.value}", payload, _SOURCE)


class FanOutDispatcher:
    """
    Runs one command on every host of a HostSet:
      - a single host is called directly on the current thread
      - several hosts get one worker each; all of them run to completion,
        a failing host never cancels its siblings
      - outcomes come back in host-set order, not completion order
      - per-host failures end up in the outcome, execute() itself does not raise
    """

    def __init__(
        self,
        transport: ExecutionTransport,
        *,
        bus: Optional[EventBus] = None,
        env: Optional[Mapping[str, str]] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self._transport = transport
        self._bus = bus
        self._env: Mapping[str, str] = env if env is not None else {}
        self._max_workers = max_workers

    def execute(self, command: str, hosts: HostSet, *, process: str = "") -> List[ExecutionOutcome]:
        # each unit gets the same read-only view
        env = MappingProxyType(dict(self._env))
        publish_state(self._bus, DispatchState.DISPATCHING, {"process": process, "command": command, "hosts": list(hosts)})

        if len(hosts) <= 1:
            publish_state(self._bus, DispatchState.COLLECTING, {"process": process, "pending": len(hosts)})
            outcomes = [self._run_one(command, host, env, process) for host in hosts]
        else:
            workers = min(len(hosts), self._max_workers or len(hosts))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fleetctl-fanout") as pool:
                futures = [pool.submit(self._run_one, command, host, env, process) for host in hosts]
                publish_state(self._bus, DispatchState.COLLECTING, {"process": process, "pending": len(futures)})
                outcomes = [f.result() for f in futures]

        for outcome in outcomes:
            self._announce(outcome)
        return outcomes

    def _run_one(self, command: str, host: str, env: Mapping[str, str], process: str) -> ExecutionOutcome:
        try:
            res = self._transport.run_on_host(host, command, env=env)
        except RemoteExecutionError as e:
            return ExecutionOutcome(host=host, exit_status=e.exit_status, error=e, process=process)
        except Exception as e:  # transport could not even attempt the command
            err = RemoteExecutionError(host, f"{type(e).__name__}: {e}")
            return ExecutionOutcome(host=host, exit_status=None, error=err, process=process)

        error = None
        if res.exit_code != 0:
            detail = (res.stderr or "").strip().splitlines()
            message = f"exit status {res.exit_code}" + (f": {detail[-1]}" if detail else "")
            error = RemoteExecutionError(host, message, exit_status=res.exit_code)
        return ExecutionOutcome(
            host=host,
            exit_status=res.exit_code,
            error=error,
            process=process,
            stdout=res.stdout,
            stderr=res.stderr,
        )

    def _announce(self, outcome: ExecutionOutcome) -> None:
        payload = {
            "process": outcome.process,
            "host": outcome.host,
            "exit_status": outcome.exit_status,
            "ok": outcome.ok,
            "error": outcome.error.reason if outcome.error else None,
        }
        try:
            emit(self._bus, "process.host", payload, _SOURCE)
        except Exception:
            # outcome stays final, subscriber errors are only logged
            _log.warning("process.host handler failed for %s@%s", outcome.process, outcome.host, exc_info=True)


def aggregate(outcomes: List[ExecutionOutcome], *, bus: Optional[EventBus] = None, process: str = "") -> AggregateResult:
    result = AggregateResult(tuple(outcomes))
    publish_state(
        bus,
        DispatchState.AGGREGATED,
        {"process": process, "success": result.success, "failing_hosts": result.failing_hosts},
    )
    return result
