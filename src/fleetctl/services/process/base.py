# src/fleetctl/services/process/base.py
"""Process contract and its two variants.

`LeafProcess` drives one daemon kind: it builds a single command line and
dispatches it to the resolved hosts. `CompositeProcess` has no command of its
own; start/stop fold over a fixed, ordered list of children.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, MutableMapping, Optional, Protocol, Tuple, Union, runtime_checkable

from fleetctl.config import const
from fleetctl.domain import (
    AggregateResult,
    HostSet,
    ProcessDescriptor,
    ProcessKind,
    Scope,
    StartRequest,
    StopRequest,
)
from fleetctl.ports import ConfigProvider, EventBus
from fleetctl.services.process.command import build_start_command, build_stop_command
from fleetctl.services.process.dispatch import DispatchState, FanOutDispatcher, aggregate, publish_state
from fleetctl.services.process.scope import HostScopeResolver


@dataclass(slots=True)
class ProcessRuntime:
    """Per-invocation collaborators handed to start()/stop()."""

    resolver: HostScopeResolver
    dispatcher: FanOutDispatcher
    bus: Optional[EventBus] = None


# (leaf, hosts it will run on), in dispatch order
Plan = List[Tuple["LeafProcess", HostSet]]


@runtime_checkable
class Process(Protocol):
    @property
    def descriptor(self) -> ProcessDescriptor: ...

    def set_env_vars(self, config: ConfigProvider, env: MutableMapping[str, str]) -> None: ...
    def build_start_command(self, req: StartRequest) -> str: ...
    def build_stop_command(self, req: StopRequest) -> str: ...
    def resolve_all(self, scope: Scope, runtime: ProcessRuntime) -> Plan: ...
    def start(self, req: StartRequest, runtime: ProcessRuntime) -> AggregateResult: ...
    def stop(self, req: StopRequest, runtime: ProcessRuntime) -> AggregateResult: ...


@dataclass(frozen=True, slots=True)
class LeafProcess:
    """
    One daemon kind. `daemon` is the token placed in the command line; for
    fleet groups (`masters`, `proxies`, ...) it names the member daemon while
    `name` is the group name. `hosts_tag` picks the membership list that the
    `all` scope expands to.
    """

    name: str
    daemon: str
    hosts_tag: str = const.TAG_ALL
    default_scope: Scope = field(default_factory=Scope.local)
    help: str = ""
    # fleet groups leave environment derivation to the remote hosts
    configures_env: bool = True

    @property
    def descriptor(self) -> ProcessDescriptor:
        return ProcessDescriptor(self.name, ProcessKind.LEAF, self.help, self.default_scope)

    @property
    def java_opts_var(self) -> str:
        return f"FLEETCTL_{self.daemon.upper()}_JAVA_OPTS"

    def set_env_vars(self, config: ConfigProvider, env: MutableMapping[str, str]) -> None:
        if not self.configures_env:
            return
        parts = [
            config.get("FLEETCTL_JAVA_OPTS"),
            config.get(self.java_opts_var),
            f"-Dfleet.logger.type={self.daemon.upper()}_LOGGER",
        ]
        env[self.java_opts_var] = " ".join(p.strip() for p in parts if p and p.strip())

    def build_start_command(self, req: StartRequest) -> str:
        return build_start_command(self.daemon, req.flags, req.command)

    def build_stop_command(self, req: StopRequest) -> str:
        return build_stop_command(self.daemon, req.flags, req.command)

    def start(self, req: StartRequest, runtime: ProcessRuntime) -> AggregateResult:
        return self._run(req.scope, lambda: self.build_start_command(req), runtime)

    def stop(self, req: StopRequest, runtime: ProcessRuntime) -> AggregateResult:
        return self._run(req.scope, lambda: self.build_stop_command(req), runtime)

    def resolve_all(self, scope: Scope, runtime: ProcessRuntime) -> Plan:
        publish_state(runtime.bus, DispatchState.RESOLVING, {"process": self.name, "scope": str(scope)})
        return [(self, runtime.resolver.resolve(scope, tag=self.hosts_tag))]

    def dispatch(self, command: str, hosts: HostSet, runtime: ProcessRuntime) -> AggregateResult:
        outcomes = runtime.dispatcher.execute(command, hosts, process=self.name)
        return aggregate(outcomes, bus=runtime.bus, process=self.name)

    def _run(self, scope: Scope, build: Callable[[], str], runtime: ProcessRuntime) -> AggregateResult:
        [(_, hosts)] = self.resolve_all(scope, runtime)
        return self.dispatch(build(), hosts, runtime)


@dataclass(frozen=True, slots=True)
class CompositeProcess:
    """Named group over child processes; children always all run, in order."""

    name: str
    children: tuple["AnyProcess", ...]
    default_scope: Scope = field(default_factory=Scope.local)
    help: str = ""

    @property
    def descriptor(self) -> ProcessDescriptor:
        return ProcessDescriptor(self.name, ProcessKind.COMPOSITE, self.help, self.default_scope)

    def set_env_vars(self, config: ConfigProvider, env: MutableMapping[str, str]) -> None:
        for child in self.children:
            child.set_env_vars(config, env)

    def build_start_command(self, req: StartRequest) -> str:
        # one line per child, in child order
        return "\n".join(child.build_start_command(req) for child in self.children)

    def build_stop_command(self, req: StopRequest) -> str:
        return "\n".join(child.build_stop_command(req) for child in self.children)

    def resolve_all(self, scope: Scope, runtime: ProcessRuntime) -> Plan:
        return [step for child in self.children for step in child.resolve_all(scope, runtime)]

    def start(self, req: StartRequest, runtime: ProcessRuntime) -> AggregateResult:
        return self._fold(req.scope, lambda leaf: leaf.build_start_command(req), runtime)

    def stop(self, req: StopRequest, runtime: ProcessRuntime) -> AggregateResult:
        return self._fold(req.scope, lambda leaf: leaf.build_stop_command(req), runtime)

    def _fold(
        self, scope: Scope, build: Callable[["LeafProcess"], str], runtime: ProcessRuntime
    ) -> AggregateResult:
        # every leaf resolves and builds before the first command is sent
        plan = [(leaf, hosts, build(leaf)) for leaf, hosts in self.resolve_all(scope, runtime)]
        results = [leaf.dispatch(command, hosts, runtime) for leaf, hosts, command in plan]
        merged = AggregateResult.merge(results)
        return aggregate(list(merged.outcomes), bus=runtime.bus, process=self.name)


AnyProcess = Union[LeafProcess, CompositeProcess]
