"""Command line construction for start/stop requests.

The textual shape is stable and part of the public contract::

    <service> <subcommand> <process> [flag tokens in declaration order]

e.g. ``process start master -a -N``. The transport prepends the node-side
launcher executable.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from fleetctl.config import const
from fleetctl.domain import ConfigurationError


@dataclass(frozen=True, slots=True)
class FlagSpec:
    name: str
    token: str
    help: str = ""
    takes_value: bool = False


START_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec("async", "-a", "return without waiting for the process to come up"),
    FlagSpec("skip_kill", "-N", "do not kill an already running instance before starting"),
)

STOP_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec("soft", "-s", "send SIGTERM and let the process exit on its own"),
)


def render_flags(flags: Mapping[str, Any], declared: Sequence[FlagSpec]) -> list[str]:
    known = {spec.name for spec in declared}
    unknown = sorted(k for k in flags if k not in known)
    if unknown:
        allowed = ", ".join(spec.name for spec in declared) or "none"
        raise ConfigurationError(f"unsupported flag(s): {', '.join(unknown)} (allowed: {allowed})")

    tokens: list[str] = []
    for spec in declared:
        if spec.name not in flags:
            continue
        value = flags[spec.name]
        if spec.takes_value:
            if value is None:
                continue
            if isinstance(value, bool):
                raise ConfigurationError(f"flag '{spec.name}' expects a value, got {value!r}")
            tokens += [spec.token, shlex.quote(str(value))]
        else:
            if not isinstance(value, bool):
                raise ConfigurationError(f"flag '{spec.name}' is a switch, got {value!r}")
            if value:
                tokens.append(spec.token)
    return tokens


def build_command(
    service: str,
    subcommand: str,
    process: str,
    flags: Mapping[str, Any],
    declared: Sequence[FlagSpec],
) -> str:
    return " ".join([service, subcommand, process, *render_flags(flags, declared)])


def build_start_command(process: str, flags: Mapping[str, Any], subcommand: str = const.START_COMMAND) -> str:
    return build_command(const.SERVICE_NAME, subcommand, process, flags, START_FLAGS)


def build_stop_command(process: str, flags: Mapping[str, Any], subcommand: str = const.STOP_COMMAND) -> str:
    return build_command(const.SERVICE_NAME, subcommand, process, flags, STOP_FLAGS)
