from __future__ import annotations

from fleetctl.config import const
from fleetctl.domain import (
    ConfigurationError,
    HostSet,
    NoHostsConfiguredError,
    Scope,
    ScopeKind,
    UnknownHostError,
)
from fleetctl.ports import MembershipSource


class HostScopeResolver:
    """Turns a Scope into the concrete HostSet to act on.

    The membership source is only read. `tag` selects which membership list
    `all` expands to (masters / workers / all).
    """

    def __init__(self, membership: MembershipSource, local_host: str) -> None:
        self._membership = membership
        self._local_host = local_host

    @property
    def local_host(self) -> str:
        return self._local_host

    def resolve(self, scope: Scope, tag: str = const.TAG_ALL) -> HostSet:
        if scope.kind is ScopeKind.LOCAL:
            return HostSet.of([self._local_host])

        if scope.kind is ScopeKind.ALL:
            hosts = HostSet.of(self._membership.list_hosts(tag))
            if not hosts:
                raise NoHostsConfiguredError(tag)
            return hosts

        requested = HostSet.of(scope.hosts)
        if not requested:
            raise ConfigurationError("explicit host scope is empty")
        known = set(self._membership.list_hosts(const.TAG_ALL))
        unknown = [h for h in requested if h not in known]
        if unknown:
            raise UnknownHostError(unknown)
        return requested
