# tests/test_scope.py
from __future__ import annotations
import pytest

from fleetctl.adapters.membership import InMemoryMembershipSource
from fleetctl.domain import (
    ConfigurationError,
    HostSet,
    NoHostsConfiguredError,
    Scope,
    ScopeKind,
    UnknownHostError,
)
from fleetctl.services.process import HostScopeResolver


def test_local_is_singleton(membership):
    hosts = HostScopeResolver(membership, "me").resolve(Scope.local())
    assert list(hosts) == ["me"]


def test_all_preserves_order_and_dedups(membership):
    r = HostScopeResolver(membership, "me")
    assert list(r.resolve(Scope.all())) == ["m1", "m2", "w1", "w2"]
    assert list(r.resolve(Scope.all(), tag="workers")) == ["w1", "w2", "m1"]
    assert list(r.resolve(Scope.all(), tag="masters")) == ["m1", "m2"]


@pytest.mark.parametrize(
    "masters,workers",
    [
        (["a", "b", "a"], []),
        ([], ["c", "c", "d"]),
        (["x", "y"], ["y", "z", "x"]),
    ],
)
def test_resolved_host_sets_have_no_duplicates(masters, workers):
    source = InMemoryMembershipSource(masters, workers)
    r = HostScopeResolver(source, "me")
    for tag in ("masters", "workers", "all"):
        if not source.list_hosts(tag):
            continue
        hosts = list(r.resolve(Scope.all(), tag=tag))
        assert len(hosts) == len(set(hosts))
        assert hosts == list(dict.fromkeys(source.list_hosts(tag)))


def test_all_with_empty_membership_fails():
    r = HostScopeResolver(InMemoryMembershipSource(), "me")
    with pytest.raises(NoHostsConfiguredError) as ei:
        r.resolve(Scope.all(), tag="workers")
    assert ei.value.tag == "workers"


def test_explicit_hosts_keep_given_order(membership):
    r = HostScopeResolver(membership, "me")
    assert list(r.resolve(Scope.of(["w2", "m1", "w2"]))) == ["w2", "m1"]


def test_unknown_hosts_are_reported_not_skipped(membership):
    r = HostScopeResolver(membership, "me")
    with pytest.raises(UnknownHostError) as ei:
        r.resolve(Scope.of(["w1", "ghost", "phantom"]))
    assert ei.value.hosts == ("ghost", "phantom")
    assert "ghost" in str(ei.value) and "phantom" in str(ei.value)


def test_empty_explicit_scope_is_a_configuration_error(membership):
    with pytest.raises(ConfigurationError):
        HostScopeResolver(membership, "me").resolve(Scope.of([" ", ""]))


def test_resolution_does_not_mutate_membership(membership):
    before = {t: membership.list_hosts(t) for t in ("masters", "workers", "all")}
    r = HostScopeResolver(membership, "me")
    list(r.resolve(Scope.all()))
    list(r.resolve(Scope.of(["w1"])))
    assert {t: membership.list_hosts(t) for t in ("masters", "workers", "all")} == before


def test_unknown_tag_is_rejected(membership):
    with pytest.raises(ConfigurationError):
        membership.list_hosts("proxies")


@pytest.mark.parametrize(
    "text,kind,hosts",
    [
        ("local", ScopeKind.LOCAL, ()),
        ("ALL", ScopeKind.ALL, ()),
        ("h1, h2,,h3", ScopeKind.HOSTS, ("h1", "h2", "h3")),
    ],
)
def test_scope_parse(text, kind, hosts):
    scope = Scope.parse(text)
    assert scope.kind is kind
    assert scope.hosts == hosts


def test_host_set_of_dedups():
    assert HostSet.of(["a", "b", "a", "c", "b"]).hosts == ("a", "b", "c")
