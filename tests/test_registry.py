from __future__ import annotations
import pytest

from fleetctl.domain import ConfigurationError, ProcessKind
from fleetctl.services.process import LeafProcess, ProcessRegistry, build_default_registry


def test_default_registry_contents():
    reg = build_default_registry()
    assert reg.frozen
    assert reg.names() == [
        "master",
        "job_master",
        "worker",
        "job_worker",
        "proxy",
        "masters",
        "job_masters",
        "workers",
        "job_workers",
        "proxies",
        "local",
        "all",
    ]
    kinds = {d.name: d.kind for d in reg.descriptors()}
    assert kinds["local"] is ProcessKind.COMPOSITE
    assert kinds["proxies"] is ProcessKind.LEAF


def test_unknown_process_is_a_configuration_error():
    with pytest.raises(ConfigurationError) as ei:
        build_default_registry().get("zookeeper")
    assert "zookeeper" in str(ei.value)


def test_frozen_registry_rejects_registration():
    reg = build_default_registry()
    with pytest.raises(RuntimeError):
        reg.register(LeafProcess("extra", "extra"))


def test_duplicate_names_rejected():
    reg = ProcessRegistry([LeafProcess("a", "a")])
    with pytest.raises(ValueError):
        reg.register(LeafProcess("a", "other"))
    assert len(reg) == 1 and "a" in reg
