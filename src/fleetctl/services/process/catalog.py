# src/fleetctl/services/process/catalog.py
from __future__ import annotations

from fleetctl.config.const import TAG_ALL, TAG_MASTERS, TAG_WORKERS
from fleetctl.domain import Scope
from fleetctl.services.process.base import CompositeProcess, LeafProcess
from fleetctl.services.process.registry import ProcessRegistry

MASTER = LeafProcess("master", "master", TAG_MASTERS, help="master daemon")
JOB_MASTER = LeafProcess("job_master", "job_master", TAG_MASTERS, help="job master daemon")
WORKER = LeafProcess("worker", "worker", TAG_WORKERS, help="worker daemon")
JOB_WORKER = LeafProcess("job_worker", "job_worker", TAG_WORKERS, help="job worker daemon")
PROXY = LeafProcess("proxy", "proxy", TAG_ALL, help="proxy daemon")


def _fleet(name: str, member: LeafProcess) -> LeafProcess:
    return LeafProcess(
        name=name,
        daemon=member.daemon,
        hosts_tag=member.hosts_tag,
        default_scope=Scope.all(),
        help=f"{member.daemon} on every host listed under '{member.hosts_tag}'",
        configures_env=False,
    )


MASTERS = _fleet("masters", MASTER)
JOB_MASTERS = _fleet("job_masters", JOB_MASTER)
WORKERS = _fleet("workers", WORKER)
JOB_WORKERS = _fleet("job_workers", JOB_WORKER)
PROXIES = _fleet("proxies", PROXY)

LOCAL = CompositeProcess(
    "local",
    (MASTER, JOB_MASTER, WORKER, JOB_WORKER, PROXY),
    default_scope=Scope.local(),
    help="every daemon on this host",
)
ALL = CompositeProcess(
    "all",
    (MASTERS, JOB_MASTERS, WORKERS, JOB_WORKERS, PROXIES),
    default_scope=Scope.all(),
    help="every daemon on every host",
)

BUILTIN = (MASTER, JOB_MASTER, WORKER, JOB_WORKER, PROXY, MASTERS, JOB_MASTERS, WORKERS, JOB_WORKERS, PROXIES, LOCAL, ALL)


def build_default_registry() -> ProcessRegistry:
    return ProcessRegistry(BUILTIN).freeze()
