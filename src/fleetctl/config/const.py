# src/fleetctl/config/const.py
from __future__ import annotations

# first token of every dispatched command: `<launcher> process start master`
SERVICE_NAME = "process"

START_COMMAND = "start"
STOP_COMMAND = "stop"

# membership tags understood by every MembershipSource
TAG_MASTERS = "masters"
TAG_WORKERS = "workers"
TAG_ALL = "all"
HOST_TAGS = (TAG_MASTERS, TAG_WORKERS, TAG_ALL)

DEFAULT_HOME_DIRNAME = ".fleetctl"
HOSTS_FILENAME = "cluster.yaml"
ENV_FILENAME = "fleet-env"
LAUNCHER_RELPATH = "bin/fleetd"
