"""
Cluster membership from a YAML file:

    masters:
      - m1.example.org
    workers:
      - w1.example.org
      - w2.example.org

`all` is masters followed by workers, duplicates dropped.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, List

import yaml

from fleetctl.config import const
from fleetctl.domain import ConfigurationError
from fleetctl.adapters.membership.memory import InMemoryMembershipSource


def _host_list(data: dict, key: str, path: Path) -> List[str]:
    raw: Any = data.get(key) or []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise ConfigurationError(f"{path}: '{key}' must be a list of host names")
    return [str(h).strip() for h in raw if h is not None and str(h).strip()]


class YamlMembershipSource:
    """Reads the hosts file on every call; a missing file means no hosts."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _load(self) -> InMemoryMembershipSource:
        if not self.path.exists():
            return InMemoryMembershipSource()
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{self.path}: invalid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.path}: expected a mapping with '{const.TAG_MASTERS}'/'{const.TAG_WORKERS}'")
        return InMemoryMembershipSource(
            masters=_host_list(data, const.TAG_MASTERS, self.path),
            workers=_host_list(data, const.TAG_WORKERS, self.path),
        )

    def list_hosts(self, tag: str) -> List[str]:
        return self._load().list_hosts(tag)
