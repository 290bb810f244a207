from __future__ import annotations
from typing import Iterable, List

from fleetctl.config import const
from fleetctl.domain import ConfigurationError


def union_hosts(masters: Iterable[str], workers: Iterable[str]) -> List[str]:
    return list(dict.fromkeys([*masters, *workers]))


class InMemoryMembershipSource:
    def __init__(self, masters: Iterable[str] = (), workers: Iterable[str] = ()) -> None:
        self._lists = {
            const.TAG_MASTERS: list(masters),
            const.TAG_WORKERS: list(workers),
        }

    def list_hosts(self, tag: str) -> List[str]:
        if tag == const.TAG_ALL:
            return union_hosts(self._lists[const.TAG_MASTERS], self._lists[const.TAG_WORKERS])
        if tag not in self._lists:
            raise ConfigurationError(f"unknown host tag '{tag}' (expected one of: {', '.join(const.HOST_TAGS)})")
        return list(self._lists[tag])
