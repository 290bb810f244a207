# src/fleetctl/services/settings.py
from __future__ import annotations
from dataclasses import dataclass, replace
import os
import socket
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from fleetctl.config import const
from fleetctl.domain import ConfigurationError


def _load_env_file(path: Optional[str]) -> Dict[str, str]:
    if not path or not Path(path).exists():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


@dataclass(frozen=True, slots=True)
class Settings:
    home_dir: Path
    local_host: str
    launcher: Optional[str] = None
    ssh_user: Optional[str] = None
    ssh_port: int = 22
    ssh_connect_timeout: int = 10
    exec_timeout_s: Optional[float] = None
    max_parallel: Optional[int] = None
    log_level: str = "INFO"

    @property
    def conf_dir(self) -> Path:
        return self.home_dir / "conf"

    @property
    def logs_dir(self) -> Path:
        return self.home_dir / "logs"

    @property
    def hosts_file(self) -> Path:
        return self.conf_dir / const.HOSTS_FILENAME

    @property
    def env_file(self) -> Path:
        return self.conf_dir / const.ENV_FILENAME

    @property
    def launcher_path(self) -> str:
        return self.launcher or str(self.home_dir / const.LAUNCHER_RELPATH)

    @staticmethod
    def from_sources(env_file: Optional[str] = ".env") -> "Settings":
        env_file_vars = _load_env_file(env_file)

        def pick_env(key: str, default: Optional[str] = None) -> Optional[str]:
            return os.environ.get(key) or env_file_vars.get(key) or default

        def pick_number(key: str, kind):
            raw = pick_env(key)
            if not raw:
                return None
            try:
                return kind(raw)
            except ValueError:
                raise ConfigurationError(f"{key} must be {'an integer' if kind is int else 'a number'}, got {raw!r}") from None

        def pick_int(key: str) -> Optional[int]:
            return pick_number(key, int)

        home = Path(pick_env("FLEETCTL_HOME") or (Path.home() / const.DEFAULT_HOME_DIRNAME)).expanduser().resolve()

        return Settings(
            home_dir=home,
            local_host=pick_env("FLEETCTL_LOCAL_HOST") or socket.gethostname(),
            launcher=pick_env("FLEETCTL_LAUNCHER"),
            ssh_user=pick_env("FLEETCTL_SSH_USER"),
            ssh_port=pick_int("FLEETCTL_SSH_PORT") or 22,
            ssh_connect_timeout=pick_int("FLEETCTL_SSH_CONNECT_TIMEOUT") or 10,
            exec_timeout_s=pick_number("FLEETCTL_EXEC_TIMEOUT_S", float),
            max_parallel=pick_int("FLEETCTL_MAX_PARALLEL"),
            log_level=pick_env("FLEETCTL_LOG_LEVEL", "INFO") or "INFO",
        )

    def with_overrides(self, **kw) -> "Settings":
        # only fields that are safe to change from the command line
        safe = {k: v for k, v in kw.items() if k in {"home_dir", "local_host"} and v is not None}
        if "home_dir" in safe:
            safe["home_dir"] = Path(safe["home_dir"]).expanduser().resolve()
        return replace(self, **safe)
