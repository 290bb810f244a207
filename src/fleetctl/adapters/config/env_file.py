from __future__ import annotations
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values


class EnvFileConfig:
    """Key/value configuration: `<conf>/fleet-env` overlaid by the process environment."""

    def __init__(self, path: Optional[Path | str] = None, environ: Optional[Mapping[str, str]] = None) -> None:
        self.path = Path(path) if path else None
        self._environ = os.environ if environ is None else environ
        self._file: Dict[str, str] = {}
        if self.path is not None and self.path.exists():
            self._file = {k: v for k, v in dotenv_values(self.path).items() if v is not None}

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._environ.get(key)
        if value is not None:
            return value
        return self._file.get(key, default)
