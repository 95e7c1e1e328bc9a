"""Environment loader with optional .env support.

Lookup order for each variable, highest precedence first: explicit
overrides, the process environment, then the .env file (an explicit path,
or ./.env when it exists).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from dotenv import dotenv_values


class EnvLoader:
    """Resolve configuration variables from a .env file and the environment.

    The .env file is parsed once per loader.
    """

    def __init__(self, env_file: Optional[Path | str] = None) -> None:
        self.env_file = Path(env_file) if env_file else None
        self._file_values: Optional[Dict[str, str]] = None

    def file_values(self) -> Dict[str, str]:
        """Variables declared in the .env file; empty when there is none."""
        if self._file_values is None:
            path = self.env_file or Path.cwd() / ".env"
            parsed = dotenv_values(path) if path.exists() else {}
            # Keys declared without a value parse as None
            self._file_values = {k: v for k, v in parsed.items() if v is not None}
        return self._file_values

    def get(
        self,
        name: str,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> Optional[str]:
        if overrides and name in overrides:
            return str(overrides[name])
        if name in os.environ:
            return os.environ[name]
        return self.file_values().get(name)

    def select(
        self,
        names: Iterable[str],
        overrides: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, str]:
        """Resolve only the given variables, omitting those set nowhere."""
        selected: Dict[str, str] = {}
        for name in names:
            value = self.get(name, overrides)
            if value is not None:
                selected[name] = value
        return selected

    def load(self, overrides: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Every variable from all sources, merged by precedence."""
        names = set(self.file_values()) | set(os.environ) | set(overrides or {})
        return self.select(names, overrides)

    @staticmethod
    def missing(values: Mapping[str, str], names: Iterable[str]) -> List[str]:
        """Names that are absent or empty in values."""
        return [name for name in names if not values.get(name)]


__all__ = ["EnvLoader"]
