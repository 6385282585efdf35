"""Config source protocol, the environment/file implementation and a fake for tests."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping, Protocol, runtime_checkable

from ._types import ConfigError

CONFIG_PATH_ENV = "SHEETGUARD_CONFIG"


@runtime_checkable
class ConfigRepository(Protocol):
    """Abstraction over where config values come from.

    Implementations provide one lookup method per config source: the process
    environment and the JSON settings file.
    """

    def get_env(self, key: str) -> str | None:
        ...

    def get_file_config(self, key: str) -> Any:
        ...


class EnvConfigRepository:
    """Reads ``os.environ`` and an optional JSON settings file.

    The settings file path is taken from ``path`` or, when omitted, from the
    ``SHEETGUARD_CONFIG`` environment variable. A missing variable means no
    file; a variable pointing at an unreadable file is a ``ConfigError``.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        if path is None:
            path = self._environ.get(CONFIG_PATH_ENV) or None
        self.path = Path(path) if path else None
        self._file: dict[str, Any] | None = None

    def _load_file(self) -> dict[str, Any]:
        if self._file is None:
            if self.path is None:
                self._file = {}
            else:
                try:
                    data = json.loads(self.path.read_text(encoding="utf-8"))
                except (OSError, json.JSONDecodeError) as e:
                    raise ConfigError(f"Cannot read settings file {self.path}: {e}") from e
                if not isinstance(data, dict):
                    raise ConfigError(f"Settings file {self.path} must contain a JSON object")
                self._file = data
        return self._file

    def get_env(self, key: str) -> str | None:
        return self._environ.get(key)

    def get_file_config(self, key: str) -> Any:
        return self._load_file().get(key)


class FakeConfigRepository:
    """Dict-backed config repository for tests.

    >>> repo = FakeConfigRepository(env={"SHEETGUARD_LOG_LEVEL": "debug"})
    >>> repo.get_env("SHEETGUARD_LOG_LEVEL")
    'debug'
    """

    def __init__(
        self,
        env: dict[str, str] | None = None,
        file: dict[str, Any] | None = None,
    ) -> None:
        self._env: dict[str, str] = dict(env or {})
        self._file: dict[str, Any] = dict(file or {})

    # -- Protocol methods ---------------------------------------------------

    def get_env(self, key: str) -> str | None:
        return self._env.get(key)

    def get_file_config(self, key: str) -> Any:
        return self._file.get(key)

    # -- Mutation helpers for test setup ------------------------------------

    def set_env(self, key: str, value: str) -> None:
        self._env[key] = value

    def set_file(self, key: str, value: Any) -> None:
        self._file[key] = value
