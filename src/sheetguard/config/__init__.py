"""Typed, validated configuration layer for sheetguard.

Provides fail-fast config reading with type casting, environment variable
support and an optional JSON settings file.
"""

from ._app_config import AppConfig, ValidatorSettings
from ._casters import Choices
from ._reader import config
from ._repository import ConfigRepository, EnvConfigRepository, FakeConfigRepository
from ._testing import override_config
from ._types import ConfigError, UndefinedValueError

__all__ = [
    # Core
    "config",
    "ConfigError",
    "UndefinedValueError",
    # Typed groups
    "AppConfig",
    "ValidatorSettings",
    # Helpers
    "Choices",
    # Sources
    "ConfigRepository",
    "EnvConfigRepository",
    "FakeConfigRepository",
    # Testing
    "override_config",
]
