"""Core ``config()`` function — the primary public API for reading config values.

Lookup order:
1. Environment variable (if ``env=`` specified)
2. Settings file (JSON object, see ``EnvConfigRepository``)
3. Default value (returned as-is, **not** passed through ``cast``)
4. Raise ``UndefinedValueError``
"""

from __future__ import annotations

from typing import Any, Callable

from ._casters import _cast_bool
from ._repository import ConfigRepository
from ._types import UNDEFINED, UndefinedValueError, _Undefined

# ---------------------------------------------------------------------------
# Module-level repository management
# ---------------------------------------------------------------------------

_active_repository: ConfigRepository | None = None


def set_repository(repo: ConfigRepository | None) -> None:
    """Set the module-level config repository."""
    global _active_repository
    _active_repository = repo


def get_repository() -> ConfigRepository | None:
    """Return the current module-level config repository (may be ``None``)."""
    return _active_repository


def _auto_repository() -> ConfigRepository:
    """Lazily create an ``EnvConfigRepository`` if none is set."""
    global _active_repository
    if _active_repository is None:
        from ._repository import EnvConfigRepository

        _active_repository = EnvConfigRepository()
    return _active_repository


# ---------------------------------------------------------------------------
# Dot-path helpers
# ---------------------------------------------------------------------------


def _resolve_dot_path(source: dict[str, Any], key: str) -> Any:
    """Walk nested dicts using dot-separated key segments.

    Returns ``UNDEFINED`` if any segment is missing.
    """
    current: Any = source
    for segment in key.split("."):
        if not isinstance(current, dict):
            return UNDEFINED
        current = current.get(segment, UNDEFINED)
        if isinstance(current, _Undefined):
            return UNDEFINED
    return current


def _lookup_in_file(repo: ConfigRepository, key: str) -> Any:
    """Look up *key* in the settings file, supporting dot-path traversal.

    Returns ``UNDEFINED`` if the key is not found.
    """
    raw = repo.get_file_config(key)
    if raw is not None:
        return raw

    if "." in key:
        top_key, _, rest = key.partition(".")
        top_value = repo.get_file_config(top_key)
        if isinstance(top_value, dict):
            return _resolve_dot_path(top_value, rest)

    return UNDEFINED


# ---------------------------------------------------------------------------
# Cast resolution
# ---------------------------------------------------------------------------


def _identity(value: Any) -> Any:
    return value


def _resolve_cast(cast: Callable | type | None) -> Callable[[Any], Any]:
    """Return the actual callable to apply to raw values."""
    if cast is None:
        return _identity
    if cast is bool:
        return _cast_bool
    return cast


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def config(
    key: str,
    *,
    default: Any = UNDEFINED,
    cast: Callable | type | None = None,
    env: str | None = None,
    repo: ConfigRepository | None = None,
) -> Any:
    """Read a configuration value with type casting and fail-fast semantics.

    Parameters
    ----------
    key:
        Settings file key. Supports dot-paths (e.g., ``"validation.lenient_threshold"``).
    default:
        Fallback value if the key is not found anywhere. Returned **as-is**
        (not passed through *cast*).
    cast:
        Callable to coerce the raw value. ``bool`` is special-cased to handle
        string representations like ``"true"`` / ``"0"``.
    env:
        Environment variable name to check first.
    repo:
        Per-call repository override. Falls back to the module-level repository
        (or auto-creates an ``EnvConfigRepository``).
    """
    active_repo = repo or _auto_repository()
    caster = _resolve_cast(cast)

    # 1) Environment variable
    if env is not None:
        env_value = active_repo.get_env(env)
        if env_value is not None:
            return caster(env_value)

    # 2) Settings file
    file_value = _lookup_in_file(active_repo, key)
    if not isinstance(file_value, _Undefined):
        return caster(file_value)

    # 3) Default (returned as-is, NOT cast)
    if not isinstance(default, _Undefined):
        return default

    # 4) Fail fast
    raise UndefinedValueError(key)
