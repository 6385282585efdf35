"""Typed config groups using Pydantic BaseModel.

Subclass ``AppConfig`` and declare fields + a ``Meta`` inner class to map
config keys automatically::

    class ReportConfig(AppConfig):
        class Meta:
            key = "report"
            env_prefix = "SHEETGUARD_REPORT"

        max_errors: int = 50

    cfg = ReportConfig.load()
    cfg.max_errors      # SHEETGUARD_REPORT_MAX_ERRORS env / "report.max_errors" in the settings file

Without ``Meta.key``, fields are read from top-level settings-file keys,
named ``{Meta.prefix}_{field}`` when a prefix is set (``report_max_errors``).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._casters import _cast_optional_int
from ._repository import ConfigRepository
from ._types import UNDEFINED, _Undefined


class AppConfig(BaseModel):
    """Base class for declarative, typed config groups."""

    model_config = ConfigDict(frozen=True)

    class Meta:
        prefix: str = ""
        env_prefix: str = ""
        key: str = ""

    @classmethod
    def load(cls, repo: ConfigRepository | None = None) -> "AppConfig":
        """Load config values and return a validated instance.

        Resolution per field:
        1. Environment variable (``{ENV_PREFIX}_{FIELD_NAME}`` uppercased)
        2. Settings file key (nested under ``Meta.key`` or prefixed with ``Meta.prefix``)
        3. Omit — let Pydantic use the field default or raise ``ValidationError``
        """
        from ._reader import _auto_repository

        active_repo = repo or _auto_repository()

        meta = cls.Meta
        prefix = getattr(meta, "prefix", "")
        env_prefix = getattr(meta, "env_prefix", "")
        nested_key = getattr(meta, "key", "")

        # If Meta.key is set, read the entire nested dict once.
        nested_dict: dict[str, Any] = {}
        if nested_key:
            file_val = active_repo.get_file_config(nested_key)
            if isinstance(file_val, dict):
                nested_dict = file_val

        raw_data: dict[str, Any] = {}

        for field_name in cls.model_fields:
            value: Any = UNDEFINED

            # --- Env var lookup ---
            if env_prefix:
                env_key = f"{env_prefix}_{field_name}".upper()
                env_val = active_repo.get_env(env_key)
                if env_val is not None:
                    value = env_val

            # --- Settings file lookup ---
            if isinstance(value, _Undefined):
                if nested_key:
                    dict_val = nested_dict.get(field_name, UNDEFINED)
                    if not isinstance(dict_val, _Undefined):
                        value = dict_val
                else:
                    config_key = f"{prefix}_{field_name}" if prefix else field_name
                    file_val = active_repo.get_file_config(config_key)
                    if file_val is not None:
                        value = file_val

            if not isinstance(value, _Undefined):
                raw_data[field_name] = value

        return cls.model_validate(raw_data)


class ValidatorSettings(AppConfig):
    """Tunables of the validation engine.

    Attributes:
        lenient_threshold: Minimum matching fraction for ``TypeStrictness.lenient``
        type_sample_size: Number of leading data rows sampled by the column type
            check; ``None`` samples every row
    """

    class Meta:
        key = "validation"
        env_prefix = "SHEETGUARD"

    lenient_threshold: float = Field(default=0.5, gt=0, le=1)
    type_sample_size: Optional[int] = Field(default=None, ge=1)

    @field_validator("type_sample_size", mode="before")
    @classmethod
    def _parse_sample_size(cls, value: Any) -> Any:
        return _cast_optional_int(value)
