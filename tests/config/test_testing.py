"""Tests for _testing.py — override_config context manager."""

import pytest

from sheetguard.config._app_config import ValidatorSettings
from sheetguard.config._reader import config, get_repository, set_repository
from sheetguard.config._repository import FakeConfigRepository
from sheetguard.config._testing import override_config


@pytest.fixture(autouse=True)
def _reset_module_repo():
    set_repository(None)
    yield
    set_repository(None)


class TestOverrideConfig:
    def test_replaces_config_source(self):
        with override_config(file={"key": "overridden"}):
            assert config("key") == "overridden"

    def test_restores_original_repo(self):
        original = FakeConfigRepository(file={"key": "original"})
        set_repository(original)

        with override_config(file={"key": "temp"}):
            assert config("key") == "temp"

        assert get_repository() is original
        assert config("key") == "original"

    def test_settings_respect_override(self):
        with override_config(env={"SHEETGUARD_LENIENT_THRESHOLD": "0.75"}):
            assert ValidatorSettings.load().lenient_threshold == 0.75

    def test_nested_overrides(self):
        with override_config(file={"key": "outer"}):
            with override_config(file={"key": "inner"}):
                assert config("key") == "inner"
            assert config("key") == "outer"

    def test_yields_fake_repo_for_mutation(self):
        with override_config(file={"key": "initial"}) as repo:
            repo.set_file("key", "mutated")
            assert config("key") == "mutated"
