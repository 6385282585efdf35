"""Tests for _reader.py — the core config() function."""

import pytest

from sheetguard.config._casters import Choices
from sheetguard.config._reader import config, get_repository, set_repository
from sheetguard.config._repository import EnvConfigRepository, FakeConfigRepository
from sheetguard.config._types import UndefinedValueError


def _repo(**kwargs) -> FakeConfigRepository:
    return FakeConfigRepository(**kwargs)


@pytest.fixture(autouse=True)
def _reset_module_repo():
    set_repository(None)
    yield
    set_repository(None)


class TestBasicLookup:
    def test_required_key_missing_raises(self):
        with pytest.raises(UndefinedValueError, match="missing_key"):
            config("missing_key", repo=_repo())

    def test_required_key_present(self):
        assert config("log_level", repo=_repo(file={"log_level": "info"})) == "info"

    def test_default_used_when_missing(self):
        assert config("nope", default="fallback", repo=_repo()) == "fallback"

    def test_default_none_is_valid(self):
        assert config("nope", default=None, repo=_repo()) is None


class TestCasting:
    def test_cast_float(self):
        result = config("threshold", cast=float, repo=_repo(file={"threshold": "0.75"}))
        assert result == 0.75

    def test_cast_bool(self):
        assert config("log_json", cast=bool, repo=_repo(file={"log_json": "true"})) is True
        assert config("log_json", cast=bool, repo=_repo(file={"log_json": "0"})) is False

    def test_default_not_cast(self):
        result = config("missing", default=42, cast=str, repo=_repo())
        assert result == 42

    def test_cast_choices_invalid(self):
        with pytest.raises(ValueError, match="not a valid choice"):
            config(
                "log_level",
                cast=Choices(["debug", "info"]),
                repo=_repo(file={"log_level": "verbose"}),
            )


class TestPrecedence:
    def test_env_beats_file(self):
        repo = _repo(env={"SHEETGUARD_LOG_LEVEL": "debug"}, file={"log_level": "info"})
        assert config("log_level", env="SHEETGUARD_LOG_LEVEL", repo=repo) == "debug"

    def test_file_used_when_env_missing(self):
        repo = _repo(file={"log_level": "info"})
        assert config("log_level", env="SHEETGUARD_LOG_LEVEL", repo=repo) == "info"

    def test_env_only_checked_when_named(self):
        repo = _repo(env={"log_level": "debug"})
        assert config("log_level", default="warning", repo=repo) == "warning"


class TestDotPath:
    def test_nested_lookup(self):
        repo = _repo(file={"validation": {"lenient_threshold": 0.6}})
        assert config("validation.lenient_threshold", repo=repo) == 0.6

    def test_literal_key_wins(self):
        repo = _repo(file={"a.b": "literal", "a": {"b": "nested"}})
        assert config("a.b", repo=repo) == "literal"

    def test_missing_segment(self):
        repo = _repo(file={"validation": {}})
        assert config("validation.lenient_threshold", default=None, repo=repo) is None

    def test_non_dict_segment(self):
        repo = _repo(file={"validation": "flat"})
        with pytest.raises(UndefinedValueError):
            config("validation.lenient_threshold", repo=repo)


class TestModuleRepository:
    def test_set_repository_used_by_default(self):
        repo = _repo(file={"key": "value"})
        set_repository(repo)
        assert get_repository() is repo
        assert config("key") == "value"

    def test_auto_repository_reads_environment(self, monkeypatch):
        monkeypatch.delenv("SHEETGUARD_CONFIG", raising=False)
        monkeypatch.setenv("SHEETGUARD_TEST_VALUE", "from-env")
        assert config("unused", env="SHEETGUARD_TEST_VALUE") == "from-env"
        assert isinstance(get_repository(), EnvConfigRepository)
