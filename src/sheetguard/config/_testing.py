"""Test utilities for the config module."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from ._reader import get_repository, set_repository
from ._repository import FakeConfigRepository


@contextmanager
def override_config(
    *,
    file: dict[str, Any] | None = None,
    env: dict[str, str] | None = None,
) -> Iterator[FakeConfigRepository]:
    """Temporarily replace the config source with a ``FakeConfigRepository``.

    Usage::

        with override_config(env={"SHEETGUARD_LENIENT_THRESHOLD": "0.75"}) as repo:
            assert ValidatorSettings.load().lenient_threshold == 0.75
            repo.set_file("log_level", "debug")  # mutate inside context
    """
    previous = get_repository()
    fake = FakeConfigRepository(env=env, file=file)
    set_repository(fake)
    try:
        yield fake
    finally:
        set_repository(previous)
