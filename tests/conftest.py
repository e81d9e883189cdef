"""Shared fixtures and markers for the visgate test suite."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from visgate import config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep developer environment overrides out of the tests."""
    monkeypatch.delenv(config.THRESHOLD_ENV, raising=False)
    monkeypatch.delenv(config.MAX_DIFF_RATIO_ENV, raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_log_level() -> Generator[None, None, None]:
    """Undo the level the CLI's --verbose callback sets on the package logger."""
    yield
    logging.getLogger("visgate").setLevel(logging.NOTSET)
