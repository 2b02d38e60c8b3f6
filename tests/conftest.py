"""Shared pytest fixtures and configuration for the yt-shaper test suite.

Guidelines
----------
* No internet access in any test.
* yt-dlp must be mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers installed by CLI runs so tests stay isolated."""
    logger = logging.getLogger("yt_shaper")
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    logger.setLevel(level)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ignore any ``YT_SHAPER_*`` variables set in the developer's shell."""
    for name in list(os.environ):
        if name.startswith("YT_SHAPER_"):
            monkeypatch.delenv(name)
