"""Pytest fixtures for logframe tests."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest
from hypothesis import Phase, Verbosity, settings

from logframe.config import FramerConfig
from logframe.debug_log import clear_log_buffer, teardown_debug_logging
from logframe.framer import LineFramer
from logframe.sources import CharacterSource, StringCharSource

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture(autouse=True)
def _clean_debug_log() -> Generator[None, None, None]:
    """Keep the global capture handler and ring buffer from leaking between tests."""
    yield
    teardown_debug_logging()
    logging.getLogger("logframe").setLevel(logging.NOTSET)
    clear_log_buffer()


@pytest.fixture
def make_framer() -> Callable[..., LineFramer]:
    """Build a framer over an in-memory string."""

    def _factory(text: str, **config: object) -> LineFramer:
        return LineFramer(StringCharSource(text), FramerConfig(**config))

    return _factory


@pytest.fixture
def mock_source() -> MagicMock:
    return MagicMock(spec=CharacterSource)
