"""Numeric limits and defaults - no circular dependencies."""

from __future__ import annotations

import os


def _is_debug_enabled() -> bool:
    """Check the LOGFRAME_DEBUG env var ("1" or "true") for always-on log capture."""
    return os.environ.get("LOGFRAME_DEBUG", "").lower() in ("1", "true")


DEBUG_CAPTURE: bool = _is_debug_enabled()
"""True when LOGFRAME_DEBUG asks every CLI run to capture log records."""


DEFAULT_OUTPUT_CHARSET = "UTF-8"
DEFAULT_MAX_EVENT_LENGTH = 2048
DEFAULT_START_PREFIX = "^"

DEFAULT_BATCH_SIZE = 100
MAX_LOG_LINES = 2000
MAX_LOG_MESSAGE_LENGTH = 4096
