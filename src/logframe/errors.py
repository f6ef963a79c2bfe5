"""Exception types raised by logframe."""

from __future__ import annotations


class LogframeError(Exception):
    """Base class for logframe errors."""


class FramerClosedError(LogframeError, RuntimeError):
    """Raised when a framer is used after close()."""

    def __init__(self, message: str = "Framer has been closed") -> None:
        super().__init__(message)


class ConfigError(LogframeError, ValueError):
    """Raised when framer configuration is invalid."""


class SourceClosedError(LogframeError, OSError):
    """Raised when a character source is used after close()."""

    def __init__(self, message: str = "Character source has been closed") -> None:
        super().__init__(message)
