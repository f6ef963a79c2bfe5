"""logframe: multi-line log entry framing with replayable read positions."""

from logframe.config import FramerConfig
from logframe.errors import ConfigError, FramerClosedError, LogframeError, SourceClosedError
from logframe.event import Event, EventBuilder
from logframe.framer import LineFramer, build_framer
from logframe.sources import CharacterSource, FileCharSource, StringCharSource

__version__ = "0.1.0"

__all__ = [
    "CharacterSource",
    "ConfigError",
    "Event",
    "EventBuilder",
    "FileCharSource",
    "FramerClosedError",
    "FramerConfig",
    "LineFramer",
    "LogframeError",
    "SourceClosedError",
    "StringCharSource",
    "build_framer",
]
