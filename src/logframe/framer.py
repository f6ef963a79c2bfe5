"""Multi-line log entry framer.

Splits a character stream into events. An entry ends at a newline followed by
the start prefix (or end of stream), so continuation lines such as stack
traces stay in the event they belong to.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Self

from logframe.config import FramerConfig
from logframe.errors import FramerClosedError
from logframe.event import Event, EventBuilder

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from types import TracebackType

    from logframe.sources import CharacterSource

log = logging.getLogger(__name__)

NEWLINE = "\n"


class _ScanState(Enum):
    SCANNING = auto()
    SAW_NEWLINE = auto()


class LineFramer:
    """Frames prefix-delimited, possibly multi-line log entries into events.

    The framer owns its source. It is not thread-safe; use one instance per
    reader.
    """

    def __init__(self, source: CharacterSource, config: FramerConfig | None = None) -> None:
        self._source = source
        self._config = config or FramerConfig()
        self._open = True

    @property
    def config(self) -> FramerConfig:
        return self._config

    @property
    def is_open(self) -> bool:
        return self._open

    def read_event(self) -> Event | None:
        """Read one entry and return it as an event.

        Returns:
            The next event, or None when the source is exhausted.

        Raises:
            FramerClosedError: If the framer has been closed.
        """
        self._ensure_open()
        text = self._read_entry()
        if text is None:
            return None
        return EventBuilder.with_body(text, self._config.output_charset)

    def read_events(self, max_count: int) -> list[Event]:
        """Read up to max_count events, stopping early at end of stream."""
        self._ensure_open()
        events: list[Event] = []
        for _ in range(max_count):
            event = self.read_event()
            if event is None:
                break
            events.append(event)
        return events

    def mark(self) -> None:
        self._ensure_open()
        self._source.mark()

    def reset(self) -> None:
        self._ensure_open()
        self._source.reset()

    def close(self) -> None:
        """Rewind to the last mark and release the source. Safe to call twice."""
        if not self._open:
            return
        self.reset()
        self._source.close()
        self._open = False
        log.debug("Framer closed")

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __iter__(self) -> Iterator[Event]:
        while (event := self.read_event()) is not None:
            yield event

    def _ensure_open(self) -> None:
        if not self._open:
            raise FramerClosedError()

    def _read_entry(self) -> str | None:
        prefix = self._config.start_prefix
        max_length = self._config.max_event_length
        chars: list[str] = []
        accepted = 0
        state = _ScanState.SCANNING

        while True:
            char = self._source.read()
            if char is None:
                break

            if state is _ScanState.SAW_NEWLINE:
                state = _ScanState.SCANNING
                if char == prefix:
                    break
                # Embedded line break; char is accepted below as-is.
                chars.append(NEWLINE)
            elif char == NEWLINE:
                state = _ScanState.SAW_NEWLINE
                continue
            elif char == prefix:
                continue

            chars.append(char)
            accepted += 1
            if accepted >= max_length:
                log.warning("Log length exceeds max (%d), truncating log!", max_length)
                break

        if accepted == 0:
            return None
        return "".join(chars)


def build_framer(context: Mapping[str, str], source: CharacterSource) -> LineFramer:
    """Build a framer from legacy string options.

    Recognised keys are ``outputCharset``, ``maxLineLength`` and
    ``newLogStartPrefix``; missing keys fall back to defaults.
    """
    return LineFramer(source, FramerConfig.from_context(context))
