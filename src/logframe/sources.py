"""Resettable character sources feeding a LineFramer."""

from __future__ import annotations

import codecs
from collections import deque
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from logframe.errors import SourceClosedError
from logframe.limits import DEFAULT_OUTPUT_CHARSET

if TYPE_CHECKING:
    from typing import BinaryIO


@runtime_checkable
class CharacterSource(Protocol):
    """Upstream stream yielding one decoded character at a time.

    ``read()`` returns ``None`` at end of stream. ``mark()`` remembers the
    position of the next unread character and ``reset()`` rewinds to it.
    """

    def read(self) -> str | None: ...

    def mark(self) -> None: ...

    def reset(self) -> None: ...

    def close(self) -> None: ...


class StringCharSource:
    """In-memory character source over a string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._mark = 0
        self._closed = False

    @property
    def position(self) -> int:
        return self._pos

    def read(self) -> str | None:
        self._ensure_open()
        if self._pos >= len(self._text):
            return None
        char = self._text[self._pos]
        self._pos += 1
        return char

    def mark(self) -> None:
        self._ensure_open()
        self._mark = self._pos

    def reset(self) -> None:
        self._ensure_open()
        self._pos = self._mark

    def close(self) -> None:
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise SourceClosedError()


class FileCharSource:
    """File-backed character source with byte-accurate mark/reset.

    Bytes are fed to an incremental decoder one at a time. A mark captures the
    byte offset, the decoder state and any decoded-but-unread characters, so a
    reset replays exactly from the next unread character even when a mark falls
    in the middle of a multi-byte sequence.
    """

    def __init__(
        self,
        path: str | Path,
        charset: str = DEFAULT_OUTPUT_CHARSET,
        errors: str = "replace",
    ) -> None:
        self.path = Path(path)
        self._file: BinaryIO | None = open(self.path, "rb")  # noqa: SIM115
        self._decoder = codecs.getincrementaldecoder(charset)(errors=errors)
        self._pending: deque[str] = deque()
        self._offset = 0
        self._mark: tuple[int, tuple[bytes, int], tuple[str, ...]] = (
            0,
            self._decoder.getstate(),
            (),
        )
        self._eof = False

    @property
    def position(self) -> int:
        """Byte offset of the input consumed so far."""
        return self._offset

    @property
    def mark_position(self) -> int:
        """Byte offset recorded by the last mark()."""
        return self._mark[0]

    @property
    def at_eof(self) -> bool:
        """True once the file is exhausted and every decoded character was read."""
        return self._eof and not self._pending

    def read(self) -> str | None:
        f = self._ensure_open()
        while not self._pending:
            if self._eof:
                return None
            byte = f.read(1)
            if not byte:
                self._eof = True
                self._pending.extend(self._decoder.decode(b"", final=True))
                continue
            self._offset += 1
            self._pending.extend(self._decoder.decode(byte))
        return self._pending.popleft()

    def mark(self) -> None:
        self._ensure_open()
        self._mark = (self._offset, self._decoder.getstate(), tuple(self._pending))

    def reset(self) -> None:
        f = self._ensure_open()
        offset, state, pending = self._mark
        f.seek(offset)
        self._offset = offset
        self._decoder.setstate(state)
        self._pending = deque(pending)
        self._eof = False

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def _ensure_open(self) -> BinaryIO:
        if self._file is None:
            raise SourceClosedError(f"{self.path} has been closed")
        return self._file
