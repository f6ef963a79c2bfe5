"""Event value type."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from logframe.limits import DEFAULT_OUTPUT_CHARSET

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class Event:
    """A framed log entry ready for transport."""

    body: bytes
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    def text(self, charset: str = DEFAULT_OUTPUT_CHARSET) -> str:
        return self.body.decode(charset)


class EventBuilder:
    """Factory helpers for building events."""

    @staticmethod
    def with_body(
        text: str,
        charset: str = DEFAULT_OUTPUT_CHARSET,
        headers: Mapping[str, str] | None = None,
    ) -> Event:
        """Encode text into a new event.

        Args:
            text: Event text.
            charset: Codec name used to encode the body.
            headers: Optional headers, copied into a read-only mapping.

        Returns:
            A fresh Event owned by the caller.
        """
        return Event(
            body=text.encode(charset),
            headers=MappingProxyType(dict(headers or {})),
        )
