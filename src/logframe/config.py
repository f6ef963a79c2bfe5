"""Configuration loader for logframe."""

from __future__ import annotations

import codecs
import tomllib
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from logframe.errors import ConfigError
from logframe.limits import (
    DEFAULT_MAX_EVENT_LENGTH,
    DEFAULT_OUTPUT_CHARSET,
    DEFAULT_START_PREFIX,
)

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


OUT_CHARSET_KEY = "outputCharset"
MAXLINE_KEY = "maxLineLength"
NEW_LOG_PREFIX_KEY = "newLogStartPrefix"

CONFIG_TABLE = "framer"


class FramerConfig(BaseModel):
    """Settings for a LineFramer. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    output_charset: str = Field(
        default=DEFAULT_OUTPUT_CHARSET,
        description="Codec used to encode event bodies",
    )
    max_event_length: int = Field(
        default=DEFAULT_MAX_EVENT_LENGTH,
        ge=1,
        description="Characters accumulated before an entry is truncated",
    )
    start_prefix: str = Field(
        default=DEFAULT_START_PREFIX,
        min_length=1,
        max_length=1,
        description="Character that starts a new entry when it follows a newline",
    )

    @field_validator("output_charset")
    @classmethod
    def validate_output_charset(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown charset: {value!r}") from exc
        return value

    @field_validator("start_prefix")
    @classmethod
    def validate_start_prefix(cls, value: str) -> str:
        if value == "\n":
            raise ValueError("start prefix cannot be a newline")
        return value

    @classmethod
    def build(cls, data: Mapping[str, Any]) -> FramerConfig:
        """Validate a mapping, raising ConfigError instead of ValidationError."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc

    @classmethod
    def load(cls, config_path: Path | None = None) -> FramerConfig:
        """Load configuration from the [framer] table of a TOML file or use defaults."""
        if config_path is None or not config_path.exists():
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{config_path}: {exc}") from exc

        table = data.get(CONFIG_TABLE, {})
        if not isinstance(table, dict):
            raise ConfigError(f"{config_path}: [{CONFIG_TABLE}] must be a table")
        return cls.build(table)

    @classmethod
    def from_context(cls, context: Mapping[str, str]) -> FramerConfig:
        """Build from flat string options using the legacy camelCase keys.

        Only the first character of ``newLogStartPrefix`` is used.
        """
        data: dict[str, Any] = {}
        if OUT_CHARSET_KEY in context:
            data["output_charset"] = context[OUT_CHARSET_KEY]
        if MAXLINE_KEY in context:
            raw = context[MAXLINE_KEY]
            try:
                data["max_event_length"] = int(raw)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"{MAXLINE_KEY} must be an integer, got {raw!r}") from exc
        if NEW_LOG_PREFIX_KEY in context:
            data["start_prefix"] = context[NEW_LOG_PREFIX_KEY][:1]
        return cls.build(data)

    def with_overrides(self, **overrides: Any) -> FramerConfig:
        """Return a validated copy with non-None overrides applied."""
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return self.build(data)
