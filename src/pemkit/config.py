"""
Configuration — typed, validated codec options.

Two layers, both built on pydantic:
  - ParseConfig / EncodeConfig: frozen BaseModel option sets passed to
    parse() and encode(). Invalid values fail at construction.
  - CodecSettings: pydantic-settings BaseSettings that loads application-wide
    defaults from the environment (or a .env file) for programs embedding
    the codec.

env_nested_delimiter="__" maps PEMKIT_ENCODE__LINE_WIDTH → encode.line_width,
PEMKIT_PARSE__STRICT_HEADERS → parse.strict_headers, and so on.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LINE_WIDTH = 64


class LineEnding(str, Enum):
    """Line terminator written by the encoder. The parser accepts both."""

    LF = "\n"
    CRLF = "\r\n"


class ParseConfig(BaseModel):
    """
    Parser options.

    allow_header_continuation:
      A line starting with a space or tab directly after a header line is
      appended to that header's value (RFC 822 style unfolding).
    strict_headers:
      Reject header lines with an empty key, and colon-bearing lines found
      after the body has started, as INVALID_HEADER. When off, empty-key
      lines are dropped and late colon-bearing lines fall through to the
      base64 decoder.
    """

    model_config = ConfigDict(frozen=True)

    allow_header_continuation: bool = Field(
        default=True,
        description="Fold whitespace-led lines into the preceding header value",
    )
    strict_headers: bool = Field(
        default=False,
        description="Report malformed header lines as INVALID_HEADER",
    )


class EncodeConfig(BaseModel):
    """Encoder options: base64 wrap width and output line terminator."""

    model_config = ConfigDict(frozen=True)

    line_width: int = Field(default=DEFAULT_LINE_WIDTH, gt=0, description="Base64 characters per body line")
    line_ending: LineEnding = Field(default=LineEnding.LF, description="Output line terminator")


class CodecSettings(BaseSettings):
    """
    Application-wide codec defaults.

    Load order (highest priority first):
      1. Environment variables (PEMKIT_*)
      2. .env file in the working directory
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="PEMKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    parse: ParseConfig = Field(default_factory=ParseConfig)
    encode: EncodeConfig = Field(default_factory=EncodeConfig)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False, description="Render log events as JSON lines instead of console text")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept only the standard logging level names (case-insensitive)."""
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level
