"""
Structured-record adapter — Entry ⇄ plain record / JSON.

Lets PEM-derived data travel inside other serialized formats as

    {"tag": "CERTIFICATE", "headers": [["Comment", "x"]], "contents": "MIIB..."}

Uses a pydantic model for validation and serialization. `contents` is
carried as standard base64 text; `headers` as an ordered list of
[key, value] pairs so duplicates and ordering survive.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from pemkit.domain.models import Entry, Headers
from pemkit.result import Result
from pemkit.result_failures import PemFailures


class EntryRecord(BaseModel):
    """Interchange representation of an Entry."""

    model_config = ConfigDict(frozen=True)

    tag: str = Field(min_length=1, description="PEM block label, e.g. CERTIFICATE")
    headers: list[tuple[str, str]] = Field(default_factory=list, description="Ordered header pairs")
    contents: bytes = Field(default=b"", description="Decoded payload (base64 text when serialized)")

    @field_validator("contents", mode="before")
    @classmethod
    def decode_contents(cls, value: Any) -> Any:
        """Accept base64 text on input; raw bytes pass through unchanged."""
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except (binascii.Error, ValueError) as e:
                raise ValueError(f"contents is not valid base64: {e}") from e
        return value

    @field_serializer("contents")
    def encode_contents(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")


def to_record(entry: Entry) -> EntryRecord:
    return EntryRecord(tag=entry.tag, headers=entry.headers.items(), contents=entry.contents)


def from_record(record: EntryRecord) -> Result[Entry]:
    """Build an Entry from a record, checking the Entry invariants."""
    return Entry(
        tag=record.tag,
        contents=record.contents,
        headers=Headers(record.headers),
    ).validate()


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    return to_record(entry).model_dump(mode="json")


def entry_to_json(entry: Entry) -> str:
    return to_record(entry).model_dump_json()


def entry_from_dict(data: dict[str, Any]) -> Result[Entry]:
    """Validate a plain mapping into an Entry. Failures are INVALID_ENTRY."""
    try:
        record = EntryRecord.model_validate(data)
    except ValidationError as e:
        return PemFailures.invalid_entry(f"invalid entry record: {e.error_count()} validation error(s)", e)
    return from_record(record)


def entry_from_json(data: str | bytes) -> Result[Entry]:
    """Validate a JSON document into an Entry. Failures are INVALID_ENTRY."""
    try:
        record = EntryRecord.model_validate_json(data)
    except ValidationError as e:
        return PemFailures.invalid_entry(f"invalid entry record: {e.error_count()} validation error(s)", e)
    return from_record(record)
