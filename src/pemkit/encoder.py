"""
PEM encoder — serializes Entries into canonical wrapped PEM text.

Output layout for one Entry:

  -----BEGIN <tag>-----
  <key>: <value>            one line per stored header, in order, never folded
                            blank separator line, only when headers exist
  <base64, line_width chars per line, last line may be shorter>
  -----END <tag>-----

Every line, including the last, ends with the configured line terminator.
Empty contents produce no body lines at all.
"""

from __future__ import annotations

from typing import Iterable

import structlog
from pydantic import ValidationError

from pemkit.adapters.base64_transcoder import StdlibBase64Transcoder
from pemkit.config import EncodeConfig
from pemkit.domain.models import Entry
from pemkit.domain.ports import Base64Transcoder
from pemkit.result import Result
from pemkit.result_failures import PemFailures

log = structlog.get_logger()

_DEFAULT_CONFIG = EncodeConfig()
_DEFAULT_TRANSCODER = StdlibBase64Transcoder()


def _resolve_config(line_width: int | None, config: EncodeConfig | None) -> Result[EncodeConfig]:
    """An explicit line_width overrides the width carried by `config`."""
    base = config or _DEFAULT_CONFIG
    if line_width is None:
        return Result.success(base)
    try:
        return Result.success(EncodeConfig(line_width=line_width, line_ending=base.line_ending))
    except ValidationError as e:
        return PemFailures.configuration_error(f"invalid encoder options: line_width={line_width!r}", e)


def _wrap(data: str, width: int) -> list[str]:
    return [data[i : i + width] for i in range(0, len(data), width)]


def _render(entry: Entry, config: EncodeConfig, transcoder: Base64Transcoder) -> str:
    lines = [f"-----BEGIN {entry.tag}-----"]
    lines.extend(f"{key}: {value}" for key, value in entry.headers)
    if entry.headers:
        lines.append("")
    lines.extend(_wrap(transcoder.encode(entry.contents), config.line_width))
    lines.append(f"-----END {entry.tag}-----")

    eol = config.line_ending.value
    return eol.join(lines) + eol


def encode(
    entry: Entry,
    line_width: int | None = None,
    config: EncodeConfig | None = None,
    transcoder: Base64Transcoder | None = None,
) -> Result[str]:
    """
    Encode one Entry as PEM text.

    line_width defaults to 64 (or the width in `config`). Returns
    CONFIGURATION_ERROR for a non-positive width and INVALID_ENTRY for an
    Entry whose tag or headers could not be parsed back.
    """
    coder = transcoder or _DEFAULT_TRANSCODER
    return (
        _resolve_config(line_width, config)
        .flat_map(lambda cfg: entry.validate().map(lambda valid: _render(valid, cfg, coder)))
        .peek(lambda text: log.debug("encoder.complete", tag=entry.tag, chars=len(text)))
    )


def encode_many(
    entries: Iterable[Entry],
    line_width: int | None = None,
    config: EncodeConfig | None = None,
    transcoder: Base64Transcoder | None = None,
) -> Result[str]:
    """
    Encode several Entries, separating consecutive blocks with a blank line.

    Fails on the first Entry that cannot be encoded.
    """

    def _encode_all(cfg: EncodeConfig) -> Result[str]:
        return Result.all_of(encode(entry, config=cfg, transcoder=transcoder) for entry in entries).map(
            lambda blocks: cfg.line_ending.value.join(blocks)
        )

    return _resolve_config(line_width, config).flat_map(_encode_all)
