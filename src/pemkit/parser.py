"""
PEM parser — scans text for BEGIN/END delimited blocks and decodes them.

The scan is a small line-oriented state machine over a cursor:

  SEEK_BEGIN ──BEGIN line──▶ READ_HEADERS ──first non-header line──▶ READ_BODY
      ▲                            │                                     │
      └──────── END line (tag matches, body decoded) ◀──────────────────┘

Text outside blocks is ignored, so PEM embedded in mail or log output
parses. Inside a block, anything that breaks the framing (END tag mismatch,
a nested BEGIN, end of input before END) or a body that does not decode is
fatal for the whole call: no partial list of entries is returned.

Line handling:
  - "\\r\\n" and "\\n" both separate lines; the last line may lack a separator
  - each line is trimmed before matching; blank lines are skipped in both the
    header section and the body
  - header continuation (see ParseConfig) looks at the untrimmed line
  - bytes are decoded as UTF-8 with surrogateescape; undecodable bytes are
    NOT_UTF8 only when they fall on a line inside a block
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Iterator

import structlog

from pemkit.adapters.base64_transcoder import StdlibBase64Transcoder
from pemkit.config import ParseConfig
from pemkit.domain.models import BEGIN_LINE, END_LINE, Entry, Headers
from pemkit.domain.ports import Base64Transcoder
from pemkit.failure import PemFailure
from pemkit.result import Result
from pemkit.result_failures import PemFailures

log = structlog.get_logger()

_LINE_SEPARATOR = re.compile(r"\r?\n")
# Lone surrogates left by surrogateescape decoding of non-UTF-8 bytes
_UNDECODABLE = re.compile("[\udc80-\udcff]")
_NON_BASE64 = re.compile(r"[^A-Za-z0-9+/=\s]")
_CONTINUATION_PREFIXES = (" ", "\t")

_DEFAULT_CONFIG = ParseConfig()
_DEFAULT_TRANSCODER = StdlibBase64Transcoder()


class _State(Enum):
    SEEK_BEGIN = auto()
    READ_HEADERS = auto()
    READ_BODY = auto()


@dataclass(slots=True)
class _OpenBlock:
    """Working state for the block between its BEGIN line and its END line."""

    tag: str
    begin_line: int
    # Leading whitespace of the BEGIN line; continuation lines must be indented past it
    indent: str = ""
    headers: Headers = field(default_factory=Headers)
    body: list[tuple[int, str]] = field(default_factory=list)
    # True only while the previous line was a header that may be continued
    can_continue: bool = False


# ─────────────────────── Input Normalization ───────────────────────


def _decode_input(text: str | bytes | bytearray | memoryview) -> str:
    """
    Accept str as-is; decode bytes-like input as UTF-8 (a leading BOM is dropped).

    Undecodable bytes become lone surrogates instead of failing here: only
    bytes that end up inside a block are an error, prose around blocks may
    be in any encoding.
    """
    if isinstance(text, str):
        return text
    return bytes(text).decode("utf-8-sig", errors="surrogateescape")


def _split_lines(text: str) -> list[str]:
    return _LINE_SEPARATOR.split(text)


def _is_continuation(raw: str, indent: str) -> bool:
    return raw.startswith(indent) and raw[len(indent):].startswith(_CONTINUATION_PREFIXES)


# ─────────────────────── Block Completion ───────────────────────


def _first_bad_body_line(block: _OpenBlock) -> int | None:
    """Line number of the first body line carrying a non-base64 character."""
    for number, line in block.body:
        if _NON_BASE64.search(line):
            return number
    return None


def _decode_block(block: _OpenBlock, end_line: int, transcoder: Base64Transcoder) -> Result[Entry]:
    """Strip whitespace from the body, base64-decode it and build the Entry."""
    data = "".join("".join(line.split()) for _, line in block.body)

    def _with_context(err: PemFailure) -> PemFailure:
        line = _first_bad_body_line(block)
        if line is None:
            line = block.body[0][0] if block.body else end_line
        return replace(err, message=f"{err.message} (block {block.tag!r})", line=line)

    return (
        transcoder.decode(data)
        .map_failure(_with_context)
        .map(lambda contents: Entry(tag=block.tag, contents=contents, headers=block.headers))
        .peek(
            lambda entry: log.debug(
                "parser.block_decoded",
                tag=entry.tag,
                headers=len(entry.headers),
                size=len(entry.contents),
                begin_line=block.begin_line,
                end_line=end_line,
            )
        )
    )


# ─────────────────────── State Machine ───────────────────────


def _scan(lines: list[str], config: ParseConfig, transcoder: Base64Transcoder) -> Iterator[Result[Entry]]:
    """
    Yield one Result per block found in `lines`.

    Stops right after yielding the first Failure.
    """
    state = _State.SEEK_BEGIN
    block: _OpenBlock | None = None
    cursor = 0

    while cursor < len(lines):
        raw = lines[cursor]
        line = raw.strip()
        number = cursor + 1

        if state is _State.SEEK_BEGIN:
            begin = BEGIN_LINE.match(line)
            if begin is not None:
                if _UNDECODABLE.search(line):
                    yield PemFailures.not_utf8("BEGIN line is not valid UTF-8", line=number)
                    return
                block = _OpenBlock(
                    tag=begin["tag"],
                    begin_line=number,
                    indent=raw[: len(raw) - len(raw.lstrip())],
                )
                state = _State.READ_HEADERS
            cursor += 1
            continue

        assert block is not None  # READ_HEADERS and READ_BODY always have an open block

        if _UNDECODABLE.search(raw):
            yield PemFailures.not_utf8(f"block {block.tag!r} is not valid UTF-8", line=number)
            return

        if BEGIN_LINE.match(line):
            yield PemFailures.malformed_framing(
                f"BEGIN line found before END of block {block.tag!r} opened at line {block.begin_line}",
                line=number,
            )
            return

        end = END_LINE.match(line)
        if end is not None:
            if end["tag"] != block.tag:
                yield PemFailures.malformed_framing(
                    f"mismatching BEGIN ({block.tag!r}) and END ({end['tag']!r}) tags",
                    line=number,
                )
                return
            result = _decode_block(block, number, transcoder)
            yield result
            if result.is_failure():
                return
            block = None
            state = _State.SEEK_BEGIN
            cursor += 1
            continue

        if state is _State.READ_HEADERS:
            if not line:
                block.can_continue = False
            elif config.allow_header_continuation and block.can_continue and _is_continuation(raw, block.indent):
                block.headers.extend_last_value(raw[len(block.indent):].rstrip())
            elif ":" in line:
                key, _, value = line.partition(":")
                key = key.strip()
                if key:
                    block.headers.append(key, value.strip())
                    block.can_continue = True
                elif config.strict_headers:
                    yield PemFailures.invalid_header(
                        f"header line in block {block.tag!r} has an empty key",
                        line=number,
                    )
                    return
                else:
                    log.debug("parser.header_skipped", tag=block.tag, line=number)
                    block.can_continue = False
            else:
                # First body line: re-examine it in READ_BODY without advancing
                state = _State.READ_BODY
                continue
            cursor += 1
            continue

        if config.strict_headers and ":" in line:
            yield PemFailures.invalid_header(
                f"header-like line after the body of block {block.tag!r} started",
                line=number,
            )
            return
        if line:
            block.body.append((number, line))
        cursor += 1

    if block is not None:
        yield PemFailures.malformed_framing(
            f"no END line for block {block.tag!r}",
            line=block.begin_line,
        )


# ─────────────────────── Public API ───────────────────────


def iter_entries(
    text: str | bytes,
    config: ParseConfig | None = None,
    transcoder: Base64Transcoder | None = None,
) -> Iterator[Result[Entry]]:
    """
    Lazily yield one Result[Entry] per PEM block, in order of appearance.

    The generator is finite and stops after the first Failure it yields.
    Calling iter_entries() again restarts the scan from the beginning.
    """
    yield from _scan(
        _split_lines(_decode_input(text)),
        config or _DEFAULT_CONFIG,
        transcoder or _DEFAULT_TRANSCODER,
    )


def parse(
    text: str | bytes,
    config: ParseConfig | None = None,
    transcoder: Base64Transcoder | None = None,
) -> Result[list[Entry]]:
    """
    Parse every PEM block in `text`.

    Returns Result[list[Entry]] (possibly empty: text without any BEGIN line
    is not an error). Returns a Failure on the first framing, header, base64
    or UTF-8 error; no partial results.
    """
    return (
        Result.all_of(iter_entries(text, config, transcoder))
        .peek(lambda entries: log.debug("parser.complete", blocks=len(entries)))
        .peek_failure(
            lambda err: log.warning(
                "parser.failed",
                code=err.code.value,
                line=err.line,
                error=err.message,
            )
        )
    )


def _exactly_one(entries: list[Entry]) -> Result[Entry]:
    if len(entries) != 1:
        return PemFailures.not_exactly_one(len(entries))
    return Result.success(entries[0])


def parse_one(
    text: str | bytes,
    config: ParseConfig | None = None,
    transcoder: Base64Transcoder | None = None,
) -> Result[Entry]:
    """
    Parse text that must contain exactly one PEM block.

    Fails with NOT_EXACTLY_ONE on zero or several blocks, or with the
    parse() failure if the text itself is malformed.
    """
    return parse(text, config, transcoder).flat_map(_exactly_one)
