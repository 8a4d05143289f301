"""
Domain models — the PEM block value and its ordered header list.

An Entry is what the parser produces and what the encoder consumes. It is a
plain mutable value: callers may edit the tag, headers, or contents between
parsing and re-encoding. Nothing is shared between Entries.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from pemkit.result import Result
from pemkit.result_failures import PemFailures

_LINE_BREAKS = ("\r", "\n")

# Delimiter lines, matched against a line with surrounding whitespace removed
BEGIN_LINE = re.compile(r"^-----BEGIN (?P<tag>[^-]+)-----$")
END_LINE = re.compile(r"^-----END (?P<tag>.*)-----$")

HeaderPair = tuple[str, str]


def _has_line_break(text: str) -> bool:
    return any(ch in text for ch in _LINE_BREAKS)


class Headers:
    """
    Ordered sequence of (key, value) header pairs.

    Mapping-style lookups are layered over the sequence: duplicate keys are
    legal, lookups scan linearly and the first match wins. Keys compare
    exactly (case-sensitive).

    >>> headers = Headers([("Proc-Type", "4,ENCRYPTED")])
    >>> headers.append("Comment", "first")
    >>> headers.append("Comment", "second")
    >>> headers.get("Comment")
    'first'
    >>> headers.remove("Comment")
    True
    >>> headers.get_all("Comment")
    ['second']
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[HeaderPair] | None = None) -> None:
        self._pairs: list[HeaderPair] = []
        for key, value in pairs or ():
            self.append(key, value)

    def get(self, key: str, default: str | None = None) -> str | None:
        """First value stored under `key`, or `default`."""
        for k, v in self._pairs:
            if k == key:
                return v
        return default

    def get_all(self, key: str) -> list[str]:
        return [v for k, v in self._pairs if k == key]

    def append(self, key: str, value: str) -> None:
        self._pairs.append((str(key), str(value)))

    def remove(self, key: str) -> bool:
        """
        Remove the first occurrence of `key`.

        Returns True if a pair was removed, False if the key was absent.
        Later duplicates are left in place; use remove_all() to drop them too.
        """
        for index, (k, _) in enumerate(self._pairs):
            if k == key:
                del self._pairs[index]
                return True
        return False

    def remove_all(self, key: str) -> int:
        """Remove every occurrence of `key`; returns how many were removed."""
        kept = [(k, v) for k, v in self._pairs if k != key]
        removed = len(self._pairs) - len(kept)
        self._pairs = kept
        return removed

    def extend_last_value(self, suffix: str) -> None:
        """
        Append `suffix` to the value of the most recently added pair (header continuation).

        Leading whitespace is dropped when the value was empty, so the folded
        value never starts with whitespace.
        """
        key, value = self._pairs[-1]
        self._pairs[-1] = (key, (value + suffix).lstrip())

    def keys(self) -> list[str]:
        return [k for k, _ in self._pairs]

    def items(self) -> list[HeaderPair]:
        return list(self._pairs)

    def copy(self) -> Headers:
        return Headers(self._pairs)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._pairs)

    def __iter__(self) -> Iterator[HeaderPair]:
        return iter(list(self._pairs))

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return self._pairs == other._pairs
        if isinstance(other, (list, tuple)):
            return self._pairs == [tuple(pair) for pair in other]
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Headers({self._pairs!r})"


@dataclass(slots=True)
class Entry:
    """
    One PEM block: tag, ordered headers, and the decoded binary contents.

    `headers` accepts a Headers instance or any iterable of (key, value)
    pairs; `contents` accepts any bytes-like value and is stored as bytes.
    """

    tag: str
    contents: bytes = field(default=b"", repr=False)
    headers: Headers = field(default_factory=Headers)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)
        if not isinstance(self.contents, bytes):
            self.contents = bytes(self.contents)

    def validate(self) -> Result[Entry]:
        """
        Check the invariants every encodable Entry must satisfy.

          1. tag is non-empty, has no line break and no '-' character
          2. header keys are non-empty, have no colon, no line break and no
             surrounding whitespace
          3. header values have no line break and no surrounding whitespace
          4. no rendered "key: value" line reads as a BEGIN or END line

        Returns Result[Entry] (self) on success, INVALID_ENTRY otherwise.
        """
        if not self.tag:
            return PemFailures.invalid_entry("tag must not be empty")
        if _has_line_break(self.tag):
            return PemFailures.invalid_entry(f"tag {self.tag!r} contains a line break")
        if "-" in self.tag:
            return PemFailures.invalid_entry(f"tag {self.tag!r} contains '-'")

        for key, value in self.headers:
            if not key or key != key.strip():
                return PemFailures.invalid_entry(f"header key {key!r} is empty or padded with whitespace")
            if ":" in key:
                return PemFailures.invalid_entry(f"header key {key!r} contains a colon")
            if _has_line_break(key):
                return PemFailures.invalid_entry(f"header key {key!r} contains a line break")
            if _has_line_break(value):
                return PemFailures.invalid_entry(f"value of header {key!r} contains a line break")
            if value != value.strip():
                return PemFailures.invalid_entry(f"value of header {key!r} is padded with whitespace")
            rendered = f"{key}: {value}".strip()
            if BEGIN_LINE.match(rendered) or END_LINE.match(rendered):
                return PemFailures.invalid_entry(f"header {key!r} would be read back as a delimiter line")

        return Result.success(self)
