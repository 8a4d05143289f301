"""
Failure description — structured error information for the failure track.

Every codec operation that can fail returns a Result whose failure side
carries a PemFailure: an error code from PemErrorCode, a human-readable
message, and (where the parser knows it) the 1-based input line that
triggered the failure.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class PemErrorCode(Enum):
    """
    Error kinds produced by the PEM codec.

    Parse-side: MALFORMED_FRAMING, INVALID_HEADER, INVALID_BASE64, NOT_EXACTLY_ONE, NOT_UTF8
    Encode-side: INVALID_ENTRY, CONFIGURATION_ERROR
    """

    MALFORMED_FRAMING = "MALFORMED_FRAMING"
    """BEGIN without matching END, nested BEGIN, or BEGIN/END tag mismatch."""

    INVALID_HEADER = "INVALID_HEADER"
    """Header line rejected by strict header parsing."""

    INVALID_BASE64 = "INVALID_BASE64"
    """Body is not decodable base64 (bad alphabet, bad length or padding)."""

    NOT_EXACTLY_ONE = "NOT_EXACTLY_ONE"
    """parse_one() found zero blocks or more than one."""

    NOT_UTF8 = "NOT_UTF8"
    """Byte input is not valid UTF-8."""

    INVALID_ENTRY = "INVALID_ENTRY"
    """An Entry or interchange record breaks the well-formedness invariants."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """Invalid codec option, e.g. a non-positive line width."""


@dataclass(frozen=True, slots=True)
class PemFailure:
    """
    Immutable failure descriptor: error code, message, input line, optional exception.

    >>> failure = PemFailure(PemErrorCode.MALFORMED_FRAMING, "missing END line", line=3)
    >>> failure.code
    <PemErrorCode.MALFORMED_FRAMING: 'MALFORMED_FRAMING'>
    >>> failure.describe()
    'MALFORMED_FRAMING at line 3: missing END line'
    """

    code: PemErrorCode
    message: str
    line: Optional[int] = None
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC), repr=False)

    def describe(self) -> str:
        """One-line summary including the input line when known."""
        if self.line is None:
            return f"{self.code.value}: {self.message}"
        return f"{self.code.value} at line {self.line}: {self.message}"

    def full_stack_trace(self) -> str:
        """Summary followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.describe()
        tb = "".join(
            traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__)
        )
        return f"{self.describe()}\n{tb}"
