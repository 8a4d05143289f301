"""
Convenience factory methods for the codec's failure kinds.

    from pemkit.result_failures import PemFailures

    # Instead of:
    Result.failure(PemErrorCode.MALFORMED_FRAMING, "no END line for 'CERTIFICATE'", line=4)

    # Write:
    PemFailures.malformed_framing("no END line for 'CERTIFICATE'", line=4)
"""

from __future__ import annotations

from pemkit.failure import PemErrorCode
from pemkit.result import Result


class PemFailures:
    """Factory methods, one per PemErrorCode."""

    @staticmethod
    def malformed_framing(message: str, line: int | None = None) -> Result:
        """BEGIN/END delimiters missing, nested, or mismatched."""
        return Result.failure(PemErrorCode.MALFORMED_FRAMING, message, line)

    @staticmethod
    def invalid_header(message: str, line: int | None = None) -> Result:
        return Result.failure(PemErrorCode.INVALID_HEADER, message, line)

    @staticmethod
    def invalid_base64(message: str, line: int | None = None, exception: BaseException | None = None) -> Result:
        """Body is not decodable base64."""
        return Result.failure(PemErrorCode.INVALID_BASE64, message, line, exception)

    @staticmethod
    def not_exactly_one(found: int) -> Result:
        return Result.failure(
            PemErrorCode.NOT_EXACTLY_ONE,
            f"expected exactly one PEM block, found {found}",
        )

    @staticmethod
    def not_utf8(message: str, line: int | None = None) -> Result:
        """Bytes inside a block are not UTF-8."""
        return Result.failure(PemErrorCode.NOT_UTF8, message, line)

    @staticmethod
    def invalid_entry(message: str, exception: BaseException | None = None) -> Result:
        """Entry breaks a well-formedness invariant."""
        return Result.failure(PemErrorCode.INVALID_ENTRY, message, None, exception)

    @staticmethod
    def configuration_error(message: str, exception: BaseException | None = None) -> Result:
        return Result.failure(PemErrorCode.CONFIGURATION_ERROR, message, None, exception)
