"""
Test assertions for Result values.

Usage in tests:
    from pemkit.assertions import ResultAssertions

    def test_parse_single_certificate():
        entry = ResultAssertions.assert_success(parse_one(CERT_PEM))
        assert entry.tag == "CERTIFICATE"

    def test_mismatched_tags():
        failure = ResultAssertions.assert_failure(parse(text), PemErrorCode.MALFORMED_FRAMING)
        assert failure.line == 3
"""

from __future__ import annotations

from typing import Any, TypeVar

from pemkit.failure import PemErrorCode, PemFailure
from pemkit.result import Result

T = TypeVar("T")


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[T], message: str = "") -> T:
        """Assert the Result is a Success and return the value."""
        context = f" — {message}" if message else ""
        assert result.is_success(), (
            f"Expected Success but got Failure({result.error().describe()!r}){context}"
        )
        return result.value()

    @staticmethod
    def assert_failure(
        result: Result[T],
        expected_code: PemErrorCode | None = None,
        message: str = "",
    ) -> PemFailure:
        """
        Assert the Result is a Failure, optionally checking the error code.

            failure = ResultAssertions.assert_failure(result, PemErrorCode.INVALID_BASE64)
        """
        context = f" — {message}" if message else ""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r}){context}"
        )
        error = result.error()
        if expected_code is not None:
            assert error.code == expected_code, (
                f"Expected error code {expected_code.value} "
                f"but got {error.code.value}: {error.message!r}{context}"
            )
        return error

    @staticmethod
    def assert_failure_message_contains(result: Result[T], substring: str) -> None:
        """Case-insensitive substring check on the failure message."""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r})"
        )
        error = result.error()
        assert substring.lower() in error.message.lower(), (
            f"Expected failure message to contain {substring!r} "
            f"but message was: {error.message!r}"
        )

    @staticmethod
    def assert_success_value(result: Result[T], expected_value: Any) -> None:
        value = ResultAssertions.assert_success(result)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )
