"""
Base64 transcoder adapter — implements the Base64Transcoder port.

Uses the standard library `base64` module in strict mode:
`validate=True` makes b64decode reject characters outside the standard
alphabet instead of silently discarding them, and binascii enforces the
4-character block length and padding rules.
"""

from __future__ import annotations

import base64
import binascii

from pemkit.result import Result
from pemkit.result_failures import PemFailures


class StdlibBase64Transcoder:
    """
    Standard-alphabet base64 (RFC 4648 §4) with mandatory padding.

    All binascii errors are caught at this adapter boundary and returned as
    INVALID_BASE64 failures.
    """

    def encode(self, data: bytes) -> str:
        return base64.b64encode(data).decode("ascii")

    def decode(self, text: str) -> Result[bytes]:
        if not text.isascii():
            return PemFailures.invalid_base64("body contains non-ASCII characters")
        try:
            return Result.success(base64.b64decode(text, validate=True))
        except binascii.Error as e:
            return PemFailures.invalid_base64(f"body is not valid base64: {e}", exception=e)
