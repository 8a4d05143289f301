"""
pemkit — PEM text parser and encoder.

Finds `-----BEGIN <TAG>-----` / `-----END <TAG>-----` blocks in arbitrary
text, extracts their headers and base64-decoded contents, and writes
Entries back out as canonical wrapped PEM.

Built on a Result railway: parsing and encoding return Result values
instead of raising on malformed input.

    from pemkit import Entry, encode, parse_one

    text = encode(Entry("CERTIFICATE", der_bytes)).value()
    entry = parse_one(text).value()
"""

from pemkit.config import CodecSettings, EncodeConfig, LineEnding, ParseConfig
from pemkit.domain.models import Entry, Headers
from pemkit.encoder import encode, encode_many
from pemkit.failure import PemErrorCode, PemFailure
from pemkit.parser import iter_entries, parse, parse_one
from pemkit.result import Failure, Result, Success

__all__ = [
    "CodecSettings",
    "EncodeConfig",
    "Entry",
    "Failure",
    "Headers",
    "LineEnding",
    "ParseConfig",
    "PemErrorCode",
    "PemFailure",
    "Result",
    "Success",
    "encode",
    "encode_many",
    "iter_entries",
    "parse",
    "parse_one",
]

__version__ = "0.1.0"
