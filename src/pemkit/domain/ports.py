"""
Ports — Protocol-based interfaces for the codec's external collaborators.

The parser and encoder own the PEM framing: delimiter lines, headers,
line wrapping and whitespace stripping. The raw base64 transcoding step
is delegated to a Base64Transcoder so it can be swapped (or faked in tests)
without touching the framing logic:

  Parser/Encoder ← Base64Transcoder (protocol) ← StdlibBase64Transcoder (adapter)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pemkit.result import Result


@runtime_checkable
class Base64Transcoder(Protocol):
    """
    Port: raw base64 encode/decode of an unwrapped character run.

    decode() receives the body with all whitespace already removed. It must
    reject anything outside the alphabet and any bad length or padding; the
    codec adds no leniency of its own on top of what the transcoder accepts.
    """

    def encode(self, data: bytes) -> str: ...

    def decode(self, text: str) -> Result[bytes]: ...
