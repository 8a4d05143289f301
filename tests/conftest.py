"""
Shared test fixtures and helpers for the pemkit test suite.

Provides path resolution for the PEM fixture files under tests/fixtures
and a few ready-made Entries.
"""

from __future__ import annotations

import base64
from pathlib import Path

import pytest

from pemkit.domain.models import Entry

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def fixtures_dir() -> Path:
    """Return the absolute path to the test fixtures directory."""
    return FIXTURES_DIR


def fixture_path(filename: str) -> Path:
    """
    Resolve the absolute path to a test fixture file.

    Raises FileNotFoundError if the fixture does not exist.
    """
    path = FIXTURES_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Test fixture not found: {path}")
    return path


PRIVATE_KEY_BASE64 = (
    "MIIBPQIBAAJBAOsfi5AGYhdRs/x6q5H7kScxA0Kzzqe6WI6gf6+tc6IvKQJo5rQc"
    "dWWSQ0nRGt2hOPDO+35NKhQEjBQxPh/v7n0CAwEAAQJBAOGaBAyuw0ICyENy5NsO"
    "2gkT00AWTSzM9Zns0HedY31yEabkuFvrMCHjscEF7u3Y6PB7An3IzooBHchsFDei"
    "AAECIQD/JahddzR5K3A6rzTidmAf1PBtqi7296EnWv8WvpfAAQIhAOvowIXZI4Un"
    "DXjgZ9ekuUjZN+GUQRAVlkEEohGLVy59AiEA90VtqDdQuWWpvJX0cM08V10tLXrT"
    "TTGsEtITid1ogAECIQDAaFl90ZgS5cMrL3wCeatVKzVUmuJmB/VAmlLFFGzK0QIh"
    "ANJGc7AFk4fyFD/OezhwGHbWmo/S+bfeAiIh2Ss2FxKJ"
)

PUBLIC_KEY_BASE64 = (
    "MIIBOgIBAAJBAMIeCnn9G/7g2Z6J+qHOE2XCLLuPoh5NHTO2Fm+PbzBvafBo0oYo"
    "QVVy7frzxmOqx6iIZBxTyfAQqBPO3Br59BMCAwEAAQJAX+PjHPuxdqiwF6blTkS0"
    "RFI1MrnzRbCmOkM6tgVO0cd6r5Z4bDGLusH9yjI9iI84gPRjK0AzymXFmBGuREHI"
    "sQIhAPKf4pp+Prvutgq2ayygleZChBr1DC4XnnufBNtaswyvAiEAzNGVKgNvzuhk"
    "ijoUXIDruJQEGFGvZTsi1D2RehXiT90CIQC4HOQUYKCydB7oWi1SHDokFW2yFyo6"
    "/+lf3fgNjPI6OQIgUPmTFXciXxT1msh3gFLf3qt2Kv8wbr9Ad9SXjULVpGkCIB+g"
    "RzHX0lkJl9Stshd/7Gbt65/QYq+v+xvAeT0CoyIg"
)

# Payloads of the fixture files, decoded independently of pemkit
PRIVATE_KEY_DER = base64.b64decode(PRIVATE_KEY_BASE64)
PUBLIC_KEY_DER = base64.b64decode(PUBLIC_KEY_BASE64)


@pytest.fixture()
def certificate_entry() -> Entry:
    """An Entry with no headers and a payload spanning several body lines."""
    return Entry(tag="CERTIFICATE", contents=bytes(range(256)) * 2)


@pytest.fixture()
def headered_entry() -> Entry:
    """An Entry with ordered, duplicated headers."""
    return Entry(
        tag="RSA PRIVATE KEY",
        contents=b"\x30\x82\x01\x3b\x02\x01\x00",
        headers=[
            ("Proc-Type", "4,ENCRYPTED"),
            ("DEK-Info", "AES-128-CBC,0123456789ABCDEF0123456789ABCDEF"),
            ("Comment", "first"),
            ("Comment", "second"),
        ],
    )
