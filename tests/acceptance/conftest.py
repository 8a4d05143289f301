"""
Acceptance test fixtures — keys and certificates generated with cryptography.

Generated once per session so every interop test works on fresh, real DER.
"""

from __future__ import annotations

import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec


def _self_signed(key: ec.EllipticCurvePrivateKey, common_name: str) -> x509.Certificate:
    name = x509.Name([x509.NameAttribute(x509.oid.NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )


@pytest.fixture(scope="session")
def ec_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def certificate(ec_key: ec.EllipticCurvePrivateKey) -> x509.Certificate:
    return _self_signed(ec_key, "pemkit root")


@pytest.fixture(scope="session")
def certificate_chain() -> list[x509.Certificate]:
    """Three unrelated self-signed certificates, in a fixed order."""
    return [_self_signed(ec.generate_private_key(ec.SECP256R1()), f"cert {i}") for i in range(3)]
