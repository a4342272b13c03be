"""
Canonical message construction and RSA signing for connectIPS.

The gateway recomputes the canonical message on its side and checks the
token against it, so the field order and formatting here must match the
gateway byte for byte:

- NAME=value pairs joined with "," in the order given, no trailing separator
- values are rendered with str() and never escaped or trimmed
- the signature is RSA PKCS#1 v1.5 with SHA-256 over the UTF-8 message bytes
- the token is the standard base64 encoding of the raw signature
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Iterable, List, Tuple

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .exceptions import SignatureError

Field = Tuple[str, Any]

# The initiation message ends with a literal TOKEN=TOKEN pair
TOKEN_PLACEHOLDER = "TOKEN"


def build_message(fields: Iterable[Field]) -> str:
    """Join ordered (name, value) pairs into the canonical message string."""
    return ",".join(f"{name}={value}" for name, value in fields)


def initiation_fields(
    merchant_id: str,
    app_id: str,
    app_name: str,
    transaction_id: str,
    transaction_date: str,
    currency: str,
    amount: int,
    reference_id: str,
    remarks: str,
    particulars: str,
) -> List[Field]:
    """Fields of the payment initiation message, in signing order."""
    return [
        ("MERCHANTID", merchant_id),
        ("APPID", app_id),
        ("APPNAME", app_name),
        ("TXNID", transaction_id),
        ("TXNDATE", transaction_date),
        ("TXNCRNCY", currency),
        ("TXNAMT", amount),
        ("REFERENCEID", reference_id),
        ("REMARKS", remarks),
        ("PARTICULARS", particulars),
        ("TOKEN", TOKEN_PLACEHOLDER),
    ]


def lookup_fields(merchant_id: str, app_id: str, reference_id: str, amount: int) -> List[Field]:
    """Fields of the validate/detail token message. There is no TOKEN pair here."""
    return [
        ("MERCHANTID", merchant_id),
        ("APPID", app_id),
        ("REFERENCEID", reference_id),
        ("TXNAMT", amount),
    ]


class MessageSigner:
    """Signs canonical messages with the merchant's RSA private key."""

    def __init__(self, private_key: rsa.RSAPrivateKey) -> None:
        self._private_key = private_key

    def sign_message(self, message: str) -> bytes:
        """
        Sign a canonical message string.

        Args:
            message: Canonical message, signed as raw UTF-8 bytes

        Returns:
            Raw signature bytes

        Raises:
            SignatureError: If the cryptographic operation fails
        """
        try:
            return self._private_key.sign(
                message.encode("utf-8"),
                padding.PKCS1v15(),
                hashes.SHA256(),
            )
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SignatureError(f"Signature failed: {e}") from e

    def sign(self, fields: Iterable[Field]) -> bytes:
        """Build the canonical message from ordered fields and sign it."""
        return self.sign_message(build_message(fields))

    def token(self, fields: Iterable[Field]) -> str:
        """Base64 token for the canonical message built from ``fields``."""
        return encode_token(self.sign(fields))


def encode_token(signature: bytes) -> str:
    return base64.b64encode(signature).decode("ascii")


def verify_token(
    public_key: rsa.RSAPublicKey,
    message: str,
    token: str,
) -> bool:
    """
    Check a base64 token against a canonical message.

    Returns:
        True if the token is a valid signature of ``message`` for ``public_key``
    """
    try:
        signature = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError):
        return False
    try:
        public_key.verify(signature, message.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())
        return True
    except InvalidSignature:
        return False
