"""Loading of the merchant's RSA private key from a PEM file."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .exceptions import KeyLoadError

logger = logging.getLogger(__name__)


def load_private_key(pem_path: Union[str, Path]) -> rsa.RSAPrivateKey:
    """
    Load an unencrypted RSA private key from a PEM file.

    Args:
        pem_path: Path to the PEM file issued for the merchant account

    Returns:
        Parsed RSA private key

    Raises:
        KeyLoadError: If the file is missing or does not hold a usable RSA key
    """
    path = Path(pem_path)
    if not path.is_file():
        raise KeyLoadError(f"Private key file not found at: {path}")

    try:
        pem_data = path.read_bytes()
    except OSError as e:
        raise KeyLoadError(f"Failed to read private key file {path}: {e}") from e

    try:
        # Encrypted keys raise TypeError since no password is passed
        key = serialization.load_pem_private_key(pem_data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyLoadError(f"Failed to load private key: {e}") from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyLoadError(
            f"Failed to load private key: expected an RSA key, got {type(key).__name__}"
        )

    logger.debug("Loaded %d-bit RSA private key from %s", key.key_size, path)
    return key
