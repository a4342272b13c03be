"""
Tests for loading the merchant RSA private key.

Tests cover:
- Loading a valid PEM key
- Missing paths and directories
- Non-PEM, corrupted, encrypted and non-RSA keys
"""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from connectips.exceptions import KeyLoadError
from connectips.keys import load_private_key


class TestLoadPrivateKey:
    """Tests for load_private_key."""

    def test_loads_rsa_key(self, pem_path, rsa_private_key):
        """A valid PEM file yields the same RSA key."""
        key = load_private_key(pem_path)

        assert isinstance(key, rsa.RSAPrivateKey)
        assert key.private_numbers() == rsa_private_key.private_numbers()

    def test_accepts_string_path(self, pem_path):
        """Paths may be given as strings."""
        assert isinstance(load_private_key(str(pem_path)), rsa.RSAPrivateKey)

    def test_loads_pkcs8_key(self, tmp_path, rsa_private_key):
        """PKCS#8 PEM files are accepted as well."""
        path = tmp_path / "pkcs8.pem"
        path.write_bytes(
            rsa_private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )

        assert isinstance(load_private_key(path), rsa.RSAPrivateKey)

    def test_missing_file(self, tmp_path):
        """A non-existent path raises KeyLoadError."""
        with pytest.raises(KeyLoadError, match="not found"):
            load_private_key(tmp_path / "missing.pem")

    def test_directory_path(self, tmp_path):
        """A directory is not a key file."""
        with pytest.raises(KeyLoadError, match="not found"):
            load_private_key(tmp_path)

    def test_non_pem_file(self, tmp_path):
        """Plain text content raises KeyLoadError."""
        path = tmp_path / "notes.txt"
        path.write_text("this is not a key")

        with pytest.raises(KeyLoadError, match="Failed to load private key"):
            load_private_key(path)

    def test_corrupted_pem(self, tmp_path, pem_path):
        """A PEM file with a damaged body raises KeyLoadError."""
        lines = pem_path.read_text().splitlines()
        corrupted = [lines[0]] + ["A" * 64] * 3 + [lines[-1]]
        path = tmp_path / "corrupted.pem"
        path.write_text("\n".join(corrupted) + "\n")

        with pytest.raises(KeyLoadError):
            load_private_key(path)

    def test_empty_file(self, tmp_path):
        """An empty file raises KeyLoadError."""
        path = tmp_path / "empty.pem"
        path.write_bytes(b"")

        with pytest.raises(KeyLoadError):
            load_private_key(path)

    def test_encrypted_key(self, tmp_path, rsa_private_key):
        """Password protected keys are not supported."""
        path = tmp_path / "encrypted.pem"
        path.write_bytes(
            rsa_private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.BestAvailableEncryption(b"secret"),
            )
        )

        with pytest.raises(KeyLoadError):
            load_private_key(path)

    def test_non_rsa_key(self, tmp_path):
        """An EC key is rejected even though it parses."""
        path = tmp_path / "ec.pem"
        path.write_bytes(
            ec.generate_private_key(ec.SECP256R1()).private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )

        with pytest.raises(KeyLoadError, match="expected an RSA key"):
            load_private_key(path)

    def test_public_key_file(self, tmp_path, rsa_private_key):
        """A public key is not a private key."""
        path = tmp_path / "public.pem"
        path.write_bytes(
            rsa_private_key.public_key().public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
        )

        with pytest.raises(KeyLoadError):
            load_private_key(path)
