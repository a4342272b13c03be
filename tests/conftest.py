"""
Test configuration and fixtures
"""
import sys
from pathlib import Path
from unittest.mock import Mock

# Add src to Python path so the package imports without installation
project_root = Path(__file__).parent.parent
src_path = project_root / "src"

sys.path.insert(0, str(src_path))

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from connectips.client import ConnectIPSClient
from connectips.config import ConnectIPSConfig


@pytest.fixture(scope="session")
def rsa_private_key():
    """A 2048-bit RSA key shared by the whole test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def pem_path(tmp_path, rsa_private_key):
    """The session key written as an unencrypted PEM file."""
    path = tmp_path / "merchant.pem"
    path.write_bytes(
        rsa_private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return path


@pytest.fixture
def config(pem_path):
    """Configuration for merchant M1 on the UAT gateway."""
    return ConnectIPSConfig(
        merchant_id="M1",
        app_id="A1",
        app_name="App",
        password="p",
        pem_path=str(pem_path),
        base_url="https://uat.connectips.com",
    )


@pytest.fixture
def connectips_env(pem_path):
    """Environment variables describing the same merchant as ``config``."""
    return {
        "CONNECTIPS_MERCHANT_ID": "M1",
        "CONNECTIPS_APP_ID": "A1",
        "CONNECTIPS_APP_NAME": "App",
        "CONNECTIPS_PASSWORD": "p",
        "CONNECTIPS_PEM_PATH": str(pem_path),
    }


@pytest.fixture
def client(config):
    """Client with a real HTTPClient whose session tests replace with a Mock."""
    c = ConnectIPSClient(config)
    yield c
    c.close()


@pytest.fixture
def make_response():
    """Factory for mocked ``requests.Response`` objects."""

    def _make(status_code=200, text='{"status": "SUCCESS"}', json_data=None, json_error=None):
        response = Mock()
        response.status_code = status_code
        response.text = text
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = json_data if json_data is not None else {"status": "SUCCESS"}
        return response

    return _make
