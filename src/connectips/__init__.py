"""
connectIPS Python Client

Signs payment initiation payloads and calls the connectIPS gateway's
payment validation and transaction detail endpoints.

Example:
    >>> from connectips import ConnectIPSClient
    >>> client = ConnectIPSClient.from_env()
    >>> client.validate_payment("TX1", 100)
"""

from .client import ConnectIPSClient
from .config import ConnectIPSConfig
from .exceptions import (
    ConnectIPSError,
    ConfigurationError,
    ValidationError,
    KeyLoadError,
    SignatureError,
    GatewayCallError,
    GatewayTransportError,
    GatewayTimeoutError,
    MalformedResponseError,
)
from .keys import load_private_key
from .models import (
    GatewayCredentials,
    TransactionRequest,
    SignedInitiationPayload,
)
from .signing import MessageSigner, build_message, verify_token

__version__ = "1.0.0"

__all__ = [
    "ConnectIPSClient",
    "ConnectIPSConfig",
    "GatewayCredentials",
    "TransactionRequest",
    "SignedInitiationPayload",
    "MessageSigner",
    "build_message",
    "verify_token",
    "load_private_key",
    "ConnectIPSError",
    "ConfigurationError",
    "ValidationError",
    "KeyLoadError",
    "SignatureError",
    "GatewayCallError",
    "GatewayTransportError",
    "GatewayTimeoutError",
    "MalformedResponseError",
]
