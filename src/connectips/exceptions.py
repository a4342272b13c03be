"""
Exceptions for the connectIPS client

Every error raised by the package derives from ConnectIPSError so callers
can catch the whole family with a single except clause.
"""

from typing import Optional, Dict, Any


class ConnectIPSError(Exception):
    """Base exception for all connectIPS client errors."""

    def __init__(
        self,
        message: str,
        code: Optional[Any] = None,
        error_details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the error.

        Args:
            message: Human readable error message
            code: Optional error code (HTTP status or gateway code)
            error_details: Additional structured details
        """
        self.message = message
        self.code = code
        self.error_details = error_details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.code is not None:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(ConnectIPSError):
    """Raised when required configuration is missing or invalid."""
    pass


class ValidationError(ConnectIPSError):
    """Raised when call arguments are invalid."""
    pass


class KeyLoadError(ConnectIPSError):
    """Raised when the merchant private key cannot be loaded."""
    pass


class SignatureError(ConnectIPSError):
    """Raised when signing a canonical message fails."""
    pass


class GatewayCallError(ConnectIPSError):
    """
    Raised when a call to the gateway web service fails.

    Carries the HTTP status code (when a response was received) and the raw
    response body so operators can see what the gateway actually said.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        error_details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=status_code, error_details=error_details)
        self.status_code = status_code
        self.response_body = response_body


class GatewayTransportError(GatewayCallError):
    """Raised when the request never produced an HTTP response."""
    pass


class GatewayTimeoutError(GatewayTransportError):
    """Raised when the request times out."""
    pass


class MalformedResponseError(GatewayCallError):
    """Raised when a successful response does not carry a JSON object."""
    pass
