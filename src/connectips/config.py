"""
connectIPS Client Configuration

Merchant credentials are supplied by the host environment and read once when
the client is constructed.

SECURITY NOTICE:
- The password and the private key MUST be provided via environment variables
  or by the host application, never committed to version control
- Use the UAT gateway (the default URL) until the merchant account is live
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://uat.connectips.com"
DEFAULT_TIMEOUT = 30

_REQUIRED_ENV = {
    "merchant_id": "CONNECTIPS_MERCHANT_ID",
    "app_id": "CONNECTIPS_APP_ID",
    "app_name": "CONNECTIPS_APP_NAME",
    "password": "CONNECTIPS_PASSWORD",
    "pem_path": "CONNECTIPS_PEM_PATH",
}


def _get_required(environ: Mapping[str, str], env_var: str) -> str:
    value = environ.get(env_var, "").strip()
    if not value:
        raise ConfigurationError(f"{env_var} environment variable is required")
    return value


def _resolve_pem_path(pem_path: str, storage_dir: Optional[str]) -> str:
    """Resolve a relative key path against the host storage directory."""
    path = Path(pem_path).expanduser()
    if storage_dir and not path.is_absolute():
        path = Path(storage_dir).expanduser() / path
    return str(path)


@dataclass(frozen=True)
class ConnectIPSConfig:
    """Merchant configuration for the connectIPS gateway."""

    merchant_id: str
    app_id: str
    app_name: str
    password: str
    pem_path: str
    base_url: str = DEFAULT_BASE_URL
    # Redirect targets for the hosted payment page; not used by the client itself
    success_url: Optional[str] = None
    failure_url: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConnectIPSConfig":
        """
        Build the configuration from CONNECTIPS_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Loaded configuration

        Raises:
            ConfigurationError: If a required variable is missing or a value is invalid
        """
        if environ is None:
            environ = os.environ

        values = {field: _get_required(environ, env_var) for field, env_var in _REQUIRED_ENV.items()}
        values["pem_path"] = _resolve_pem_path(
            values["pem_path"], environ.get("CONNECTIPS_STORAGE_DIR", "").strip() or None
        )

        raw_timeout = environ.get("CONNECTIPS_TIMEOUT", "").strip()
        try:
            timeout = int(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(f"CONNECTIPS_TIMEOUT must be an integer, got {raw_timeout!r}") from e
        if timeout <= 0:
            raise ConfigurationError("CONNECTIPS_TIMEOUT must be positive")

        config = cls(
            base_url=environ.get("CONNECTIPS_URL", "").strip() or DEFAULT_BASE_URL,
            success_url=environ.get("CONNECTIPS_SUCCESS_URL", "").strip() or None,
            failure_url=environ.get("CONNECTIPS_FAILURE_URL", "").strip() or None,
            timeout=timeout,
            **values,
        )
        logger.debug("Loaded connectIPS configuration for merchant %s (%s)", config.merchant_id, config.base_url)
        return config

    def redacted(self) -> Dict[str, Any]:
        """Configuration as a dictionary with the password masked."""
        return {
            "merchant_id": self.merchant_id,
            "app_id": self.app_id,
            "app_name": self.app_name,
            "password": "********" if self.password else "",
            "pem_path": self.pem_path,
            "base_url": self.base_url,
            "success_url": self.success_url,
            "failure_url": self.failure_url,
            "timeout": self.timeout,
        }
