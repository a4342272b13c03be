"""
HTTP Client for the connectIPS web service

Handles HTTP communication with connection pooling, Basic authentication,
and error handling. Requests are never retried here; the caller decides
whether a failed call is worth repeating.
"""

import json
import logging
from typing import Optional, Dict, Any

import requests
from requests.adapters import HTTPAdapter
from requests.auth import HTTPBasicAuth

from .exceptions import (
    GatewayCallError,
    GatewayTimeoutError,
    GatewayTransportError,
    MalformedResponseError,
)

logger = logging.getLogger(__name__)

USER_AGENT = "connectips-python/1.0"


class HTTPClient:
    """
    HTTP client for the gateway's JSON endpoints.

    Features:
    - Connection pooling
    - HTTP Basic authentication on every request
    - Gateway error bodies preserved on the raised exceptions
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: int = 30,
        pool_connections: int = 10,
        pool_maxsize: int = 10,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL of the gateway
            username: Basic auth username (the merchant's application id)
            password: Basic auth password
            timeout: Request timeout in seconds
            pool_connections: Number of connection pools
            pool_maxsize: Maximum size of connection pool
        """
        self.base_url = base_url.rstrip("/")
        self.auth = HTTPBasicAuth(username, password)
        self.timeout = timeout

        self.session = requests.Session()
        self._setup_connection_pooling(pool_connections, pool_maxsize)

    def _setup_connection_pooling(
        self, pool_connections: int, pool_maxsize: int
    ) -> None:
        """Setup HTTP connection pooling without automatic retries."""
        adapter = HTTPAdapter(
            pool_connections=pool_connections,
            pool_maxsize=pool_maxsize,
            max_retries=0,
        )
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def _build_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _get_headers(self, custom_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Get request headers.

        Args:
            custom_headers: Custom headers to include

        Returns:
            Headers dictionary
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

        if custom_headers:
            headers.update(custom_headers)

        return headers

    def _handle_response(self, response: requests.Response) -> Dict[str, Any]:
        """
        Handle API response and raise appropriate exceptions.

        Args:
            response: Response object

        Returns:
            Parsed JSON object

        Raises:
            GatewayCallError: If the gateway returned a non-success status
            MalformedResponseError: If a success response is not a JSON object
        """
        body = response.text

        if not 200 <= response.status_code < 300:
            raise GatewayCallError(
                f"Gateway call failed: {body}",
                status_code=response.status_code,
                response_body=body,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Gateway response is not valid JSON",
                status_code=response.status_code,
                response_body=body,
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Gateway response is not a JSON object: {type(data).__name__}",
                status_code=response.status_code,
                response_body=body,
            )

        return data

    def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Make a POST request with a JSON body.

        Args:
            endpoint: API endpoint path
            data: Request body data
            headers: Custom headers

        Returns:
            Response data
        """
        url = self._build_url(endpoint)
        headers = self._get_headers(headers)

        try:
            response = self.session.post(
                url,
                data=json.dumps(data if data is not None else {}),
                headers=headers,
                auth=self.auth,
                timeout=self.timeout,
                # 30x responses surface as GatewayCallError
                allow_redirects=False,
            )
        except requests.Timeout as e:
            raise GatewayTimeoutError(f"Request timeout after {self.timeout}s: {e}") from e
        except requests.ConnectionError as e:
            raise GatewayTransportError(f"Connection error: {e}") from e
        except requests.RequestException as e:
            raise GatewayTransportError(f"Request error: {e}") from e

        logger.debug("POST %s - Status: %s", url, response.status_code)
        return self._handle_response(response)

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
