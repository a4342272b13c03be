"""
connectIPS Client

Entry point of the package. Loads the merchant key once, builds signed
payment initiation payloads and calls the gateway's validation and
transaction detail endpoints.

Example:
    >>> from connectips import ConnectIPSClient, TransactionRequest
    >>> with ConnectIPSClient.from_env() as client:
    ...     payload = client.build_initiation_payload(
    ...         TransactionRequest("TX1", 100, "R1", "ok", "goods")
    ...     )
    ...     result = client.validate_payment("TX1", 100)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from .config import ConnectIPSConfig
from .http_client import HTTPClient
from .keys import load_private_key
from .models import (
    DEFAULT_CURRENCY,
    TXN_DATE_FORMAT,
    GatewayCredentials,
    SignedInitiationPayload,
    TransactionRequest,
    validate_amount,
    validate_transaction_id,
)
from .signing import MessageSigner, initiation_fields, lookup_fields

logger = logging.getLogger(__name__)

VALIDATE_TXN_ENDPOINT = "/connectipswebws/api/creditor/validatetxn"
TXN_DETAIL_ENDPOINT = "/connectipswebws/api/creditor/gettxndetail"


def _today() -> str:
    return datetime.now().strftime(TXN_DATE_FORMAT)


class ConnectIPSClient:
    """
    Client for the connectIPS payment gateway.

    The credentials and private key are read-only after construction, so a
    single instance can be shared between threads.
    """

    def __init__(
        self,
        config: ConnectIPSConfig,
        http_client: Optional[HTTPClient] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Merchant configuration
            http_client: Transport to use instead of a new HTTPClient

        Raises:
            KeyLoadError: If the private key cannot be loaded
        """
        self.config = config
        self.credentials = GatewayCredentials(
            merchant_id=config.merchant_id,
            app_id=config.app_id,
            app_name=config.app_name,
            password=config.password,
            private_key=load_private_key(config.pem_path),
            base_url=config.base_url,
        )
        self.signer = MessageSigner(self.credentials.private_key)
        self.http_client = http_client or HTTPClient(
            base_url=self.credentials.base_url,
            username=self.credentials.app_id,
            password=self.credentials.password,
            timeout=config.timeout,
        )

    @classmethod
    def from_env(cls) -> "ConnectIPSClient":
        """Create a client configured from CONNECTIPS_* environment variables."""
        return cls(ConnectIPSConfig.from_env())

    def build_initiation_payload(self, request: TransactionRequest) -> SignedInitiationPayload:
        """
        Build the signed field set for the hosted payment page.

        No network call is made. A missing transaction date defaults to
        today and a missing currency to NPR.

        Args:
            request: Transaction to initiate

        Returns:
            Payload including the base64 TOKEN

        Raises:
            SignatureError: If signing fails
        """
        creds = self.credentials
        transaction_date = request.transaction_date
        if transaction_date is None:
            transaction_date = _today()
        currency = request.currency or DEFAULT_CURRENCY

        token = self.signer.token(
            initiation_fields(
                merchant_id=creds.merchant_id,
                app_id=creds.app_id,
                app_name=creds.app_name,
                transaction_id=request.transaction_id,
                transaction_date=transaction_date,
                currency=currency,
                amount=request.amount,
                reference_id=request.reference_id,
                remarks=request.remarks,
                particulars=request.particulars,
            )
        )

        return SignedInitiationPayload(
            merchant_id=creds.merchant_id,
            app_id=creds.app_id,
            app_name=creds.app_name,
            transaction_id=request.transaction_id,
            transaction_date=transaction_date,
            currency=currency,
            amount=request.amount,
            reference_id=request.reference_id,
            remarks=request.remarks,
            particulars=request.particulars,
            token=token,
        )

    def generate_token(self, transaction_id: str, amount: int) -> str:
        """
        Token authorizing a validate or detail call for a transaction.

        Raises:
            ValidationError: If the arguments are invalid
            SignatureError: If signing fails
        """
        validate_transaction_id(transaction_id)
        validate_amount(amount)
        return self.signer.token(
            lookup_fields(
                merchant_id=self.credentials.merchant_id,
                app_id=self.credentials.app_id,
                reference_id=transaction_id,
                amount=amount,
            )
        )

    def _lookup_request(self, transaction_id: str, amount: int) -> Dict[str, Any]:
        token = self.generate_token(transaction_id, amount)
        return {
            "merchantId": self.credentials.merchant_id,
            "appId": self.credentials.app_id,
            "referenceId": transaction_id,
            "txnAmt": amount,
            "token": token,
        }

    def validate_payment(self, transaction_id: str, amount: int) -> Dict[str, Any]:
        """
        Ask the gateway to validate a completed payment.

        Args:
            transaction_id: Transaction id used when the payment was initiated
            amount: Transaction amount

        Returns:
            Parsed gateway response

        Raises:
            GatewayCallError: If the call fails or the gateway rejects it
        """
        request_data = self._lookup_request(transaction_id, amount)
        logger.debug("Validating connectIPS transaction %s", transaction_id)
        return self.http_client.post(VALIDATE_TXN_ENDPOINT, data=request_data)

    def get_transaction_details(self, transaction_id: str, amount: int) -> Dict[str, Any]:
        """
        Fetch the gateway's record of a transaction.

        Args:
            transaction_id: Transaction id used when the payment was initiated
            amount: Transaction amount

        Returns:
            Parsed gateway response

        Raises:
            GatewayCallError: If the call fails or the gateway rejects it
        """
        request_data = self._lookup_request(transaction_id, amount)
        logger.debug("Fetching connectIPS transaction details for %s", transaction_id)
        return self.http_client.post(TXN_DETAIL_ENDPOINT, data=request_data)

    def close(self) -> None:
        """Close the HTTP session."""
        self.http_client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
