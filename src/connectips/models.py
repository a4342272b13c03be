"""
Data models for connectIPS requests and payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from cryptography.hazmat.primitives.asymmetric import rsa

from .exceptions import ValidationError

DEFAULT_CURRENCY = "NPR"
# DD-MM-YYYY, as the gateway expects for TXNDATE
TXN_DATE_FORMAT = "%d-%m-%Y"


def validate_amount(amount: Any) -> int:
    """Amounts are whole numbers; bool is rejected even though it is an int."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"amount must be an integer, got {type(amount).__name__}")
    return amount


def validate_transaction_id(transaction_id: Any) -> str:
    if not isinstance(transaction_id, str) or not transaction_id:
        raise ValidationError("transaction_id is required")
    return transaction_id


def validate_text(name: str, value: Any, optional: bool = False) -> Optional[str]:
    """Signed text fields must be str; None passes only when optional."""
    if value is None and optional:
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class GatewayCredentials:
    """Merchant credentials, fixed for the lifetime of a client."""
    merchant_id: str
    app_id: str
    app_name: str
    password: str
    private_key: rsa.RSAPrivateKey
    base_url: str

    def __repr__(self) -> str:
        return (
            f"GatewayCredentials(merchant_id={self.merchant_id!r}, app_id={self.app_id!r}, "
            f"app_name={self.app_name!r}, base_url={self.base_url!r})"
        )


@dataclass
class TransactionRequest:
    """Parameters of a payment to initiate on the hosted payment page."""
    transaction_id: str
    amount: int
    reference_id: str
    remarks: str
    particulars: str
    transaction_date: Optional[str] = None
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        validate_transaction_id(self.transaction_id)
        validate_amount(self.amount)
        validate_text("reference_id", self.reference_id)
        validate_text("remarks", self.remarks)
        validate_text("particulars", self.particulars)
        # DD-MM-YYYY string, or None for today
        validate_text("transaction_date", self.transaction_date, optional=True)
        if self.currency is None or self.currency == "":
            self.currency = DEFAULT_CURRENCY
        validate_text("currency", self.currency)


@dataclass(frozen=True)
class SignedInitiationPayload:
    """The form fields posted to the gateway's payment initiation page."""
    merchant_id: str
    app_id: str
    app_name: str
    transaction_id: str
    transaction_date: str
    currency: str
    amount: int
    reference_id: str
    remarks: str
    particulars: str
    token: str

    def to_dict(self) -> Dict[str, Any]:
        """Gateway field names mapped to values, in form order."""
        return {
            "MERCHANTID": self.merchant_id,
            "APPID": self.app_id,
            "APPNAME": self.app_name,
            "TXNID": self.transaction_id,
            "TXNDATE": self.transaction_date,
            "TXNCRNCY": self.currency,
            "TXNAMT": self.amount,
            "REFERENCEID": self.reference_id,
            "REMARKS": self.remarks,
            "PARTICULARS": self.particulars,
            "TOKEN": self.token,
        }
