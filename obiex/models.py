"""
Request and response types for the Obiex API.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class TransactionCategory(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    SWAP = "SWAP"
    TRANSFER = "TRANSFER"


class TradeSide(str, Enum):
    """
    Trade direction for a pair.

    For BTC/USDT, BUY spends USDT to get BTC and SELL spends BTC to get USDT.
    """
    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def parse(cls, side: "str | TradeSide") -> "TradeSide":
        """
        Normalize a side string to a TradeSide.

        Raises:
            ValueError: If side is not buy or sell (any case)
        """
        if isinstance(side, TradeSide):
            return side
        normalized = str(side).upper()
        if normalized not in ["BUY", "SELL"]:
            raise ValueError(f"Invalid side: {side}. Must be 'BUY' or 'SELL'")
        return cls(normalized)


@dataclass(frozen=True)
class CryptoAccountPayout:
    """Destination wallet for a crypto withdrawal."""

    address: str
    network: str
    memo: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        payload = {"address": self.address, "network": self.network}
        if self.memo is not None:
            payload["memo"] = self.memo
        return payload


@dataclass(frozen=True)
class BankAccountPayout:
    """Destination bank account for a naira withdrawal."""

    account_number: str
    account_name: str
    bank_name: str
    bank_code: str
    paga_bank_code: str
    merchant_code: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "accountNumber": self.account_number,
            "accountName": self.account_name,
            "bankName": self.bank_name,
            "bankCode": self.bank_code,
            "pagaBankCode": self.paga_bank_code,
            "merchantCode": self.merchant_code,
        }


@dataclass(frozen=True)
class DepositAddress:
    """Broker deposit address tied to a caller-supplied identifier."""

    address: str
    memo: Optional[str]
    network: Optional[str]
    identifier: Optional[str]

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "DepositAddress":
        """Map the API's field names (value, purpose) to ours."""
        return cls(
            address=data.get("value", ""),
            memo=data.get("memo"),
            network=data.get("network"),
            identifier=data.get("purpose"),
        )
