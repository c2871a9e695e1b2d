"""
Error taxonomy for the multi-signature wallet
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class WalletError(Enum):
    NOT_AUTHORIZED = 100
    INVALID_THRESHOLD = 101
    ALREADY_SIGNED = 102
    INSUFFICIENT_SIGNATURES = 103
    TX_DOES_NOT_EXIST = 104
    TX_EXPIRED = 105
    TX_ALREADY_EXECUTED = 106

    @property
    def code(self) -> int:
        return self.value


@dataclass(frozen=True)
class Result:
    """Outcome of a wallet operation: a value or exactly one WalletError"""
    value: Any = None
    error: Optional[WalletError] = None

    @classmethod
    def success(cls, value: Any = True) -> 'Result':
        return cls(value=value)

    @classmethod
    def failure(cls, error: WalletError) -> 'Result':
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


class SignatureCapacityError(RuntimeError):
    """A transaction would hold more signatures than the wallet allows"""

    def __init__(self, tx_id: int, capacity: int):
        super().__init__(f"Transaction {tx_id} is at its signature capacity of {capacity}")
        self.tx_id = tx_id
        self.capacity = capacity


class TransferError(RuntimeError):
    """The custody transfer primitive refused to move funds"""

    def __init__(self, tx_id: int, amount: int, recipient: str):
        super().__init__(f"Transfer of {amount} to {recipient} failed for transaction {tx_id}")
        self.tx_id = tx_id
        self.amount = amount
        self.recipient = recipient
