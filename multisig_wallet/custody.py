"""
Host collaborators: the block clock and the custody account
"""

import logging
import threading
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

class BlockClock:
    """Monotonic progress counter standing in for chain block height"""

    def __init__(self, start_height: int = 0):
        if start_height < 0:
            raise ValueError("Block height cannot be negative")
        self._height = start_height
        self._lock = threading.Lock()

    def current_height(self) -> int:
        with self._lock:
            return self._height

    def advance(self, blocks: int = 1) -> int:
        """Move the clock forward and return the new height"""
        if blocks < 0:
            raise ValueError("Block height only moves forward")
        with self._lock:
            self._height += blocks
            return self._height


class CustodyAccount:
    """Pooled funds held by the wallet; pays out all-or-nothing"""

    def __init__(self, balance: int = 0):
        if balance < 0:
            raise ValueError("Custody balance cannot be negative")
        self.balance = balance
        self._transfer_history = []
        self._lock = threading.Lock()

    def deposit(self, amount: int) -> int:
        if amount <= 0:
            raise ValueError("Deposit must be positive")
        with self._lock:
            self.balance += amount
            return self.balance

    def transfer(self, amount: int, recipient: str) -> bool:
        """Move amount out of custody to recipient"""
        with self._lock:
            if amount < 0 or amount > self.balance:
                logger.warning(
                    "Custody refused transfer of %s to %s (balance %s)",
                    amount, recipient, self.balance
                )
                return False

            self.balance -= amount
            self._transfer_history.append({
                'recipient': recipient,
                'amount': amount,
                'remaining_balance': self.balance
            })
            return True

    def get_transfer_history(self) -> List[Dict[str, Any]]:
        """Payouts in the order they happened"""
        with self._lock:
            return [dict(entry) for entry in self._transfer_history]
