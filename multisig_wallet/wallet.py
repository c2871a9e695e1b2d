import dataclasses
import logging
import threading
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Sequence

from .config import WalletConfig
from .errors import Result, WalletError, SignatureCapacityError, TransferError

logger = logging.getLogger(__name__)

@dataclass
class Transaction:
    """Proposed payout from custody, pending owner signatures"""
    id: int
    recipient: str  # identity receiving the funds
    amount: int
    expiration: int  # block height; valid while current height < expiration
    executed: bool = False
    signatures: List[str] = field(default_factory=list)  # owners, in signing order

    def is_expired(self, current_height: int) -> bool:
        return current_height >= self.expiration

    def snapshot(self) -> 'Transaction':
        """Detached copy safe to hand to callers"""
        return dataclasses.replace(self, signatures=list(self.signatures))

    def to_dict(self) -> dict:
        return asdict(self)


class MultiSigWallet:
    """
    Owners jointly control payouts from a custody account.

    Every public method runs under one lock, so calls are applied one at a
    time and never observe each other's partial writes. The caller identity
    is passed in explicitly and trusted as given.
    """

    def __init__(self, clock, custody, config: WalletConfig = None):
        self.clock = clock
        self.custody = custody
        self.config = config or WalletConfig.default()
        self._owners: List[str] = []
        self._threshold = 0
        self._tx_counter = 0
        self._transactions: Dict[int, Transaction] = {}
        self._lock = threading.RLock()

    def initialize(self, owners: Sequence[str], threshold: int, caller: Optional[str] = None) -> Result:
        """Set the owner set and signature threshold"""
        owners = list(owners)
        if not all(isinstance(owner, str) for owner in owners):
            raise ValueError("Owners must be identity strings")
        if len(owners) > self.config.max_owners:
            raise ValueError(f"At most {self.config.max_owners} owners allowed, got {len(owners)}")
        if len(set(owners)) != len(owners):
            raise ValueError("Duplicate owners not allowed")
        if isinstance(threshold, bool) or not isinstance(threshold, int):
            raise ValueError(f"Threshold must be an integer, got {threshold!r}")

        with self._lock:
            if threshold > len(owners) or threshold <= 0:
                logger.debug("initialize rejected: threshold %s for %s owners", threshold, len(owners))
                return Result.failure(WalletError.INVALID_THRESHOLD)

            if self._owners:
                logger.warning("Re-initializing wallet; %s replacing %s owners", caller, len(self._owners))
            self._owners = owners
            self._threshold = threshold
            logger.info("Wallet initialized: %s-of-%s", threshold, len(owners))
            return Result.success(True)

    def is_owner(self, identity: str) -> bool:
        with self._lock:
            return any(owner == identity for owner in self._owners)

    def propose(self, recipient: str, amount: int, expiration: int, caller: str) -> Result:
        """Create a transaction signed by its proposer; returns the new id"""
        if not isinstance(recipient, str):
            raise ValueError(f"Recipient must be an identity string, got {recipient!r}")

        with self._lock:
            if not self.is_owner(caller):
                logger.debug("propose rejected: %s is not an owner", caller)
                return Result.failure(WalletError.NOT_AUTHORIZED)

            tx_id = self._tx_counter
            self._transactions[tx_id] = Transaction(
                id=tx_id,
                recipient=recipient,
                amount=amount,
                expiration=expiration,
                signatures=[caller]
            )
            self._tx_counter += 1
            logger.info("Transaction %s proposed: %s to %s, expires at %s",
                        tx_id, amount, recipient, expiration)
            return Result.success(tx_id)

    def sign(self, tx_id: int, caller: str) -> Result:
        with self._lock:
            tx = self._transactions.get(tx_id)
            error = self._check_pending(tx)
            if error is None and not self.is_owner(caller):
                error = WalletError.NOT_AUTHORIZED
            if error is None and caller in tx.signatures:
                error = WalletError.ALREADY_SIGNED
            if error is not None:
                logger.debug("sign %s rejected: %s", tx_id, error.name)
                return Result.failure(error)

            if len(tx.signatures) >= self.config.max_signatures:
                raise SignatureCapacityError(tx_id, self.config.max_signatures)

            tx.signatures.append(caller)
            logger.info("Transaction %s signed by %s (%s/%s)",
                        tx_id, caller, len(tx.signatures), self._threshold)
            return Result.success(True)

    def execute(self, tx_id: int, caller: str) -> Result:
        """
        Pay out a transaction that has reached the threshold.

        Any caller may trigger execution once quorum is met; the signatures
        are the authorization. The executed flag and the custody transfer
        are applied together: if the transfer fails the flag is restored and
        the failure propagates as TransferError.
        """
        with self._lock:
            tx = self._transactions.get(tx_id)
            error = self._check_pending(tx)
            if error is None and len(tx.signatures) < self._threshold:
                error = WalletError.INSUFFICIENT_SIGNATURES
            if error is not None:
                logger.debug("execute %s rejected: %s", tx_id, error.name)
                return Result.failure(error)

            tx.executed = True
            try:
                moved = self.custody.transfer(tx.amount, tx.recipient)
            except Exception:
                tx.executed = False
                logger.warning("Transfer raised for transaction %s; rolled back", tx_id)
                raise
            if not moved:
                tx.executed = False
                logger.warning("Transfer refused for transaction %s; rolled back", tx_id)
                raise TransferError(tx_id, tx.amount, tx.recipient)

            logger.info("Transaction %s executed by %s: %s to %s",
                        tx_id, caller, tx.amount, tx.recipient)
            return Result.success(True)

    def _check_pending(self, tx: Optional[Transaction]) -> Optional[WalletError]:
        if tx is None:
            return WalletError.TX_DOES_NOT_EXIST
        if tx.is_expired(self.clock.current_height()):
            return WalletError.TX_EXPIRED
        if tx.executed:
            return WalletError.TX_ALREADY_EXECUTED
        return None

    # Read-only queries; unknown ids yield defaults rather than errors

    def signature_count(self, tx_id: int) -> int:
        with self._lock:
            tx = self._transactions.get(tx_id)
            return len(tx.signatures) if tx else 0

    def has_signed(self, tx_id: int, identity: str) -> bool:
        with self._lock:
            tx = self._transactions.get(tx_id)
            return tx is not None and identity in tx.signatures

    def get_owners(self) -> List[str]:
        with self._lock:
            return list(self._owners)

    def get_threshold(self) -> int:
        with self._lock:
            return self._threshold

    def get_transaction(self, tx_id: int) -> Optional[Transaction]:
        with self._lock:
            tx = self._transactions.get(tx_id)
            return tx.snapshot() if tx else None

    def transaction_count(self) -> int:
        with self._lock:
            return self._tx_counter

    def is_initialized(self) -> bool:
        with self._lock:
            return bool(self._owners)
