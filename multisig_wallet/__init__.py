"""
Multi-Signature Wallet - shared custody with quorum-gated payouts
"""

from .wallet import MultiSigWallet, Transaction
from .errors import WalletError, Result, SignatureCapacityError, TransferError
from .custody import BlockClock, CustodyAccount
from .identity import OwnerKey, normalize_identity, verify_caller
from .config import WalletConfig

__version__ = "0.1.0"
__all__ = [
    "MultiSigWallet",
    "Transaction",
    "WalletError",
    "Result",
    "SignatureCapacityError",
    "TransferError",
    "BlockClock",
    "CustodyAccount",
    "OwnerKey",
    "normalize_identity",
    "verify_caller",
    "WalletConfig"
]
