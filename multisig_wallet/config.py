import os
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

@dataclass
class WalletConfig:
    """Wallet limits and runtime settings"""

    # Contract limits
    max_owners: int
    max_signatures: int

    # Host runtime
    start_height: int  # block height the clock starts at
    custody_balance: int  # units held in custody at creation
    port: int
    log_level: str

    def __post_init__(self):
        if self.max_owners < 1:
            raise ValueError("max_owners must be at least 1")
        if self.max_signatures < self.max_owners:
            raise ValueError(
                f"max_signatures ({self.max_signatures}) cannot be below max_owners ({self.max_owners})"
            )
        if self.start_height < 0:
            raise ValueError("start_height cannot be negative")
        if self.custody_balance < 0:
            raise ValueError("custody_balance cannot be negative")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.log_level}")

    @classmethod
    def default(cls) -> 'WalletConfig':
        """Limits of the deployed contract"""
        return cls(
            max_owners=10,
            max_signatures=10,
            start_height=100,
            custody_balance=100_000_000,
            port=10000,
            log_level="INFO"
        )

    @classmethod
    def testing(cls) -> 'WalletConfig':
        """Small custody balance and verbose logging for tests"""
        return cls(
            max_owners=10,
            max_signatures=10,
            start_height=100,
            custody_balance=10_000,
            port=0,
            log_level="DEBUG"
        )

    @classmethod
    def from_env(cls, environ=None) -> 'WalletConfig':
        """Default config with overrides from environment variables"""
        environ = os.environ if environ is None else environ
        base = cls.default()
        return cls(
            max_owners=base.max_owners,
            max_signatures=base.max_signatures,
            start_height=int(environ.get("MULTISIG_START_HEIGHT", base.start_height)),
            custody_balance=int(environ.get("MULTISIG_CUSTODY_BALANCE", base.custody_balance)),
            port=int(environ.get("PORT", base.port)),
            log_level=environ.get("MULTISIG_LOG_LEVEL", base.log_level)
        )
