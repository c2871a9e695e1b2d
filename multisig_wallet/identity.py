"""
Owner identities backed by secp256k1 keys
"""

import hashlib
import logging
from typing import Optional, Tuple

from ecdsa import SigningKey, VerifyingKey, SECP256k1, BadSignatureError, MalformedPointError

logger = logging.getLogger(__name__)

class OwnerKey:
    """Key pair whose compressed public key is the owner's identity"""

    def __init__(self, private_key: bytes = None):
        if private_key:
            self.private_key = SigningKey.from_string(private_key, curve=SECP256k1)
        else:
            self.private_key = SigningKey.generate(curve=SECP256k1)

        self.public_key = self.private_key.get_verifying_key()

    @property
    def identity(self) -> str:
        """Compressed public key in hex (02/03 prefix + x coordinate)"""
        return self.public_key.to_string("compressed").hex()

    def sign_message(self, message: bytes) -> str:
        """Sign message and return signature in hex"""
        signature = self.private_key.sign(message, hashfunc=hashlib.sha256)
        return signature.hex()

    @staticmethod
    def generate_key_pair() -> Tuple[str, str]:
        """Generate new key pair and return (private_key_hex, identity)"""
        key = OwnerKey()
        return key.private_key.to_string().hex(), key.identity


def normalize_identity(pubkey_hex: str) -> str:
    """Compressed lowercase form of a public key given in any SEC1 hex encoding"""
    if not isinstance(pubkey_hex, str):
        raise ValueError(f"Public key must be a hex string, got {pubkey_hex!r}")
    try:
        vk = VerifyingKey.from_string(bytes.fromhex(pubkey_hex), curve=SECP256k1)
    except MalformedPointError as e:
        raise ValueError(f"Malformed public key {pubkey_hex}: {e}") from e
    return vk.to_string("compressed").hex()


def verify_caller(message: bytes, signature_hex: str, pubkey_hex: str) -> Optional[str]:
    """Return the caller identity if signature_hex signs message under pubkey_hex"""
    try:
        vk = VerifyingKey.from_string(bytes.fromhex(pubkey_hex), curve=SECP256k1)
        vk.verify(bytes.fromhex(signature_hex), message, hashfunc=hashlib.sha256)
    except (BadSignatureError, MalformedPointError, ValueError) as e:
        logger.debug("Caller verification failed for %s...: %s", pubkey_hex[:16], e)
        return None

    # Normalize so an uncompressed key maps to the same identity
    return vk.to_string("compressed").hex()
