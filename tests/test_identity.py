import unittest
from multisig_wallet.identity import OwnerKey, normalize_identity, verify_caller

class TestOwnerKey(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.key = OwnerKey()
        self.message = b"/api/wallets/abc/transactions\n{}"

    def test_identity_is_compressed_pubkey(self):
        identity = self.key.identity
        self.assertEqual(len(identity), 66)
        self.assertIn(identity[:2], ("02", "03"))

    def test_key_pair_round_trip(self):
        private_hex, identity = OwnerKey.generate_key_pair()
        restored = OwnerKey(bytes.fromhex(private_hex))
        self.assertEqual(restored.identity, identity)

    def test_verify_caller(self):
        signature = self.key.sign_message(self.message)
        self.assertEqual(verify_caller(self.message, signature, self.key.identity), self.key.identity)

    def test_uncompressed_pubkey_maps_to_same_identity(self):
        signature = self.key.sign_message(self.message)
        uncompressed = self.key.public_key.to_string("uncompressed").hex()
        self.assertEqual(verify_caller(self.message, signature, uncompressed), self.key.identity)

    def test_forged_signature_rejected(self):
        other = OwnerKey()
        signature = other.sign_message(self.message)
        self.assertIsNone(verify_caller(self.message, signature, self.key.identity))

    def test_tampered_message_rejected(self):
        signature = self.key.sign_message(self.message)
        self.assertIsNone(verify_caller(self.message + b"x", signature, self.key.identity))

    def test_malformed_input_rejected(self):
        signature = self.key.sign_message(self.message)
        self.assertIsNone(verify_caller(self.message, signature, "not-hex"))
        self.assertIsNone(verify_caller(self.message, "zz", self.key.identity))
        self.assertIsNone(verify_caller(self.message, signature, "02" + "00" * 10))

    def test_normalize_identity(self):
        uncompressed = self.key.public_key.to_string("uncompressed").hex()
        self.assertEqual(normalize_identity(uncompressed), self.key.identity)
        self.assertEqual(normalize_identity(self.key.identity.upper()), self.key.identity)
        self.assertEqual(normalize_identity(self.key.identity), self.key.identity)

    def test_normalize_identity_rejects_malformed_keys(self):
        for pubkey in ["not-hex", "02" + "00" * 10, None]:
            with self.assertRaises(ValueError):
                normalize_identity(pubkey)

if __name__ == '__main__':
    unittest.main()
