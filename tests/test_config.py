import unittest
from multisig_wallet.config import WalletConfig

class TestWalletConfig(unittest.TestCase):

    def test_default_limits(self):
        config = WalletConfig.default()
        self.assertEqual(config.max_owners, 10)
        self.assertEqual(config.max_signatures, 10)
        self.assertEqual(config.start_height, 100)

    def test_testing_preset(self):
        config = WalletConfig.testing()
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.custody_balance, 10_000)

    def test_from_env(self):
        config = WalletConfig.from_env({
            'PORT': '8080',
            'MULTISIG_START_HEIGHT': '500',
            'MULTISIG_CUSTODY_BALANCE': '42',
            'MULTISIG_LOG_LEVEL': 'warning'
        })
        self.assertEqual(config.port, 8080)
        self.assertEqual(config.start_height, 500)
        self.assertEqual(config.custody_balance, 42)
        self.assertEqual(config.log_level, "WARNING")
        self.assertEqual(config.max_owners, 10)

    def test_from_env_defaults(self):
        self.assertEqual(WalletConfig.from_env({}), WalletConfig.default())

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            WalletConfig.from_env({'MULTISIG_LOG_LEVEL': 'LOUD'})
        with self.assertRaises(ValueError):
            WalletConfig.from_env({'MULTISIG_CUSTODY_BALANCE': '-1'})
        with self.assertRaises(ValueError):
            WalletConfig(
                max_owners=10,
                max_signatures=5,
                start_height=0,
                custody_balance=0,
                port=0,
                log_level="INFO"
            )

if __name__ == '__main__':
    unittest.main()
