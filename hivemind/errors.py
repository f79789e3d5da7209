"""Error categories raised by the HiveMind client itself.

Transport failures and contract reverts reported by web3 during ``eth_call``
or gas estimation are not wrapped; they reach the caller unchanged.
"""


class HiveMindError(Exception):
    """Base exception for all HiveMind client errors."""


class IdentityError(HiveMindError):
    """Signing key material is missing or malformed."""


class ConfigurationError(HiveMindError):
    """Client configuration is missing or invalid."""


class NetworkMisconfiguration(ConfigurationError):
    """Unknown network name or a contract that is not deployed there."""


class TransactionReverted(HiveMindError):
    """A transaction was mined but its receipt reports ``status == 0``."""

    def __init__(self, message: str, tx_hash: str, receipt=None):
        super().__init__(message)
        self.tx_hash = tx_hash
        self.receipt = receipt
