"""secp256k1 signing identity: key normalization, address derivation, signing."""

import re

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .errors import IdentityError

_PRIVATE_KEY_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


def normalize_private_key(key: str) -> str:
    """Return *key* in canonical ``0x``-prefixed hex form.

    Accepts 64 hex characters with or without the ``0x`` prefix.

    Raises:
        IdentityError: If *key* is not 32 bytes of hex.
    """
    if not isinstance(key, str):
        raise IdentityError(f"Private key must be a hex string, got {type(key).__name__}")
    k = key.strip()
    if not k.startswith(("0x", "0X")):
        k = "0x" + k
    k = "0x" + k[2:]
    if not _PRIVATE_KEY_RE.match(k):
        raise IdentityError(
            "Invalid private key: expected 64 hex characters "
            f"(optionally 0x-prefixed), got {len(k) - 2}"
        )
    return k.lower()


class Identity:
    """An Ethereum account used to sign HiveMind transactions."""

    def __init__(self, account: LocalAccount):
        self._account = account

    @classmethod
    def generate(cls) -> "Identity":
        """Generate a new random account (in-memory only)."""
        return cls(Account.create())

    @classmethod
    def from_key(cls, key: str) -> "Identity":
        """Build an identity from raw key material.

        Raises:
            IdentityError: If the key is malformed or outside the curve order.
        """
        pk = normalize_private_key(key)
        try:
            return cls(Account.from_key(pk))
        except Exception as e:
            raise IdentityError(f"Invalid private key: {e}") from e

    @property
    def address(self) -> str:
        """EIP-55 checksummed address of this identity."""
        return self._account.address

    @property
    def private_key(self) -> str:
        """Canonical 0x-prefixed private key."""
        return "0x" + bytes(self._account.key).hex()

    def sign_transaction(self, tx: dict):
        """Sign a transaction dict, returning eth_account's SignedTransaction."""
        return self._account.sign_transaction(tx)
