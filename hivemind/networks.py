"""Static network table: chain ids, RPC defaults, explorers, contract addresses."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .errors import NetworkMisconfiguration

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class Network:
    name: str
    display_name: str
    chain_id: int
    rpc_url: str
    explorer_url: str
    hivemind_address: str
    usdc_address: str

    @property
    def hivemind_deployed(self) -> bool:
        return self.hivemind_address.lower() != ZERO_ADDRESS


NETWORKS: Mapping[str, Network] = MappingProxyType(
    {
        "base": Network(
            name="base",
            display_name="Base",
            chain_id=8453,
            rpc_url="https://mainnet.base.org",
            explorer_url="https://basescan.org",
            hivemind_address="0xA1021d8287Da2cdFAfFab57CDb150088179e5f5B",
            usdc_address="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
        ),
        "base_sepolia": Network(
            name="base_sepolia",
            display_name="Base Sepolia",
            chain_id=84532,
            rpc_url="https://sepolia.base.org",
            explorer_url="https://sepolia.basescan.org",
            # Ledger not deployed on the testnet yet.
            hivemind_address=ZERO_ADDRESS,
            usdc_address="0x036CbD53842c5426634e7929541eC2318f3dCF7e",
        ),
    }
)

DEFAULT_NETWORK = "base"


def get_network(name: str) -> Network:
    """Look up a network by name.

    Raises:
        NetworkMisconfiguration: If *name* is not a supported network.
    """
    try:
        return NETWORKS[name]
    except KeyError:
        supported = ", ".join(sorted(NETWORKS))
        raise NetworkMisconfiguration(
            f"Unknown network {name!r} (supported: {supported})"
        ) from None


def explorer_tx_url(network: Network, tx_hash: str) -> str:
    """Block explorer URL for *tx_hash* on *network*."""
    return f"{network.explorer_url}/tx/{tx_hash}"
