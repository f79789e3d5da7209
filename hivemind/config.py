"""Client configuration.

Every field can be passed explicitly or read from the environment:

    HIVEMIND_PRIVATE_KEY   – hex-encoded private key (0x prefix optional)
    HIVEMIND_CHAIN         – network name: base | base_sepolia (default base)
    HIVEMIND_RPC_URL       – JSON-RPC endpoint (default: the network's)
    HIVEMIND_ADDRESS       – ledger contract override (local deployments)
    HIVEMIND_USDC_ADDRESS  – payment token override
    HIVEMIND_TX_TIMEOUT    – receipt wait timeout in seconds (default: none)
    HIVEMIND_TX_POLL       – receipt poll latency in seconds (default 2)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError
from .networks import DEFAULT_NETWORK


@dataclass
class HiveMindConfig:
    private_key: str
    chain: str = DEFAULT_NETWORK
    rpc_url: Optional[str] = None
    hivemind_address: Optional[str] = None
    usdc_address: Optional[str] = None
    # None waits for confirmation indefinitely.
    tx_timeout: Optional[float] = None
    poll_latency: float = 2.0

    @classmethod
    def from_env(cls, **overrides) -> "HiveMindConfig":
        """Build a config from ``HIVEMIND_*`` environment variables.

        Keyword arguments take precedence over the environment.

        Raises:
            ConfigurationError: If no private key is available or a numeric
                variable does not parse.
        """
        env = os.environ
        private_key = overrides.pop("private_key", None) or env.get("HIVEMIND_PRIVATE_KEY")
        if not private_key:
            raise ConfigurationError("HIVEMIND_PRIVATE_KEY is not set")

        values = {
            "chain": env.get("HIVEMIND_CHAIN", DEFAULT_NETWORK),
            "rpc_url": env.get("HIVEMIND_RPC_URL") or None,
            "hivemind_address": env.get("HIVEMIND_ADDRESS") or None,
            "usdc_address": env.get("HIVEMIND_USDC_ADDRESS") or None,
            "tx_timeout": _float_env("HIVEMIND_TX_TIMEOUT"),
            "poll_latency": _float_env("HIVEMIND_TX_POLL", 2.0),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(private_key=private_key, **values)


def _float_env(name: str, default: Optional[float] = None) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
