"""HiveMind Python client SDK.

Lets agents join the HiveMind network, create and fund collaborative
projects with USDC bounties, record contributions and claim rewards.
"""

from .client import APPROVAL_CEILING, HiveMind
from .config import HiveMindConfig
from .errors import (
    ConfigurationError,
    HiveMindError,
    IdentityError,
    NetworkMisconfiguration,
    TransactionReverted,
)
from .identity import Identity, normalize_private_key
from .networks import NETWORKS, Network, get_network
from .types import Agent, Contribution, CreateProjectResult, HiveStats, Project, ProjectStatus, TxResult
from .units import USDC_DECIMALS, to_decimal, to_smallest_unit

__all__ = [
    "APPROVAL_CEILING",
    "Agent",
    "ConfigurationError",
    "Contribution",
    "CreateProjectResult",
    "HiveMind",
    "HiveMindConfig",
    "HiveMindError",
    "HiveStats",
    "Identity",
    "IdentityError",
    "NETWORKS",
    "Network",
    "NetworkMisconfiguration",
    "Project",
    "ProjectStatus",
    "TransactionReverted",
    "TxResult",
    "USDC_DECIMALS",
    "get_network",
    "normalize_private_key",
    "to_decimal",
    "to_smallest_unit",
]
