"""Typed records mirroring HiveMind contract state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import IntEnum

from .units import to_decimal


class ProjectStatus(IntEnum):
    """Project status, matching the contract's uint8 enum."""

    ACTIVE = 0
    COMPLETED = 1
    CANCELLED = 2


@dataclass(frozen=True)
class Agent:
    wallet: str
    node_id: str
    credits_contributed: int
    compute_score: int  # reserved by the contract, always 0 today
    joined_at: datetime
    active: bool

    @property
    def credits_contributed_usdc(self) -> Decimal:
        return to_decimal(self.credits_contributed)


@dataclass(frozen=True)
class Project:
    id: int
    name: str
    repo_url: str
    creator: str
    total_funding: int
    created_at: datetime
    status: ProjectStatus
    contributors: tuple[str, ...]

    @property
    def total_funding_usdc(self) -> Decimal:
        return to_decimal(self.total_funding)


@dataclass(frozen=True)
class Contribution:
    agent: str
    percentage: int
    claimed: bool


@dataclass(frozen=True)
class TxResult:
    tx_hash: str
    block_number: int


@dataclass(frozen=True)
class CreateProjectResult(TxResult):
    project_id: int


@dataclass(frozen=True)
class HiveStats:
    agent_count: int
    project_count: int
    total_credits_pooled: Decimal
