"""Async client for the HiveMind multi-agent collaboration protocol.

Talks to the HiveMind ledger contract and its USDC payment token via
web3.py's ``AsyncWeb3``.  The contract enforces every business rule; this
module encodes calls, waits for confirmations and decodes results into the
records in :mod:`hivemind.types`.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from hexbytes import HexBytes
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import TimeExhausted

from .abi import HIVEMIND, USDC, load_abi
from .config import HiveMindConfig
from .errors import NetworkMisconfiguration, TransactionReverted
from .identity import Identity
from .networks import Network, explorer_tx_url, get_network
from .types import (
    Agent,
    Contribution,
    CreateProjectResult,
    HiveStats,
    Project,
    ProjectStatus,
    TxResult,
)
from .units import Amount, to_decimal, to_smallest_unit

_LOG = logging.getLogger(__name__)

# One-time allowance granted to the ledger when the current one is too low:
# 1,000,000 USDC in base units.
APPROVAL_CEILING = to_smallest_unit(1_000_000)


def _hex(value: bytes | str) -> str:
    """0x-prefixed hex for a tx hash given as bytes or str."""
    if isinstance(value, str):
        s = value.strip()
        return s if s.startswith("0x") else f"0x{s}"
    h = HexBytes(value).hex()
    return h if h.startswith("0x") else f"0x{h}"


def _timestamp(seconds: int) -> datetime:
    return datetime.fromtimestamp(int(seconds), tz=timezone.utc)


class HiveMind:
    """HiveMind protocol client.

    Example::

        hive = HiveMind(HiveMindConfig(private_key=os.environ["AGENT_KEY"]))
        await hive.join("my-agent", credits_to_pool="5")
        result = await hive.create_project("Parser", "https://github.com/o/r", 50)
        print(hive.get_explorer_url(result.tx_hash))
    """

    def __init__(self, config: HiveMindConfig):
        """Build a client.  Performs no network I/O.

        Raises:
            IdentityError: If ``config.private_key`` is malformed.
            NetworkMisconfiguration: If ``config.chain`` is unknown, or the
                ledger is not deployed there and no address override is given.
        """
        self.network: Network = get_network(config.chain)
        self.identity = Identity.from_key(config.private_key)
        self.rpc_url = config.rpc_url or self.network.rpc_url
        self.tx_timeout = config.tx_timeout
        self.poll_latency = config.poll_latency

        if config.hivemind_address is None and not self.network.hivemind_deployed:
            raise NetworkMisconfiguration(
                f"HiveMind is not deployed on {self.network.display_name}; "
                "pass hivemind_address to use a custom deployment"
            )
        self.hivemind_address = AsyncWeb3.to_checksum_address(
            config.hivemind_address or self.network.hivemind_address
        )
        self.usdc_address = AsyncWeb3.to_checksum_address(
            config.usdc_address or self.network.usdc_address
        )

        self.w3 = AsyncWeb3(AsyncHTTPProvider(self.rpc_url))
        self.hivemind = self.w3.eth.contract(
            address=self.hivemind_address, abi=load_abi(HIVEMIND)
        )
        self.usdc = self.w3.eth.contract(address=self.usdc_address, abi=load_abi(USDC))

    @classmethod
    def from_env(cls, **overrides) -> "HiveMind":
        """Build a client from ``HIVEMIND_*`` environment variables."""
        return cls(HiveMindConfig.from_env(**overrides))

    @property
    def address(self) -> str:
        """Checksummed wallet address of the signing key."""
        return self.identity.address

    # -- internal call helpers ----------------------------------------------

    async def _call(self, contract, fn_name: str, *args, block_identifier: Any = "latest"):
        """eth_call a view function and return the decoded result."""
        _LOG.debug("call %s(%s) block=%s", fn_name, ", ".join(map(repr, args)), block_identifier)
        fn = getattr(contract.functions, fn_name)(*args)
        return await fn.call(block_identifier=block_identifier)

    async def _transact(self, contract, fn_name: str, *args) -> TxResult:
        """Build, sign and send a contract call, then wait for its receipt.

        Raises:
            TransactionReverted: If the mined receipt reports failure.
        """
        fn = getattr(contract.functions, fn_name)(*args)
        tx = await fn.build_transaction(
            {
                "from": self.address,
                "nonce": await self.w3.eth.get_transaction_count(self.address, "pending"),
                "gasPrice": await self.w3.eth.gas_price,
                "chainId": self.network.chain_id,
            }
        )
        signed = self.identity.sign_transaction(tx)
        tx_hash = _hex(await self.w3.eth.send_raw_transaction(signed.raw_transaction))
        _LOG.debug("sent %s tx=%s", fn_name, tx_hash)

        receipt = await self._wait_receipt(tx_hash)
        status = int(receipt.get("status", 0))
        block_number = int(receipt["blockNumber"])
        _LOG.info("%s tx=%s status=%s block=%s", fn_name, tx_hash, status, block_number)
        if status == 0:
            raise TransactionReverted(
                f"{fn_name} reverted: {self.get_explorer_url(tx_hash)}",
                tx_hash=tx_hash,
                receipt=receipt,
            )
        return TxResult(tx_hash=tx_hash, block_number=block_number)

    async def _wait_receipt(self, tx_hash: str):
        try:
            return await self.w3.eth.wait_for_transaction_receipt(
                HexBytes(tx_hash), timeout=self.tx_timeout, poll_latency=self.poll_latency
            )
        except TimeExhausted:
            # Not a failure: the transaction may still confirm.
            _LOG.warning(
                "tx=%s not confirmed within %ss, check %s",
                tx_hash,
                self.tx_timeout,
                self.get_explorer_url(tx_hash),
            )
            raise

    # -- reads ----------------------------------------------------------------

    async def get_usdc_balance(self, address: Optional[str] = None) -> Decimal:
        """USDC balance of *address* (default: own address)."""
        owner = AsyncWeb3.to_checksum_address(address or self.address)
        return to_decimal(await self._call(self.usdc, "balanceOf", owner))

    async def get_allowance(self, owner: Optional[str] = None) -> int:
        """USDC base units *owner* has authorized the ledger to spend."""
        owner = AsyncWeb3.to_checksum_address(owner or self.address)
        return int(await self._call(self.usdc, "allowance", owner, self.hivemind_address))

    async def get_agent(self, address: Optional[str] = None) -> Optional[Agent]:
        """Registered agent at *address*, or None if it never joined.

        An agent exists iff its ``joinedAt`` timestamp is non-zero; the
        ``active`` flag is reported as-is and does not affect existence.
        """
        wallet = AsyncWeb3.to_checksum_address(address or self.address)
        raw = await self._call(self.hivemind, "agents", wallet)
        if int(raw[4]) == 0:
            return None
        return Agent(
            wallet=raw[0],
            node_id=raw[1],
            credits_contributed=int(raw[2]),
            compute_score=int(raw[3]),
            joined_at=_timestamp(raw[4]),
            active=bool(raw[5]),
        )

    async def get_agent_address(self, index: int) -> str:
        """Address at position *index* of the on-chain agent list."""
        return await self._call(self.hivemind, "agentList", int(index))

    async def get_project(self, project_id: int) -> Project:
        """Project record merged with its contributor list.

        Unknown ids surface whatever error the contract call raises.
        """
        pid = int(project_id)
        raw, contributors = await asyncio.gather(
            self._call(self.hivemind, "projects", pid),
            self._call(self.hivemind, "getContributors", pid),
        )
        return Project(
            id=pid,
            name=raw[0],
            repo_url=raw[1],
            creator=raw[2],
            total_funding=int(raw[3]),
            created_at=_timestamp(raw[4]),
            status=ProjectStatus(int(raw[5])),
            contributors=tuple(contributors),
        )

    async def get_contribution(self, project_id: int, agent: Optional[str] = None) -> Contribution:
        """Contribution of *agent* (default: self) on *project_id*.

        Agents never recorded on the project come back as 0% / unclaimed.
        """
        who = AsyncWeb3.to_checksum_address(agent or self.address)
        percentage, claimed = await self._call(self.hivemind, "contributions", int(project_id), who)
        return Contribution(agent=who, percentage=int(percentage), claimed=bool(claimed))

    async def get_project_count(self) -> int:
        return int(await self._call(self.hivemind, "projectCount"))

    async def get_agent_count(self) -> int:
        return int(await self._call(self.hivemind, "getAgentCount"))

    async def get_total_credits_pooled(self) -> Decimal:
        """Total USDC pooled by agents on join."""
        return to_decimal(await self._call(self.hivemind, "totalCreditsPooled"))

    async def get_hive_stats(self) -> HiveStats:
        agent_count, project_count, pooled = await asyncio.gather(
            self.get_agent_count(),
            self.get_project_count(),
            self.get_total_credits_pooled(),
        )
        return HiveStats(
            agent_count=agent_count,
            project_count=project_count,
            total_credits_pooled=pooled,
        )

    # -- writes ---------------------------------------------------------------

    async def ensure_allowance(self, amount: int) -> Optional[TxResult]:
        """Make sure the ledger may spend *amount* USDC base units.

        When the current allowance is lower, approves :data:`APPROVAL_CEILING`
        (not just *amount*) so later funding calls skip this step, and waits
        for that approval to confirm.

        Returns:
            The approval's TxResult, or None if no approval was needed.
        """
        allowance = await self.get_allowance()
        if allowance >= amount:
            return None
        _LOG.info(
            "allowance %s < %s, approving %s for %s",
            allowance,
            amount,
            APPROVAL_CEILING,
            self.hivemind_address,
        )
        return await self._transact(self.usdc, "approve", self.hivemind_address, APPROVAL_CEILING)

    async def join(self, node_id: str, credits_to_pool: Amount = 0) -> TxResult:
        """Join the hive under *node_id*, optionally pooling USDC.

        Args:
            node_id: Human-readable label for this agent.
            credits_to_pool: USDC to contribute to the collective pool.
        """
        amount = to_smallest_unit(credits_to_pool)
        if amount > 0:
            await self.ensure_allowance(amount)
        return await self._transact(self.hivemind, "joinHive", node_id, amount)

    async def create_project(self, name: str, repo_url: str, funding: Amount) -> CreateProjectResult:
        """Create a project with an initial USDC bounty.

        The new id is inferred as ``projectCount - 1`` read at the block that
        confirmed the creation.  Another creation mined in the same block
        after ours would make the inference wrong.
        """
        amount = to_smallest_unit(funding)
        if amount > 0:
            await self.ensure_allowance(amount)

        result = await self._transact(self.hivemind, "createProject", name, repo_url, amount)
        count = await self._call(
            self.hivemind, "projectCount", block_identifier=result.block_number
        )
        project_id = int(count) - 1
        _LOG.info("project %s created tx=%s", project_id, result.tx_hash)
        return CreateProjectResult(
            tx_hash=result.tx_hash,
            block_number=result.block_number,
            project_id=project_id,
        )

    async def fund_project(self, project_id: int, amount: Amount) -> TxResult:
        """Add USDC funding to an existing project."""
        units = to_smallest_unit(amount)
        await self.ensure_allowance(units)
        return await self._transact(self.hivemind, "fundProject", int(project_id), units)

    async def record_contribution(self, project_id: int, agent: str, percentage: int) -> TxResult:
        """Record *agent*'s share of work (0-100) on a project.

        Range and sum checks are left to the contract.
        """
        who = AsyncWeb3.to_checksum_address(agent)
        return await self._transact(
            self.hivemind, "recordContribution", int(project_id), who, int(percentage)
        )

    async def complete_project(self, project_id: int) -> TxResult:
        """Mark a project completed (creator only)."""
        return await self._transact(self.hivemind, "completeProject", int(project_id))

    async def claim_rewards(self, project_id: int) -> TxResult:
        """Claim this agent's reward share from a completed project."""
        return await self._transact(self.hivemind, "claimRewards", int(project_id))

    # -- utilities ------------------------------------------------------------

    def get_explorer_url(self, tx_hash: bytes | str) -> str:
        """Block explorer URL for a transaction on the configured network."""
        if not isinstance(tx_hash, str):
            tx_hash = _hex(tx_hash)
        return explorer_tx_url(self.network, tx_hash)
