"""Shared fixtures: a client wired to an in-memory fake ledger."""

from __future__ import annotations

import asyncio

import pytest

from hivemind import HiveMind, HiveMindConfig, TxResult

# secp256k1 private key 1 and its well-known address.
KEY_ONE = "0x0000000000000000000000000000000000000000000000000000000000000001"
KEY_ONE_ADDRESS = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"
OTHER_AGENT = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


class FakeLedger:
    """Stands in for the RPC node: answers view calls and records txs.

    ``views`` maps a function name to either a value or a callable taking
    the call args (and ``block_identifier``) and returning one.
    """

    def __init__(self, client: HiveMind):
        self.client = client
        self.views: dict = {}
        self.calls: list[tuple] = []
        self.txs: list[tuple] = []
        self.on_transact: dict = {}
        self._block = 100
        self.in_flight = 0
        self.max_in_flight = 0

    def _target(self, contract) -> str:
        return "usdc" if contract is self.client.usdc else "hivemind"

    async def call(self, contract, fn_name, *args, block_identifier="latest"):
        self.calls.append((self._target(contract), fn_name, args, block_identifier))
        if fn_name not in self.views:
            raise AssertionError(f"unexpected view call {fn_name}{args}")
        value = self.views[fn_name]
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            # Yield so gathered reads overlap the way RPC round trips do.
            await asyncio.sleep(0)
            if callable(value):
                return value(*args, block_identifier=block_identifier)
            return value
        finally:
            self.in_flight -= 1

    async def transact(self, contract, fn_name, *args) -> TxResult:
        self._block += 1
        self.txs.append((self._target(contract), fn_name, args))
        hook = self.on_transact.get(fn_name)
        if hook is not None:
            hook(*args)
        return TxResult(tx_hash="0x" + f"{len(self.txs):064x}", block_number=self._block)

    def count(self, fn_name: str) -> int:
        return sum(1 for c in self.calls if c[1] == fn_name)

    def tx_names(self) -> list[str]:
        return [t[1] for t in self.txs]


@pytest.fixture
def client() -> HiveMind:
    return HiveMind(HiveMindConfig(private_key=KEY_ONE))


@pytest.fixture
def ledger(client, monkeypatch) -> FakeLedger:
    fake = FakeLedger(client)
    monkeypatch.setattr(client, "_call", fake.call)
    monkeypatch.setattr(client, "_transact", fake.transact)
    return fake
