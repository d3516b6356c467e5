"""Pytest fixtures shared by the lightgate test-suite."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from lightgate.client.types import Block, BlockTag, CallRequest, LogFilter
from lightgate.config.schema import LightClientConfig
from lightgate.gateway.state import LightClientManager



class FakeLightClient:
    """Deterministic in-memory light client that records every call."""

    def __init__(self, *, fail_start: Exception | None = None, sync_delay: float = 0.0):
        self.fail_start = fail_start
        self.sync_delay = sync_delay
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.started = False
        self.closed = False
        self.failure: Exception | None = None

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.failure is not None:
            raise self.failure

    async def start(self) -> None:
        if self.fail_start is not None:
            raise self.fail_start
        self.started = True

    async def wait_synced(self) -> None:
        if self.sync_delay:
            await asyncio.sleep(self.sync_delay)

    async def close(self) -> None:
        self.closed = True

    async def get_block_by_number(self, tag: BlockTag, full_tx: bool) -> Block | None:
        self._record("get_block_by_number", tag, full_tx)
        return Block(number=100, hash="0x" + "ab" * 32, timestamp=1_700_000_000, gas_used=0)

    async def get_block_by_hash(self, block_hash: bytes, full_tx: bool) -> Block | None:
        self._record("get_block_by_hash", block_hash, full_tx)
        return None

    async def get_block_number(self) -> int:
        self._record("get_block_number")
        return 100

    async def get_balance(self, address: bytes, tag: BlockTag) -> int:
        self._record("get_balance", address, tag)
        return 0

    async def get_code(self, address: bytes, tag: BlockTag) -> bytes:
        self._record("get_code", address, tag)
        return b"\x60\x80"

    async def get_storage_at(self, address: bytes, slot: bytes, tag: BlockTag) -> bytes:
        self._record("get_storage_at", address, slot, tag)
        return b"\x00" * 32

    async def get_transaction_count(self, address: bytes, tag: BlockTag) -> int:
        self._record("get_transaction_count", address, tag)
        return 7

    async def get_block_transaction_count_by_hash(self, block_hash: bytes) -> int | None:
        self._record("get_block_transaction_count_by_hash", block_hash)
        return 3

    async def get_block_transaction_count_by_number(self, tag: BlockTag) -> int | None:
        self._record("get_block_transaction_count_by_number", tag)
        return 3

    async def get_gas_price(self) -> int:
        self._record("get_gas_price")
        return 1_000_000_000

    async def get_chain_id(self) -> int:
        self._record("get_chain_id")
        return 1

    async def send_raw_transaction(self, raw: bytes) -> bytes:
        self._record("send_raw_transaction", raw)
        return b"\x33" * 32

    async def get_transaction_receipt(self, tx_hash: bytes) -> dict[str, Any] | None:
        self._record("get_transaction_receipt", tx_hash)
        return None

    async def get_transaction_by_hash(self, tx_hash: bytes) -> dict[str, Any] | None:
        self._record("get_transaction_by_hash", tx_hash)
        return {"hash": "0x" + tx_hash.hex(), "nonce": "0x1"}

    async def get_transaction_by_block_hash_and_index(self, block_hash: bytes, index: int) -> dict[str, Any] | None:
        self._record("get_transaction_by_block_hash_and_index", block_hash, index)
        return None

    async def get_logs(self, log_filter: LogFilter) -> list[dict[str, Any]]:
        self._record("get_logs", log_filter)
        return []

    async def new_filter(self, log_filter: LogFilter) -> int:
        self._record("new_filter", log_filter)
        return 1

    async def new_block_filter(self) -> int:
        self._record("new_block_filter")
        return 2

    async def new_pending_transaction_filter(self) -> int:
        self._record("new_pending_transaction_filter")
        return 3

    async def get_filter_changes(self, filter_id: int) -> list[Any]:
        self._record("get_filter_changes", filter_id)
        return []

    async def uninstall_filter(self, filter_id: int) -> bool:
        self._record("uninstall_filter", filter_id)
        return True

    async def syncing(self) -> bool:
        self._record("syncing")
        return False

    async def get_coinbase(self) -> bytes:
        self._record("get_coinbase")
        return b"\x00" * 20

    async def call(self, request: CallRequest, tag: BlockTag) -> bytes:
        self._record("call", request, tag)
        return b""

    async def estimate_gas(self, request: CallRequest) -> int:
        self._record("estimate_gas", request)
        return 21000

    async def get_max_priority_fee(self) -> int:
        self._record("get_max_priority_fee")
        return 1_500_000_000

    async def get_block_receipts(self, tag: BlockTag) -> list[dict[str, Any]] | None:
        self._record("get_block_receipts", tag)
        return []


class FakeClientFactory:
    """Client factory that counts constructions and hands out FakeLightClients."""

    def __init__(self, **client_kwargs: Any):
        self.client_kwargs = client_kwargs
        self.built: list[FakeLightClient] = []

    def __call__(self, config: LightClientConfig) -> FakeLightClient:
        client = FakeLightClient(**self.client_kwargs)
        self.built.append(client)
        return client


@pytest.fixture
def light_client_config(tmp_path) -> LightClientConfig:
    return LightClientConfig(
        execution_rpc="https://execution.invalid/",
        data_dir=str(tmp_path / "data"),
    )


@pytest.fixture
def factory() -> FakeClientFactory:
    return FakeClientFactory()


@pytest.fixture
def manager(factory: FakeClientFactory) -> LightClientManager:
    return LightClientManager(client_factory=factory)


@pytest.fixture
def make_factory():
    """Factory builder for clients with custom start/sync behavior."""
    return FakeClientFactory

