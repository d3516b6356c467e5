"""Interface the gateway expects from a light client implementation."""

from __future__ import annotations

from typing import Any, Protocol

from lightgate.client.types import Block, BlockTag, CallRequest, LogFilter

SyncStatus = bool | dict[str, Any]


class LightClient(Protocol):
    """Verified chain access. Implementations own networking and consensus checks."""

    async def start(self) -> None: ...

    async def wait_synced(self) -> None: ...

    async def get_block_by_number(self, tag: BlockTag, full_tx: bool) -> Block | None: ...

    async def get_block_by_hash(self, block_hash: bytes, full_tx: bool) -> Block | None: ...

    async def get_block_number(self) -> int: ...

    async def get_balance(self, address: bytes, tag: BlockTag) -> int: ...

    async def get_code(self, address: bytes, tag: BlockTag) -> bytes: ...

    async def get_storage_at(self, address: bytes, slot: bytes, tag: BlockTag) -> bytes: ...

    async def get_transaction_count(self, address: bytes, tag: BlockTag) -> int: ...

    async def get_block_transaction_count_by_hash(self, block_hash: bytes) -> int | None: ...

    async def get_block_transaction_count_by_number(self, tag: BlockTag) -> int | None: ...

    async def get_gas_price(self) -> int: ...

    async def get_chain_id(self) -> int: ...

    async def send_raw_transaction(self, raw: bytes) -> bytes: ...

    async def get_transaction_receipt(self, tx_hash: bytes) -> dict[str, Any] | None: ...

    async def get_transaction_by_hash(self, tx_hash: bytes) -> dict[str, Any] | None: ...

    async def get_transaction_by_block_hash_and_index(
        self, block_hash: bytes, index: int
    ) -> dict[str, Any] | None: ...

    async def get_logs(self, log_filter: LogFilter) -> list[dict[str, Any]]: ...

    async def new_filter(self, log_filter: LogFilter) -> int: ...

    async def new_block_filter(self) -> int: ...

    async def new_pending_transaction_filter(self) -> int: ...

    async def get_filter_changes(self, filter_id: int) -> list[Any]: ...

    async def uninstall_filter(self, filter_id: int) -> bool: ...

    async def syncing(self) -> SyncStatus: ...

    async def get_coinbase(self) -> bytes: ...

    async def call(self, request: CallRequest, tag: BlockTag) -> bytes: ...

    async def estimate_gas(self, request: CallRequest) -> int: ...

    async def get_max_priority_fee(self) -> int: ...

    async def get_block_receipts(self, tag: BlockTag) -> list[dict[str, Any]] | None: ...
