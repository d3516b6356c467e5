"""Method table: JSON-RPC method name -> positional params -> client operation.

Adding a method means adding one row; the dispatcher never branches on names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from lightgate.client.base import LightClient
from lightgate.rpc.params import (
    ADDRESS,
    BLOCK,
    CALL_REQUEST,
    FLAG,
    HASH,
    LOG_FILTER,
    QUANTITY,
    RAW_TX,
    SLOT,
    Param,
)


@dataclass(frozen=True, slots=True)
class MethodSpec:
    """Contract for one supported method."""

    name: str
    params: tuple[Param, ...]
    operation: str

    async def invoke(self, client: LightClient, args: list[Any]) -> Any:
        return await getattr(client, self.operation)(*args)


def _spec(name: str, operation: str, *params: Param) -> MethodSpec:
    return MethodSpec(name=name, params=tuple(params), operation=operation)


METHOD_SPECS: tuple[MethodSpec, ...] = (
    _spec("eth_getBlockByNumber", "get_block_by_number", BLOCK, FLAG),
    _spec("eth_getBlockByHash", "get_block_by_hash", HASH, FLAG),
    _spec("eth_blockNumber", "get_block_number"),
    _spec("eth_getBalance", "get_balance", ADDRESS, BLOCK),
    _spec("eth_getCode", "get_code", ADDRESS, BLOCK),
    _spec("eth_getStorageAt", "get_storage_at", ADDRESS, SLOT, BLOCK),
    _spec("eth_getTransactionCount", "get_transaction_count", ADDRESS, BLOCK),
    _spec("eth_getBlockTransactionCountByHash", "get_block_transaction_count_by_hash", HASH),
    _spec("eth_getBlockTransactionCountByNumber", "get_block_transaction_count_by_number", BLOCK),
    _spec("eth_gasPrice", "get_gas_price"),
    _spec("eth_chainId", "get_chain_id"),
    _spec("eth_sendRawTransaction", "send_raw_transaction", RAW_TX),
    _spec("eth_getTransactionReceipt", "get_transaction_receipt", HASH),
    _spec("eth_getTransactionByHash", "get_transaction_by_hash", HASH),
    _spec("eth_getTransactionByBlockHashAndIndex", "get_transaction_by_block_hash_and_index", HASH, QUANTITY),
    _spec("eth_getLogs", "get_logs", LOG_FILTER),
    _spec("eth_newFilter", "new_filter", LOG_FILTER),
    _spec("eth_newBlockFilter", "new_block_filter"),
    _spec("eth_newPendingTransactionFilter", "new_pending_transaction_filter"),
    _spec("eth_getFilterChanges", "get_filter_changes", QUANTITY),
    _spec("eth_uninstallFilter", "uninstall_filter", QUANTITY),
    _spec("eth_syncing", "syncing"),
    _spec("eth_coinbase", "get_coinbase"),
    _spec("eth_call", "call", CALL_REQUEST, BLOCK),
    _spec("eth_estimateGas", "estimate_gas", CALL_REQUEST),
    _spec("eth_maxPriorityFeePerGas", "get_max_priority_fee"),
    _spec("eth_getBlockReceipts", "get_block_receipts", BLOCK),
)

METHODS: Mapping[str, MethodSpec] = {spec.name: spec for spec in METHOD_SPECS}


def resolve_method(name: str) -> MethodSpec | None:
    return METHODS.get(name)


def supported_methods() -> list[str]:
    return [spec.name for spec in METHOD_SPECS]
