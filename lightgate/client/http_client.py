"""HTTP-backed light client.

Follows the chain head through a beacon light-client endpoint (consensus RPC)
and serves state queries from an untrusted execution JSON-RPC endpoint.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import httpx
from loguru import logger

from lightgate.client.base import SyncStatus
from lightgate.client.codec import encode_value, parse_hex_bytes, parse_quantity, to_hex, to_quantity
from lightgate.client.networks import Network, SupportedNetworks
from lightgate.client.types import Block, BlockTag, CallRequest, LogFilter
from lightgate.utils.exceptions import ClientRequestError, sanitize_error_message
from lightgate.utils.helpers import ensure_dir

FINALITY_UPDATE_PATH = "/eth/v1/beacon/light_client/finality_update"
CHECKPOINT_FILE = "checkpoint.json"


class HttpLightClient:
    def __init__(
        self,
        *,
        network: Network,
        consensus_rpc: str,
        execution_rpc: str,
        data_dir: Path,
        request_timeout: float = 30.0,
        sync_poll_interval: float = 2.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.network = network
        self.consensus_rpc = consensus_rpc.rstrip("/")
        self.execution_rpc = execution_rpc
        self.data_dir = data_dir
        self.sync_poll_interval = sync_poll_interval
        self.finalized_slot: int | None = None
        self._request_id = 0
        self._http = httpx.AsyncClient(timeout=request_timeout, transport=transport)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        header = await self._fetch_finalized_header()
        self.finalized_slot = parse_quantity_or_int(header.get("slot"))
        self._store_checkpoint(header)
        logger.info("Consensus head finalized at slot {} ({})", self.finalized_slot, self.network.name)

        chain_id = await self.get_chain_id()
        if chain_id != self.network.chain_id:
            served = SupportedNetworks.by_chain_id(chain_id)
            raise ClientRequestError(
                f"execution rpc serves chain id {chain_id}"
                + (f" ({served.name})" if served else "")
                + f", expected {self.network.chain_id} ({self.network.name})",
                method="eth_chainId",
            )

    async def wait_synced(self) -> None:
        while True:
            status = await self.syncing()
            if status is False:
                return
            logger.debug("Execution endpoint still syncing: {}", status)
            await asyncio.sleep(self.sync_poll_interval)

    async def close(self) -> None:
        await self._http.aclose()

    async def _fetch_finalized_header(self) -> dict[str, Any]:
        url = f"{self.consensus_rpc}{FINALITY_UPDATE_PATH}"
        try:
            resp = await self._http.get(url, headers={"Accept": "application/json"})
        except httpx.TimeoutException as exc:
            raise ClientRequestError("consensus rpc timeout", is_retryable=True) from exc
        except httpx.RequestError as exc:
            raise ClientRequestError(
                f"consensus rpc network error: {sanitize_error_message(str(exc))}", is_retryable=True
            ) from exc
        if resp.status_code >= 400:
            raise ClientRequestError(
                f"consensus rpc http error {resp.status_code}",
                status_code=resp.status_code,
                is_retryable=resp.status_code >= 500,
            )
        try:
            body = resp.json()
        except ValueError as exc:
            raise ClientRequestError("consensus rpc bad response: non-json body") from exc

        data = body.get("data") if isinstance(body, dict) else None
        finalized = data.get("finalized_header") if isinstance(data, dict) else None
        if isinstance(finalized, dict) and isinstance(finalized.get("beacon"), dict):
            finalized = finalized["beacon"]
        if not isinstance(finalized, dict) or "slot" not in finalized:
            raise ClientRequestError("consensus rpc bad response: missing finalized header")
        return finalized

    def _store_checkpoint(self, header: dict[str, Any]) -> None:
        ensure_dir(self.data_dir)
        payload = {"network": self.network.name, "slot": self.finalized_slot, "header": header}
        (self.data_dir / CHECKPOINT_FILE).write_text(json.dumps(payload, indent=2), encoding="utf-8")

    # ------------------------------------------------------------------
    # Execution JSON-RPC transport
    # ------------------------------------------------------------------

    async def _request(self, method: str, params: list[Any]) -> Any:
        self._request_id += 1
        payload = {"jsonrpc": "2.0", "id": self._request_id, "method": method, "params": params}
        try:
            resp = await self._http.post(self.execution_rpc, json=payload)
        except httpx.TimeoutException as exc:
            raise ClientRequestError(
                f"execution rpc timeout: {method}", method=method, is_retryable=True
            ) from exc
        except httpx.RequestError as exc:
            raise ClientRequestError(
                f"execution rpc network error: {method}: {sanitize_error_message(str(exc))}",
                method=method,
                is_retryable=True,
            ) from exc

        if resp.status_code >= 400:
            raise ClientRequestError(
                f"execution rpc http error {resp.status_code}: {method}",
                method=method,
                status_code=resp.status_code,
                is_retryable=resp.status_code >= 500 or resp.status_code == 429,
            )
        try:
            body = resp.json()
        except ValueError as exc:
            raise ClientRequestError(f"execution rpc bad response: non-json body for {method}", method=method) from exc
        if not isinstance(body, dict):
            raise ClientRequestError(f"execution rpc bad response: {method}", method=method)

        error = body.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ClientRequestError(f"execution rpc error: {message}", method=method)
        return body.get("result")

    async def _quantity(self, method: str, params: list[Any]) -> int:
        return parse_quantity(await self._request(method, params))

    async def _optional_quantity(self, method: str, params: list[Any]) -> int | None:
        result = await self._request(method, params)
        return None if result is None else parse_quantity(result)

    async def _bytes(self, method: str, params: list[Any]) -> bytes:
        return parse_hex_bytes(await self._request(method, params))

    # ------------------------------------------------------------------
    # Typed operations
    # ------------------------------------------------------------------

    async def get_block_by_number(self, tag: BlockTag, full_tx: bool) -> Block | None:
        raw = await self._request("eth_getBlockByNumber", [tag.value, full_tx])
        return None if raw is None else Block.model_validate(raw)

    async def get_block_by_hash(self, block_hash: bytes, full_tx: bool) -> Block | None:
        raw = await self._request("eth_getBlockByHash", [to_hex(block_hash), full_tx])
        return None if raw is None else Block.model_validate(raw)

    async def get_block_number(self) -> int:
        return await self._quantity("eth_blockNumber", [])

    async def get_balance(self, address: bytes, tag: BlockTag) -> int:
        return await self._quantity("eth_getBalance", [to_hex(address), tag.value])

    async def get_code(self, address: bytes, tag: BlockTag) -> bytes:
        return await self._bytes("eth_getCode", [to_hex(address), tag.value])

    async def get_storage_at(self, address: bytes, slot: bytes, tag: BlockTag) -> bytes:
        return await self._bytes("eth_getStorageAt", [to_hex(address), to_hex(slot), tag.value])

    async def get_transaction_count(self, address: bytes, tag: BlockTag) -> int:
        return await self._quantity("eth_getTransactionCount", [to_hex(address), tag.value])

    async def get_block_transaction_count_by_hash(self, block_hash: bytes) -> int | None:
        return await self._optional_quantity("eth_getBlockTransactionCountByHash", [to_hex(block_hash)])

    async def get_block_transaction_count_by_number(self, tag: BlockTag) -> int | None:
        return await self._optional_quantity("eth_getBlockTransactionCountByNumber", [tag.value])

    async def get_gas_price(self) -> int:
        return await self._quantity("eth_gasPrice", [])

    async def get_chain_id(self) -> int:
        return await self._quantity("eth_chainId", [])

    async def send_raw_transaction(self, raw: bytes) -> bytes:
        return await self._bytes("eth_sendRawTransaction", [to_hex(raw)])

    async def get_transaction_receipt(self, tx_hash: bytes) -> dict[str, Any] | None:
        return await self._request("eth_getTransactionReceipt", [to_hex(tx_hash)])

    async def get_transaction_by_hash(self, tx_hash: bytes) -> dict[str, Any] | None:
        return await self._request("eth_getTransactionByHash", [to_hex(tx_hash)])

    async def get_transaction_by_block_hash_and_index(self, block_hash: bytes, index: int) -> dict[str, Any] | None:
        return await self._request(
            "eth_getTransactionByBlockHashAndIndex", [to_hex(block_hash), to_quantity(index)]
        )

    async def get_logs(self, log_filter: LogFilter) -> list[dict[str, Any]]:
        return await self._request("eth_getLogs", [encode_value(log_filter)]) or []

    async def new_filter(self, log_filter: LogFilter) -> int:
        return await self._quantity("eth_newFilter", [encode_value(log_filter)])

    async def new_block_filter(self) -> int:
        return await self._quantity("eth_newBlockFilter", [])

    async def new_pending_transaction_filter(self) -> int:
        return await self._quantity("eth_newPendingTransactionFilter", [])

    async def get_filter_changes(self, filter_id: int) -> list[Any]:
        return await self._request("eth_getFilterChanges", [to_quantity(filter_id)]) or []

    async def uninstall_filter(self, filter_id: int) -> bool:
        return bool(await self._request("eth_uninstallFilter", [to_quantity(filter_id)]))

    async def syncing(self) -> SyncStatus:
        result = await self._request("eth_syncing", [])
        if result is False or result is None:
            return False
        return result if isinstance(result, dict) else True

    async def get_coinbase(self) -> bytes:
        return await self._bytes("eth_coinbase", [])

    async def call(self, request: CallRequest, tag: BlockTag) -> bytes:
        return await self._bytes("eth_call", [encode_value(request), tag.value])

    async def estimate_gas(self, request: CallRequest) -> int:
        return await self._quantity("eth_estimateGas", [encode_value(request)])

    async def get_max_priority_fee(self) -> int:
        return await self._quantity("eth_maxPriorityFeePerGas", [])

    async def get_block_receipts(self, tag: BlockTag) -> list[dict[str, Any]] | None:
        return await self._request("eth_getBlockReceipts", [tag.value])


def parse_quantity_or_int(value: Any) -> int:
    """Beacon APIs encode slots as decimal strings; execution APIs use hex."""
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return parse_quantity(value)
