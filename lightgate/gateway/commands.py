"""Host command surface: initialize-and-start, latest block, dispatch."""

from __future__ import annotations

from typing import Any

from loguru import logger

from lightgate.client.types import Block, BlockTag
from lightgate.config.schema import LightClientConfig
from lightgate.gateway.state import LightClientManager
from lightgate.rpc.dispatcher import RpcDispatcher
from lightgate.utils.exceptions import ClientRequestError

STARTED_MESSAGE = "Light client started and synced successfully"


async def initialize_and_start(manager: LightClientManager, config: LightClientConfig) -> str:
    """Start the single light client. Raises AlreadyRunningError or ClientStartError."""
    await manager.initialize(config)
    return STARTED_MESSAGE


async def get_latest_block(manager: LightClientManager) -> Block:
    """Typed chain head, bypassing the JSON-RPC envelope. Raises NotInitializedError."""
    block = await manager.with_client(lambda client: client.get_block_by_number(BlockTag.LATEST, False))
    if block is None:
        raise ClientRequestError("latest block unavailable", method="eth_getBlockByNumber")
    logger.debug("Latest block {}", block.number)
    return block


async def dispatch(dispatcher: RpcDispatcher, request: Any) -> dict[str, Any]:
    """JSON-RPC entry point; failures come back as error envelopes."""
    return await dispatcher.dispatch(request)
