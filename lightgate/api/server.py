"""FastAPI server exposing the light client gateway.

POST /rpc carries JSON-RPC 2.0; /initialize and /block/latest are the direct
host commands and report failures as HTTP errors.
"""

from __future__ import annotations

import asyncio
import json
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from lightgate import __version__
from lightgate.client.codec import encode_value
from lightgate.config.schema import Config
from lightgate.gateway.commands import dispatch, get_latest_block, initialize_and_start
from lightgate.gateway.state import LightClientManager
from lightgate.rpc.dispatcher import RpcDispatcher
from lightgate.rpc.errors import ParseError
from lightgate.rpc.models import NO_ID, error_response
from lightgate.utils.exceptions import (
    ErrorCategory,
    LightGateError,
    NotInitializedError,
    classify_exception,
    describe_exception,
)


def classify_http_status(exc: Exception) -> int:
    """Map exception to appropriate HTTP status code."""
    _, category, _ = classify_exception(exc)
    category_to_status = {
        ErrorCategory.VALIDATION: 400,
        ErrorCategory.CONFLICT: 409,
        ErrorCategory.UNAVAILABLE: 503,
        ErrorCategory.TIMEOUT: 504,
        ErrorCategory.RETRYABLE: 502,
    }
    return category_to_status.get(category, 500)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def create_app(config: Config | None = None, manager: LightClientManager | None = None) -> FastAPI:
    config = config or Config()
    manager = manager or LightClientManager()
    dispatcher = RpcDispatcher(manager)
    background: set[asyncio.Task] = set()

    async def _auto_start() -> None:
        try:
            message = await initialize_and_start(manager, config.light_client)
            logger.info(message)
        except LightGateError as exc:
            logger.error("Light client auto-start failed: {}", exc.message)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting lightgate API server")
        if config.gateway.auto_start:
            task = asyncio.create_task(_auto_start())
            background.add(task)
            task.add_done_callback(background.discard)
        try:
            yield
        finally:
            for task in list(background):
                task.cancel()
            await manager.close()
            logger.info("lightgate API server stopped")

    app = FastAPI(
        title="lightgate",
        description="JSON-RPC gateway for an Ethereum light client",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.manager = manager
    app.state.dispatcher = dispatcher
    app.state.config = config

    @app.exception_handler(LightGateError)
    async def lightgate_exception_handler(request: Request, exc: LightGateError):
        return JSONResponse(status_code=classify_http_status(exc), content=exc.to_dict())

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {
            "ok": True,
            "initialized": manager.is_initialized,
            "initializing": manager.is_initializing,
            "network": config.light_client.network,
        }

    @app.post("/initialize")
    async def initialize() -> dict[str, Any]:
        message = await initialize_and_start(manager, config.light_client)
        return {"ok": True, "message": message}

    @app.get("/block/latest")
    async def latest_block() -> Any:
        try:
            block = await get_latest_block(manager)
        except NotInitializedError:
            raise
        except Exception as exc:
            message = describe_exception(exc)
            logger.warning("Latest block lookup failed: {}", message)
            return JSONResponse(status_code=502, content={"error": "CLIENT_FAILURE", "message": message})
        return encode_value(block)

    @app.post("/rpc")
    async def rpc(request: Request) -> JSONResponse:
        body = await request.body()
        try:
            payload = json.loads(body, parse_constant=_reject_constant)
        except ValueError as exc:
            return JSONResponse(content=error_response(NO_ID, ParseError(str(exc))))
        return JSONResponse(content=await dispatch(dispatcher, payload))

    return app
