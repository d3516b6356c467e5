"""Single-instance lifecycle for the light client.

At most one client is ever published per manager. Construction, start and
sync run outside the lock so lookups are never blocked by a slow sync; the
publish step re-checks occupancy under the lock.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from loguru import logger

from lightgate.client.base import LightClient
from lightgate.client.builder import build_light_client
from lightgate.config.schema import LightClientConfig
from lightgate.utils.exceptions import (
    AlreadyRunningError,
    ClientStartError,
    NotInitializedError,
    describe_exception,
)

R = TypeVar("R")
ClientFactory = Callable[[LightClientConfig], LightClient]


@dataclass(slots=True)
class GatewayState:
    """Process-wide slot for the active client."""

    client: LightClient | None = None
    initializing: bool = False


class LightClientManager:
    """Owns the gateway state and hands out borrowed client references."""

    def __init__(self, client_factory: ClientFactory | None = None):
        self._client_factory = client_factory or build_light_client
        self._state = GatewayState()
        self._lock = asyncio.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._state.client is not None

    @property
    def is_initializing(self) -> bool:
        return self._state.initializing

    async def initialize(self, config: LightClientConfig) -> LightClient:
        """Build, start and sync a client, then publish it. Only one call ever succeeds."""
        async with self._lock:
            if self._state.client is not None or self._state.initializing:
                raise AlreadyRunningError()
            self._state.initializing = True

        try:
            client = await self._construct(config)
        except BaseException:
            async with self._lock:
                self._state.initializing = False
            raise

        async with self._lock:
            self._state.initializing = False
            if self._state.client is not None:
                await _close_quietly(client)
                raise AlreadyRunningError("Light client was started by another request")
            self._state.client = client
        logger.info("Light client published (network={})", config.network)
        return client

    async def _construct(self, config: LightClientConfig) -> LightClient:
        logger.info("Building light client for {}", config.network)
        try:
            client = self._client_factory(config)
        except Exception as exc:
            raise ClientStartError("create", describe_exception(exc)) from exc

        # Any exit other than success, cancellation included, releases the client.
        try:
            await self._start_and_sync(client, config)
        except BaseException:
            await _close_quietly(client)
            raise
        return client

    async def _start_and_sync(self, client: LightClient, config: LightClientConfig) -> None:
        try:
            await client.start()
        except Exception as exc:
            raise ClientStartError("start", describe_exception(exc)) from exc

        logger.info("Light client started; waiting for sync")
        try:
            if config.sync_timeout_seconds is None:
                await client.wait_synced()
            else:
                await asyncio.wait_for(client.wait_synced(), timeout=config.sync_timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise ClientStartError(
                "sync", f"not synced after {config.sync_timeout_seconds}s"
            ) from exc
        except Exception as exc:
            raise ClientStartError("sync", describe_exception(exc)) from exc

    async def with_client(self, fn: Callable[[LightClient], Awaitable[R]]) -> R:
        """Run fn against the published client; the reference must not outlive the call."""
        async with self._lock:
            client = self._state.client
        if client is None:
            raise NotInitializedError()
        return await fn(client)

    async def close(self) -> None:
        """Process teardown: release the client's resources. The slot stays occupied."""
        async with self._lock:
            client = self._state.client
        if client is not None:
            await _close_quietly(client)


async def _close_quietly(client: Any) -> None:
    close = getattr(client, "close", None)
    if close is None:
        return
    try:
        outcome = close()
        if inspect.isawaitable(outcome):
            await outcome
    except Exception as exc:
        logger.warning("Light client close failed: {}", describe_exception(exc))


__all__ = ["GatewayState", "LightClientManager", "ClientFactory"]
