"""Tests for the single-instance light client lifecycle."""

from __future__ import annotations

import asyncio

import pytest

from lightgate.gateway.state import LightClientManager
from lightgate.utils.exceptions import AlreadyRunningError, ClientStartError, NotInitializedError


@pytest.mark.asyncio
async def test_initialize_publishes_client(manager, light_client_config, factory) -> None:
    assert not manager.is_initialized
    client = await manager.initialize(light_client_config)
    assert manager.is_initialized
    assert not manager.is_initializing
    assert client is factory.built[0]
    assert client.started


@pytest.mark.asyncio
async def test_second_initialize_is_rejected(manager, light_client_config, factory) -> None:
    await manager.initialize(light_client_config)
    with pytest.raises(AlreadyRunningError) as exc_info:
        await manager.initialize(light_client_config)
    assert exc_info.value.message == "Light client is already running"
    assert len(factory.built) == 1


@pytest.mark.asyncio
async def test_concurrent_initialize_builds_exactly_one_client(make_factory, light_client_config) -> None:
    factory = make_factory(sync_delay=0.05)
    manager = LightClientManager(client_factory=factory)

    results = await asyncio.gather(
        *(manager.initialize(light_client_config) for _ in range(8)),
        return_exceptions=True,
    )

    successes = [r for r in results if not isinstance(r, BaseException)]
    failures = [r for r in results if isinstance(r, BaseException)]
    assert len(successes) == 1
    assert len(failures) == 7
    assert all(isinstance(f, AlreadyRunningError) for f in failures)
    assert len(factory.built) == 1
    assert manager.is_initialized


@pytest.mark.asyncio
async def test_lookups_are_not_blocked_while_syncing(make_factory, light_client_config) -> None:
    factory = make_factory(sync_delay=0.2)
    manager = LightClientManager(client_factory=factory)

    init = asyncio.create_task(manager.initialize(light_client_config))
    await asyncio.sleep(0.01)
    assert manager.is_initializing
    with pytest.raises(NotInitializedError):
        await asyncio.wait_for(manager.with_client(lambda c: c.get_chain_id()), timeout=0.1)
    await init
    assert await manager.with_client(lambda c: c.get_chain_id()) == 1


@pytest.mark.asyncio
async def test_start_failure_leaves_state_empty_and_allows_retry(make_factory, light_client_config) -> None:
    failing = make_factory(fail_start=RuntimeError("consensus rpc unreachable"))
    manager = LightClientManager(client_factory=failing)

    with pytest.raises(ClientStartError) as exc_info:
        await manager.initialize(light_client_config)
    assert exc_info.value.stage == "start"
    assert "Failed to start client: consensus rpc unreachable" == exc_info.value.message
    assert failing.built[0].closed
    assert not manager.is_initialized
    assert not manager.is_initializing

    failing.client_kwargs = {}
    await manager.initialize(light_client_config)
    assert manager.is_initialized
    assert len(failing.built) == 2


@pytest.mark.asyncio
async def test_factory_failure_is_a_create_error(light_client_config) -> None:
    def broken(config):
        raise ValueError("bad execution rpc")

    manager = LightClientManager(client_factory=broken)
    with pytest.raises(ClientStartError) as exc_info:
        await manager.initialize(light_client_config)
    assert exc_info.value.stage == "create"
    assert exc_info.value.message.startswith("Failed to create client:")
    assert not manager.is_initializing


@pytest.mark.asyncio
async def test_sync_timeout(make_factory, light_client_config) -> None:
    factory = make_factory(sync_delay=5)
    manager = LightClientManager(client_factory=factory)
    config = light_client_config.model_copy(update={"sync_timeout_seconds": 0.01})

    with pytest.raises(ClientStartError) as exc_info:
        await manager.initialize(config)
    assert exc_info.value.stage == "sync"
    assert "not synced after 0.01s" in exc_info.value.message
    assert factory.built[0].closed
    assert not manager.is_initialized


@pytest.mark.asyncio
async def test_with_client_before_initialize(manager) -> None:
    with pytest.raises(NotInitializedError):
        await manager.with_client(lambda c: c.get_chain_id())


@pytest.mark.asyncio
async def test_close_releases_client_but_keeps_slot(manager, light_client_config, factory) -> None:
    await manager.initialize(light_client_config)
    await manager.close()
    assert factory.built[0].closed
    assert manager.is_initialized


@pytest.mark.asyncio
async def test_cancelled_initialize_closes_half_built_client(make_factory, light_client_config) -> None:
    factory = make_factory(sync_delay=5)
    manager = LightClientManager(client_factory=factory)

    init = asyncio.create_task(manager.initialize(light_client_config))
    await asyncio.sleep(0.05)
    init.cancel()
    with pytest.raises(asyncio.CancelledError):
        await init

    assert factory.built[0].closed
    assert not manager.is_initialized
    assert not manager.is_initializing

