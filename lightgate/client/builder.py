"""Fluent construction of light client instances."""

from __future__ import annotations

from pathlib import Path

import httpx

from lightgate.client.http_client import HttpLightClient
from lightgate.client.networks import Network, SupportedNetworks
from lightgate.config.schema import LightClientConfig
from lightgate.utils.exceptions import ClientConfigError


def _check_url(value: str, field: str) -> str:
    url = (value or "").strip()
    if not url:
        raise ClientConfigError(f"{field} is required", field=field)
    if not url.startswith(("http://", "https://")):
        raise ClientConfigError(f"{field} must be an http(s) URL", field=field)
    return url


class LightClientBuilder:
    """Collects client settings; build() validates them and creates the client."""

    def __init__(self) -> None:
        self._network: Network = SupportedNetworks.MAINNET
        self._consensus_rpc: str | None = None
        self._execution_rpc: str | None = None
        self._data_dir: Path | None = None
        self._request_timeout = 30.0
        self._sync_poll_interval = 2.0
        self._transport: httpx.AsyncBaseTransport | None = None

    def network(self, network: Network | str) -> "LightClientBuilder":
        if isinstance(network, str):
            resolved = SupportedNetworks.get(network)
            if resolved is None:
                raise ClientConfigError(
                    f"unknown network: {network} (expected one of {', '.join(SupportedNetworks.names())})",
                    field="network",
                )
            network = resolved
        self._network = network
        return self

    def consensus_rpc(self, url: str) -> "LightClientBuilder":
        self._consensus_rpc = url
        return self

    def execution_rpc(self, url: str) -> "LightClientBuilder":
        self._execution_rpc = url
        return self

    def data_dir(self, path: str | Path) -> "LightClientBuilder":
        self._data_dir = Path(path).expanduser()
        return self

    def request_timeout(self, seconds: float) -> "LightClientBuilder":
        self._request_timeout = seconds
        return self

    def sync_poll_interval(self, seconds: float) -> "LightClientBuilder":
        self._sync_poll_interval = seconds
        return self

    def transport(self, transport: httpx.AsyncBaseTransport) -> "LightClientBuilder":
        self._transport = transport
        return self

    def build(self) -> HttpLightClient:
        consensus = _check_url(self._consensus_rpc or self._network.consensus_rpc, "consensus_rpc")
        execution = _check_url(self._execution_rpc or "", "execution_rpc")
        if self._data_dir is None:
            raise ClientConfigError("data_dir is required", field="data_dir")
        return HttpLightClient(
            network=self._network,
            consensus_rpc=consensus,
            execution_rpc=execution,
            data_dir=self._data_dir,
            request_timeout=self._request_timeout,
            sync_poll_interval=self._sync_poll_interval,
            transport=self._transport,
        )


def build_light_client(config: LightClientConfig) -> HttpLightClient:
    """Default client factory used by the lifecycle manager."""
    return (
        LightClientBuilder()
        .network(config.network)
        .consensus_rpc(config.consensus_rpc)
        .execution_rpc(config.execution_rpc)
        .data_dir(config.data_path)
        .request_timeout(config.request_timeout_seconds)
        .sync_poll_interval(config.sync_poll_interval_seconds)
        .build()
    )
