"""Light client boundary: interface, typed values and the HTTP-backed implementation."""

from lightgate.client.base import LightClient, SyncStatus
from lightgate.client.builder import LightClientBuilder, build_light_client
from lightgate.client.http_client import HttpLightClient
from lightgate.client.networks import Network, SupportedNetworks
from lightgate.client.types import Block, BlockTag, CallRequest, LogFilter

__all__ = [
    "LightClient",
    "SyncStatus",
    "LightClientBuilder",
    "build_light_client",
    "HttpLightClient",
    "Network",
    "SupportedNetworks",
    "Block",
    "BlockTag",
    "CallRequest",
    "LogFilter",
]
