"""Light client lifecycle and host-facing commands."""

from lightgate.gateway.state import GatewayState, LightClientManager
from lightgate.gateway.commands import STARTED_MESSAGE, dispatch, get_latest_block, initialize_and_start

__all__ = [
    "GatewayState",
    "LightClientManager",
    "STARTED_MESSAGE",
    "dispatch",
    "get_latest_block",
    "initialize_and_start",
]
