"""Configuration module for lightgate."""

from lightgate.config.loader import load_config, get_config_path, save_config
from lightgate.config.schema import Config, GatewayConfig, LightClientConfig, LoggingConfig
from lightgate.config.access import clear_config_cache, gateway_config_snapshot, get_config

__all__ = [
    "Config",
    "GatewayConfig",
    "LightClientConfig",
    "LoggingConfig",
    "load_config",
    "save_config",
    "get_config_path",
    "get_config",
    "clear_config_cache",
    "gateway_config_snapshot",
]
