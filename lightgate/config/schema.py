"""Configuration schema using Pydantic.

Single data model and defaults for lightgate, persisted to ~/.lightgate/config.json.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


class LightClientConfig(BaseModel):
    """Light client construction settings."""
    network: Literal["mainnet", "sepolia", "holesky"] = "mainnet"
    consensus_rpc: str = ""  # Empty uses the network's default beacon endpoint
    execution_rpc: str = "https://eth-mainnet.g.alchemy.com/v2/"  # Untrusted execution endpoint
    data_dir: str = "~/.lightgate/data"  # Finalized checkpoint cache
    sync_timeout_seconds: float | None = None  # None waits for sync indefinitely
    sync_poll_interval_seconds: float = Field(default=2.0, gt=0)
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser()


class GatewayConfig(BaseModel):
    """HTTP gateway configuration."""
    host: str = "127.0.0.1"
    port: int = 8545
    auto_start: bool = False  # Initialize the light client when the server starts


class LoggingConfig(BaseModel):
    """Log output configuration."""
    level: str = "INFO"
    file_enabled: bool = True  # Rotating file under ~/.lightgate/logs


class Config(BaseSettings):
    """Root configuration for lightgate."""
    light_client: LightClientConfig = Field(default_factory=LightClientConfig)
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(
        env_prefix="LIGHTGATE_",
        env_nested_delimiter="__",
    )
