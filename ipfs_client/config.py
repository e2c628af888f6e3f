from __future__ import annotations

from functools import lru_cache
from typing import Any

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ipfs_client import __version__

log = logger.bind(module="config")

DEFAULT_USER_AGENT = f"ipfs-client-python/{__version__}"


class ClientConfig(BaseSettings):
    """Connection settings for one IPFS daemon.

    Instances are frozen, so a single config can be shared by any number of
    clients and threads.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    host: str = Field(default="localhost", alias="IPFS_HOST")
    port: int = Field(default=5001, ge=0, le=65535, alias="IPFS_PORT")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, alias="IPFS_USER_AGENT")
    timeout_seconds: float = Field(default=5.0, gt=0, alias="IPFS_TIMEOUT_SECONDS")
    publish_timeout_seconds: float = Field(default=60.0, gt=0, alias="IPFS_PUBLISH_TIMEOUT_SECONDS")

    def export_safe(self) -> dict[str, Any]:
        """Return settings for debugging/logging."""
        return {
            "host": self.host,
            "port": self.port,
            "user_agent": self.user_agent,
            "timeout_seconds": self.timeout_seconds,
            "publish_timeout_seconds": self.publish_timeout_seconds,
        }


@lru_cache
def get_default_config() -> ClientConfig:
    """Load and cache the default client configuration."""
    config = ClientConfig()
    log.info("Client config initialised: {}", config.export_safe())
    return config
