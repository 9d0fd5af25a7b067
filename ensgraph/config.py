from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    DATABASE_URL: str = "sqlite+aiosqlite:///./ensgraph.db"
    DATABASE_ECHO: bool = False

    # Ethereum / ENS
    ETH_RPC_URL: str = "https://eth.llamarpc.com"
    IPFS_GATEWAY_URL: str = "https://ipfs.io/ipfs/"
    ENS_AVATAR_SERVICE_URL: str = "https://metadata.ens.domains/mainnet/avatar/"

    # HTTP
    CORS_ALLOW_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = Field(default="json", description="'json' for production, 'console' for dev")


def get_settings() -> Settings:
    return Settings()
