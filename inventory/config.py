from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (INVENTORY_*)."""

    # Simulated network latency per operation, in milliseconds
    list_delay_ms: int = Field(800, ge=0)
    get_delay_ms: int = Field(500, ge=0)
    create_delay_ms: int = Field(1000, ge=0)
    update_delay_ms: int = Field(800, ge=0)
    delete_delay_ms: int = Field(600, ge=0)
    latency_scale: float = Field(1.0, ge=0)

    # Failure injection
    network_error_rate: float = Field(0.1, ge=0, le=1)
    server_error_rate: float = Field(0.05, ge=0, le=1)
    random_seed: Optional[int] = None

    # When set, clients talk to the REST surface instead of the in-process service
    api_url: Optional[str] = None
    api_host: str = "127.0.0.1"
    api_port: int = 8085

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def delay_seconds(self, operation: str) -> float:
        """Scaled delay for one of list/get/create/update/delete."""
        ms = getattr(self, f"{operation}_delay_ms")
        return ms * self.latency_scale / 1000.0


settings = Settings()
