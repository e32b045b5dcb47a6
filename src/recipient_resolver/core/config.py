"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Directory / advisory backend
    backend_base_url: str = Field(
        default="https://xumm.app",
        description="Base URL of the directory lookup and account advisory backend",
    )
    backend_timeout: float = Field(
        default=10.0,
        description="Backend request timeout in seconds",
        gt=0,
    )

    # Ledger node
    ledger_node_url: str = Field(
        default="https://xrplcluster.com",
        description="JSON-RPC endpoint of a ledger node",
    )
    ledger_timeout: float = Field(
        default=10.0,
        description="Ledger node request timeout in seconds",
        gt=0,
    )

    # Search
    search_debounce_seconds: float = Field(
        default=0.5,
        description="Debounce window before a remote directory search is issued",
        ge=0,
    )
    remote_search_min_length: int = Field(
        default=4,
        description="Minimum trimmed query length that triggers a remote directory search",
        gt=0,
    )

    # Validation
    activation_reserve: Decimal = Field(
        default=Decimal(20),
        description="Native currency units required to bring a new account into existence",
        gt=0,
    )

    # Local snapshot for the CLI
    store_path: str | None = Field(
        default=None,
        description="JSON file holding the contacts and owned accounts snapshot",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )
    log_json: bool = Field(
        default=False,
        description="Serialize stderr log records as JSON",
    )

    @field_validator("backend_base_url", "ledger_node_url")
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Require an http(s) scheme and drop any trailing slash."""
        if not v.startswith(("http://", "https://")):
            msg = "URL must start with http:// or https://"
            raise ValueError(msg)
        return v.rstrip("/")


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
