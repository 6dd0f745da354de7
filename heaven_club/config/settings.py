"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = "logs/heaven_club.log"

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = Field(
        default=8080, ge=1, le=65535, description="HTTP API port"
    )

    # Referral network traversal
    network_tier_depth: int = Field(
        default=7,
        gt=0,
        description="Deepest level counted for reward tiers",
    )
    network_max_traversal_depth: int = Field(
        default=64,
        gt=0,
        description=(
            "Hard cap on levels walked when counting the whole team. "
            "A chain deeper than this is treated as corrupted data"
        ),
    )
    network_max_visited_nodes: int = Field(
        default=1_000_000,
        gt=0,
        description="Hard cap on members visited in one traversal",
    )
    network_graph_default_depth: int = Field(
        default=5,
        gt=0,
        description="Default depth of the drill-down tree",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level name."""
        level = v.upper()
        allowed = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(
                f"Invalid LOG_LEVEL '{v}'. Expected one of: {', '.join(sorted(allowed))}"
            )
        return level

    @model_validator(mode="after")
    def validate_traversal_caps(self) -> "Settings":
        """Traversal cap must reach at least the tier depth."""
        if self.network_max_traversal_depth < self.network_tier_depth:
            raise ValueError(
                "NETWORK_MAX_TRAVERSAL_DEPTH must be greater than or equal to "
                "NETWORK_TIER_DEPTH"
            )
        if self.network_graph_default_depth > self.network_tier_depth:
            logger.warning(
                "NETWORK_GRAPH_DEFAULT_DEPTH exceeds NETWORK_TIER_DEPTH, "
                "drill-down trees will be capped at the tier depth"
            )
        return self

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Validate production-specific requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG must be False in production environment. "
                "Set DEBUG=false in your .env file."
            )
        return self


settings = Settings()
