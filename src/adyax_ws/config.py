"""Configuration management for the Adyax web service."""

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "postgresql://localhost:5432/adyax_ws"
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_command_timeout: float = 30.0

    # API
    host: str = "0.0.0.0"
    port: int = Field(
        default=19200,
        validation_alias=AliasChoices("port", "adyax_ws_port"),
        description="API port (checks PORT, then ADYAX_WS_PORT, defaults to 19200)",
    )
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Content rules
    title_max_length: int = Field(default=255, ge=1, le=255)
    default_node_type: str | None = None  # seeded at startup when set
    default_node_type_name: str | None = None

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is one of the supported renderers."""
        valid_formats = {"json", "console"}
        if v.lower() not in valid_formats:
            raise ValueError(
                f"Invalid LOG_FORMAT: '{v}'. "
                f"Must be one of: {', '.join(sorted(valid_formats))}"
            )
        return v.lower()

    @model_validator(mode="after")
    def validate_pool_sizes(self) -> "Settings":
        """Validate connection pool bounds."""
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                "DB_POOL_MIN_SIZE cannot exceed DB_POOL_MAX_SIZE "
                f"({self.db_pool_min_size} > {self.db_pool_max_size})"
            )
        return self


# Lazy settings initialization
_settings = None


def get_settings() -> Settings:
    """Get the settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


class SettingsProxy:
    """Proxy to provide attribute access to settings."""

    def __getattr__(self, name):
        return getattr(get_settings(), name)

    def __setattr__(self, name, value):
        setattr(get_settings(), name, value)


settings = SettingsProxy()
