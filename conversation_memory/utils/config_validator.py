"""Type-safe configuration validation using Pydantic Settings."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://ai-embeddings.vercel.app"


class ApiConfig(BaseSettings):
    """Remote embedding service configuration."""

    model_config = SettingsConfigDict(env_prefix="CONVERSATION_MEMORY_API_")

    base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base address of the conversation embedding service",
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds (None = wait indefinitely)",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and strip the trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got '{v}'")
        return v.rstrip("/")


class LoggingConfig(BaseSettings):
    """Logging configuration with validation."""

    model_config = SettingsConfigDict(env_prefix="CONVERSATION_MEMORY_LOGGING_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    log_dir: str = Field(
        default="",
        description="Directory for server.log (default ~/.conversation-memory/logs)",
    )
    file_enabled: bool = Field(
        default=True,
        description="Write server.log in addition to stderr",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate format string is not empty."""
        if not v or not v.strip():
            raise ValueError("Logging format cannot be empty")
        return v

    @field_validator("log_dir")
    @classmethod
    def resolve_log_dir(cls, v: str) -> str:
        if not v:
            return str(Path.home() / ".conversation-memory" / "logs")
        return str(Path(v).expanduser())


class ConversationMemoryConfig(BaseSettings):
    """Root configuration with auto-loading from .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_dict(self) -> dict:
        """Convert to the nested dictionary consumed by the server."""
        return {
            "api": {
                "base_url": self.api.base_url,
                "timeout": self.api.timeout,
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "log_dir": self.logging.log_dir,
                "file_enabled": self.logging.file_enabled,
            },
        }


def load_validated_config() -> ConversationMemoryConfig:
    """
    Load and validate configuration from environment variables and .env file.

    Returns:
        ConversationMemoryConfig: Validated configuration object

    Raises:
        ValueError: If configuration validation fails with detailed error messages
    """
    try:
        return ConversationMemoryConfig(
            api=ApiConfig(),
            logging=LoggingConfig(),
        )
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}") from e
