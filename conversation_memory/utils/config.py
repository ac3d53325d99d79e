"""Configuration management with environment variable support and validation."""

from pathlib import Path

from dotenv import load_dotenv

from conversation_memory.utils.config_validator import load_validated_config

# Auto-load .env file if present
env_file = Path.cwd() / ".env"
if env_file.exists():
    load_dotenv(dotenv_path=env_file)


def load_config() -> dict:
    """
    Load and validate configuration from environment variables.

    Automatically loads .env file from current directory if present.
    Uses Pydantic validation for type safety and range checking.

    Returns:
        dict: Validated configuration with "api" and "logging" sections

    Raises:
        ValueError: If configuration validation fails
    """
    return load_validated_config().to_dict()
