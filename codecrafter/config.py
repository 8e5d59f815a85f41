"""
Configuration module for loading and validating environment variables.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""
    pass


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self, env_path: Optional[Path] = None):
        # Load .env file from project root
        if env_path is None:
            env_path = Path(__file__).parent.parent / ".env"
        load_dotenv(dotenv_path=env_path)

        # Azure OpenAI settings
        self.azure_openai_api_key = os.getenv("AZURE_OPENAI_API_KEY")
        self.azure_openai_endpoint = os.getenv("AZURE_OPENAI_ENDPOINT")
        self.azure_openai_deployment_name = os.getenv("AZURE_OPENAI_DEPLOYMENT_NAME")
        self.azure_openai_api_version = os.getenv("AZURE_OPENAI_API_VERSION", "2024-02-15-preview")

        # Retry policy
        self.max_attempts = self._read_int("CODECRAFTER_MAX_ATTEMPTS", 3)
        self.retry_base_delay = self._read_float("CODECRAFTER_RETRY_BASE_DELAY", 2.0)

        self.log_level = os.getenv("CODECRAFTER_LOG_LEVEL", "INFO").upper()

        # Validate required settings
        self._validate()

    @staticmethod
    def _read_int(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or raw == "":
            return default
        try:
            return int(raw)
        except ValueError:
            raise ConfigError(f"{name} must be an integer, got {raw!r}")

    @staticmethod
    def _read_float(name: str, default: float) -> float:
        raw = os.getenv(name)
        if raw is None or raw == "":
            return default
        try:
            return float(raw)
        except ValueError:
            raise ConfigError(f"{name} must be a number, got {raw!r}")

    def _validate(self):
        """Validate that all required environment variables are set."""
        missing = []

        if not self.azure_openai_api_key:
            missing.append("AZURE_OPENAI_API_KEY")
        if not self.azure_openai_endpoint:
            missing.append("AZURE_OPENAI_ENDPOINT")
        if not self.azure_openai_deployment_name:
            missing.append("AZURE_OPENAI_DEPLOYMENT_NAME")

        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)}\n"
                "Please create a .env file with these variables. See .env.example for reference."
            )

        if self.max_attempts < 1:
            raise ConfigError("CODECRAFTER_MAX_ATTEMPTS must be at least 1")
        if self.retry_base_delay < 0:
            raise ConfigError("CODECRAFTER_RETRY_BASE_DELAY must not be negative")


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
