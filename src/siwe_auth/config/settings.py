"""
Library settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, test.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    siwe-auth settings with environment variable support.

    RPC URLs may embed API keys and should come from environment
    variables, not from YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "siwe-auth"
    ENV: str = Field(default="production", description="Environment name")

    # Ethereum RPC (contract-account signature checks)
    ETH_RPC_URL: Optional[str] = Field(
        default=None,
        description="JSON-RPC endpoint used for ERC-1271 calls",
    )
    RPC_REQUEST_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="ERC-1271 call timeout in seconds",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=True)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("ETH_RPC_URL")
    @classmethod
    def validate_rpc_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate RPC URL scheme."""
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("ETH_RPC_URL must be an http(s) URL")
        return v or None


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
    config_dir: Optional[Path] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")
        config_dir: Optional directory holding the YAML files

    Returns:
        Settings instance

    Raises:
        ValidationError: If a value is invalid
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    if config_dir is None:
        config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    if env_file is None:
        default_env_file, default_config_file = env_map.get(
            environment, (".env.production", "production.yaml")
        )
        env_file = default_env_file
        if config_file is None:
            config_file = default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    if config_file:
        env_config_path = config_dir / config_file
        if env_config_path.exists():
            with open(env_config_path, "r") as f:
                loaded = yaml.safe_load(f)
                if loaded:
                    merged_config.update(loaded)

    # Environment variables win over YAML values
    for key in list(merged_config):
        if key in os.environ:
            merged_config.pop(key)

    return Settings(**merged_config)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
