"""
Configuration for the DNS domain client.

This module defines the configuration dataclasses and loaders for JSON
config files and for environment variables (optionally read from a
.env file).
"""

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .audit_logger import OUTPUT_FORMATS
from .enums import ErrorCode, LogLevel
from .exceptions import ValidationError

DEFAULT_BASE_URL = "https://desec.io/api/v1"
DEFAULT_CONFIG_PATH = Path.home() / ".dns_domain_client" / "config.json"

ENV_BASE_URL = "DNS_API_URL"
ENV_TOKEN = "DNS_API_TOKEN"
ENV_TIMEOUT = "DNS_API_TIMEOUT"
ENV_LOG_LEVEL = "DNS_API_LOG_LEVEL"


@dataclass
class LoggingConfig:
    """Request logging configuration."""

    level: str = "info"
    output_format: str = "text"

    @property
    def log_level(self) -> LogLevel:
        try:
            return LogLevel(self.level.lower())
        except (ValueError, AttributeError):
            raise ValidationError(
                code=ErrorCode.VALIDATION_ERROR.value,
                message=f"Invalid log level: {self.level}",
                details={"level": self.level},
            )

    @property
    def log_format(self) -> str:
        if self.output_format not in OUTPUT_FORMATS:
            raise ValidationError(
                code=ErrorCode.VALIDATION_ERROR.value,
                message=f"Invalid output format: {self.output_format}",
                details={"output_format": self.output_format, "allowed": list(OUTPUT_FORMATS)},
            )
        return self.output_format


@dataclass
class ClientConfig:
    """Connection settings for the API client."""

    token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    auth_scheme: str = "Token"
    user_agent: Optional[str] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_from_dict(data: dict) -> ClientConfig:
    """
    Build a ClientConfig from a decoded JSON object.

    Raises:
        KeyError: If the token is missing
        TypeError: If data or its logging section is not an object
    """
    if not isinstance(data, dict):
        raise TypeError(f"config must be an object, got {type(data).__name__}")

    logging_data = data.get("logging", {})
    if not isinstance(logging_data, dict):
        raise TypeError(f"logging must be an object, got {type(logging_data).__name__}")
    logging_config = LoggingConfig(
        level=logging_data.get("level", "info"),
        output_format=logging_data.get("output_format", "text"),
    )

    return ClientConfig(
        token=data["token"],
        base_url=data.get("base_url", DEFAULT_BASE_URL),
        timeout=float(data.get("timeout", 10.0)),
        auth_scheme=data.get("auth_scheme", "Token"),
        user_agent=data.get("user_agent"),
        logging=logging_config,
    )


def config_to_dict(config: ClientConfig) -> dict:
    """Convert a ClientConfig to a JSON-serializable dict."""
    data = {
        "token": config.token,
        "base_url": config.base_url,
        "timeout": config.timeout,
        "auth_scheme": config.auth_scheme,
        "logging": {
            "level": config.logging.level,
            "output_format": config.logging.output_format,
        },
    }
    if config.user_agent is not None:
        data["user_agent"] = config.user_agent
    return data


def load_config_from_file(config_path: Path) -> Optional[ClientConfig]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        ClientConfig, or None if the file is missing or invalid
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return config_from_dict(data)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None
    except FileNotFoundError:
        return None


def save_config_to_file(config: ClientConfig, config_path: Path) -> bool:
    """
    Save configuration to a JSON file.

    Args:
        config: ClientConfig to save
        config_path: Path to save the configuration

    Returns:
        True if saved successfully, False otherwise
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config_to_dict(config), f, indent=2, ensure_ascii=False)
        return True
    except OSError as e:
        print(f"Error saving config: {e}", file=sys.stderr)
        return False


def load_config_from_env(dotenv_path: Optional[Path] = None) -> ClientConfig:
    """
    Build configuration from environment variables.

    A .env file is loaded first (existing variables win).

    Raises:
        ValidationError: If the token is missing or the timeout is not a number
    """
    load_dotenv(dotenv_path=dotenv_path)

    token = os.getenv(ENV_TOKEN, "").strip()
    if not token:
        raise ValidationError(
            code=ErrorCode.VALIDATION_ERROR.value,
            message=f"{ENV_TOKEN} is not set",
            details={"variable": ENV_TOKEN},
        )

    raw_timeout = os.getenv(ENV_TIMEOUT, "10")
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ValidationError(
            code=ErrorCode.VALIDATION_ERROR.value,
            message=f"{ENV_TIMEOUT} must be a number: {raw_timeout!r}",
            details={"variable": ENV_TIMEOUT, "value": raw_timeout},
        )

    return ClientConfig(
        token=token,
        base_url=os.getenv(ENV_BASE_URL, DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
        timeout=timeout,
        logging=LoggingConfig(level=os.getenv(ENV_LOG_LEVEL, "info")),
    )
