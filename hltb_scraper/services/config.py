"""Configuration service for validating and loading scraper settings."""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import structlog

from ..models import ScraperConfig
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing scraper configuration.

    The library itself never reads files; only the command-line tool loads
    a config file through this service.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path | None = config_path

    def load_config(self) -> ScraperConfig:
        """Load configuration from file or return default configuration."""
        if self.config_path is None or not self.config_path.exists():
            log.debug("Configuration file not found, using defaults", config_path=str(self.config_path))
            return ScraperConfig()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, Any] = json.load(f)

            config = self.dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return ScraperConfig()

            log.debug("Configuration loaded successfully", config_path=str(self.config_path))
            return config

        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return ScraperConfig()

    def validate_config(self, config: ScraperConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        # Validate base_url
        parsed = urlparse(config.base_url) if isinstance(config.base_url, str) else None
        if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append("base_url must be an absolute http(s) URL")

        # Validate user_agent
        if not isinstance(config.user_agent, str) or not config.user_agent.strip():
            errors.append("user_agent cannot be empty")

        # Validate timeout
        if config.timeout is not None:
            if isinstance(config.timeout, bool) or not isinstance(config.timeout, (int, float)):
                errors.append("timeout must be a number or None")
            elif config.timeout <= 0:
                errors.append("timeout must be positive")

        # Validate log_level
        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        return ValidationResult(len(errors) == 0, errors)

    def require_valid(self, config: ScraperConfig) -> ScraperConfig:
        """Return the configuration unchanged or raise ConfigurationError."""
        result = self.validate_config(config)
        if not result.is_valid:
            raise ConfigurationError(f"Invalid configuration: {', '.join(result.errors)}", result.errors)
        return config

    @staticmethod
    def config_to_dict(config: ScraperConfig) -> dict[str, str | float | None]:
        """Convert ScraperConfig to dictionary for JSON serialization."""
        return {
            "base_url": config.base_url,
            "user_agent": config.user_agent,
            "timeout": config.timeout,
            "log_level": config.log_level,
        }

    @staticmethod
    def dict_to_config(data: dict[str, Any]) -> ScraperConfig:
        """Convert dictionary to ScraperConfig; missing keys keep their defaults."""
        defaults = ScraperConfig()

        timeout_raw = data.get("timeout", defaults.timeout)
        timeout: float | None = None
        if timeout_raw is not None and timeout_raw != "":
            timeout = float(timeout_raw)

        return ScraperConfig(
            base_url=str(data.get("base_url", defaults.base_url)).rstrip("/"),
            user_agent=str(data.get("user_agent", defaults.user_agent)),
            timeout=timeout,
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
        )
