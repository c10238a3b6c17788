"""
Configuration Management for Wiki Search

This module provides configuration management for the Wiki Search client. It implements a
singleton pattern so the whole application shares one set of settings, loaded from
defaults, an optional YAML file and environment variables (in that order of precedence).

Example Usage:
    from wiki_search.config import config

    timeout = config.search_timeout
    limit = config.result_limit

    config.update({"search_timeout": 10.0})

Environment Variables:
    ENVIRONMENT: Environment name (development/staging/production)
    DEBUG: Log at debug level when no -v is given (true/false)
    CONFIG_FILE: Optional YAML file with settings
    API_URL_TEMPLATE: MediaWiki API URL, with a {language} placeholder
    ARTICLE_URL_TEMPLATE: Article URL, with {language} and {title} placeholders
    DEFAULT_LANGUAGE: Language used when no preference is stored
    RESULT_LIMIT: Number of titles requested and results shown
    SEARCH_TIMEOUT: Deadline for a whole search cycle, in seconds
    HTTP_TIMEOUT: Per-request HTTP timeout, in seconds
    DEBOUNCE_DELAY: Quiet window before a search runs, in seconds
    CACHE_MAX_ENTRIES: Maximum number of cached searches
    CACHE_TTL: Age after which cached searches are ignored, in seconds
    TYPO_TOLERANCE: Maximum edit distance for suggestions
    PREFERENCES_PATH: File holding the persisted language preference
    USER_AGENT: User-Agent sent to the API
    ENABLE_TELEMETRY: Start the Prometheus metrics exporter
    METRICS_PORT: Port of the metrics exporter
    LOG_LEVEL: Logging level when no -v is given (default WARNING)
"""

import logging
import os
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from . import constants

logger = logging.getLogger(__name__)

LANGUAGE_PATTERN = re.compile(r"^[a-z]{2}$")


class Environment(str, Enum):
    """Environment enumeration."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Config:
    """Configuration settings."""

    _instance = None

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize configuration."""
        if self._initialized:
            return
        self._initialized = True
        self._set_defaults()
        self._load_from_env()

    def _set_defaults(self) -> None:
        """Reset every setting to its default value."""
        # Environment
        self.environment = Environment.DEVELOPMENT.value
        self.debug = False

        # API
        self.api_url_template = constants.API_URL_TEMPLATE
        self.article_url_template = constants.ARTICLE_URL_TEMPLATE
        self.user_agent = constants.USER_AGENT
        self.http_timeout = constants.DEFAULT_HTTP_TIMEOUT

        # Search
        self.default_language = constants.DEFAULT_LANGUAGE
        self.result_limit = constants.DEFAULT_RESULT_LIMIT
        self.search_timeout = constants.DEFAULT_SEARCH_TIMEOUT
        self.debounce_delay = constants.DEFAULT_DEBOUNCE_DELAY
        self.typo_tolerance = constants.TYPO_TOLERANCE

        # Cache
        self.cache_max_entries = constants.DEFAULT_CACHE_MAX_ENTRIES
        self.cache_ttl = constants.DEFAULT_CACHE_TTL

        # Paths
        self.preferences_path = str(
            Path.home() / ".config" / "wiki-search" / "preferences.json"
        )

        # Monitoring
        self.enable_telemetry = False
        self.metrics_port = 5555

        # Logging
        self.log_level = "WARNING"

    def _load_from_env(self) -> None:
        """Load configuration from a YAML file and environment variables."""
        # Load environment from .env file if it exists
        if os.path.exists(".env"):
            load_dotenv()

        config_file = os.getenv("CONFIG_FILE")
        if config_file:
            self.load_file(config_file)

        # Environment
        self.environment = os.getenv("ENVIRONMENT", self.environment)
        self.debug = os.getenv("DEBUG", str(self.debug)).lower() == "true"

        # API
        self.api_url_template = os.getenv("API_URL_TEMPLATE", self.api_url_template)
        self.article_url_template = os.getenv(
            "ARTICLE_URL_TEMPLATE", self.article_url_template
        )
        self.user_agent = os.getenv("USER_AGENT", self.user_agent)
        self.http_timeout = _float_env("HTTP_TIMEOUT", self.http_timeout)

        # Search
        self.default_language = os.getenv(
            "DEFAULT_LANGUAGE", self.default_language
        ).lower()
        self.result_limit = _int_env("RESULT_LIMIT", self.result_limit)
        self.search_timeout = _float_env("SEARCH_TIMEOUT", self.search_timeout)
        self.debounce_delay = _float_env("DEBOUNCE_DELAY", self.debounce_delay)
        self.typo_tolerance = _int_env("TYPO_TOLERANCE", self.typo_tolerance)

        # Cache
        self.cache_max_entries = _int_env("CACHE_MAX_ENTRIES", self.cache_max_entries)
        self.cache_ttl = _float_env("CACHE_TTL", self.cache_ttl)

        # Paths
        self.preferences_path = os.getenv("PREFERENCES_PATH", self.preferences_path)

        # Monitoring
        self.enable_telemetry = (
            os.getenv("ENABLE_TELEMETRY", str(self.enable_telemetry)).lower() == "true"
        )
        self.metrics_port = _int_env("METRICS_PORT", self.metrics_port)

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", self.log_level).upper()

        self._validate()

    def load_file(self, path: str) -> None:
        """Load settings from a YAML file.

        Keys are setting names (e.g. ``search_timeout``); unknown keys are ignored.

        Args:
            path: Path to YAML file
        """
        file_path = Path(path)
        if not file_path.exists():
            logger.warning(f"Configuration file not found: {path}")
            return

        try:
            with open(file_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load configuration file {path}: {e}")
            return

        if not isinstance(data, dict):
            logger.error(f"Configuration file {path} must contain a mapping")
            return

        self.update(data)

    def update(self, values: Dict[str, Any]) -> None:
        """Update settings at runtime.

        Args:
            values: Setting names mapped to new values
        """
        for key, value in values.items():
            if key.startswith("_") or not hasattr(self, key):
                logger.warning(f"Ignoring unknown setting: {key}")
                continue
            setattr(self, key, value)
        self._validate()

    def reset(self) -> None:
        """Reload defaults, the YAML file and environment variables."""
        self._set_defaults()
        self._load_from_env()

    def _validate(self) -> None:
        """Fall back to defaults for invalid values."""
        # Validate environment
        if self.environment not in [e.value for e in Environment]:
            self.environment = Environment.DEVELOPMENT.value

        # Validate log level
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if str(self.log_level).upper() not in valid_levels:
            self.log_level = "WARNING"
        self.log_level = str(self.log_level).upper()

        # Validate language
        if not LANGUAGE_PATTERN.match(str(self.default_language)):
            self.default_language = constants.DEFAULT_LANGUAGE

        # Validate numeric bounds
        if self.result_limit <= 0:
            self.result_limit = constants.DEFAULT_RESULT_LIMIT
        if self.search_timeout <= 0:
            self.search_timeout = constants.DEFAULT_SEARCH_TIMEOUT
        if self.http_timeout <= 0:
            self.http_timeout = constants.DEFAULT_HTTP_TIMEOUT
        if self.http_timeout < self.search_timeout:
            # Per-request timeout never undercuts the search deadline
            self.http_timeout = self.search_timeout
        if self.debounce_delay < 0:
            self.debounce_delay = constants.DEFAULT_DEBOUNCE_DELAY
        if self.cache_max_entries <= 0:
            self.cache_max_entries = constants.DEFAULT_CACHE_MAX_ENTRIES
        if self.cache_ttl <= 0:
            self.cache_ttl = constants.DEFAULT_CACHE_TTL
        if self.typo_tolerance < 0:
            self.typo_tolerance = constants.TYPO_TOLERANCE

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_url_template": self.api_url_template,
            "article_url_template": self.article_url_template,
            "user_agent": self.user_agent,
            "http_timeout": self.http_timeout,
            "default_language": self.default_language,
            "result_limit": self.result_limit,
            "search_timeout": self.search_timeout,
            "debounce_delay": self.debounce_delay,
            "typo_tolerance": self.typo_tolerance,
            "cache_max_entries": self.cache_max_entries,
            "cache_ttl": self.cache_ttl,
            "preferences_path": self.preferences_path,
            "enable_telemetry": self.enable_telemetry,
            "metrics_port": self.metrics_port,
            "log_level": self.log_level,
        }


def _int_env(name: str, default: int) -> int:
    value: Optional[str] = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {value!r}")
        return default


def _float_env(name: str, default: float) -> float:
    value: Optional[str] = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid number for {name}: {value!r}")
        return default


# Create global instance
config = Config()

# Export configuration instance
__all__ = ["config", "Config", "Environment", "LANGUAGE_PATTERN"]
