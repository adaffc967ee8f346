"""
Configuration System

YAML configuration for hookcli. Features:
- Single-file YAML loading with environment resolution
- Optional .env loading from the working directory
- Dot-path access with explicit defaults
- Works without any configuration file (every setting has a default)

Lookup order for the configuration file:
    1. Explicit ``config_path`` argument
    2. ``CONFIG_FILE`` environment variable
    3. ``hookcli.yml`` in the current working directory
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Use standard logging (not get_logger) to avoid circular imports with logger.py
# The short name 'CONFIG' enables easy filtering
logger = logging.getLogger("CONFIG")

DEFAULT_CONFIG_FILENAME = "hookcli.yml"


class ConfigBuilder:
    """
    Configuration builder for hookcli settings.

    Features:
    - Single-file YAML loading with validation and error handling
    - Environment variable resolution (``${VAR}``, ``${VAR:-default}``, ``$VAR``)
    """

    def __init__(self, config_path: str | Path | None = None):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to the configuration file. If None, looks for
                hookcli.yml in the current directory and falls back to an empty
                configuration when it does not exist.

        Raises:
            FileNotFoundError: If an explicit config_path does not exist.
        """
        # Load .env file from current working directory
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)  # Don't override existing env vars
            logger.debug(f"Loaded .env file from {dotenv_path}")

        if config_path is None:
            cwd_config = Path.cwd() / DEFAULT_CONFIG_FILENAME
            self.config_path = cwd_config if cwd_config.exists() else None
        else:
            self.config_path = Path(config_path)
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        if self.config_path is None:
            logger.debug("No configuration file found, using defaults")
            self.raw_config: dict[str, Any] = {}
        else:
            self.raw_config = self._load_config()

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        try:
            with open(file_path) as f:
                config = yaml.safe_load(f)

            if config is None:
                logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            if not isinstance(config, dict):
                error_msg = f"Configuration file must contain a dictionary/mapping: {file_path}"
                logger.error(error_msg)
                raise ValueError(error_msg)

            logger.debug(f"Loaded configuration from {file_path}")
            return config
        except yaml.YAMLError as e:
            error_msg = f"Error parsing YAML configuration: {e}"
            logger.error(error_msg)
            raise yaml.YAMLError(error_msg) from e

    def _resolve_env_vars(self, data: Any) -> Any:
        """Recursively resolve environment variables in configuration data.

        Supports both simple and bash-style default value syntax:
        - ${VAR_NAME} - simple substitution
        - ${VAR_NAME:-default_value} - with default value
        - $VAR_NAME - simple substitution without braces
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):

            def replace_env_var(match):
                if match.group(1):  # ${VAR_NAME:-default} or ${VAR_NAME}
                    var_name = match.group(1)
                    default_value = match.group(2)
                else:  # $VAR_NAME
                    var_name = match.group(3)
                    default_value = None

                env_value = os.environ.get(var_name)
                if env_value is None:
                    if default_value is not None:
                        return default_value
                    logger.debug(f"Environment variable '{var_name}' not found, keeping original value")
                    return match.group(0)
                return env_value

            pattern = r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)"
            return re.sub(pattern, replace_env_var, data)
        else:
            return data

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from single file, with environment variables expanded."""
        config = self._resolve_env_vars(self._load_yaml_file(self.config_path))
        logger.info(f"Loaded configuration from {self.config_path}")
        return config

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        keys = path.split(".")
        value = self.raw_config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None
_config_cache: dict[str, ConfigBuilder] = {}


def get_config_builder(config_path: str | Path | None = None) -> ConfigBuilder:
    """Get configuration instance (cached per explicit path).

    Args:
        config_path: Optional explicit path to a configuration file. When omitted,
            ``CONFIG_FILE`` or ``./hookcli.yml`` is used.

    Returns:
        ConfigBuilder instance for the specified or default configuration
    """
    global _default_config

    if config_path is None:
        if _default_config is None:
            config_file = os.environ.get("CONFIG_FILE")
            _default_config = ConfigBuilder(config_file) if config_file else ConfigBuilder()
        return _default_config

    resolved_path = str(Path(config_path).resolve())
    if resolved_path not in _config_cache:
        logger.info(f"Loading configuration from explicit path: {resolved_path}")
        _config_cache[resolved_path] = ConfigBuilder(resolved_path)
    return _config_cache[resolved_path]


def reset_config() -> None:
    """Drop cached configuration (used by tests and after changing directories)."""
    global _default_config
    _default_config = None
    _config_cache.clear()


def get_config_value(path: str, default: Any = None, config_path: str | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "resolver.max_suggestions")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Returns:
        The configuration value at the specified path, or default if not found

    Raises:
        ValueError: If path is empty or None

    Examples:
        >>> max_suggestions = get_config_value("resolver.max_suggestions", 3)
        >>> schema_file = get_config_value("schema.path")
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return get_config_builder(config_path).get(path, default)
