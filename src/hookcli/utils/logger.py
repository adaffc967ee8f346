"""
Component Logger Framework

Provides colored logging for hookcli components with:
- Unified API for all components (registry, resolver, schema loader, cli)
- Rich terminal output with component-specific colors
- Graceful fallbacks when configuration is unavailable

Usage:
    logger = get_logger("registry")
    logger.info("Loading schema")
    logger.debug("Detailed trace")
    logger.warning("Something to note")
    logger.error("Something went wrong")

    # Custom loggers with explicit parameters
    logger = get_logger(name="custom_component", color="blue")
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from hookcli.utils.config import get_config_value


class ComponentLogger:
    """
    Rich-formatted logger for hookcli components with color coding and message hierarchy.

    Message Types:
    - info: Normal operational messages
    - debug: Detailed tracing information
    - warning: Warning messages
    - error: Error messages
    """

    def __init__(self, base_logger: logging.Logger, component_name: str, color: str = "white"):
        """
        Initialize component logger.

        Args:
            base_logger: Underlying Python logger
            component_name: Name of the component (e.g., 'registry', 'resolver')
            color: Rich color name for this component
        """
        self.base_logger = base_logger
        self.component_name = component_name
        self.color = color

    def _format_message(self, message: str, style: str, emoji: str = "") -> str:
        """Format message with Rich markup and emoji prefix."""
        prefix = f"{emoji}{self.component_name.title()}: "
        if style:
            return f"[{style}]{prefix}{message}[/{style}]"
        return f"{prefix}{message}"

    def info(self, message: str) -> None:
        self.base_logger.info(self._format_message(message, self.color))

    def debug(self, message: str) -> None:
        style = f"dim {self.color}" if self.color != "white" else "dim white"
        self.base_logger.debug(self._format_message(message, style, "🔍 "))

    def warning(self, message: str) -> None:
        self.base_logger.warning(self._format_message(message, "bold yellow", "⚠️  "))

    def error(self, message: str, exc_info: bool = False) -> None:
        """Error message, optionally with the active exception's traceback."""
        self.base_logger.error(self._format_message(message, "bold red", "❌ "), exc_info=exc_info)

    @property
    def level(self) -> int:
        return self.base_logger.level

    @property
    def name(self) -> str:
        return self.base_logger.name

    def setLevel(self, level: int) -> None:
        self.base_logger.setLevel(level)

    def isEnabledFor(self, level: int) -> bool:
        return self.base_logger.isEnabledFor(level)


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = get_config_value("logging.level", "WARNING")
    if isinstance(level, str):
        # getLevelName maps known names to their number and anything else to a string
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.WARNING
    return level


def setup_logging(level: int | str | None = None) -> None:
    """Configure Rich logging for the root logger (idempotent).

    Args:
        level: Logging level; defaults to ``logging.level`` from config (WARNING)
    """
    root_logger = logging.getLogger()
    resolved = _resolve_level(level)

    # Prevent duplicate handler registration, but honor a new level
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler):
            root_logger.setLevel(resolved)
            return

    root_logger.setLevel(resolved)

    # Security-conscious defaults: hide locals to prevent sensitive data exposure
    rich_tracebacks = get_config_value("logging.rich_tracebacks", True)
    show_traceback_locals = get_config_value("logging.show_traceback_locals", False)
    show_full_paths = get_config_value("logging.show_full_paths", False)

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=rich_tracebacks,
        markup=True,  # Enable [bold], [green], etc. in log messages
        show_path=show_full_paths,
        show_time=True,
        show_level=True,
        tracebacks_show_locals=show_traceback_locals,
    )
    root_logger.addHandler(handler)


def get_logger(
    component_name: str = None,
    *,
    name: str = None,
    color: str = None,
) -> ComponentLogger:
    """
    Get a component logger.

    Args:
        component_name: Component name (e.g., 'registry', 'resolver'); the color is
            read from ``logging.logging_colors.<component_name>``
        name: Direct logger name (keyword-only, bypasses color lookup)
        color: Direct color specification (keyword-only)

    Returns:
        ComponentLogger instance

    Examples:
        logger = get_logger("registry")
        logger.info("Registered 20 commands")

        logger = get_logger(name="test_logger", color="blue")
    """
    if name is not None:
        return ComponentLogger(logging.getLogger(name), name, color or "white")

    if component_name is None:
        raise ValueError(
            "Component name is required. Usage: get_logger('component_name') or "
            "get_logger(name='custom_name', color='blue')"
        )

    base_logger = logging.getLogger(f"hookcli.{component_name}")

    try:
        color = get_config_value(f"logging.logging_colors.{component_name}") or "white"
    except Exception as e:
        # Logging must keep working with a broken config file
        color = "white"
        if os.getenv("DEBUG_LOGGING"):
            print(f"⚠️  WARNING: Failed to load color config for {component_name}: {e}.")

    return ComponentLogger(base_logger, component_name, color)
