"""Centralized color and style management for the hookcli CLI.

Design Philosophy:
- Semantic color names (error, header, command) rather than direct colors
- Theme-based approach with a configurable palette (``cli.theme`` in config)
- Rich console markup helpers for inline styling
"""

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme

from hookcli.utils.config import get_config_value
from hookcli.utils.logger import get_logger

logger = get_logger("cli")


# ============================================================================
# THEME CONFIGURATION
# ============================================================================


@dataclass
class ColorTheme:
    """Defines a complete color theme for the CLI.

    The error color follows UI conventions; the rest can be overridden by a
    named theme.
    """

    # === FIXED STANDARD COLORS (UI Conventions) ===
    error: str = "#ff0000"

    # === CONFIGURABLE THEME COLORS ===
    primary: str = "#5f87d7"
    success: str = "#5faf5f"
    accent: str = "#d7af5f"
    command: str = "#87afd7"
    info: str = "#5fafaf"

    # === NEUTRAL COLORS ===
    text_dim: str = "#666666"
    border_default: str = "#555555"


DEFAULT_THEME = ColorTheme()

THEME_REGISTRY = {
    "default": DEFAULT_THEME,
    "mono": ColorTheme(
        primary="#ffffff",
        success="#ffffff",
        accent="#bbbbbb",
        command="#ffffff",
        info="#bbbbbb",
    ),
}


def _build_rich_theme(theme: ColorTheme) -> Theme:
    """Build a Rich Theme from a ColorTheme."""
    return Theme(
        {
            # Status styles
            "error": f"bold {theme.error}",
            "info": f"bold {theme.info}",
            # Text styles
            "dim": theme.text_dim,
            # Component-specific styles
            "header": f"bold {theme.primary}",
            "label": "bold",
            "value": theme.success,
            "command": theme.command,
            "accent": theme.accent,
            # Borders
            "border": theme.border_default,
        }
    )


def load_theme_from_config() -> ColorTheme:
    """Theme named by ``cli.theme`` (falls back to the default theme)."""
    theme_name = get_config_value("cli.theme", "default")
    theme = THEME_REGISTRY.get(theme_name)
    if theme is None:
        logger.warning(f"Unknown theme '{theme_name}', using default")
        theme = DEFAULT_THEME
    return theme


def make_console(theme: ColorTheme | None = None, **kwargs) -> Console:
    """Console with the given (or configured) theme applied."""
    return Console(theme=_build_rich_theme(theme or DEFAULT_THEME), **kwargs)


console = make_console()


def initialize_theme_from_config() -> None:
    """Apply the configured theme to the shared console.

    Theme problems never stop the CLI; the default theme stays active.
    """
    try:
        console.push_theme(_build_rich_theme(load_theme_from_config()))
    except Exception as e:
        logger.debug(f"Failed to load theme from config: {e}, using default")


# ============================================================================
# STYLE HELPERS
# ============================================================================


class Styles:
    """Reusable style names defined in the Rich theme."""

    # Text styles
    DIM = "dim"

    # Component styles
    HEADER = "header"
    COMMAND = "command"
    ACCENT = "accent"

    # Borders
    BORDER = "border"


class Messages:
    """Pre-formatted message helpers for common patterns."""

    @staticmethod
    def error(text: str) -> str:
        return f"[error]✗ {text}[/error]"

    @staticmethod
    def info(text: str) -> str:
        return f"[info]ℹ️  {text}[/info]"

    @staticmethod
    def header(text: str) -> str:
        return f"[header]{text}[/header]"

    @staticmethod
    def label_value(label: str, value: str) -> str:
        return f"[label]{label}:[/label] [value]{value}[/value]"


__all__ = [
    "ColorTheme",
    "DEFAULT_THEME",
    "THEME_REGISTRY",
    "load_theme_from_config",
    "initialize_theme_from_config",
    "make_console",
    "console",
    "Styles",
    "Messages",
]
