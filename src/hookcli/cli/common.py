"""Shared helpers for hookcli subcommands.

Loads the registry once per invocation and renders core errors with the exit
status their category maps to.
"""

from dataclasses import dataclass, field

import click
from rich.markup import escape

from hookcli.cli.styles import Messages, Styles, console
from hookcli.commands.errors import (
    CommandSchemaError,
    RequiredOptionMissingError,
    UnknownCommandError,
)
from hookcli.commands.registry import CommandRegistry
from hookcli.commands.resolver import DEFAULT_MAX_DISTANCE, DEFAULT_MAX_SUGGESTIONS
from hookcli.commands.schema import load_default_registry
from hookcli.utils.config import get_config_value
from hookcli.utils.logger import get_logger

logger = get_logger("cli")


@dataclass
class CliState:
    """Per-invocation state stored on the click context."""

    schema_path: str | None = None
    verbose: bool = False
    _registry: CommandRegistry | None = field(default=None, repr=False)

    def registry(self) -> CommandRegistry:
        """Build the registry on first use."""
        if self._registry is None:
            self._registry = load_default_registry(self.schema_path)
        return self._registry


def suggestion_limits() -> dict[str, int]:
    """Suggestion settings from ``resolver.*`` in config, as resolver keyword arguments."""
    return {
        "max_suggestions": int(get_config_value("resolver.max_suggestions", DEFAULT_MAX_SUGGESTIONS)),
        "max_distance": int(get_config_value("resolver.max_distance", DEFAULT_MAX_DISTANCE)),
    }


def report_error(error: CommandSchemaError) -> None:
    """Print a core error with its specifics (suggestions, missing options)."""
    console.print(Messages.error(escape(error.message)))

    if isinstance(error, UnknownCommandError) and error.suggestions:
        console.print(f"[{Styles.DIM}]Did you mean:[/{Styles.DIM}]")
        for suggestion in error.suggestions:
            console.print(f"  [{Styles.COMMAND}]{suggestion}[/{Styles.COMMAND}]")
    elif isinstance(error, RequiredOptionMissingError):
        for name in error.options:
            console.print(f"  [{Styles.ACCENT}]•[/{Styles.ACCENT}] --{name}")

    if error.is_usage_error:
        console.print(f"[{Styles.DIM}]Run 'hookcli commands' to see available commands[/{Styles.DIM}]")


def get_registry(ctx: click.Context) -> CommandRegistry:
    """Registry for this invocation; registration errors end the process.

    Exits with the error's exit code when the schema is invalid, or 1 when the
    schema file is missing.
    """
    state = ctx.find_object(CliState) or CliState()
    try:
        return state.registry()
    except CommandSchemaError as e:
        logger.error(f"Invalid command schema: {e.message}")
        report_error(e)
        ctx.exit(e.exit_code)
    except FileNotFoundError as e:
        console.print(Messages.error(str(e)))
        ctx.exit(1)


def fail(ctx: click.Context, error: CommandSchemaError) -> None:
    """Report a resolution/validation error and exit with its code."""
    report_error(error)
    ctx.exit(error.exit_code)
