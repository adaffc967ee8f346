"""Main CLI entry point for hookcli.

This module provides the main CLI group that organizes all hookcli
commands under the `hookcli` command namespace.

Uses lazy imports so that `hookcli --help` does not load prompt_toolkit or
build the registry.
"""

import importlib
import sys

import click

from hookcli import __version__
from hookcli.cli.common import CliState
from hookcli.cli.styles import initialize_theme_from_config
from hookcli.commands.errors import EXECUTION_EXIT_CODE
from hookcli.utils.logger import setup_logging


class LazyGroup(click.Group):
    """Click group that lazily loads subcommands only when invoked."""

    # command name -> (module path, attribute)
    COMMANDS = {
        "commands": ("hookcli.cli.list_cmd", "list_commands"),
        "show": ("hookcli.cli.show_cmd", "show"),
        "resolve": ("hookcli.cli.resolve_cmd", "resolve"),
        "shell": ("hookcli.cli.shell_cmd", "shell"),
    }

    def get_command(self, ctx, cmd_name):
        """Lazily import and return the command when it's invoked."""
        if cmd_name not in self.COMMANDS:
            return None

        module_path, attribute = self.COMMANDS[cmd_name]
        mod = importlib.import_module(module_path)
        return getattr(mod, attribute)

    def list_commands(self, ctx):
        """Return list of available commands (for --help)."""
        return list(self.COMMANDS)


@click.group(cls=LazyGroup)
@click.version_option(version=__version__, prog_name="hookcli")
@click.option(
    "--schema",
    "schema_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Command schema file (YAML or JSON). Defaults to schema.path or the bundled schema.",
)
@click.option("--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, schema_path, verbose):
    """hookcli - command registry and option validation for hook-driven CLIs.

    Inspect the registered commands of a schema, and check how a command line
    resolves and validates against it.

    Examples:

    \b
      hookcli commands                          List registered commands
      hookcli show deploy function              Options and lifecycle of a command
      hookcli resolve -- invoke local -f hello  Resolve and validate a command line
      hookcli shell                             Interactive prompt with completion
    """
    setup_logging("DEBUG" if verbose else None)
    initialize_theme_from_config()
    ctx.obj = CliState(schema_path=schema_path, verbose=verbose)


def main():
    """Entry point for the hookcli CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nGoodbye!", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXECUTION_EXIT_CODE)


if __name__ == "__main__":
    main()
