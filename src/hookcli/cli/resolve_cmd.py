"""'hookcli resolve' - resolve and validate a command line.

Everything after the hookcli options is treated as the user's command line
(program name excluded). Use ``--`` to separate when the command line starts
with a flag::

    hookcli resolve -- invoke local -f hello --env A=1 --env B=2
    hookcli resolve --json -- deploy --stage prod
"""

import json

import click
from rich.markup import escape
from rich.table import Table

from hookcli.cli.common import fail, get_registry, suggestion_limits
from hookcli.cli.styles import Messages, Styles, console
from hookcli.commands.errors import OptionValidationError, UnknownCommandError
from hookcli.commands.lifecycle import lifecycle_hooks
from hookcli.commands.types import ValidatedOptions
from hookcli.commands.validator import parse_command_line, render_tokens
from hookcli.utils.logger import get_logger

logger = get_logger("cli")


def normalized_command_line(result: ValidatedOptions, global_options) -> list[str]:
    """Canonical token rendering: path, options, then positionals after ``--``."""
    tokens = [*result.command.path, *render_tokens(result.options, result.command, global_options)]
    tokens.extend(result.extension_tokens)
    if result.positionals:
        tokens.append("--")
        tokens.extend(result.positionals)
    return tokens


def _format_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, tuple):
        return escape(", ".join(value)) if value else "[dim](none)[/dim]"
    return escape(value)


def display_result(result: ValidatedOptions, normalized: list[str]) -> None:
    """Render a validation result for the terminal."""
    definition = result.command
    console.print(Messages.label_value("Command", definition.display_name))
    console.print(Messages.label_value("Service dependency", result.service_dependency_mode.value))
    console.print(Messages.label_value("Provider extension", "yes" if result.has_aws_extension else "no"))

    if result.options:
        table = Table(show_header=True, header_style=Styles.HEADER, border_style=Styles.DIM)
        table.add_column("Option", style=Styles.COMMAND, no_wrap=True)
        table.add_column("Value")
        for name, value in result.options.items():
            table.add_row(f"--{name}", _format_value(value))
        console.print(table)

    if result.positionals:
        console.print(Messages.label_value("Positionals", escape(" ".join(result.positionals))))
    if result.extension_tokens:
        console.print(Messages.label_value("Extension tokens", escape(" ".join(result.extension_tokens))))

    console.print(Messages.label_value("Lifecycle", " → ".join(definition.lifecycle_events)))
    console.print(Messages.label_value("Normalized", escape(" ".join(normalized)) or "(root)"))


@click.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option(
    "--pass-through",
    is_flag=True,
    help="Collect unknown flags for commands with a provider extension instead of failing",
)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def resolve(ctx, as_json, pass_through, tokens):
    """Resolve TOKENS to a registered command and validate its options."""
    registry = get_registry(ctx)

    try:
        result = parse_command_line(
            registry, tokens, pass_through=pass_through, **suggestion_limits()
        )
    except (UnknownCommandError, OptionValidationError) as e:
        logger.debug(f"Rejected command line {list(tokens)}: {e.message}")
        if as_json:
            click.echo(json.dumps({"error": type(e).__name__, "message": e.message, **e.details}, indent=2))
            ctx.exit(e.exit_code)
        fail(ctx, e)

    normalized = normalized_command_line(result, registry.global_options)
    if as_json:
        payload = result.to_dict()
        payload["hooks"] = [hook.name for hook in lifecycle_hooks(result.command)]
        payload["normalized"] = normalized
        click.echo(json.dumps(payload, indent=2))
        return

    display_result(result, normalized)
