"""'hookcli shell' - interactive prompt with command completion.

Each entered line is resolved and validated like ``hookcli resolve``. Errors
are reported and the prompt continues; ``exit``, ``quit``, Ctrl-D or Ctrl-C end
the session.
"""

import shlex

import click
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from hookcli.cli.common import get_registry, report_error, suggestion_limits
from hookcli.cli.resolve_cmd import display_result, normalized_command_line
from hookcli.cli.styles import Messages, console
from hookcli.commands.completer import CommandCompleter
from hookcli.commands.errors import OptionValidationError, UnknownCommandError
from hookcli.commands.registry import CommandRegistry
from hookcli.commands.validator import parse_command_line

EXIT_WORDS = {"exit", "quit"}


def handle_line(
    registry: CommandRegistry,
    line: str,
    pass_through: bool = False,
    limits: dict[str, int] | None = None,
) -> bool:
    """Resolve one entered line. Returns False when the session should end.

    ``limits`` are the suggestion settings passed to the resolver.
    """
    line = line.strip()
    if not line:
        return True
    if line in EXIT_WORDS:
        return False

    try:
        tokens = shlex.split(line)
    except ValueError as e:
        console.print(Messages.error(f"Could not parse input: {e}"))
        return True

    try:
        result = parse_command_line(registry, tokens, pass_through=pass_through, **(limits or {}))
    except (UnknownCommandError, OptionValidationError) as e:
        report_error(e)
        return True

    display_result(result, normalized_command_line(result, registry.global_options))
    return True


@click.command()
@click.option("--pass-through", is_flag=True, help="Collect unknown flags for extension commands")
@click.pass_context
def shell(ctx, pass_through):
    """Interactive prompt with completion of commands and options."""
    registry = get_registry(ctx)
    limits = suggestion_limits()
    session = PromptSession(completer=CommandCompleter(registry), history=InMemoryHistory())

    console.print(Messages.info("Type a command line to resolve it; 'exit' to quit"))
    while True:
        try:
            line = session.prompt("hookcli> ")
        except (EOFError, KeyboardInterrupt):
            break
        if not handle_line(registry, line, pass_through, limits):
            break
    console.print("Goodbye!")
