"""'hookcli show' - details of a single registered command."""

import click
from rich.panel import Panel
from rich.table import Table

from hookcli.cli.common import fail, get_registry, suggestion_limits
from hookcli.cli.styles import Messages, Styles, console
from hookcli.commands.errors import UnknownCommandError
from hookcli.commands.lifecycle import lifecycle_hooks
from hookcli.commands.resolver import suggest_commands
from hookcli.commands.types import CommandDefinition, OptionSchema


def _options_table(options: dict[str, OptionSchema], global_names: set[str]) -> Table:
    table = Table(show_header=True, header_style=Styles.HEADER, border_style=Styles.DIM)
    table.add_column("Option", style=Styles.COMMAND, no_wrap=True)
    table.add_column("Short", style=Styles.ACCENT)
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Usage")

    for name, option in options.items():
        label = option.flag if name not in global_names else f"{option.flag} [dim](global)[/dim]"
        table.add_row(
            label,
            option.short_flag or "",
            option.type.value,
            "yes" if option.required else "",
            option.usage,
        )
    return table


def _header(definition: CommandDefinition) -> str:
    lines = [
        f"[bold]{definition.display_name}[/bold]",
        "",
        definition.usage,
        "",
        Messages.label_value("Group", definition.group_name or "-"),
        Messages.label_value("Service dependency", definition.service_dependency_mode.value),
        Messages.label_value("Provider extension", "yes" if definition.has_aws_extension else "no"),
    ]
    return "\n".join(lines)


@click.command()
@click.argument("words", nargs=-1)
@click.option("--hooks/--no-hooks", default=True, help="Show lifecycle hook names")
@click.pass_context
def show(ctx, words, hooks):
    """Show options and lifecycle events of the command WORDS.

    With no WORDS the root command is shown.
    """
    registry = get_registry(ctx)
    definition = registry.get(words)
    if definition is None:
        suggestions = suggest_commands(registry, words, **suggestion_limits())
        fail(ctx, UnknownCommandError(" ".join(words), suggestions))

    console.print(Panel(_header(definition), title="Command", border_style=Styles.BORDER, expand=False))

    effective = dict(registry.effective_options(definition.path))
    global_names = {name for name in effective if name not in definition.options}
    console.print(_options_table(effective, global_names))

    console.print(Messages.header("Lifecycle events"))
    for index, event in enumerate(definition.lifecycle_events, start=1):
        console.print(f"  {index}. {event}")

    if hooks:
        console.print(Messages.header("Hooks"))
        for hook in lifecycle_hooks(definition):
            console.print(f"  [{Styles.DIM}]{hook.name}[/{Styles.DIM}]")
