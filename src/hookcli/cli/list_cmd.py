"""'hookcli commands' - list registered commands.

Commands are shown in registration order, one table per group. Commands
without a group are listed last under "other".
"""

import click
from rich.table import Table

from hookcli.cli.common import get_registry
from hookcli.cli.styles import Styles, console
from hookcli.commands.registry import CommandRegistry

UNGROUPED = "other"


def build_groups(registry: CommandRegistry) -> dict[str, list]:
    """Definitions keyed by group name, groups in first-seen order."""
    groups: dict[str, list] = {}
    for path in registry.all_paths():
        definition = registry.lookup(path)
        groups.setdefault(definition.group_name or UNGROUPED, []).append(definition)

    if UNGROUPED in groups:
        groups[UNGROUPED] = groups.pop(UNGROUPED)
    return groups


@click.command(name="commands")
@click.option("--group", "group_filter", default=None, help="Only show one group")
@click.pass_context
def list_commands(ctx, group_filter):
    """List registered commands grouped by group name."""
    registry = get_registry(ctx)
    groups = build_groups(registry)

    if group_filter is not None:
        groups = {name: defs for name, defs in groups.items() if name == group_filter}

    for group_name, definitions in groups.items():
        table = Table(
            title=group_name,
            title_style=Styles.HEADER,
            show_header=True,
            header_style=Styles.HEADER,
            border_style=Styles.DIM,
            expand=False,
        )
        table.add_column("Command", style=Styles.COMMAND, no_wrap=True)
        table.add_column("Usage")
        table.add_column("Service", style=Styles.DIM)

        for definition in definitions:
            table.add_row(
                definition.display_name,
                definition.usage,
                definition.service_dependency_mode.value,
            )
        console.print(table)
        console.print()

    console.print(f"[{Styles.DIM}]{len(registry)} commands registered[/{Styles.DIM}]")
