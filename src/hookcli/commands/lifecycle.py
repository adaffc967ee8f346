"""Lifecycle hook names for resolved commands.

Plugins subscribe to hooks named after a command's lifecycle events. Each
event expands, in declared order, into ``before:<path>:<event>``,
``<path>:<event>`` and ``after:<path>:<event>``. The expansion only reads the
definition; the dispatcher that invokes handlers lives outside this package.
"""

from dataclasses import dataclass

from .types import CommandDefinition


@dataclass(frozen=True)
class LifecycleHook:
    """A single hook point.

    Attributes:
        event: Lifecycle event name as declared on the command
        phase: "before", "on" or "after"
        name: Fully qualified hook name plugins subscribe to
    """

    event: str
    phase: str
    name: str


PHASES = ("before", "on", "after")


def event_hook_name(definition: CommandDefinition, event: str) -> str:
    """Hook name of ``event`` without phase prefix (``deploy:function:deploy``)."""
    if definition.is_root:
        return event
    return ":".join((*definition.path, event))


def lifecycle_hooks(definition: CommandDefinition) -> tuple[LifecycleHook, ...]:
    """Expand a command's lifecycle events into ordered hook points.

    Examples:
        >>> [hook.name for hook in lifecycle_hooks(deploy)]
        ['before:deploy:deploy', 'deploy:deploy', 'after:deploy:deploy',
         'before:deploy:finalize', 'deploy:finalize', 'after:deploy:finalize']
    """
    hooks = []
    for event in definition.lifecycle_events:
        base = event_hook_name(definition, event)
        for phase in PHASES:
            name = base if phase == "on" else f"{phase}:{base}"
            hooks.append(LifecycleHook(event=event, phase=phase, name=name))
    return tuple(hooks)
