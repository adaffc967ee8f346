"""
Type Definitions for the Command Registry

This module provides the value types shared by the registry, the resolver and
the option validator. Everything here is immutable once constructed: a
registry is built once at startup and then read by every resolve/validate pass.

Architecture:
    - OptionType: Closed set of option kinds, one coercion rule per kind
    - ServiceDependencyMode: Whether a command needs an enclosing service
    - OptionSchema: Declaration of a single flag
    - CommandDefinition: Complete declaration of an invocable command
    - ResolvedCommand: Output of the resolver (definition + leftover tokens)
    - ValidatedOptions: Output of the validator (typed option values)
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

OptionValue = str | bool | tuple[str, ...]


class OptionType(Enum):
    """Kinds of option values.

    Types:
        STRING: Consumes exactly one value token
        BOOLEAN: Consumes no value token; ``--no-<name>`` negates
        MULTIPLE: Repeatable, each occurrence contributes one string

    .. note::
       Adding a member here requires a matching branch in
       :func:`hookcli.commands.validator.validate_options` and
       :func:`hookcli.commands.validator.render_tokens`; both raise on
       an unhandled member instead of falling back to a default.
    """

    STRING = "string"
    BOOLEAN = "boolean"
    MULTIPLE = "multiple"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class ServiceDependencyMode(Enum):
    """Whether a command must run inside an initialized service context."""

    NONE = "none"
    OPTIONAL = "optional"
    REQUIRED = "required"


def canonical_path(path) -> str:
    """Serialize a command path to its registry key.

    Accepts either a sequence of tokens or an already space-separated string.

    Examples:
        >>> canonical_path(["deploy", "function"])
        'deploy function'
        >>> canonical_path("deploy   list")
        'deploy list'
        >>> canonical_path([])
        ''
    """
    if isinstance(path, str):
        return " ".join(path.split())
    return " ".join(path)


def split_path(path) -> tuple[str, ...]:
    """Inverse of :func:`canonical_path`."""
    if isinstance(path, str):
        return tuple(path.split())
    return tuple(path)


@dataclass(frozen=True)
class OptionSchema:
    """Declaration of a single command-line option.

    :param name: Long option name, unique within the owning option set
    :type name: str
    :param type: Value kind
    :type type: OptionType
    :param shortcut: Optional single-character alias
    :type shortcut: Optional[str]
    :param required: Whether validation fails when the option is absent
    :type required: bool
    :param usage: Human-readable description (display only)
    :type usage: str
    """

    name: str
    type: OptionType
    shortcut: str | None = None
    required: bool = False
    usage: str = ""

    @property
    def flag(self) -> str:
        return f"--{self.name}"

    @property
    def short_flag(self) -> str | None:
        return f"-{self.shortcut}" if self.shortcut else None


@dataclass(frozen=True)
class CommandDefinition:
    """Complete specification of an invocable command.

    The lifecycle event sequence is the execution contract handed to the
    plugin dispatcher: it is stored as a tuple and never reordered.

    :param path: Command tokens; the empty tuple is the root command
    :type path: tuple[str, ...]
    :param lifecycle_events: Hook points in execution order (non-empty)
    :type lifecycle_events: tuple[str, ...]
    :param usage: Display string
    :type usage: str
    :param group_name: Optional cosmetic grouping tag (e.g. "main")
    :type group_name: Optional[str]
    :param service_dependency_mode: Service context requirement
    :type service_dependency_mode: ServiceDependencyMode
    :param has_aws_extension: Whether a provider extension layer may attach
    :type has_aws_extension: bool
    :param options: Option name to schema, in declaration order
    :type options: Mapping[str, OptionSchema]

    Examples:
        Minimal definition::

            CommandDefinition(
                path=("deploy", "list"),
                usage="List deployed versions",
                lifecycle_events=("log",),
            )
    """

    path: tuple[str, ...]
    lifecycle_events: tuple[str, ...]
    usage: str = ""
    group_name: str | None = None
    service_dependency_mode: ServiceDependencyMode = ServiceDependencyMode.NONE
    has_aws_extension: bool = False
    options: Mapping[str, OptionSchema] = field(default_factory=dict)

    def __post_init__(self):
        # Normalize containers so a definition can never be mutated after registration
        object.__setattr__(self, "path", split_path(self.path))
        object.__setattr__(self, "lifecycle_events", tuple(self.lifecycle_events))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def key(self) -> str:
        """Canonical registry key (tokens joined by single spaces)."""
        return canonical_path(self.path)

    @property
    def is_root(self) -> bool:
        return not self.path

    @property
    def display_name(self) -> str:
        return self.key or "(root)"


@dataclass(frozen=True)
class ResolvedCommand:
    """Result of resolving raw tokens against the registry.

    :param definition: The matched command
    :param command_tokens: Tokens consumed as the command path
    :param remaining: Tokens left for the option validator, untouched
    """

    definition: CommandDefinition
    command_tokens: tuple[str, ...]
    remaining: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidatedOptions:
    """Result of option validation.

    ``options`` maps option names to ``str``, ``bool`` or ``tuple[str, ...]``.
    Every ``multiple`` option of the effective set is present (possibly empty);
    other options appear only when supplied.
    """

    command: CommandDefinition
    options: Mapping[str, OptionValue]
    positionals: tuple[str, ...] = ()
    extension_tokens: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def service_dependency_mode(self) -> ServiceDependencyMode:
        return self.command.service_dependency_mode

    @property
    def has_aws_extension(self) -> bool:
        return self.command.has_aws_extension

    def to_dict(self) -> dict:
        """Plain JSON-friendly rendering."""
        return {
            "command": self.command.key,
            "options": {
                name: list(value) if isinstance(value, tuple) else value
                for name, value in self.options.items()
            },
            "positionals": list(self.positionals),
            "extension_tokens": list(self.extension_tokens),
            "service_dependency_mode": self.service_dependency_mode.value,
            "has_aws_extension": self.has_aws_extension,
            "lifecycle_events": list(self.command.lifecycle_events),
        }
