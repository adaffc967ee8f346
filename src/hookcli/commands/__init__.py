"""Command Registry and Option Validation.

This package holds the declarative command contract of a hook-driven CLI:
which commands exist, which options each accepts, and which lifecycle events
each triggers. It resolves a typed command line to a registered command and
validates the supplied flags against that command's option schema.

Architecture:
    - Explicitly constructed, frozen registry (no process-wide instance)
    - Longest-prefix resolution of multi-word command paths
    - Typed option validation with a closed set of option kinds
    - Error taxonomy split by phase (registration, resolution, validation)

Usage:
    from hookcli.commands import load_builtin_registry, parse_command_line

    registry = load_builtin_registry()
    result = parse_command_line(registry, ["invoke", "local", "-f", "hello", "--env", "A=1"])
    result.options["env"]   # ("A=1",)
"""

from .errors import (
    CommandSchemaError,
    DuplicatePathError,
    DuplicateShortcutError,
    ErrorCategory,
    InvalidDefinitionError,
    InvalidOptionTypeError,
    InvalidOptionValueError,
    MissingValueError,
    NotFoundError,
    OptionValidationError,
    RegistrationError,
    RegistryFrozenError,
    RepeatedOptionError,
    RequiredOptionMissingError,
    UnknownCommandError,
    UnknownOptionError,
)
from .lifecycle import LifecycleHook, lifecycle_hooks
from .registry import CommandRegistry, merge_options
from .resolver import resolve_command, suggest_commands
from .schema import load_builtin_registry, load_default_registry, load_registry, parse_schema
from .types import (
    CommandDefinition,
    OptionSchema,
    OptionType,
    ResolvedCommand,
    ServiceDependencyMode,
    ValidatedOptions,
)
from .validator import parse_command_line, render_tokens, validate_options

__all__ = [
    # Core system
    "CommandRegistry",
    "merge_options",
    "resolve_command",
    "suggest_commands",
    "validate_options",
    "render_tokens",
    "parse_command_line",
    "lifecycle_hooks",
    # Schema files
    "load_registry",
    "load_builtin_registry",
    "load_default_registry",
    "parse_schema",
    # Types
    "CommandDefinition",
    "OptionSchema",
    "OptionType",
    "ServiceDependencyMode",
    "ResolvedCommand",
    "ValidatedOptions",
    "LifecycleHook",
    # Errors
    "CommandSchemaError",
    "ErrorCategory",
    "RegistrationError",
    "DuplicatePathError",
    "DuplicateShortcutError",
    "InvalidOptionTypeError",
    "InvalidDefinitionError",
    "RegistryFrozenError",
    "NotFoundError",
    "UnknownCommandError",
    "OptionValidationError",
    "UnknownOptionError",
    "MissingValueError",
    "InvalidOptionValueError",
    "RepeatedOptionError",
    "RequiredOptionMissingError",
]
