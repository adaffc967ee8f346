"""
Command Registry

This module holds the registry of command definitions. The registry is an
explicitly constructed value: it is built once at startup, frozen, and then
passed by reference into every resolve/validate pass. There is no process-wide
instance.

Architecture:
    - CommandRegistry: ordered mapping from canonical path to CommandDefinition,
      plus the global options merged beneath every command's own options
    - Registration checks: path syntax, option types, shortcut collisions
    - Effective option sets: command options first, then non-shadowed globals
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from hookcli.utils.logger import get_logger

from .errors import (
    DuplicatePathError,
    DuplicateShortcutError,
    InvalidDefinitionError,
    InvalidOptionTypeError,
    NotFoundError,
    RegistryFrozenError,
)
from .types import CommandDefinition, OptionSchema, OptionType, canonical_path, split_path

logger = get_logger("registry")

# Single characters are reserved for shortcuts
_PATH_TOKEN = re.compile(r"^[a-z0-9][a-z0-9-]*[a-z0-9]$")
_SHORTCUT = re.compile(r"^[A-Za-z0-9]$")


def merge_options(
    command_options: Mapping[str, OptionSchema], global_options: Mapping[str, OptionSchema]
) -> dict[str, OptionSchema]:
    """Effective option set: command options first, then globals they do not shadow."""
    merged = dict(command_options)
    for name, option in global_options.items():
        merged.setdefault(name, option)
    return merged


class _PathsView:
    """Lazy, restartable view over registered paths in registration order."""

    def __init__(self, commands: Mapping[str, CommandDefinition]):
        self._commands = commands

    def __iter__(self) -> Iterator[tuple[str, ...]]:
        for definition in self._commands.values():
            yield definition.path

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, path) -> bool:
        return canonical_path(path) in self._commands


class CommandRegistry:
    """Registry of command definitions and global options.

    The registry validates every definition on insertion so that a
    misconfigured command set fails at startup instead of mid-run. After
    :meth:`freeze` it rejects further registration; resolution and validation
    only ever read from it.

    :param global_options: Options available to every command unless shadowed
    :type global_options: Mapping[str, OptionSchema]
    :raises DuplicateShortcutError: If two global options share a shortcut
    :raises InvalidOptionTypeError: If a global option has an unknown type

    Examples:
        Build and freeze in one call::

            registry = CommandRegistry.from_definitions(definitions, global_options)
            definition = registry.lookup("deploy function")

        Incremental registration::

            registry = CommandRegistry(global_options)
            registry.register(CommandDefinition(path=("info",), lifecycle_events=("info",)))
            registry.freeze()
    """

    def __init__(self, global_options: Mapping[str, OptionSchema] | None = None):
        global_options = dict(global_options or {})
        for name, option in global_options.items():
            self._check_option("", name, option)
        self._check_shortcuts("", list(global_options.values()))

        self._global_options = MappingProxyType(global_options)
        self._commands: dict[str, CommandDefinition] = {}
        self._prefixes: set[str] = set()
        self._frozen = False

    @classmethod
    def from_definitions(
        cls,
        definitions: Iterable[CommandDefinition],
        global_options: Mapping[str, OptionSchema] | None = None,
    ) -> "CommandRegistry":
        """Register every definition in order and freeze the result."""
        registry = cls(global_options)
        for definition in definitions:
            registry.register(definition)
        registry.freeze()
        logger.debug(f"Built registry with {len(registry)} commands")
        return registry

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, definition: CommandDefinition) -> None:
        """Insert a definition after validating it against the registry.

        :param definition: Command to register
        :type definition: CommandDefinition
        :raises RegistryFrozenError: If the registry was already frozen
        :raises DuplicatePathError: If the path is already registered
        :raises InvalidDefinitionError: If the path or lifecycle events are malformed
        :raises InvalidOptionTypeError: If an option type is not recognized
        :raises DuplicateShortcutError: If the effective option set reuses a shortcut
        """
        key = definition.key
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{definition.display_name}': registry is frozen",
                {"path": key},
            )

        for token in definition.path:
            if not _PATH_TOKEN.match(token):
                raise InvalidDefinitionError(
                    f"Invalid command path token '{token}' in '{key}': tokens must be "
                    f"lowercase alphanumeric with at least two characters",
                    {"path": key, "token": token},
                )

        if key in self._commands:
            raise DuplicatePathError(key)

        if not definition.lifecycle_events:
            raise InvalidDefinitionError(
                f"Command '{definition.display_name}' declares no lifecycle events",
                {"path": key},
            )

        for name, option in definition.options.items():
            self._check_option(key, name, option)

        effective = self._merge(definition)
        self._check_shortcuts(key, list(effective.values()))

        self._commands[key] = definition
        for i in range(1, len(definition.path) + 1):
            self._prefixes.add(canonical_path(definition.path[:i]))

        logger.debug(f"Registered command '{definition.display_name}'")

    def freeze(self) -> None:
        """Reject any further registration."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_option(self, path: str, name: str, option: OptionSchema) -> None:
        if not isinstance(option.type, OptionType):
            raise InvalidOptionTypeError(path, name, option.type)
        if name != option.name:
            raise InvalidDefinitionError(
                f"Option key '{name}' does not match option name '{option.name}'",
                {"path": path, "option": name},
            )
        if option.shortcut is not None and not _SHORTCUT.match(option.shortcut):
            raise InvalidDefinitionError(
                f"Shortcut '{option.shortcut}' of option '--{name}' must be a single "
                f"alphanumeric character",
                {"path": path, "option": name, "shortcut": option.shortcut},
            )

    @staticmethod
    def _check_shortcuts(path: str, options: list[OptionSchema]) -> None:
        owners: dict[str, str] = {}
        for option in options:
            if option.shortcut is None:
                continue
            if option.shortcut in owners:
                raise DuplicateShortcutError(path, option.shortcut, (owners[option.shortcut], option.name))
            owners[option.shortcut] = option.name

    def _merge(self, definition: CommandDefinition) -> dict[str, OptionSchema]:
        return merge_options(definition.options, self._global_options)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, path) -> CommandDefinition:
        """Return the definition registered at ``path``.

        :param path: Token sequence or space-separated string
        :raises NotFoundError: If nothing is registered at the path
        """
        key = canonical_path(path)
        try:
            return self._commands[key]
        except KeyError:
            raise NotFoundError(key) from None

    def get(self, path) -> CommandDefinition | None:
        """Like :meth:`lookup` but returns None for unknown paths."""
        return self._commands.get(canonical_path(path))

    def has_command(self, path) -> bool:
        return canonical_path(path) in self._commands

    def is_prefix(self, path) -> bool:
        """True when some registered path starts with ``path`` token-wise."""
        return canonical_path(path) in self._prefixes

    def all_paths(self) -> _PathsView:
        """All registered paths in registration order (restartable, lazy)."""
        return _PathsView(self._commands)

    def definitions(self) -> list[CommandDefinition]:
        return list(self._commands.values())

    def children(self, path) -> list[str]:
        """Distinct next tokens of registered paths extending ``path``."""
        prefix = split_path(path)
        seen: dict[str, None] = {}
        for definition in self._commands.values():
            if len(definition.path) > len(prefix) and definition.path[: len(prefix)] == prefix:
                seen.setdefault(definition.path[len(prefix)], None)
        return list(seen)

    @property
    def global_options(self) -> Mapping[str, OptionSchema]:
        return self._global_options

    @property
    def root(self) -> CommandDefinition | None:
        return self._commands.get("")

    def effective_options(self, path) -> Mapping[str, OptionSchema]:
        """Merged option set of the command at ``path``.

        Command options come first in declaration order, followed by global
        options whose names the command does not shadow.

        :raises NotFoundError: If nothing is registered at the path
        """
        return MappingProxyType(self._merge(self.lookup(path)))

    def get_commands_by_group(self, group_name: str | None) -> list[CommandDefinition]:
        return [cmd for cmd in self._commands.values() if cmd.group_name == group_name]

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, path) -> bool:
        return self.has_command(path)

    def __iter__(self) -> Iterator[CommandDefinition]:
        return iter(list(self._commands.values()))
