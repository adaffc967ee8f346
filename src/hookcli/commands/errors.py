"""Command registry exception hierarchy.

All errors are raised before any lifecycle event fires. They derive from
CommandSchemaError and are categorized by the phase that detected them so the
boundary layer can pick an exit status:

    - REGISTRATION: misconfigured registry, fatal at startup
    - RESOLUTION: command words did not match a registered command
    - VALIDATION: options did not satisfy the command's option schema

Exit code 1 is left for failures inside lifecycle handlers, which are outside
this package.
"""

from enum import Enum

REGISTRATION_EXIT_CODE = 3
USAGE_EXIT_CODE = 2
EXECUTION_EXIT_CODE = 1


class ErrorCategory(Enum):
    """Phase in which an error was detected."""

    REGISTRATION = "registration"
    RESOLUTION = "resolution"
    VALIDATION = "validation"


class CommandSchemaError(Exception):
    """Base exception for all registry, resolution and validation errors.

    Attributes:
        message: Human-readable error description
        category: Phase that detected the error
        details: Additional structured information for display or debugging
    """

    category = ErrorCategory.REGISTRATION

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def exit_code(self) -> int:
        if self.category is ErrorCategory.REGISTRATION:
            return REGISTRATION_EXIT_CODE
        return USAGE_EXIT_CODE

    @property
    def is_usage_error(self) -> bool:
        """True when the user (not the registry author) can fix the input."""
        return self.category is not ErrorCategory.REGISTRATION


# === REGISTRATION category ===


class RegistrationError(CommandSchemaError):
    """Registry could not be built from the supplied definitions."""

    category = ErrorCategory.REGISTRATION


class DuplicatePathError(RegistrationError):
    """Two definitions share the same command path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Command '{path or '(root)'}' is already registered", {"path": path})
        self.path = path


class DuplicateShortcutError(RegistrationError):
    """Two options of one effective option set share a shortcut character."""

    def __init__(self, path: str, shortcut: str, options: tuple[str, str]) -> None:
        super().__init__(
            f"Shortcut '-{shortcut}' is used by both '--{options[0]}' and '--{options[1]}' "
            f"in command '{path or '(root)'}'",
            {"path": path, "shortcut": shortcut, "options": list(options)},
        )
        self.path = path
        self.shortcut = shortcut
        self.options = options


class InvalidOptionTypeError(RegistrationError):
    """Option declares a type that is not string, boolean or multiple."""

    def __init__(self, path: str, option: str, declared_type) -> None:
        super().__init__(
            f"Option '--{option}' of command '{path or '(root)'}' has unsupported type "
            f"'{declared_type}'",
            {"path": path, "option": option, "type": declared_type},
        )
        self.path = path
        self.option = option
        self.declared_type = declared_type


class InvalidDefinitionError(RegistrationError):
    """Definition is structurally invalid (path tokens, events, shortcuts, file shape)."""


class RegistryFrozenError(RegistrationError):
    """Registration attempted after the registry was frozen."""


class NotFoundError(CommandSchemaError, LookupError):
    """Lookup of a path that is not registered."""

    category = ErrorCategory.RESOLUTION

    def __init__(self, path: str) -> None:
        super().__init__(f"Command '{path or '(root)'}' is not registered", {"path": path})
        self.path = path


# === RESOLUTION category ===


class UnknownCommandError(CommandSchemaError):
    """Typed command words match no registered command.

    Attributes:
        command: The unmatched command words, space-joined
        suggestions: Closest registered paths, best first
    """

    category = ErrorCategory.RESOLUTION

    def __init__(self, command: str, suggestions: list[str] | None = None) -> None:
        suggestions = list(suggestions or [])
        message = f"Command '{command}' not found" if command else "No command specified"
        super().__init__(message, {"command": command, "suggestions": suggestions})
        self.command = command
        self.suggestions = suggestions


# === VALIDATION category ===


class OptionValidationError(CommandSchemaError):
    """Supplied options do not satisfy the command's option schema."""

    category = ErrorCategory.VALIDATION


class UnknownOptionError(OptionValidationError):
    """Flag-like token that names no option of the effective set."""

    def __init__(self, token: str, command: str) -> None:
        name = token.lstrip("-").split("=", 1)[0]
        super().__init__(
            f"Unrecognized option '{token}' for command '{command or '(root)'}'",
            {"token": token, "option": name, "command": command},
        )
        self.token = token
        self.option = name
        self.command = command


class MissingValueError(OptionValidationError):
    """String option given without a following value token."""

    def __init__(self, option: str, command: str) -> None:
        super().__init__(
            f"Option '--{option}' requires a value", {"option": option, "command": command}
        )
        self.option = option
        self.command = command


class InvalidOptionValueError(OptionValidationError):
    """Inline value that the option's type cannot accept."""

    def __init__(self, option: str, value: str, command: str) -> None:
        super().__init__(
            f"Option '--{option}' does not accept value '{value}'",
            {"option": option, "value": value, "command": command},
        )
        self.option = option
        self.value = value


class RepeatedOptionError(OptionValidationError):
    """Single-valued option supplied more than once."""

    def __init__(self, option: str, command: str) -> None:
        super().__init__(
            f"Option '--{option}' may only be given once", {"option": option, "command": command}
        )
        self.option = option


class RequiredOptionMissingError(OptionValidationError):
    """One or more required options were never supplied.

    Attributes:
        options: Every missing required option, in declaration order
    """

    def __init__(self, options: list[str], command: str) -> None:
        flags = ", ".join(f"--{name}" for name in options)
        label = "option" if len(options) == 1 else "options"
        super().__init__(
            f"Missing required {label} for command '{command or '(root)'}': {flags}",
            {"options": list(options), "command": command},
        )
        self.options = list(options)
        self.command = command
