"""
Option Validator

Checks the tokens left over after command resolution against the resolved
command's effective option set (command options with global options merged
beneath them) and produces typed option values.

Token conventions:
    --name            long option
    --name=value      long option with inline value
    -x                shortcut
    --no-name         negated boolean option
    --                end of options; everything after is positional

Validation is all-or-nothing: on any error no partial result is returned.
"""

from collections.abc import Mapping, Sequence

from hookcli.utils.logger import get_logger

from .errors import (
    InvalidOptionValueError,
    MissingValueError,
    RepeatedOptionError,
    RequiredOptionMissingError,
    UnknownOptionError,
)
from .registry import CommandRegistry, merge_options
from .resolver import DEFAULT_MAX_DISTANCE, DEFAULT_MAX_SUGGESTIONS, is_flag, resolve_command
from .types import CommandDefinition, OptionSchema, OptionType, OptionValue, ValidatedOptions

logger = get_logger("validator")

TERMINATOR = "--"
NEGATION_PREFIX = "no-"

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


class _FlagMatcher:
    """Looks up flag tokens in one effective option set."""

    def __init__(self, options: Mapping[str, OptionSchema]):
        self.options = options
        self.shortcuts = {opt.shortcut: opt for opt in options.values() if opt.shortcut}

    def match(self, token: str) -> tuple[OptionSchema, bool, str | None] | None:
        """Return (option, negated, inline_value) or None for unknown flags."""
        if token.startswith("--"):
            name, sep, inline = token[2:].partition("=")
            inline = inline if sep else None
            if name in self.options:
                return self.options[name], False, inline
            if name.startswith(NEGATION_PREFIX):
                option = self.options.get(name[len(NEGATION_PREFIX) :])
                if option is not None and option.type is OptionType.BOOLEAN:
                    return option, True, inline
            return None

        body = token[1:]
        if len(body) == 1 and body in self.shortcuts:
            return self.shortcuts[body], False, None
        if len(body) >= 2 and body[1] == "=" and body[0] in self.shortcuts:
            return self.shortcuts[body[0]], False, body[2:]
        return None

    def is_known_flag(self, token: str) -> bool:
        return token == TERMINATOR or (is_flag(token) and self.match(token) is not None)


def _parse_bool(option: OptionSchema, value: str, command: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise InvalidOptionValueError(option.name, value, command)


def validate_options(
    definition: CommandDefinition,
    tokens: Sequence[str],
    global_options: Mapping[str, OptionSchema] | None = None,
    *,
    pass_through: bool = False,
) -> ValidatedOptions:
    """Validate raw option tokens against a command's effective option set.

    :param definition: Resolved command
    :param tokens: Tokens remaining after resolution, in order
    :param global_options: Registry-wide options merged beneath the command's own
    :param pass_through: Collect unknown flags into ``extension_tokens`` instead of
        failing, for commands that declare ``has_aws_extension``
    :return: Typed option values plus positional and extension tokens
    :raises UnknownOptionError: Flag names no option (and pass-through does not apply)
    :raises MissingValueError: String or multiple option without a value
    :raises InvalidOptionValueError: Boolean option with a non-boolean inline value
    :raises RepeatedOptionError: String option given more than once
    :raises RequiredOptionMissingError: Required options absent (all reported at once)

    Examples:
        Multiple option accumulates in order::

            result = validate_options(invoke_local, ["-f", "hello", "--env", "A=1", "-e", "B=2"])
            result.options["env"]       # ("A=1", "B=2")
            result.options["function"]  # "hello"
    """
    command = definition.key
    effective = merge_options(definition.options, global_options or {})
    matcher = _FlagMatcher(effective)
    allow_unknown = pass_through and definition.has_aws_extension

    values: dict[str, OptionValue | list[str]] = {}
    positionals: list[str] = []
    extension_tokens: list[str] = []

    tokens = list(tokens)
    i = 0
    while i < len(tokens):
        token = tokens[i]
        i += 1

        if token == TERMINATOR:
            positionals.extend(tokens[i:])
            break

        if not is_flag(token):
            positionals.append(token)
            continue

        matched = matcher.match(token)
        if matched is None:
            if not allow_unknown:
                raise UnknownOptionError(token, command)
            extension_tokens.append(token)
            # Unknown "--flag value" keeps its value next to it
            if "=" not in token and i < len(tokens) and not is_flag(tokens[i]):
                extension_tokens.append(tokens[i])
                i += 1
            continue

        option, negated, inline = matched

        if option.type is OptionType.BOOLEAN:
            if inline is None:
                values[option.name] = not negated
            elif negated:
                raise InvalidOptionValueError(option.name, inline, command)
            else:
                values[option.name] = _parse_bool(option, inline, command)
            continue

        if inline is None:
            if i >= len(tokens) or matcher.is_known_flag(tokens[i]):
                raise MissingValueError(option.name, command)
            inline = tokens[i]
            i += 1

        if option.type is OptionType.STRING:
            if option.name in values:
                raise RepeatedOptionError(option.name, command)
            values[option.name] = inline
        elif option.type is OptionType.MULTIPLE:
            values.setdefault(option.name, []).append(inline)
        else:
            raise TypeError(f"Unhandled option type: {option.type!r}")

    missing = [name for name, opt in effective.items() if opt.required and name not in values]
    if missing:
        raise RequiredOptionMissingError(missing, command)

    options: dict[str, OptionValue] = {}
    for name, value in values.items():
        options[name] = tuple(value) if isinstance(value, list) else value
    for name, opt in effective.items():
        if opt.type is OptionType.MULTIPLE:
            options.setdefault(name, ())

    return ValidatedOptions(
        command=definition,
        options=options,
        positionals=tuple(positionals),
        extension_tokens=tuple(extension_tokens),
    )


def render_tokens(
    options: Mapping[str, OptionValue],
    definition: CommandDefinition,
    global_options: Mapping[str, OptionSchema] | None = None,
) -> list[str]:
    """Render an option assignment back into command-line tokens.

    The rendering always uses the long, inline-value form so that values
    starting with ``-`` survive a second validation pass unchanged.

    :raises UnknownOptionError: If an option name is not in the effective set
    """
    effective = merge_options(definition.options, global_options or {})
    tokens: list[str] = []
    for name, value in options.items():
        option = effective.get(name)
        if option is None:
            raise UnknownOptionError(f"--{name}", definition.key)

        if option.type is OptionType.BOOLEAN:
            negation = f"{NEGATION_PREFIX}{name}"
            if value:
                tokens.append(option.flag)
            elif negation in effective:
                # A declared "--no-<name>" option would capture the negated spelling
                tokens.append(f"{option.flag}=false")
            else:
                tokens.append(f"--{negation}")
        elif option.type is OptionType.STRING:
            tokens.append(f"{option.flag}={value}")
        elif option.type is OptionType.MULTIPLE:
            tokens.extend(f"{option.flag}={item}" for item in value)
        else:
            raise TypeError(f"Unhandled option type: {option.type!r}")
    return tokens


def parse_command_line(
    registry: CommandRegistry,
    tokens: Sequence[str],
    *,
    pass_through: bool = False,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> ValidatedOptions:
    """Resolve the command and validate its options in one pass.

    :param registry: Frozen registry
    :param tokens: Raw tokens, program name excluded
    :param pass_through: See :func:`validate_options`
    :param max_suggestions: See :func:`resolve_command`
    :param max_distance: See :func:`resolve_command`
    :raises UnknownCommandError: From resolution
    :raises OptionValidationError: From validation
    """
    resolved = resolve_command(
        registry, tokens, max_suggestions=max_suggestions, max_distance=max_distance
    )
    result = validate_options(
        resolved.definition,
        resolved.remaining,
        registry.global_options,
        pass_through=pass_through,
    )
    logger.debug(
        f"Resolved '{resolved.definition.display_name}' with options {sorted(result.options)}"
    )
    return result
