"""
Command Resolver

Maps the raw command-line tokens (program name excluded) to a registered
command. Leading tokens that do not look like flags are command words; the
longest run of them that forms a registered path wins, and everything after it
is handed to the option validator untouched.

Resolution never reads external state and never mutates the registry.
"""

from collections.abc import Sequence

from hookcli.utils.logger import get_logger

from .errors import UnknownCommandError
from .registry import CommandRegistry
from .types import ResolvedCommand, canonical_path

logger = get_logger("resolver")

DEFAULT_MAX_SUGGESTIONS = 3
DEFAULT_MAX_DISTANCE = 2


def is_flag(token: str) -> bool:
    """True for tokens written as an option (``-x``, ``--name``, ``--``)."""
    return token.startswith("-") and token != "-"


def leading_words(tokens: Sequence[str]) -> list[str]:
    """Tokens before the first flag-like token."""
    words = []
    for token in tokens:
        if is_flag(token):
            break
        words.append(token)
    return words


def resolve_command(
    registry: CommandRegistry,
    tokens: Sequence[str],
    *,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> ResolvedCommand:
    """Resolve user tokens to the longest matching registered command.

    Command words are consumed one at a time while they still extend some
    registered path; the longest consumed run that is itself registered is the
    match. When no command words were typed at all the root (empty-path)
    command is used if it is registered.

    :param registry: Registry to resolve against
    :param tokens: Raw tokens, program name excluded
    :param max_suggestions: Suggestion limit for unknown commands
    :param max_distance: Edit distance threshold for suggestions
    :return: Matched definition, consumed command tokens and remaining tokens
    :raises UnknownCommandError: If typed command words match no registered path,
        or no words were typed and no root command exists

    Examples:
        Longest match wins::

            resolved = resolve_command(registry, ["deploy", "list", "functions"])
            resolved.definition.key   # "deploy list functions"

        Unregistered extension is passed through::

            resolved = resolve_command(registry, ["deploy", "list", "extra", "--force"])
            resolved.remaining        # ("extra", "--force")
    """
    tokens = tuple(tokens)
    words = leading_words(tokens)

    matched = 0
    for i in range(1, len(words) + 1):
        if not registry.is_prefix(words[:i]):
            break
        if registry.has_command(words[:i]):
            matched = i

    if matched:
        definition = registry.lookup(words[:matched])
        return ResolvedCommand(definition, tokens[:matched], tokens[matched:])

    if not words:
        root = registry.root
        if root is not None:
            return ResolvedCommand(root, (), tokens)
        raise UnknownCommandError("", suggestions=[])

    command = canonical_path(words)
    suggestions = suggest_commands(registry, words, max_suggestions, max_distance)
    logger.debug(f"No command matches '{command}', suggestions: {suggestions}")
    raise UnknownCommandError(command, suggestions)


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein distance between strings."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    prev_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        curr_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = prev_row[j + 1] + 1
            deletions = curr_row[j] + 1
            substitutions = prev_row[j] + (c1 != c2)
            curr_row.append(min(insertions, deletions, substitutions))
        prev_row = curr_row

    return prev_row[-1]


def _shared_prefix(s1: str, s2: str) -> int:
    count = 0
    for c1, c2 in zip(s1, s2):
        if c1 != c2:
            break
        count += 1
    return count


def suggest_commands(
    registry: CommandRegistry,
    words: Sequence[str],
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> list[str]:
    """Closest registered paths to the typed command words.

    Each non-empty registered path is compared with the typed words truncated
    to the path's token count. Paths within ``max_distance`` edits are ranked
    by longest shared character prefix, then by edit distance, then by path.
    Paths that extend the first typed word (``deploy foo`` -> ``deploy list``)
    are offered after the edit-distance matches.

    :param registry: Registry to search
    :param words: Typed command words
    :param max_suggestions: Result limit
    :param max_distance: Edit distance threshold
    :return: Canonical paths, best first
    """
    words = list(words)
    if not words or max_suggestions <= 0:
        return []

    ranked = []
    related = []
    for path in registry.all_paths():
        if not path:
            continue
        candidate = canonical_path(path)
        typed = canonical_path(words[: len(path)])
        distance = levenshtein_distance(typed, candidate)
        if distance <= max_distance:
            ranked.append((-_shared_prefix(typed, candidate), distance, candidate))
        elif path[0] == words[0]:
            related.append(candidate)

    suggestions = [candidate for _, _, candidate in sorted(ranked)]
    for candidate in related:
        if candidate not in suggestions:
            suggestions.append(candidate)
    return suggestions[:max_suggestions]
