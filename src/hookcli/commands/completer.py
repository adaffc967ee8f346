"""
Command Completion for Interactive Interfaces

Completion candidates for a partially typed command line, plus a
prompt_toolkit completer that presents them with descriptions.

While the cursor is still in command position the candidates are the next
command tokens of registered paths; once a flag is being typed they are the
long names and shortcuts of the resolved command's effective option set.
"""

import shlex
from collections.abc import Iterable
from dataclasses import dataclass

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from .errors import UnknownCommandError
from .registry import CommandRegistry
from .resolver import leading_words, resolve_command


@dataclass(frozen=True)
class Candidate:
    """A single completion candidate."""

    text: str
    description: str = ""


def _split(text: str) -> tuple[list[str], str]:
    """Split into complete tokens and the word under the cursor."""
    try:
        tokens = shlex.split(text)
    except ValueError:
        # Unbalanced quotes while typing
        tokens = text.split()
    if text and not text[-1].isspace() and tokens:
        return tokens[:-1], tokens[-1]
    return tokens, ""


def complete(registry: CommandRegistry, text: str) -> list[Candidate]:
    """Completion candidates for the word under the cursor.

    :param registry: Registry to complete against
    :param text: Command line typed so far (program name excluded)
    :return: Candidates whose text starts with the current word

    Examples:
        complete(registry, "dep")             # [Candidate("deploy", ...)]
        complete(registry, "deploy ")         # function, list
        complete(registry, "deploy fun")      # function
        complete(registry, "invoke local --e")  # --env
    """
    tokens, current = _split(text)
    words = leading_words(tokens)

    if len(words) == len(tokens) and not current.startswith("-"):
        candidates = []
        for token in registry.children(words):
            if token.startswith(current):
                definition = registry.get([*words, token])
                candidates.append(Candidate(token, definition.usage if definition else ""))
        return candidates

    try:
        resolved = resolve_command(registry, tokens)
    except UnknownCommandError:
        return []

    if current and not current.startswith("-"):
        return []

    candidates = []
    for option in registry.effective_options(resolved.definition.path).values():
        for flag in (option.flag, option.short_flag):
            if flag and flag.startswith(current or "-"):
                candidates.append(Candidate(flag, option.usage))
    return candidates


class CommandCompleter(Completer):
    """prompt_toolkit completer backed by a command registry.

    :param registry: Registry to complete against

    Examples:
        CLI integration::

            completer = CommandCompleter(registry)
            session = PromptSession(completer=completer)
            line = session.prompt("hookcli> ")
    """

    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """Get completions for the current input."""
        text = document.text_before_cursor
        _, current = _split(text)

        for candidate in complete(self.registry, text):
            yield Completion(
                text=candidate.text,
                start_position=-len(current),
                display_meta=candidate.description,
            )
