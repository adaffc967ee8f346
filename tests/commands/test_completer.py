"""Tests for command-line completion."""

from prompt_toolkit.document import Document

from hookcli.commands.completer import Candidate, CommandCompleter, complete


def texts(candidates):
    return [candidate.text for candidate in candidates]


class TestComplete:
    """Test completion candidates for partial command lines."""

    def test_top_level_words(self, small_registry):
        assert texts(complete(small_registry, "")) == ["deploy", "invoke"]

    def test_partial_word(self, small_registry):
        assert complete(small_registry, "dep") == [Candidate("deploy", "")]

    def test_next_word(self, small_registry):
        assert texts(complete(small_registry, "deploy ")) == ["list", "function"]

    def test_partial_subcommand(self, small_registry):
        assert texts(complete(small_registry, "deploy fun")) == ["function"]

    def test_long_flag(self, small_registry):
        assert texts(complete(small_registry, "invoke local --e")) == ["--env"]

    def test_all_flags_for_dash(self, small_registry):
        assert texts(complete(small_registry, "invoke local -")) == [
            "--function",
            "-f",
            "--env",
            "-e",
            "--docker",
            "--stage",
            "-s",
            "--verbose",
        ]

    def test_flags_after_options(self, small_registry):
        assert "--force" in texts(complete(small_registry, "deploy -s dev "))

    def test_unknown_command(self, small_registry):
        assert complete(small_registry, "nope --") == []

    def test_value_position(self, small_registry):
        assert complete(small_registry, "deploy --package pkg") == []

    def test_usage_as_description(self, builtin_registry):
        (candidate,) = complete(builtin_registry, "plugin ins")
        assert candidate.text == "install"
        assert candidate.description == "Install and add a plugin to your service"


class TestCommandCompleter:
    """Test the prompt_toolkit adapter."""

    def test_completions_replace_current_word(self, small_registry):
        completer = CommandCompleter(small_registry)
        completions = list(completer.get_completions(Document("invoke local --e"), None))

        assert [completion.text for completion in completions] == ["--env"]
        assert completions[0].start_position == -3
