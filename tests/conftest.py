"""
Pytest configuration and shared test utilities.

This module provides shared fixtures for all hookcli tests: an isolated
configuration environment, the bundled registry, and a small hand-built
registry for focused resolver/validator tests.
"""

import pytest

from hookcli.commands.registry import CommandRegistry
from hookcli.commands.schema import load_builtin_registry
from hookcli.commands.types import CommandDefinition, OptionSchema, OptionType
from hookcli.utils.config import reset_config

# ===================================================================
# Configuration Isolation
# ===================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test in an empty directory with no cached configuration.

    Keeps a developer's ./hookcli.yml, .env or CONFIG_FILE from leaking into
    test results.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    reset_config()
    yield tmp_path
    reset_config()


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    """Write a hookcli.yml into the working directory and reload config."""

    def _write(text: str):
        config_file = tmp_path / "hookcli.yml"
        config_file.write_text(text)
        reset_config()
        return config_file

    return _write


# ===================================================================
# Registry Factories
# ===================================================================


def string_option(name, shortcut=None, required=False):
    return OptionSchema(name=name, type=OptionType.STRING, shortcut=shortcut, required=required)


def boolean_option(name, shortcut=None):
    return OptionSchema(name=name, type=OptionType.BOOLEAN, shortcut=shortcut)


def multiple_option(name, shortcut=None, required=False):
    return OptionSchema(name=name, type=OptionType.MULTIPLE, shortcut=shortcut, required=required)


def make_command(path, events=("run",), options=(), **kwargs) -> CommandDefinition:
    """Factory for command definitions with minimal boilerplate.

    Examples:
        make_command("deploy list", options=[boolean_option("force")])
    """
    return CommandDefinition(
        path=path,
        lifecycle_events=events,
        options={option.name: option for option in options},
        **kwargs,
    )


@pytest.fixture
def builtin_registry() -> CommandRegistry:
    """Registry of the bundled command schema."""
    return load_builtin_registry()


@pytest.fixture
def small_registry() -> CommandRegistry:
    """Hand-built registry without a root command.

    Paths: deploy, deploy list, deploy function, invoke local.
    Globals: stage (-s), verbose.
    """
    global_options = {
        "stage": string_option("stage", "s"),
        "verbose": boolean_option("verbose"),
    }
    definitions = [
        make_command(
            "deploy",
            events=("deploy", "finalize"),
            options=[boolean_option("force"), string_option("package", "p")],
            has_aws_extension=True,
        ),
        make_command("deploy list", events=("log",)),
        make_command(
            "deploy function",
            events=("initialize", "deploy"),
            options=[string_option("function", "f", required=True)],
        ),
        make_command(
            "invoke local",
            events=("loadEnvVars", "invoke"),
            options=[
                string_option("function", "f", required=True),
                multiple_option("env", "e"),
                boolean_option("docker"),
            ],
        ),
    ]
    return CommandRegistry.from_definitions(definitions, global_options)
