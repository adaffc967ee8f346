"""Tests for command registry value types and the error taxonomy."""

from types import MappingProxyType

import pytest

from hookcli.commands.errors import (
    EXECUTION_EXIT_CODE,
    REGISTRATION_EXIT_CODE,
    USAGE_EXIT_CODE,
    DuplicatePathError,
    ErrorCategory,
    MissingValueError,
    NotFoundError,
    RequiredOptionMissingError,
    UnknownCommandError,
    UnknownOptionError,
)
from hookcli.commands.types import (
    CommandDefinition,
    OptionSchema,
    OptionType,
    ServiceDependencyMode,
    ValidatedOptions,
    canonical_path,
    split_path,
)


class TestPaths:
    """Test canonical path serialization."""

    def test_canonical_path_from_tokens(self):
        assert canonical_path(["deploy", "list", "functions"]) == "deploy list functions"

    def test_canonical_path_collapses_whitespace(self):
        assert canonical_path("  deploy   list ") == "deploy list"

    def test_root_path(self):
        assert canonical_path([]) == ""
        assert canonical_path("") == ""
        assert split_path("") == ()

    def test_split_is_inverse(self):
        assert split_path(canonical_path(("invoke", "local"))) == ("invoke", "local")


class TestOptionSchema:
    """Test option declarations."""

    def test_flags(self):
        option = OptionSchema(name="function", type=OptionType.STRING, shortcut="f")
        assert option.flag == "--function"
        assert option.short_flag == "-f"

    def test_no_shortcut(self):
        option = OptionSchema(name="force", type=OptionType.BOOLEAN)
        assert option.short_flag is None
        assert option.required is False

    def test_option_type_values(self):
        assert OptionType.values() == ["string", "boolean", "multiple"]


class TestCommandDefinition:
    """Test command definitions are normalized and immutable."""

    def test_string_path_is_split(self):
        definition = CommandDefinition(path="deploy function", lifecycle_events=["deploy"])
        assert definition.path == ("deploy", "function")
        assert definition.key == "deploy function"
        assert definition.lifecycle_events == ("deploy",)

    def test_root_definition(self):
        definition = CommandDefinition(path=(), lifecycle_events=("end",))
        assert definition.is_root
        assert definition.key == ""
        assert definition.display_name == "(root)"

    def test_defaults(self):
        definition = CommandDefinition(path=("info",), lifecycle_events=("info",))
        assert definition.service_dependency_mode is ServiceDependencyMode.NONE
        assert definition.has_aws_extension is False
        assert definition.group_name is None
        assert dict(definition.options) == {}

    def test_options_are_read_only(self):
        options = {"force": OptionSchema(name="force", type=OptionType.BOOLEAN)}
        definition = CommandDefinition(path=("deploy",), lifecycle_events=("deploy",), options=options)

        # Mutating the source dict does not reach the definition
        options.clear()
        assert "force" in definition.options
        assert isinstance(definition.options, MappingProxyType)
        with pytest.raises(TypeError):
            definition.options["other"] = None

    def test_definition_is_frozen(self):
        definition = CommandDefinition(path=("info",), lifecycle_events=("info",))
        with pytest.raises(AttributeError):
            definition.usage = "changed"


class TestValidatedOptions:
    """Test the validation result value."""

    def test_to_dict(self):
        definition = CommandDefinition(
            path=("invoke", "local"),
            lifecycle_events=("loadEnvVars", "invoke"),
            service_dependency_mode=ServiceDependencyMode.REQUIRED,
            has_aws_extension=True,
        )
        result = ValidatedOptions(
            command=definition,
            options={"function": "hello", "env": ("A=1", "B=2"), "docker": False},
            positionals=("extra",),
        )

        assert result.to_dict() == {
            "command": "invoke local",
            "options": {"function": "hello", "env": ["A=1", "B=2"], "docker": False},
            "positionals": ["extra"],
            "extension_tokens": [],
            "service_dependency_mode": "required",
            "has_aws_extension": True,
            "lifecycle_events": ["loadEnvVars", "invoke"],
        }
        assert result.service_dependency_mode is ServiceDependencyMode.REQUIRED
        assert result.has_aws_extension is True


class TestErrors:
    """Test error categories, exit codes and messages."""

    def test_exit_codes_by_category(self):
        assert DuplicatePathError("deploy").exit_code == REGISTRATION_EXIT_CODE
        assert UnknownCommandError("depoy").exit_code == USAGE_EXIT_CODE
        assert MissingValueError("stage", "deploy").exit_code == USAGE_EXIT_CODE
        assert EXECUTION_EXIT_CODE not in (REGISTRATION_EXIT_CODE, USAGE_EXIT_CODE)

    def test_usage_error_flag(self):
        assert not DuplicatePathError("deploy").is_usage_error
        assert UnknownCommandError("depoy").is_usage_error
        assert UnknownCommandError("depoy").category is ErrorCategory.RESOLUTION
        assert MissingValueError("stage", "deploy").category is ErrorCategory.VALIDATION

    def test_unknown_command_message(self):
        error = UnknownCommandError("depoy", ["deploy"])
        assert error.message == "Command 'depoy' not found"
        assert error.suggestions == ["deploy"]
        assert error.details == {"command": "depoy", "suggestions": ["deploy"]}

    def test_no_command_message(self):
        assert UnknownCommandError("").message == "No command specified"

    def test_unknown_option_name(self):
        error = UnknownOptionError("--bogus=1", "deploy")
        assert error.option == "bogus"
        assert error.token == "--bogus=1"
        assert "'--bogus=1'" in error.message

    def test_required_missing_lists_every_option(self):
        error = RequiredOptionMissingError(["function", "function-version"], "rollback function")
        assert error.options == ["function", "function-version"]
        assert "--function, --function-version" in error.message
        assert "options" in error.message

    def test_not_found_is_lookup_error(self):
        with pytest.raises(LookupError):
            raise NotFoundError("nope")
