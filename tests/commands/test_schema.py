"""Tests for loading command schemas from YAML/JSON files."""

import json

import pytest

from hookcli.commands.errors import (
    DuplicatePathError,
    DuplicateShortcutError,
    InvalidDefinitionError,
    InvalidOptionTypeError,
)
from hookcli.commands.schema import (
    load_builtin_registry,
    load_default_registry,
    load_registry,
    parse_schema,
)
from hookcli.commands.types import OptionType, ServiceDependencyMode

MINIMAL_YAML = """
globalOptions:
  stage:
    type: string
    shortcut: s
commands:
  - path: deploy
    groupName: main
    serviceDependencyMode: required
    hasAwsExtension: true
    options:
      force: {type: boolean}
    lifecycleEvents: [deploy, finalize]
  - path: [deploy, list]
    lifecycleEvents: [log]
"""


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "commands.yml"
    path.write_text(MINIMAL_YAML)
    return path


class TestParseSchema:
    """Test conversion of schema records into definitions."""

    def test_records_are_converted(self):
        definitions, global_options = parse_schema(
            {
                "globalOptions": {"stage": {"type": "string", "shortcut": "s"}},
                "commands": [
                    {
                        "path": "invoke local",
                        "usage": "Invoke function locally",
                        "serviceDependencyMode": "optional",
                        "options": {"env": {"type": "multiple", "shortcut": "e"}},
                        "lifecycleEvents": ["loadEnvVars", "invoke"],
                    }
                ],
            }
        )

        assert global_options["stage"].type is OptionType.STRING
        assert global_options["stage"].shortcut == "s"

        (definition,) = definitions
        assert definition.path == ("invoke", "local")
        assert definition.usage == "Invoke function locally"
        assert definition.service_dependency_mode is ServiceDependencyMode.OPTIONAL
        assert definition.options["env"].type is OptionType.MULTIPLE
        assert definition.lifecycle_events == ("loadEnvVars", "invoke")

    def test_option_type_defaults_to_string(self):
        definitions, _ = parse_schema(
            {"commands": [{"path": "logs", "options": {"filter": {}}, "lifecycleEvents": ["logs"]}]}
        )
        assert definitions[0].options["filter"].type is OptionType.STRING

    def test_unknown_option_type(self):
        data = {"commands": [{"path": "logs", "options": {"n": {"type": "integer"}}, "lifecycleEvents": ["logs"]}]}
        with pytest.raises(InvalidOptionTypeError) as exc_info:
            parse_schema(data)
        assert exc_info.value.path == "logs"

    def test_missing_lifecycle_events(self):
        with pytest.raises(InvalidDefinitionError):
            parse_schema({"commands": [{"path": "logs"}]})

    def test_unknown_record_key(self):
        with pytest.raises(InvalidDefinitionError):
            parse_schema({"commands": [{"path": "logs", "lifecycle": ["logs"], "lifecycleEvents": ["logs"]}]})

    def test_unknown_service_dependency_mode(self):
        data = {"commands": [{"path": "logs", "serviceDependencyMode": "sometimes", "lifecycleEvents": ["logs"]}]}
        with pytest.raises(InvalidDefinitionError):
            parse_schema(data)

    def test_document_must_be_mapping(self):
        with pytest.raises(InvalidDefinitionError):
            parse_schema(["deploy"])


class TestLoadRegistry:
    """Test building registries from files."""

    def test_yaml_file(self, schema_file):
        registry = load_registry(schema_file)

        assert registry.frozen
        assert [definition.key for definition in registry] == ["deploy", "deploy list"]
        assert registry.lookup("deploy").group_name == "main"
        assert registry.lookup("deploy").has_aws_extension is True
        assert list(registry.effective_options("deploy list")) == ["stage"]

    def test_json_file(self, tmp_path):
        path = tmp_path / "commands.json"
        path.write_text(json.dumps({"commands": [{"path": "info", "lifecycleEvents": ["info"]}]}))
        registry = load_registry(path)
        assert registry.has_command("info")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_registry(tmp_path / "missing.yml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("commands: [\n  - path: deploy\n")
        with pytest.raises(InvalidDefinitionError):
            load_registry(path)

    def test_registry_errors_surface(self, tmp_path):
        path = tmp_path / "dupes.yml"
        path.write_text(
            "commands:\n"
            "  - {path: deploy, lifecycleEvents: [deploy]}\n"
            "  - {path: deploy, lifecycleEvents: [deploy]}\n"
        )
        with pytest.raises(DuplicatePathError):
            load_registry(path)

    def test_global_shortcut_collision_surfaces(self, tmp_path):
        path = tmp_path / "collide.yml"
        path.write_text(
            "globalOptions:\n"
            "  stage: {shortcut: s}\n"
            "commands:\n"
            "  - path: config credentials\n"
            "    options:\n"
            "      secret: {shortcut: s}\n"
            "    lifecycleEvents: [config]\n"
        )
        with pytest.raises(DuplicateShortcutError):
            load_registry(path)


class TestBundledSchema:
    """Test the bundled command set."""

    def test_command_count_and_order(self):
        registry = load_builtin_registry()
        keys = [definition.key for definition in registry]

        assert len(registry) == 20
        assert keys[0] == ""
        assert keys.index("deploy") < keys.index("deploy function") < keys.index("deploy list functions")
        assert keys[-1] == "test"

    def test_global_options(self):
        registry = load_builtin_registry()
        assert list(registry.global_options)[:2] == ["help", "version"]
        assert registry.global_options["param"].type is OptionType.MULTIPLE
        assert registry.global_options["stage"].shortcut == "s"

    def test_lifecycle_order_preserved(self):
        registry = load_builtin_registry()
        assert registry.lookup("package").lifecycle_events == (
            "cleanup",
            "initialize",
            "setupProviderConfiguration",
            "createDeploymentArtifacts",
            "compileLayers",
            "compileFunctions",
            "compileEvents",
            "finalize",
        )

    def test_secret_has_no_shortcut(self):
        registry = load_builtin_registry()
        assert registry.lookup("config credentials").options["secret"].shortcut is None


class TestDefaultRegistry:
    """Test schema selection for the CLI."""

    def test_bundled_by_default(self):
        assert len(load_default_registry()) == 20

    def test_explicit_path(self, schema_file):
        assert len(load_default_registry(schema_file)) == 2

    def test_path_from_config(self, schema_file, write_config):
        write_config(f"schema:\n  path: {schema_file}\n")
        assert len(load_default_registry()) == 2
