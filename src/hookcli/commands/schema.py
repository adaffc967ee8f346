"""
Command Schema Files

Loads command definitions and global options from structured YAML or JSON
files and builds a frozen :class:`CommandRegistry` from them. Record shapes are
validated with Pydantic; semantic checks (types, shortcuts, duplicate paths)
are left to the registry so file-based and hardcoded registration fail the
same way.

File layout::

    globalOptions:
      stage: {type: string, shortcut: s, usage: Stage of the service}
    commands:
      - path: deploy function
        usage: Deploy a single function from the service
        groupName: main
        serviceDependencyMode: required
        hasAwsExtension: true
        options:
          function: {type: string, shortcut: f, required: true}
        lifecycleEvents: [initialize, packageFunction, deploy]

Commands register in file order.
"""

import json
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hookcli.utils.config import get_config_value
from hookcli.utils.logger import get_logger

from .errors import InvalidDefinitionError, InvalidOptionTypeError
from .registry import CommandRegistry
from .types import (
    CommandDefinition,
    OptionSchema,
    OptionType,
    ServiceDependencyMode,
    split_path,
)

logger = get_logger("schema")

BUILTIN_SCHEMA = "builtin_schema.yml"


# =============================================================================
# Record Models
# =============================================================================


class OptionRecord(BaseModel):
    """Option record as written in a schema file."""

    model_config = ConfigDict(extra="forbid")

    type: str = Field(default="string", description="string | boolean | multiple")
    shortcut: str | None = Field(default=None, description="Single-character alias")
    required: bool = Field(default=False, description="Fail validation when absent")
    usage: str = Field(default="", description="Help text")


class CommandRecord(BaseModel):
    """Command record as written in a schema file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    path: str | list[str] = Field(default="", description="Space-separated or token list")
    usage: str = Field(default="", description="Display string")
    group_name: str | None = Field(default=None, alias="groupName")
    service_dependency_mode: str = Field(default="none", alias="serviceDependencyMode")
    has_aws_extension: bool = Field(default=False, alias="hasAwsExtension")
    options: dict[str, OptionRecord] = Field(default_factory=dict)
    lifecycle_events: list[str] = Field(alias="lifecycleEvents")

    @field_validator("service_dependency_mode")
    @classmethod
    def _known_mode(cls, value: str) -> str:
        allowed = [mode.value for mode in ServiceDependencyMode]
        if value not in allowed:
            raise ValueError(f"must be one of {allowed}, got '{value}'")
        return value


class SchemaDocument(BaseModel):
    """Top-level schema file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    global_options: dict[str, OptionRecord] = Field(default_factory=dict, alias="globalOptions")
    commands: list[CommandRecord] = Field(default_factory=list)


# =============================================================================
# Conversion
# =============================================================================


def _to_option(path: str, name: str, record: OptionRecord) -> OptionSchema:
    try:
        option_type = OptionType(record.type)
    except ValueError:
        raise InvalidOptionTypeError(path, name, record.type) from None
    return OptionSchema(
        name=name,
        type=option_type,
        shortcut=record.shortcut,
        required=record.required,
        usage=record.usage,
    )


def _to_definition(record: CommandRecord) -> CommandDefinition:
    path = split_path(record.path)
    key = " ".join(path)
    return CommandDefinition(
        path=path,
        usage=record.usage,
        group_name=record.group_name,
        service_dependency_mode=ServiceDependencyMode(record.service_dependency_mode),
        has_aws_extension=record.has_aws_extension,
        options={name: _to_option(key, name, opt) for name, opt in record.options.items()},
        lifecycle_events=tuple(record.lifecycle_events),
    )


def parse_schema(data: Any, source: str = "<schema>") -> tuple[list[CommandDefinition], dict[str, OptionSchema]]:
    """Convert loaded schema data into definitions and global options.

    :param data: Mapping loaded from YAML/JSON
    :param source: Label used in error messages
    :raises InvalidDefinitionError: If the document shape is invalid
    :raises InvalidOptionTypeError: If an option declares an unknown type
    """
    try:
        document = SchemaDocument.model_validate(data)
    except ValidationError as e:
        raise InvalidDefinitionError(
            f"Invalid command schema in {source}: {e.error_count()} problem(s)\n{e}",
            {"source": source, "errors": e.errors(include_url=False)},
        ) from e

    global_options = {
        name: _to_option("", name, record) for name, record in document.global_options.items()
    }
    definitions = [_to_definition(record) for record in document.commands]
    return definitions, global_options


def _read_file(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidDefinitionError(
            f"Could not parse command schema {path}: {e}", {"source": str(path)}
        ) from e


def load_registry(path: str | Path) -> CommandRegistry:
    """Build a frozen registry from a YAML or JSON schema file.

    :raises FileNotFoundError: If the file does not exist
    :raises RegistrationError: If the file or its definitions are invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Command schema not found: {path}")

    definitions, global_options = parse_schema(_read_file(path), source=str(path))
    registry = CommandRegistry.from_definitions(definitions, global_options)
    logger.info(f"Loaded {len(registry)} commands from {path}")
    return registry


def load_builtin_registry() -> CommandRegistry:
    """Registry for the bundled command set."""
    text = resources.files("hookcli.commands").joinpath(BUILTIN_SCHEMA).read_text(encoding="utf-8")
    definitions, global_options = parse_schema(yaml.safe_load(text), source=BUILTIN_SCHEMA)
    return CommandRegistry.from_definitions(definitions, global_options)


def load_default_registry(schema_path: str | Path | None = None) -> CommandRegistry:
    """Registry from an explicit path, ``schema.path`` in config, or the bundled schema."""
    schema_path = schema_path or get_config_value("schema.path")
    if schema_path:
        return load_registry(schema_path)
    return load_builtin_registry()
