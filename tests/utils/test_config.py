"""Tests for the YAML configuration layer."""

import pytest

from hookcli.utils.config import (
    ConfigBuilder,
    get_config_builder,
    get_config_value,
    reset_config,
)


class TestConfigBuilder:
    """Test loading and access of a single configuration file."""

    def test_no_file_uses_defaults(self):
        builder = ConfigBuilder()
        assert builder.config_path is None
        assert builder.get("resolver.max_suggestions", 3) == 3

    def test_cwd_file(self, write_config):
        write_config("resolver:\n  max_distance: 1\n")
        builder = ConfigBuilder()
        assert builder.get("resolver.max_distance") == 1

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigBuilder(tmp_path / "missing.yml")

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            ConfigBuilder(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert ConfigBuilder(path).raw_config == {}

    def test_env_var_resolution(self, write_config, monkeypatch):
        monkeypatch.setenv("HOOKCLI_SCHEMA", "/etc/commands.yml")
        monkeypatch.delenv("HOOKCLI_THEME", raising=False)
        write_config("schema:\n  path: ${HOOKCLI_SCHEMA}\ncli:\n  theme: ${HOOKCLI_THEME:-mono}\n")
        builder = ConfigBuilder()

        assert builder.get("schema.path") == "/etc/commands.yml"
        assert builder.get("cli.theme") == "mono"

    def test_dotenv_file(self, tmp_path, write_config, monkeypatch):
        # Registers the variable with monkeypatch so it is removed afterwards
        monkeypatch.setenv("HOOKCLI_DOTENV_STAGE", "placeholder")
        monkeypatch.delenv("HOOKCLI_DOTENV_STAGE")
        (tmp_path / ".env").write_text("HOOKCLI_DOTENV_STAGE=from-dotenv\n")
        write_config("cli:\n  theme: ${HOOKCLI_DOTENV_STAGE}\n")

        assert ConfigBuilder().get("cli.theme") == "from-dotenv"

    def test_get_through_scalar(self, write_config):
        write_config("logging: quiet\n")
        assert ConfigBuilder().get("logging.level", "WARNING") == "WARNING"


class TestGlobalConfig:
    """Test cached module-level access."""

    def test_default_builder_is_cached(self):
        assert get_config_builder() is get_config_builder()

    def test_reset_config(self, write_config):
        assert get_config_value("cli.theme") is None
        write_config("cli:\n  theme: mono\n")
        assert get_config_value("cli.theme") == "mono"

    def test_config_file_env(self, tmp_path, monkeypatch):
        path = tmp_path / "other.yml"
        path.write_text("cli:\n  theme: mono\n")
        monkeypatch.setenv("CONFIG_FILE", str(path))
        reset_config()

        assert get_config_value("cli.theme") == "mono"

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "explicit.yml"
        path.write_text("resolver:\n  max_suggestions: 5\n")
        assert get_config_value("resolver.max_suggestions", config_path=str(path)) == 5

    def test_empty_path(self):
        with pytest.raises(ValueError):
            get_config_value("")
