"""Unit tests for installer settings."""

from pathlib import Path

import pytest

from swarmcity_cli.config import (
    DEFAULT_COMPOSE_COMMAND,
    InstallerConfig,
    get_config_path,
    load_config,
)
from swarmcity_cli.shared.paths import INSTALL_DIR


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "SWARMCITY_HOME",
        "SWARMCITY_STRICT",
        "SWARMCITY_LOG_LEVEL",
        "SWARMCITY_COMPOSE_COMMAND",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.cli_unit
class TestInstallerConfig:
    """Tests for InstallerConfig dataclass."""

    def test_defaults(self):
        config = InstallerConfig()
        assert config.home == INSTALL_DIR
        assert config.strict is False
        assert config.compose_command == DEFAULT_COMPOSE_COMMAND
        assert config.get_source("strict") == "default"

    def test_compose_args_split(self):
        config = InstallerConfig(compose_command="docker compose")
        assert config.compose_args == ["docker", "compose"]


@pytest.mark.cli_unit
class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_config_path_follows_home_env(self, clean_env, tmp_path):
        clean_env.setenv("SWARMCITY_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "config.yaml"

    def test_defaults_without_file(self, clean_env, tmp_path):
        clean_env.setenv("SWARMCITY_HOME", str(tmp_path))
        config = load_config()
        assert config.strict is False
        assert config.get_source("strict") == "default"
        assert config.get_source("home") == "environment"

    def test_file_values(self, clean_env, tmp_path):
        clean_env.setenv("SWARMCITY_HOME", str(tmp_path))
        (tmp_path / "config.yaml").write_text(
            "strict: true\ncompose_command: docker compose\nlog_level: debug\n"
        )
        config = load_config()
        assert config.strict is True
        assert config.compose_args == ["docker", "compose"]
        assert config.log_level == "debug"
        assert config.get_source("strict") == "config file"

    def test_env_overrides_file(self, clean_env, tmp_path):
        clean_env.setenv("SWARMCITY_HOME", str(tmp_path))
        (tmp_path / "config.yaml").write_text("strict: true\n")
        clean_env.setenv("SWARMCITY_STRICT", "no")
        config = load_config()
        assert config.strict is False
        assert config.get_source("strict") == "environment"

    def test_invalid_file_falls_back_to_defaults(self, clean_env, tmp_path):
        clean_env.setenv("SWARMCITY_HOME", str(tmp_path))
        (tmp_path / "config.yaml").write_text("strict: [unclosed\n")
        config = load_config()
        assert config.strict is False
        assert config.home == Path(tmp_path)

    @pytest.mark.parametrize("content", ["42\n", "- strict\n- true\n", "just a string\n"])
    def test_non_mapping_file_falls_back_to_defaults(self, clean_env, tmp_path, content):
        clean_env.setenv("SWARMCITY_HOME", str(tmp_path))
        (tmp_path / "config.yaml").write_text(content)
        config = load_config()
        assert config.strict is False
        assert config.compose_command == DEFAULT_COMPOSE_COMMAND
        assert config.get_source("strict") == "default"
