"""Configuration loading tests"""

from pathlib import Path

import pytest
import yaml

from octodeploy.core import ConfigLoader, OctoDeployConfig
from octodeploy.exceptions import ConfigurationError, ServerNotFoundError
from octodeploy.models import Dialect


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


def _write_config(directory: Path, data: dict) -> Path:
    path = directory / "octodeploy.yml"
    path.write_text(yaml.safe_dump(data))
    return path


SAMPLE = {
    "default_server": "prod",
    "servers": {
        "prod": {
            "url": "https://octopus.example.com",
            "api_key": "${OCTOPUS_KEY}",
            "space": "Spaces-1",
            "ignore_ssl_errors": True,
        },
        "test": {"url": "https://test.example.com", "api_key": "test-key"},
    },
    "tools": {
        "octopus": {"path": "/usr/local/bin/octopus", "dialect": "current"},
        "octo": {"path": "octo", "credentials_in_environment": True},
    },
    "default_tool": "octopus",
}


def test_load_from_workspace(temp_workspace: Path) -> None:
    _write_config(temp_workspace, SAMPLE)
    loader = ConfigLoader(working_directory=temp_workspace, environ={"OCTOPUS_KEY": "API-1"})

    config = loader.load()

    server = config.get_server()
    assert server.server_id == "prod"
    assert server.api_key == "API-1"
    assert server.space_id == "Spaces-1"
    assert server.ignore_ssl_errors
    assert "API-1" not in repr(server)

    tool = config.get_tool()
    assert tool.dialect == Dialect.CURRENT
    assert config.get_tool("octo").dialect is None
    assert config.get_tool("octo").credentials_in_environment


def test_dotenv_in_workspace_feeds_substitution(temp_workspace: Path) -> None:
    _write_config(temp_workspace, SAMPLE)
    (temp_workspace / ".env").write_text("OCTOPUS_KEY=from-dotenv\n")

    config = ConfigLoader(working_directory=temp_workspace, environ={}).load()

    assert config.get_server("prod").api_key == "from-dotenv"
    assert config.environment["OCTOPUS_KEY"] == "from-dotenv"


def test_environment_variable_selects_file(tmp_path: Path, temp_workspace: Path) -> None:
    path = _write_config(tmp_path, {"servers": {"only": {"url": "u", "api_key": "k"}}})

    config = ConfigLoader(
        working_directory=temp_workspace, environ={"OCTODEPLOY_CONFIG": str(path)}
    ).load()

    assert config.config_path == path
    assert config.get_server().server_id == "only"


def test_user_config_is_last_resort(isolated_home: Path, temp_workspace: Path) -> None:
    user_dir = isolated_home / ".octodeploy"
    user_dir.mkdir()
    (user_dir / "config.yml").write_text(yaml.safe_dump(SAMPLE))

    config_path = ConfigLoader(working_directory=temp_workspace, environ={}).find_config_file()

    assert config_path == user_dir / "config.yml"


def test_no_config_gives_empty_configuration(temp_workspace: Path) -> None:
    config = ConfigLoader(working_directory=temp_workspace, environ={}).load()

    assert config.servers == {}
    assert config.config_path is None


def test_missing_explicit_file_raises(temp_workspace: Path) -> None:
    loader = ConfigLoader(config_path=temp_workspace / "nope.yml", working_directory=temp_workspace)

    with pytest.raises(ConfigurationError, match="not found"):
        loader.load()


def test_invalid_yaml_raises(temp_workspace: Path) -> None:
    (temp_workspace / "octodeploy.yml").write_text("servers: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        ConfigLoader(working_directory=temp_workspace, environ={}).load()


def test_sections_must_be_mappings() -> None:
    with pytest.raises(ConfigurationError):
        OctoDeployConfig({"servers": ["prod"]})


def test_unknown_server_lists_available() -> None:
    config = OctoDeployConfig(SAMPLE, environment={"OCTOPUS_KEY": "k"})

    with pytest.raises(ServerNotFoundError) as exc_info:
        config.get_server("staging")

    assert exc_info.value.available_servers == ["prod", "test"]


def test_unknown_tool_raises() -> None:
    with pytest.raises(ConfigurationError, match="not configured"):
        OctoDeployConfig({}).get_tool()


def test_log_dir_relative_to_workspace(temp_workspace: Path) -> None:
    assert OctoDeployConfig({}).get_log_dir(temp_workspace) == temp_workspace / ".octodeploy/logs"
    assert OctoDeployConfig({"log_dir": "/var/log/octo"}).get_log_dir(temp_workspace) == Path(
        "/var/log/octo"
    )
