"""End-to-end command tests against a fake Octopus CLI script"""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from octodeploy.main import cli

API_KEY = "API-CLI-SECRET"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, fake_cli: Path) -> Path:
    path = tmp_path / "octodeploy.yml"
    path.write_text(
        yaml.safe_dump(
            {
                "servers": {
                    "prod": {
                        "url": "https://octopus.example.com",
                        "api_key": API_KEY,
                        "space": "Spaces-1",
                    }
                },
                "tools": {"octopus": {"path": str(fake_cli)}},
            }
        )
    )
    return path


@pytest.fixture
def invoke(runner, config_file, temp_workspace, fake_cli_env):
    def _invoke(*args: str, env: dict = None):
        argv = [*args, "--config", str(config_file), "--workspace", str(temp_workspace)]
        return runner.invoke(cli, argv, env={**fake_cli_env, **(env or {})})

    return _invoke


def _log_files(workspace: Path):
    return list((workspace / ".octodeploy" / "logs").rglob("*.log"))


def test_pack_runs_single_call(invoke, read_calls) -> None:
    result = invoke("pack", "--id", "Web", "--version", "1.0.0")

    assert result.exit_code == 0, result.output
    calls = read_calls()
    assert calls[0] == "config list"
    assert calls[1].startswith("package zip create --id Web --version 1.0.0")
    assert len(calls) == 2


def test_pack_with_blank_id_fails_before_launch(invoke, read_calls) -> None:
    result = invoke("pack", "--id", "  ")

    assert result.exit_code == 1
    assert "Package ID can not be empty" in result.output
    assert read_calls() == ["config list"]


def test_deploy_with_wait_runs_login_deploy_and_wait(invoke, read_calls) -> None:
    result = invoke(
        "deploy-release",
        "--project", "Web",
        "--version", "1.0.0",
        "--environment", "Staging,Production",
        "--variable", "Greeting=Hello",
        "--wait",
        "--timeout", "00:15:30",
    )

    assert result.exit_code == 0, result.output
    calls = read_calls()[1:]
    assert [call.split(" --")[0] for call in calls] == [
        "login",
        "release deploy",
        "task wait ServerTasks-42",
    ]
    assert "--environment Staging " in calls[1]
    assert "--variable Greeting:Hello" in calls[1]
    assert "--timeout 930" in calls[2]


def test_create_and_deploy_reads_created_version(invoke, read_calls) -> None:
    result = invoke("create-release", "--project", "Web", "--deploy-to", "Staging")

    assert result.exit_code == 0, result.output
    calls = read_calls()[1:]
    assert [call.split(" --")[0] for call in calls] == [
        "login",
        "release create",
        "login",
        "release deploy",
    ]
    assert "--version 1.2.3" in calls[3]


def test_failed_call_exits_with_one(invoke, read_calls, temp_workspace) -> None:
    result = invoke(
        "push", "--package", "Web.1.0.0.zip", env={"OCTO_FAKE_EXIT": "1"}
    )

    assert result.exit_code == 1
    assert [call.split(" ")[0] for call in read_calls()] == ["config", "login"]
    log_text = _log_files(temp_workspace)[0].read_text()
    assert "Octopus CLI command failed" in log_text


def test_api_key_never_reaches_output_or_logs(invoke, temp_workspace) -> None:
    result = invoke("push", "--package", "Web.1.0.0.zip", "--verbose")

    assert result.exit_code == 0, result.output
    assert API_KEY not in result.output
    logs = _log_files(temp_workspace)
    assert logs
    for log in logs:
        text = log.read_text()
        assert API_KEY not in text
        assert "--api-key '********'" in text


def test_invalid_timeout_fails_before_launch(invoke, read_calls) -> None:
    result = invoke(
        "deploy-release",
        "--project", "Web",
        "--version", "1.0.0",
        "--environment", "Prod",
        "--wait",
        "--timeout", "15m",
    )

    assert result.exit_code == 1
    assert "HH:mm:ss" in result.output
    assert read_calls() == []


def test_build_information_generates_file(invoke, read_calls, temp_workspace) -> None:
    result = invoke(
        "build-information",
        "--package-id", "Web",
        "--version", "1.0.0",
        env={"BUILD_NUMBER": "42", "GIT_COMMIT": "abc123"},
    )

    assert result.exit_code == 0, result.output
    data = json.loads((temp_workspace / "octopus.buildinfo").read_text())
    assert data["BuildNumber"] == "42"
    assert data["VcsCommitNumber"] == "abc123"
    assert "octopus.buildinfo" in read_calls()[-1]


def test_json_output(invoke) -> None:
    result = invoke("pack", "--id", "Web", "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["operation"] == "pack"
    assert data["dialect"] == "current"
    assert data["success"] is True


def test_detect_json(runner, config_file, fake_cli, fake_cli_env) -> None:
    result = runner.invoke(
        cli, ["detect", "--config", str(config_file), "--json"], env=fake_cli_env
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "tool": "octopus",
        "executable": str(fake_cli),
        "dialect": "current",
        "source": "probed",
    }


def test_detect_legacy(runner, config_file, fake_cli_env) -> None:
    env = {**fake_cli_env, "OCTO_FAKE_PROBE_EXIT": "1"}

    result = runner.invoke(cli, ["detect", "--config", str(config_file), "--json"], env=env)

    assert json.loads(result.output)["dialect"] == "legacy"
