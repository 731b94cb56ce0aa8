"""Shared fixtures for octodeploy tests"""

import os
import stat
import sys
from pathlib import Path
from typing import List, Optional

import pytest
from rich.console import Console

from octodeploy.logger import BuildLogger
from octodeploy.models import CommandInvocation, ExecutionResult, ServerContext

SERVER_URL = "https://octopus.example.com"
API_KEY = "API-KEY123"
SPACE_ID = "Spaces-1"


class FakeInvoker:
    """Records invocations and replays queued results instead of launching."""

    def __init__(
        self,
        results: Optional[List[ExecutionResult]] = None,
        credentials_in_environment: bool = False,
    ):
        self.logger = BuildLogger("test", output=Console(quiet=True))
        self.credentials_in_environment = credentials_in_environment
        self.results = list(results or [])
        self.calls: List[CommandInvocation] = []

    def invoke(self, executable, invocation, server=None) -> ExecutionResult:
        self.calls.append(invocation)
        if self.results:
            return self.results.pop(0)
        return ExecutionResult(exit_code=0, command=invocation.render(executable))

    @property
    def commands(self) -> List[str]:
        return [call.command_name for call in self.calls]


@pytest.fixture
def server() -> ServerContext:
    return ServerContext(url=SERVER_URL, api_key=API_KEY, space_id=SPACE_ID)


@pytest.fixture
def quiet_logger(tmp_path: Path) -> BuildLogger:
    logger = BuildLogger("test", log_dir=tmp_path / "logs", output=Console(quiet=True))
    yield logger
    logger.close()


@pytest.fixture
def make_invoker():
    """Factory for FakeInvoker instances with queued results."""
    return FakeInvoker


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace directory"""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


FAKE_CLI = """#!/bin/sh
echo "$@" >> "$OCTO_FAKE_LOG"
if [ "$1" = "config" ]; then
  exit ${OCTO_FAKE_PROBE_EXIT:-0}
fi
if [ "$1" = "release" ] && [ "$2" = "deploy" ]; then
  echo '[{"ServerTaskId": "ServerTasks-42"}]'
fi
if [ "$1" = "release" ] && [ "$2" = "create" ]; then
  echo '{"Version": "1.2.3"}'
fi
exit ${OCTO_FAKE_EXIT:-0}
"""


@pytest.fixture
def fake_cli(tmp_path: Path) -> Path:
    """Shell script standing in for the Octopus CLI; appends its argv to $OCTO_FAKE_LOG."""
    if sys.platform == "win32":
        pytest.skip("fake CLI is a POSIX shell script")
    script = tmp_path / "bin" / "octopus"
    script.parent.mkdir()
    script.write_text(FAKE_CLI)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def fake_cli_env(tmp_path: Path) -> dict:
    """Environment for CliRunner runs of the fake CLI."""
    return {
        "OCTO_FAKE_LOG": str(tmp_path / "calls.log"),
        "OCTODEPLOY_CONFIG": "",
        "PATH": os.environ.get("PATH", ""),
    }


@pytest.fixture
def read_calls(tmp_path: Path):
    """Argv lines the fake CLI has recorded so far."""

    def _read() -> List[str]:
        log = tmp_path / "calls.log"
        if not log.exists():
            return []
        return log.read_text().splitlines()

    return _read
