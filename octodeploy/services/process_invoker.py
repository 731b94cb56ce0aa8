"""
Process Invoker

Runs one Octopus CLI call, streaming its output into the build log with
every masked value scrubbed.
"""

import subprocess
from pathlib import Path
from typing import Mapping, Optional

from octodeploy.constants import (
    ERROR_TOOL_PATH_MISSING,
    OCTO_EXTENSION_ENV,
    OCTOPUS_API_KEY_ENV,
    OCTOPUS_SPACE_ENV,
    OCTOPUS_URL_ENV,
)
from octodeploy.exceptions import ProcessLaunchError, ToolNotFoundError
from octodeploy.logger import BuildLogger
from octodeploy.models import CommandInvocation, ExecutionResult, ServerContext
from octodeploy.utils import is_blank


class ProcessInvoker:
    """
    Launches ``[executable, *tokens]`` without a shell.

    Stdout and stderr are merged, echoed line by line to the logger, and
    returned whole. Launch problems come back as failure results carrying
    the error, never as exceptions.
    """

    def __init__(
        self,
        logger: BuildLogger,
        environment: Optional[Mapping[str, str]] = None,
        working_directory: Optional[Path] = None,
        credentials_in_environment: bool = False,
    ):
        """
        Args:
            logger: Build logger receiving command lines and output
            environment: Base environment for child processes
            working_directory: Child working directory (workspace)
            credentials_in_environment: Export server details as OCTOPUS_* variables
        """
        self.logger = logger
        self.environment = dict(environment or {})
        self.working_directory = working_directory
        self.credentials_in_environment = credentials_in_environment

    def build_environment(self, server: Optional[ServerContext] = None) -> dict:
        """Copy of the base environment with the CLI markers applied."""
        env = dict(self.environment)
        env[OCTO_EXTENSION_ENV] = ""
        if self.credentials_in_environment and server is not None:
            for name, value in (
                (OCTOPUS_URL_ENV, server.url),
                (OCTOPUS_API_KEY_ENV, server.api_key),
                (OCTOPUS_SPACE_ENV, server.space_id),
            ):
                if not is_blank(value):
                    env[name] = value
        return env

    def invoke(
        self,
        executable: Optional[str],
        invocation: CommandInvocation,
        server: Optional[ServerContext] = None,
    ) -> ExecutionResult:
        """
        Run one CLI call to completion.

        Args:
            executable: Path to the Octopus CLI
            invocation: Tokens and mask indices
            server: Server details, used when credentials go via environment

        Returns:
            ExecutionResult with merged output and exit code
        """
        if is_blank(executable):
            error = ToolNotFoundError(ERROR_TOOL_PATH_MISSING)
            self.logger.log_error(error.message)
            return ExecutionResult.failed(error, command=invocation.render())

        command = invocation.render(executable)
        self.logger.log_command(command)

        try:
            process = subprocess.Popen(
                invocation.argv(executable),
                cwd=self.working_directory,
                env=self.build_environment(server),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            error = ProcessLaunchError(
                f"Unable to start Octopus CLI: {executable}", context=str(e)
            )
            self.logger.log_error(error.message, context=error.context)
            return ExecutionResult.failed(error, command=command)

        output_lines = []
        with process:
            for line in process.stdout:
                line = invocation.redact(line.rstrip("\r\n"))
                output_lines.append(line)
                self.logger.log_output(line)
            exit_code = process.wait()

        self.logger.log(f"Octopus CLI exit code: {exit_code}")
        return ExecutionResult(
            exit_code=exit_code,
            stdout="\n".join(output_lines),
            command=command,
        )
