"""
Operation Command Base Class

Base class for commands that run one Octopus operation through the CLI.
Handles configuration, logging, adapter construction and result reporting.
"""

from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from octodeploy.constants import ERROR_COMMAND_FAILED
from octodeploy.core.config_loader import ConfigLoader, OctoDeployConfig
from octodeploy.core.validator import validate_deployment_timeout, validate_server_id
from octodeploy.exceptions import InvalidArgumentError, NonZeroExitError
from octodeploy.models import ExecutionResult, Operation, OperationParameters
from octodeploy.services.adapters import CliAdapter
from octodeploy.services.wrapper_builder import CliWrapperBuilder
from octodeploy.utils import inject_environment_variables, split_lines

from .base_command import BaseCommand


@dataclass
class CommonOptions:
    """Options shared by every operation command."""

    config_path: Optional[str] = None
    server_id: Optional[str] = None
    tool_id: Optional[str] = None
    space_id: Optional[str] = None
    workspace: Optional[str] = None
    additional_args: Optional[str] = None
    verbose: bool = False
    json_output: bool = False


class OperationCommand(BaseCommand):
    """
    Base class for Octopus operation commands.

    Subclasses name their operation and turn their options into
    OperationParameters; this class does the rest.
    """

    operation: Operation
    title: str
    requires_server = True

    def __init__(self, common: CommonOptions):
        super().__init__(verbose=common.verbose, json_output=common.json_output)
        self.common = common
        self.workspace = Path(common.workspace or Path.cwd()).resolve()
        self.config: Optional[OctoDeployConfig] = None
        self.environment: Dict[str, str] = {}

    def load_config(self) -> OctoDeployConfig:
        loader = ConfigLoader(
            config_path=Path(self.common.config_path) if self.common.config_path else None,
            working_directory=self.workspace,
        )
        self.config = loader.load()
        self.environment = self.config.environment
        return self.config

    def inject(self, value: Optional[str]) -> Optional[str]:
        """Substitute ${VAR} references from the build environment."""
        return inject_environment_variables(value, self.environment)

    def inject_lines(self, values: Iterable[str]) -> List[str]:
        """Flatten newline-separated values, substituting each entry."""
        entries = []
        for value in values:
            entries.extend(split_lines(self.inject(value)))
        return entries

    @abstractmethod
    def build_parameters(self) -> OperationParameters:
        """Operation inputs from command options."""
        pass

    def header_details(self) -> Mapping[str, Optional[str]]:
        return {}

    def validate(self, params: OperationParameters) -> None:
        """
        Check inputs before any process is launched.

        Raises:
            InvalidArgumentError: If validation fails
        """
        if params.wait_for_deployment:
            result = validate_deployment_timeout(params.deployment_timeout)
            if result.has_errors:
                raise InvalidArgumentError(
                    result.errors[0], context=f"Got: '{params.deployment_timeout}'"
                )

        if self.requires_server:
            result = validate_server_id(self.config, self.common.server_id)
            for warning in result.warnings:
                self.logger.warning(warning)
            if result.has_errors:
                raise InvalidArgumentError(result.errors[0])

    def build_adapter(self) -> CliAdapter:
        return (
            CliWrapperBuilder(self.config, self.logger, self.environment)
            .server_id(self.common.server_id)
            .tool_id(self.common.tool_id)
            .space_id(self.inject(self.common.space_id))
            .workspace(self.workspace)
            .verbose(self.verbose)
            .require_server(self.requires_server)
            .build()
        )

    def execute(self) -> None:
        self.show_header(title=self.title, details=dict(self.header_details()))

        config = self.load_config()
        logger = self.init_logger(self.operation.value, config.get_log_dir(self.workspace))

        params = self.build_parameters()
        self.validate(params)

        logger.step("Resolving Octopus CLI")
        adapter = self.build_adapter()
        logger.success(f"{adapter.dialect.value} CLI at {adapter.executable}")

        logger.step(self.title)
        result = adapter.execute(self.operation, params)
        self.report(adapter, result)

    def report(self, adapter: CliAdapter, result: ExecutionResult) -> None:
        """
        Turn the final result into output or an error.

        Raises:
            OctoDeployError: If the operation failed
        """
        if result.is_failure:
            if result.error is not None:
                raise result.error
            self.logger.log_error(ERROR_COMMAND_FAILED)
            raise NonZeroExitError(result.command, result.exit_code)

        self.logger.success(f"{self.title} completed")

        if self.json_output:
            self.output_json(
                {
                    "operation": self.operation.value,
                    "dialect": adapter.dialect.value,
                    "success": True,
                    "exit_code": result.exit_code,
                    "command": result.command,
                    "output": result.stdout,
                    "log": str(self.logger.log_path) if self.logger.log_path else None,
                }
            )
        elif self.logger.log_path:
            self.print_dim(f"Logs saved to: {self.logger.log_path}")
