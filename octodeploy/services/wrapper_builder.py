"""
CLI Wrapper Builder

Resolves server and tool configuration into a ready-to-use adapter,
probing the CLI dialect once per build.
"""

import shutil
from pathlib import Path
from typing import Mapping, Optional

from octodeploy.constants import ERROR_INPUT_BLANK, ERROR_TOOL_PATH_MISSING
from octodeploy.core.config_loader import OctoDeployConfig
from octodeploy.exceptions import ConfigurationError, ToolNotFoundError
from octodeploy.logger import BuildLogger
from octodeploy.models import Dialect, ServerContext
from octodeploy.services.adapters import CliAdapter, CurrentCliAdapter, LegacyCliAdapter
from octodeploy.services.dialect_selector import detect_dialect
from octodeploy.services.process_invoker import ProcessInvoker
from octodeploy.utils import is_blank

ADAPTERS = {
    Dialect.LEGACY: LegacyCliAdapter,
    Dialect.CURRENT: CurrentCliAdapter,
}


class CliWrapperBuilder:
    """
    Fluent builder for CliAdapter instances.

    Example:
        adapter = (
            CliWrapperBuilder(config, logger)
            .server_id("production")
            .tool_id("octopus")
            .space_id("Spaces-1")
            .workspace(Path.cwd())
            .build()
        )
    """

    def __init__(
        self,
        config: OctoDeployConfig,
        logger: BuildLogger,
        environment: Optional[Mapping[str, str]] = None,
    ):
        self.config = config
        self.logger = logger
        self.environment = dict(
            config.environment if environment is None else environment
        )
        self._server_id: Optional[str] = None
        self._tool_id: Optional[str] = None
        self._space_id: Optional[str] = None
        self._workspace: Optional[Path] = None
        self._verbose = False
        self._require_server = True

    def server_id(self, server_id: Optional[str]) -> "CliWrapperBuilder":
        self._server_id = server_id
        return self

    def tool_id(self, tool_id: Optional[str]) -> "CliWrapperBuilder":
        self._tool_id = tool_id
        return self

    def space_id(self, space_id: Optional[str]) -> "CliWrapperBuilder":
        self._space_id = space_id
        return self

    def workspace(self, workspace: Optional[Path]) -> "CliWrapperBuilder":
        self._workspace = workspace
        return self

    def verbose(self, verbose: bool) -> "CliWrapperBuilder":
        self._verbose = verbose
        return self

    def require_server(self, required: bool) -> "CliWrapperBuilder":
        """Pack runs locally; it may go without a configured server."""
        self._require_server = required
        return self

    def resolve_server(self) -> ServerContext:
        """
        Server details for this build, without caching.

        When no server is required (pack), an unknown or incomplete server
        yields a context with only the space and verbosity set.

        Raises:
            ConfigurationError: If a required server is unknown or incomplete
        """
        if self._require_server:
            return self._server_context()
        try:
            return self._server_context()
        except ConfigurationError as e:
            self.logger.log(f"Continuing without a server: {e.message}", "DEBUG")
            return ServerContext(space_id=self._space_id, verbose=self._verbose)

    def _server_context(self) -> ServerContext:
        server = self.config.get_server(self._server_id)
        if is_blank(server.url):
            raise ConfigurationError(ERROR_INPUT_BLANK.format(field="Octopus URL"),
                                     context=f"Server: {server.server_id}")
        if is_blank(server.api_key):
            raise ConfigurationError(ERROR_INPUT_BLANK.format(field="API Key"),
                                     context=f"Server: {server.server_id}")

        return ServerContext(
            url=server.url,
            api_key=server.api_key,
            space_id=self._space_id if not is_blank(self._space_id) else server.space_id,
            ignore_ssl_errors=server.ignore_ssl_errors,
            verbose=self._verbose,
        )

    def resolve_executable(self, path: str) -> str:
        """
        Absolute path of the CLI binary.

        Raises:
            ToolNotFoundError: If the path does not resolve to an executable
        """
        if is_blank(path):
            raise ToolNotFoundError(ERROR_TOOL_PATH_MISSING)
        resolved = shutil.which(str(Path(path).expanduser()))
        if resolved is None:
            raise ToolNotFoundError(ERROR_TOOL_PATH_MISSING, context=f"Path: {path}")
        return resolved

    def build(self) -> CliAdapter:
        """
        Build the adapter for the configured tool.

        The dialect comes from the tool configuration when set, otherwise
        from a single probe of the binary.

        Raises:
            ConfigurationError: If configuration is missing or the probe fails
            ToolNotFoundError: If the CLI cannot be found
        """
        server = self.resolve_server()
        tool = self.config.get_tool(self._tool_id)
        executable = self.resolve_executable(tool.path)

        dialect = tool.dialect
        if dialect is None:
            dialect = detect_dialect(executable, self.environment)
            self.logger.log(f"Detected {dialect.value} Octopus CLI at {executable}")

        invoker = ProcessInvoker(
            self.logger,
            environment=self.environment,
            working_directory=self._workspace,
            credentials_in_environment=tool.credentials_in_environment,
        )
        return ADAPTERS[dialect](executable, server, invoker)
