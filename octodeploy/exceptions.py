"""
octodeploy Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
"""

from typing import Optional


class OctoDeployError(Exception):
    """Base exception for all octodeploy errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(OctoDeployError):
    """Raised when configuration is invalid or missing."""

    pass


class InvalidArgumentError(OctoDeployError):
    """Raised when a required operation input is blank or malformed."""

    pass


class ToolNotFoundError(OctoDeployError):
    """Raised when the Octopus CLI executable cannot be resolved."""

    pass


class ProcessLaunchError(OctoDeployError):
    """Raised when the Octopus CLI process cannot be started."""

    pass


class NonZeroExitError(OctoDeployError):
    """Raised when the Octopus CLI ran but reported failure."""

    def __init__(self, command: str, exit_code: int):
        self.command = command
        self.exit_code = exit_code
        super().__init__(
            f"Octopus CLI command failed: {command}",
            context=f"Exit code: {exit_code}",
        )


class UnparsableOutputError(OctoDeployError):
    """Raised when the CLI output lacks a field the next step depends on."""

    def __init__(self, field_name: str, output: str):
        self.field_name = field_name
        self.output = output
        snippet = output.strip()[:200] or "<empty>"
        super().__init__(
            f"Could not read '{field_name}' from Octopus CLI output",
            context=f"Output: {snippet}",
        )


class ServerNotFoundError(ConfigurationError):
    """Raised when a server id is not configured."""

    def __init__(self, server_id: str, available_servers: list[str]):
        self.server_id = server_id
        self.available_servers = available_servers
        message = f"Octopus server '{server_id}' is not configured"
        context = f"Available servers: {', '.join(available_servers) or 'none'}"
        super().__init__(message, context)
