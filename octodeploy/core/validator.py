"""
Input Validation

Checks run before any Octopus CLI process is launched.
"""

from typing import Optional

from octodeploy.constants import ERROR_INVALID_TIMEOUT
from octodeploy.models import ValidationResult
from octodeploy.utils import is_blank, is_valid_timespan


def validate_deployment_timeout(value: Optional[str]) -> ValidationResult:
    """Blank is allowed; anything else must be ``HH:mm:ss``."""
    result = ValidationResult()
    if not is_blank(value) and not is_valid_timespan(value):
        result.add_error(ERROR_INVALID_TIMEOUT)
    return result


def validate_server_id(config, server_id: Optional[str]) -> ValidationResult:
    """
    Check that a server id resolves to a configured server.

    Args:
        config: Loaded OctoDeployConfig
        server_id: Server id (blank selects the default server)

    Returns:
        ValidationResult with an error when the server is unknown
    """
    result = ValidationResult()
    servers = config.list_servers()

    if not servers:
        result.add_error("There are no Octopus servers configured.")
        return result

    if is_blank(server_id):
        if is_blank(config.default_server) and len(servers) > 1:
            result.add_error(
                "No server id given and no default_server is configured."
            )
        elif not is_blank(config.default_server) and config.default_server not in servers:
            result.add_error(
                f"Default server '{config.default_server}' is not configured."
            )
        return result

    if server_id not in servers:
        result.add_error(
            f"There are no Octopus servers configured with the id '{server_id}'."
        )
    elif is_blank(config.servers[server_id].url):
        result.add_warning(f"Server '{server_id}' has no URL.")
    return result
