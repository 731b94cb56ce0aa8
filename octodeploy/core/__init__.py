"""Core argument building, configuration and validation"""

from .arguments import build_invocation
from .config_loader import ConfigLoader, OctoDeployConfig, ServerConfig, ToolConfig
from .validator import validate_deployment_timeout, validate_server_id

__all__ = [
    "build_invocation",
    "ConfigLoader",
    "OctoDeployConfig",
    "ServerConfig",
    "ToolConfig",
    "validate_deployment_timeout",
    "validate_server_id",
]
