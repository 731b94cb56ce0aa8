"""Configuration management for octodeploy servers and Octopus CLI tools"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import dotenv_values

from octodeploy.constants import (
    CONFIG_ENV,
    CONFIG_FILE_NAME,
    DEFAULT_LOG_DIR,
    USER_CONFIG_DIR,
    USER_CONFIG_FILE_NAME,
)
from octodeploy.exceptions import ConfigurationError, ServerNotFoundError
from octodeploy.models import Dialect
from octodeploy.utils import inject_environment_variables, is_blank


@dataclass
class ServerConfig:
    """Octopus server connection"""

    server_id: str
    url: str
    api_key: str
    space_id: Optional[str] = None
    ignore_ssl_errors: bool = False

    def __repr__(self) -> str:
        return f"ServerConfig(server_id={self.server_id!r}, url={self.url!r})"


@dataclass
class ToolConfig:
    """Octopus CLI installation"""

    tool_id: str
    path: str
    dialect: Optional[Dialect] = None  # None = probe the binary
    credentials_in_environment: bool = False


class OctoDeployConfig:
    """Represents a loaded and validated octodeploy configuration"""

    def __init__(
        self,
        config_dict: Dict[str, Any],
        config_path: Optional[Path] = None,
        environment: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize configuration

        Args:
            config_dict: Raw configuration dictionary from octodeploy.yml
            config_path: Path the configuration was read from (optional)
            environment: Build environment used for ${VAR} substitution
        """
        self.raw_config = config_dict or {}
        self.config_path = config_path
        self.environment = dict(environment or {})
        self._validate()

        self.servers = self._load_servers()
        self.tools = self._load_tools()
        self.default_server = self._value(self.raw_config.get("default_server"))
        self.default_tool = self._value(self.raw_config.get("default_tool"))

    def _validate(self) -> None:
        for section in ("servers", "tools"):
            value = self.raw_config.get(section)
            if value is not None and not isinstance(value, dict):
                raise ConfigurationError(
                    f"Invalid '{section}' section: must be a mapping of ids",
                    context=str(self.config_path) if self.config_path else None,
                )

    def _value(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        return inject_environment_variables(str(value), self.environment)

    def _load_servers(self) -> Dict[str, ServerConfig]:
        servers = {}
        for server_id, entry in (self.raw_config.get("servers") or {}).items():
            entry = entry or {}
            servers[str(server_id)] = ServerConfig(
                server_id=str(server_id),
                url=self._value(entry.get("url")) or "",
                api_key=self._value(entry.get("api_key")) or "",
                space_id=self._value(entry.get("space")),
                ignore_ssl_errors=bool(entry.get("ignore_ssl_errors", False)),
            )
        return servers

    def _load_tools(self) -> Dict[str, ToolConfig]:
        tools = {}
        for tool_id, entry in (self.raw_config.get("tools") or {}).items():
            entry = entry or {}
            dialect = entry.get("dialect")
            tools[str(tool_id)] = ToolConfig(
                tool_id=str(tool_id),
                path=self._value(entry.get("path")) or "",
                dialect=Dialect.parse(dialect) if not is_blank(dialect) else None,
                credentials_in_environment=bool(
                    entry.get("credentials_in_environment", False)
                ),
            )
        return tools

    def list_servers(self) -> List[str]:
        return sorted(self.servers)

    def get_server(self, server_id: Optional[str] = None) -> ServerConfig:
        """
        Look up a server, falling back to the default when no id is given.

        Raises:
            ServerNotFoundError: If the server is not configured
        """
        if is_blank(server_id):
            server_id = self.default_server
            if is_blank(server_id) and len(self.servers) == 1:
                server_id = next(iter(self.servers))
        if is_blank(server_id) or server_id not in self.servers:
            raise ServerNotFoundError(server_id or "<default>", self.list_servers())
        return self.servers[server_id]

    def get_tool(self, tool_id: Optional[str] = None) -> ToolConfig:
        """
        Look up an Octopus CLI tool, falling back to the default.

        Raises:
            ConfigurationError: If the tool is not configured
        """
        if is_blank(tool_id):
            tool_id = self.default_tool
            if is_blank(tool_id) and len(self.tools) == 1:
                tool_id = next(iter(self.tools))
        if is_blank(tool_id) or tool_id not in self.tools:
            raise ConfigurationError(
                f"Octopus CLI tool '{tool_id or '<default>'}' is not configured",
                context=f"Available tools: {', '.join(sorted(self.tools)) or 'none'}",
            )
        return self.tools[tool_id]

    def get_log_dir(self, working_directory: Path) -> Path:
        log_dir = self._value(self.raw_config.get("log_dir")) or DEFAULT_LOG_DIR
        path = Path(log_dir).expanduser()
        return path if path.is_absolute() else working_directory / path


class ConfigLoader:
    """Locates and loads octodeploy.yml plus the build environment"""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        working_directory: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.explicit_path = Path(config_path) if config_path else None
        self.working_directory = Path(working_directory or Path.cwd())
        self.environ = dict(os.environ if environ is None else environ)

    def find_config_file(self) -> Optional[Path]:
        """
        Resolve the configuration file.

        Lookup order: explicit path, $OCTODEPLOY_CONFIG, ./octodeploy.yml,
        ~/.octodeploy/config.yml.

        Raises:
            ConfigurationError: If an explicitly named file does not exist
        """
        if self.explicit_path:
            if not self.explicit_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {self.explicit_path}"
                )
            return self.explicit_path

        from_env = self.environ.get(CONFIG_ENV)
        if not is_blank(from_env):
            path = Path(from_env).expanduser()
            if not path.exists():
                raise ConfigurationError(
                    f"Config file not found: {path}", context=f"Set via ${CONFIG_ENV}"
                )
            return path

        candidates = [
            self.working_directory / CONFIG_FILE_NAME,
            Path(USER_CONFIG_DIR).expanduser() / USER_CONFIG_FILE_NAME,
        ]
        for candidate in candidates:
            if candidate.exists():
                return candidate
        return None

    def load_environment(self, config_path: Optional[Path] = None) -> Dict[str, str]:
        """
        Build environment: process environment overlaid with .env files.

        The .env beside the config file is read first, then the one in the
        working directory, so the workspace wins.
        """
        environment = dict(self.environ)
        env_files = []
        if config_path:
            env_files.append(config_path.parent / ".env")
        env_files.append(self.working_directory / ".env")

        for env_file in dict.fromkeys(env_files):
            if env_file.exists():
                values = dotenv_values(env_file)
                environment.update({k: v for k, v in values.items() if v is not None})
        return environment

    def load(self) -> OctoDeployConfig:
        """
        Load configuration from disk.

        Returns:
            OctoDeployConfig (empty when no file is found)

        Raises:
            ConfigurationError: If the file cannot be parsed
        """
        config_path = self.find_config_file()
        environment = self.load_environment(config_path)

        config_dict: Dict[str, Any] = {}
        if config_path:
            try:
                with open(config_path) as f:
                    config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in {config_path}", context=str(e)
                )
            if not isinstance(config_dict, dict):
                raise ConfigurationError(
                    f"Invalid config file: {config_path}",
                    context="Top level must be a mapping",
                )

        return OctoDeployConfig(config_dict, config_path, environment)
