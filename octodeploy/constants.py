"""
octodeploy Constants

Centralized constants for CLI vocabulary, environment variables and messages.
"""

# Environment variables set on every Octopus CLI child process
OCTO_EXTENSION_ENV = "OCTOEXTENSION"
OCTOPUS_URL_ENV = "OCTOPUS_URL"
OCTOPUS_API_KEY_ENV = "OCTOPUS_API_KEY"
OCTOPUS_SPACE_ENV = "OCTOPUS_SPACE"

# Configuration discovery
CONFIG_ENV = "OCTODEPLOY_CONFIG"
CONFIG_FILE_NAME = "octodeploy.yml"
USER_CONFIG_DIR = "~/.octodeploy"
USER_CONFIG_FILE_NAME = "config.yml"
DEFAULT_LOG_DIR = ".octodeploy/logs"

# Dialect probe: succeeds only on the Go-based CLI
PROBE_COMMAND = ["config", "list"]
PROBE_TIMEOUT_SECONDS = 60

# Current dialect
DEFAULT_PACKAGE_FORMAT = "zip"
PACKAGE_FORMAT_ALIASES = {
    "nupkg": "nuget",
}
OUTPUT_FORMAT = "json"
SERVER_TASK_ID_FIELD = "ServerTaskId"
VERSION_FIELD = "Version"

# Build information
BUILD_INFORMATION_FILE = "octopus.buildinfo"
BUILD_ENVIRONMENT = "octodeploy"

# Log rendering
MASK = "********"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Error Messages
ERROR_INPUT_BLANK = "OCTOPUS-INPUT-ERROR-0002: {field} can not be empty"
ERROR_TOOL_PATH_MISSING = (
    "OCTOPUS-INPUT-ERROR-0003: The path for the selected Octopus CLI does not exist."
)
ERROR_COMMAND_FAILED = (
    "Octopus CLI command failed. Please check the build log for details on the error."
)
ERROR_INVALID_TIMEOUT = (
    "This is not a valid deployment timeout it should be in the format HH:mm:ss"
)
