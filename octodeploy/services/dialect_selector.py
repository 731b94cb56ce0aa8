"""
Dialect Selector

Tells the Go-based CLI apart from the legacy .NET one by running a command
only the former understands.
"""

import subprocess
from typing import Mapping, Optional

from octodeploy.constants import OCTO_EXTENSION_ENV, PROBE_COMMAND, PROBE_TIMEOUT_SECONDS
from octodeploy.exceptions import ConfigurationError
from octodeploy.models import Dialect


def detect_dialect(
    executable: str, environment: Optional[Mapping[str, str]] = None
) -> Dialect:
    """
    Probe the CLI with ``config list``.

    Exit 0 means the current CLI; any other exit code means legacy.

    Raises:
        ConfigurationError: If the executable cannot be launched
    """
    env = dict(environment) if environment is not None else None
    if env is not None:
        env[OCTO_EXTENSION_ENV] = ""

    try:
        result = subprocess.run(
            [executable, *PROBE_COMMAND],
            env=env,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=PROBE_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ConfigurationError(
            f"Unable to run Octopus CLI to detect its version: {executable}",
            context=str(e),
        )

    return Dialect.CURRENT if result.returncode == 0 else Dialect.LEGACY
