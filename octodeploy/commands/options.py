"""Click options shared by the operation commands"""

import click

from octodeploy.base import CommonOptions
from octodeploy.models import OverwriteMode

_COMMON_OPTIONS = [
    click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False),
        help="Path to octodeploy.yml",
    ),
    click.option("--server-id", help="Configured Octopus server (default server if omitted)"),
    click.option("--tool-id", help="Configured Octopus CLI tool (default tool if omitted)"),
    click.option("--space", "space_id", help="Space id, overrides the server's space"),
    click.option(
        "--workspace",
        type=click.Path(file_okay=False),
        help="Working directory for the Octopus CLI (default: current directory)",
    ),
    click.option(
        "--additional-args",
        help="Extra arguments appended to the CLI call, split like a shell would",
    ),
    click.option("--verbose", "-v", is_flag=True, help="Show all command output"),
    click.option("--json", "json_output", is_flag=True, help="Output in JSON format"),
]

_COMMON_KEYS = (
    "config_path",
    "server_id",
    "tool_id",
    "space_id",
    "workspace",
    "additional_args",
    "verbose",
    "json_output",
)


def common_options(func):
    """Attach the shared options to a command."""
    for option in reversed(_COMMON_OPTIONS):
        func = option(func)
    return func


def pop_common_options(kwargs: dict) -> CommonOptions:
    """Move the shared option values out of a command's kwargs."""
    return CommonOptions(**{key: kwargs.pop(key) for key in _COMMON_KEYS})


def overwrite_mode_option(func):
    return click.option(
        "--overwrite-mode",
        type=click.Choice([mode.value for mode in OverwriteMode], case_sensitive=False),
        help="Behaviour when the package already exists on the server",
    )(func)


def deployment_options(func):
    """Tenant, variable and wait options shared by release commands."""
    options = [
        click.option("--tenant", help="Tenant to deploy for (first of a comma list)"),
        click.option("--tenant-tag", help="Deploy to tenants with this tag"),
        click.option(
            "--variable",
            "variables",
            multiple=True,
            help="Prompted variable as name=value (repeatable)",
        ),
        click.option("--wait", "wait_for_deployment", is_flag=True, help="Wait for the deployment"),
        click.option("--timeout", "deployment_timeout", help="Wait timeout as HH:mm:ss"),
        click.option(
            "--cancel-on-timeout", is_flag=True, help="Cancel the deployment if the wait times out"
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func
