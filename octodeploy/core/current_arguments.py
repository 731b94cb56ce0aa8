"""
Current Dialect Arguments

Token lists for the Go-based ``octopus`` CLI: noun-verb commands,
kebab-case flags, a separate ``login`` call, and JSON output so the
adapter can read back release versions and server task ids.
"""

from typing import Optional, Sequence

from octodeploy.constants import (
    DEFAULT_PACKAGE_FORMAT,
    OUTPUT_FORMAT,
    PACKAGE_FORMAT_ALIASES,
)
from octodeploy.core.arguments import (
    add_additional_arguments,
    add_each,
    add_optional,
    add_required,
    add_required_each,
    add_switch,
)
from octodeploy.models import CommandInvocation, OperationParameters, ServerContext
from octodeploy.utils import is_blank, non_blank, require, timespan_to_seconds


def package_format(value: Optional[str]) -> str:
    """Normalise the pack format, ``zip`` when unset."""
    if is_blank(value):
        return DEFAULT_PACKAGE_FORMAT
    wanted = value.strip().lower()
    return PACKAGE_FORMAT_ALIASES.get(wanted, wanted)


def _add_trailing_arguments(
    invocation: CommandInvocation, server: ServerContext
) -> None:
    add_optional(invocation, "--space", server.space_id)
    invocation.add("--no-prompt", "--output-format", OUTPUT_FORMAT)


def _finish(
    invocation: CommandInvocation, params: OperationParameters, server: ServerContext
) -> CommandInvocation:
    _add_trailing_arguments(invocation, server)
    add_additional_arguments(invocation, params.additional_args)
    return invocation


def _overwrite_mode(invocation: CommandInvocation, params: OperationParameters) -> None:
    if params.overwrite_mode is not None:
        invocation.add("--overwrite-mode", params.overwrite_mode.current_value)


def build_login(server: ServerContext) -> CommandInvocation:
    """
    ``login`` call that stores credentials for the following commands.

    Raises:
        InvalidArgumentError: If the server URL or API key is blank
    """
    invocation = CommandInvocation().add("login")
    add_required(invocation, "--server", server.url, "Octopus URL")
    invocation.add_secret("--api-key", require(server.api_key, "API Key"))
    add_switch(invocation, "--ignore-ssl-errors", server.ignore_ssl_errors)
    invocation.add("--no-prompt")
    return invocation


def build_pack(params: OperationParameters, server: ServerContext) -> CommandInvocation:
    invocation = CommandInvocation().add(
        "package", package_format(params.package_format), "create"
    )
    add_required(invocation, "--id", params.package_id, "Package ID")
    add_optional(invocation, "--version", params.package_version)
    add_optional(invocation, "--base-path", params.source_path)
    add_optional(invocation, "--out-folder", params.output_path)
    add_each(invocation, "--include", params.include_paths)
    add_switch(invocation, "--overwrite", params.overwrite_existing)
    add_switch(invocation, "--verbose", server.verbose)
    return _finish(invocation, params, server)


def build_push(params: OperationParameters, server: ServerContext) -> CommandInvocation:
    invocation = CommandInvocation().add("package", "upload")
    add_required_each(invocation, "--package", params.package_paths, "Package paths")
    _overwrite_mode(invocation, params)
    return _finish(invocation, params, server)


def build_push_build_information(
    params: OperationParameters, server: ServerContext
) -> CommandInvocation:
    invocation = CommandInvocation().add("build-information", "upload")
    add_required_each(invocation, "--package-id", params.package_ids, "Package IDs")
    add_required(invocation, "--version", params.version, "Version")
    add_required(
        invocation, "--file", params.build_information_file, "Build information file"
    )
    _overwrite_mode(invocation, params)
    return _finish(invocation, params, server)


def build_create_release(
    params: OperationParameters, server: ServerContext
) -> CommandInvocation:
    """``release create``; deployment is a separate call in this dialect."""
    invocation = CommandInvocation().add("release", "create")
    add_required(invocation, "--project", params.project, "Project name")
    add_optional(invocation, "--version", params.version)
    add_optional(invocation, "--channel", params.channel)
    add_optional(invocation, "--release-notes", params.release_notes)
    add_optional(invocation, "--package-version", params.default_package_version)
    add_optional(invocation, "--git-ref", params.git_ref)
    add_optional(invocation, "--git-commit", params.git_commit)
    add_each(invocation, "--package", params.packages)
    return _finish(invocation, params, server)


def build_deploy_release(
    params: OperationParameters, server: ServerContext
) -> CommandInvocation:
    invocation = CommandInvocation().add("release", "deploy")
    add_required(invocation, "--project", params.project, "Project name")
    add_required(invocation, "--version", params.version, "Release version")
    add_required(invocation, "--environment", params.environment, "Environment")
    add_optional(invocation, "--tenant", params.tenant)
    add_optional(invocation, "--tenant-tag", params.tenant_tag)
    add_each(invocation, "--variable", params.variables)
    return _finish(invocation, params, server)


def build_task_wait(
    task_ids: Sequence[str], params: OperationParameters, server: ServerContext
) -> CommandInvocation:
    """
    ``task wait`` for the server tasks of a deployment.

    Args:
        task_ids: ServerTasks ids returned by ``release deploy``
        params: Deployment inputs (timeout and cancel flag)
        server: Server connection details

    Raises:
        InvalidArgumentError: If the timeout is not ``HH:mm:ss``
    """
    ids = non_blank(task_ids)
    if not ids:
        require(None, "Task ID")
    invocation = CommandInvocation().add("task", "wait", *ids)
    if not is_blank(params.deployment_timeout):
        invocation.add("--timeout", str(timespan_to_seconds(params.deployment_timeout)))
    invocation.add("--progress")
    add_switch(invocation, "--cancel-on-timeout", params.cancel_on_timeout)
    _add_trailing_arguments(invocation, server)
    return invocation
