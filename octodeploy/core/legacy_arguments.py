"""
Legacy Dialect Arguments

Token lists for the .NET ``octo`` CLI: one verb per operation, camelCase
flags, and server credentials repeated on every call.
"""

from octodeploy.core.arguments import (
    add_additional_arguments,
    add_each,
    add_optional,
    add_required,
    add_required_each,
    add_secret,
    add_switch,
)
from octodeploy.models import CommandInvocation, OperationParameters, ServerContext


def _add_wait_scalars(invocation: CommandInvocation, params: OperationParameters) -> None:
    if params.wait_for_deployment:
        add_optional(invocation, "--deploymentTimeout", params.deployment_timeout)


def _add_wait_switches(invocation: CommandInvocation, params: OperationParameters) -> None:
    if params.wait_for_deployment:
        invocation.add("--progress", "--waitForDeployment")
        add_switch(invocation, "--cancelOnTimeout", params.cancel_on_timeout)


def _add_common_arguments(
    invocation: CommandInvocation, server: ServerContext, inline_credentials: bool
) -> None:
    """Server connection flags appended to every legacy call."""
    if inline_credentials:
        add_optional(invocation, "--server", server.url)
        add_secret(invocation, "--apiKey", server.api_key)
        add_optional(invocation, "--space", server.space_id)
    add_switch(invocation, "--ignoreSslErrors", server.ignore_ssl_errors)
    add_switch(invocation, "--debug", server.verbose)


def _finish(
    invocation: CommandInvocation,
    params: OperationParameters,
    server: ServerContext,
    inline_credentials: bool,
) -> CommandInvocation:
    _add_common_arguments(invocation, server, inline_credentials)
    add_additional_arguments(invocation, params.additional_args)
    return invocation


def build_pack(
    params: OperationParameters, server: ServerContext, inline_credentials: bool = True
) -> CommandInvocation:
    invocation = CommandInvocation().add("pack")
    add_required(invocation, "--id", params.package_id, "Package ID")
    add_optional(invocation, "--version", params.package_version)
    add_optional(invocation, "--format", params.package_format)
    add_optional(invocation, "--basePath", params.source_path)
    add_optional(invocation, "--outFolder", params.output_path)
    add_each(invocation, "--include", params.include_paths)
    add_switch(invocation, "--overwrite", params.overwrite_existing)
    add_switch(invocation, "--verbose", server.verbose)
    return _finish(invocation, params, server, inline_credentials)


def build_push(
    params: OperationParameters, server: ServerContext, inline_credentials: bool = True
) -> CommandInvocation:
    invocation = CommandInvocation().add("push")
    add_required_each(invocation, "--package", params.package_paths, "Package paths")
    if params.overwrite_mode is not None:
        invocation.add("--overwrite-mode", params.overwrite_mode.value)
    return _finish(invocation, params, server, inline_credentials)


def build_push_build_information(
    params: OperationParameters, server: ServerContext, inline_credentials: bool = True
) -> CommandInvocation:
    invocation = CommandInvocation().add("build-information")
    add_required_each(invocation, "--package-id", params.package_ids, "Package IDs")
    add_required(invocation, "--version", params.version, "Version")
    add_required(
        invocation, "--file", params.build_information_file, "Build information file"
    )
    if params.overwrite_mode is not None:
        invocation.add("--overwrite-mode", params.overwrite_mode.value)
    return _finish(invocation, params, server, inline_credentials)


def build_create_release(
    params: OperationParameters, server: ServerContext, inline_credentials: bool = True
) -> CommandInvocation:
    """
    ``create-release``, optionally deploying in the same call.

    Deployment flags (``--deployTo``, tenant, variables, wait) ride along
    on the create call; the legacy CLI deploys the new release itself.
    """
    invocation = CommandInvocation().add("create-release")
    add_required(invocation, "--project", params.project, "Project name")
    add_optional(invocation, "--version", params.version)
    add_optional(invocation, "--channel", params.channel)
    add_optional(invocation, "--releaseNotes", params.release_notes)
    add_optional(invocation, "--packageVersion", params.default_package_version)
    add_optional(invocation, "--gitRef", params.git_ref)
    add_optional(invocation, "--gitCommit", params.git_commit)
    add_optional(invocation, "--deployTo", params.deploy_to_environment)
    add_optional(invocation, "--tenant", params.tenant)
    add_optional(invocation, "--tenantTag", params.tenant_tag)
    _add_wait_scalars(invocation, params)
    add_each(invocation, "--package", params.packages)
    add_each(invocation, "--variable", params.variables)
    _add_wait_switches(invocation, params)
    return _finish(invocation, params, server, inline_credentials)


def build_deploy_release(
    params: OperationParameters, server: ServerContext, inline_credentials: bool = True
) -> CommandInvocation:
    invocation = CommandInvocation().add("deploy-release")
    add_required(invocation, "--project", params.project, "Project name")
    add_required(invocation, "--version", params.version, "Release version")
    add_required(invocation, "--deployTo", params.environment, "Environment")
    add_optional(invocation, "--tenant", params.tenant)
    add_optional(invocation, "--tenantTag", params.tenant_tag)
    _add_wait_scalars(invocation, params)
    add_each(invocation, "--variable", params.variables)
    _add_wait_switches(invocation, params)
    return _finish(invocation, params, server, inline_credentials)
