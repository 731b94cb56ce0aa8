"""
Argument Building Helpers

Shared token emitters used by both dialect builders, and the dialect
dispatch entry point.

Every emitter skips blank input, so builders can list flags in emission
order without guarding each one.
"""

from typing import Iterable, Optional

from octodeploy.models import (
    CommandInvocation,
    Dialect,
    Operation,
    OperationParameters,
    ServerContext,
)
from octodeploy.utils import is_blank, require, split_arguments


def add_required(
    invocation: CommandInvocation, flag: str, value: Optional[str], field_name: str
) -> None:
    invocation.add(flag, require(value, field_name))


def add_required_each(
    invocation: CommandInvocation, flag: str, values: Iterable[str], field_name: str
) -> None:
    """Repeat ``flag value`` for each value, failing if none are non-blank."""
    present = [value for value in values if not is_blank(value)]
    if not present:
        require(None, field_name)
    add_each(invocation, flag, present)


def add_optional(
    invocation: CommandInvocation, flag: str, value: Optional[str]
) -> None:
    if not is_blank(value):
        invocation.add(flag, value)


def add_each(invocation: CommandInvocation, flag: str, values: Iterable[str]) -> None:
    for value in values:
        if not is_blank(value):
            invocation.add(flag, value)


def add_switch(invocation: CommandInvocation, flag: str, enabled: bool) -> None:
    if enabled:
        invocation.add(flag)


def add_secret(
    invocation: CommandInvocation, flag: str, value: Optional[str]
) -> None:
    if not is_blank(value):
        invocation.add_secret(flag, value)


def add_additional_arguments(
    invocation: CommandInvocation, raw: Optional[str]
) -> None:
    """Append shell-word split extra arguments; always the last tokens."""
    invocation.extend(split_arguments(raw))


def build_invocation(
    operation: Operation,
    params: OperationParameters,
    server: ServerContext,
    dialect: Dialect,
) -> CommandInvocation:
    """
    Build the primary CLI call for an operation.

    For the current dialect this is the operation call only; login and
    task wait calls are built by the adapter around it.

    Args:
        operation: Operation to build
        params: Operation inputs
        server: Server connection details
        dialect: Target CLI dialect

    Returns:
        CommandInvocation without the executable

    Raises:
        InvalidArgumentError: If a required input is blank or malformed
    """
    from octodeploy.core import current_arguments, legacy_arguments

    module = legacy_arguments if dialect == Dialect.LEGACY else current_arguments
    builders = {
        Operation.PACK: module.build_pack,
        Operation.PUSH: module.build_push,
        Operation.PUSH_BUILD_INFORMATION: module.build_push_build_information,
        Operation.CREATE_RELEASE: module.build_create_release,
        Operation.DEPLOY_RELEASE: module.build_deploy_release,
    }
    return builders[operation](params, server)
