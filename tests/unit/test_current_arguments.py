"""Token lists for the Go-based octopus CLI."""

import pytest

from octodeploy.core import current_arguments
from octodeploy.core.arguments import build_invocation
from octodeploy.exceptions import InvalidArgumentError
from octodeploy.models import (
    Dialect,
    Operation,
    OperationParameters,
    OverwriteMode,
    ServerContext,
)

TRAILING = ["--space", "Spaces-1", "--no-prompt", "--output-format", "json"]


def test_pack_scenario_tokens(server: ServerContext) -> None:
    params = OperationParameters(
        package_id="MyPackage",
        package_version="1.0.0",
        package_format="zip",
        overwrite_existing=True,
    )

    tokens = build_invocation(Operation.PACK, params, server, Dialect.CURRENT).tokens

    assert tokens == [
        "package",
        "zip",
        "create",
        "--id",
        "MyPackage",
        "--version",
        "1.0.0",
        "--overwrite",
        *TRAILING,
    ]


@pytest.mark.parametrize("value,expected", [(None, "zip"), ("NuPkg", "nuget"), ("nuget", "nuget")])
def test_pack_format(server, value, expected) -> None:
    params = OperationParameters(package_id="Web", package_format=value)

    tokens = current_arguments.build_pack(params, server).tokens

    assert tokens[:3] == ["package", expected, "create"]


def test_pack_optional_paths(server: ServerContext) -> None:
    params = OperationParameters(
        package_id="Web",
        source_path="dist",
        output_path="out",
        include_paths=("bin/**",),
        additional_args="--verbose",
    )

    tokens = current_arguments.build_pack(params, server).tokens

    assert tokens[3:11] == [
        "--id",
        "Web",
        "--base-path",
        "dist",
        "--out-folder",
        "out",
        "--include",
        "bin/**",
    ]
    assert tokens[-6:] == [*TRAILING, "--verbose"]


def test_login_tokens_and_mask(server: ServerContext) -> None:
    invocation = current_arguments.build_login(server)

    assert invocation.tokens == [
        "login",
        "--server",
        "https://octopus.example.com",
        "--api-key",
        "API-KEY123",
        "--no-prompt",
    ]
    (index,) = invocation.masked_indices
    assert invocation.argv("octopus")[index] == "API-KEY123"


def test_login_requires_api_key() -> None:
    with pytest.raises(InvalidArgumentError, match="API Key"):
        current_arguments.build_login(ServerContext(url="https://o.example.com"))


def test_login_ignore_ssl_errors() -> None:
    server = ServerContext(url="https://o", api_key="k", ignore_ssl_errors=True)

    assert "--ignore-ssl-errors" in current_arguments.build_login(server).tokens


@pytest.mark.parametrize(
    "mode,expected",
    [
        (OverwriteMode.OVERWRITE_EXISTING, "overwrite"),
        (OverwriteMode.FAIL_IF_EXISTS, "fail"),
        (OverwriteMode.IGNORE_IF_EXISTS, "ignore"),
    ],
)
def test_push_overwrite_mode_mapping(server, mode, expected) -> None:
    params = OperationParameters(package_paths=("Web.1.0.0.zip",), overwrite_mode=mode)

    tokens = current_arguments.build_push(params, server).tokens

    assert tokens == [
        "package",
        "upload",
        "--package",
        "Web.1.0.0.zip",
        "--overwrite-mode",
        expected,
        *TRAILING,
    ]


def test_build_information_tokens(server: ServerContext) -> None:
    params = OperationParameters(
        package_ids=("Web",),
        version="1.0.0",
        build_information_file="octopus.buildinfo",
    )

    tokens = current_arguments.build_push_build_information(params, server).tokens

    assert tokens == [
        "build-information",
        "upload",
        "--package-id",
        "Web",
        "--version",
        "1.0.0",
        "--file",
        "octopus.buildinfo",
        *TRAILING,
    ]


def test_create_release_tokens(server: ServerContext) -> None:
    params = OperationParameters(
        project="Web",
        channel="Default",
        release_notes="Fixes",
        default_package_version="2.0.0",
        git_ref="main",
        packages=("Deploy:1.0.0",),
        deploy_to_environment="Staging",
    )

    tokens = current_arguments.build_create_release(params, server).tokens

    assert tokens[:4] == ["release", "create", "--project", "Web"]
    assert "--release-notes" in tokens
    assert "--package-version" in tokens
    assert "--git-ref" in tokens
    assert tokens[tokens.index("--package") + 1] == "Deploy:1.0.0"
    # deployment happens in a separate call
    assert "--deploy-to" not in tokens
    assert "--environment" not in tokens


def test_deploy_release_tokens(server: ServerContext) -> None:
    params = OperationParameters(
        project="Web",
        version="1.0.0",
        environment="Production",
        tenant="Acme",
        tenant_tag="Tier/Gold",
        variables=("Greeting:Hello", "Name:World"),
        wait_for_deployment=True,
        deployment_timeout="00:15:30",
    )

    tokens = current_arguments.build_deploy_release(params, server).tokens

    assert tokens == [
        "release",
        "deploy",
        "--project",
        "Web",
        "--version",
        "1.0.0",
        "--environment",
        "Production",
        "--tenant",
        "Acme",
        "--tenant-tag",
        "Tier/Gold",
        "--variable",
        "Greeting:Hello",
        "--variable",
        "Name:World",
        *TRAILING,
    ]


def test_task_wait_converts_timeout_to_seconds(server: ServerContext) -> None:
    params = OperationParameters(deployment_timeout="00:15:30", cancel_on_timeout=True)

    tokens = current_arguments.build_task_wait(["ServerTasks-1"], params, server).tokens

    assert tokens == [
        "task",
        "wait",
        "ServerTasks-1",
        "--timeout",
        "930",
        "--progress",
        "--cancel-on-timeout",
        *TRAILING,
    ]


def test_task_wait_rejects_bad_timeout(server: ServerContext) -> None:
    params = OperationParameters(deployment_timeout="15 minutes")

    with pytest.raises(InvalidArgumentError):
        current_arguments.build_task_wait(["ServerTasks-1"], params, server)


def test_task_wait_requires_task_id(server: ServerContext) -> None:
    with pytest.raises(InvalidArgumentError):
        current_arguments.build_task_wait([], OperationParameters(), server)


def test_space_is_omitted_when_unset() -> None:
    server = ServerContext(url="https://o", api_key="k")
    params = OperationParameters(package_paths=("a.zip",))

    tokens = current_arguments.build_push(params, server).tokens

    assert "--space" not in tokens
    assert tokens[-3:] == ["--no-prompt", "--output-format", "json"]


@pytest.mark.parametrize(
    "operation,params",
    [
        (Operation.PACK, OperationParameters()),
        (Operation.PUSH, OperationParameters(package_paths=("", " "))),
        (Operation.PUSH_BUILD_INFORMATION, OperationParameters(package_ids=("Web",), version="1")),
        (Operation.CREATE_RELEASE, OperationParameters(project="")),
        (Operation.DEPLOY_RELEASE, OperationParameters(version="1", environment="Prod")),
    ],
)
def test_blank_required_fields_raise(server, operation, params) -> None:
    with pytest.raises(InvalidArgumentError):
        build_invocation(operation, params, server, Dialect.CURRENT)


def test_unbalanced_additional_args_raise(server: ServerContext) -> None:
    params = OperationParameters(package_id="Web", additional_args='--notes "oops')

    with pytest.raises(InvalidArgumentError):
        build_invocation(Operation.PACK, params, server, Dialect.CURRENT)


def test_builder_is_deterministic(server: ServerContext) -> None:
    params = OperationParameters(project="Web", version="1.0.0", environment="Prod")

    first = build_invocation(Operation.DEPLOY_RELEASE, params, server, Dialect.CURRENT)
    second = build_invocation(Operation.DEPLOY_RELEASE, params, server, Dialect.CURRENT)

    assert first.tokens == second.tokens
    assert first.masked_indices == second.masked_indices
