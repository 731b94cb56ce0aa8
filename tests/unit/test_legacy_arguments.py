"""Token lists for the legacy octo CLI."""

import pytest

from octodeploy.core import legacy_arguments
from octodeploy.core.arguments import build_invocation
from octodeploy.exceptions import InvalidArgumentError
from octodeploy.models import (
    Dialect,
    Operation,
    OperationParameters,
    OverwriteMode,
    ServerContext,
)

API_KEY = "API-KEY123"


def _pair(tokens, flag):
    index = tokens.index(flag)
    return tokens[index + 1]


def test_pack_tokens(server: ServerContext) -> None:
    params = OperationParameters(
        package_id="Web",
        package_version="1.0.0",
        package_format="zip",
        source_path="dist",
        include_paths=("**/*.dll", "**/*.json"),
        output_path="out",
        overwrite_existing=True,
        additional_args="--verbose",
    )

    tokens = legacy_arguments.build_pack(params, server).tokens

    assert tokens[:3] == ["pack", "--id", "Web"]
    assert _pair(tokens, "--basePath") == "dist"
    assert _pair(tokens, "--outFolder") == "out"
    assert tokens.count("--include") == 2
    assert "--overwrite" in tokens
    assert _pair(tokens, "--server") == "https://octopus.example.com"
    assert _pair(tokens, "--apiKey") == API_KEY
    assert _pair(tokens, "--space") == "Spaces-1"
    assert tokens[-1] == "--verbose"


def test_common_flags_follow_operation_flags(server: ServerContext) -> None:
    verbose_server = ServerContext(
        url=server.url,
        api_key=server.api_key,
        space_id=server.space_id,
        ignore_ssl_errors=True,
        verbose=True,
    )
    params = OperationParameters(package_paths=("Web.1.0.0.zip",), additional_args="--timeout 60")

    tokens = legacy_arguments.build_push(params, verbose_server).tokens

    assert tokens == [
        "push",
        "--package",
        "Web.1.0.0.zip",
        "--server",
        "https://octopus.example.com",
        "--apiKey",
        API_KEY,
        "--space",
        "Spaces-1",
        "--ignoreSslErrors",
        "--debug",
        "--timeout",
        "60",
    ]


def test_push_overwrite_mode_passes_name_through(server: ServerContext) -> None:
    params = OperationParameters(
        package_paths=("a.zip", "b.zip"),
        overwrite_mode=OverwriteMode.OVERWRITE_EXISTING,
    )

    tokens = legacy_arguments.build_push(params, server).tokens

    assert tokens[:5] == ["push", "--package", "a.zip", "--package", "b.zip"]
    assert _pair(tokens, "--overwrite-mode") == "OverwriteExisting"


def test_build_information_tokens(server: ServerContext) -> None:
    params = OperationParameters(
        package_ids=("Web", "Api"),
        version="1.0.0",
        build_information_file="octopus.buildinfo",
        overwrite_mode=OverwriteMode.FAIL_IF_EXISTS,
    )

    tokens = legacy_arguments.build_push_build_information(params, server).tokens

    assert tokens[:5] == ["build-information", "--package-id", "Web", "--package-id", "Api"]
    assert _pair(tokens, "--file") == "octopus.buildinfo"
    assert _pair(tokens, "--overwrite-mode") == "FailIfExists"


def test_deploy_wait_flags_are_embedded(server: ServerContext) -> None:
    params = OperationParameters(
        project="Web",
        version="1.0.0",
        environment="Production",
        variables=("Greeting:Hello",),
        wait_for_deployment=True,
        deployment_timeout="00:15:30",
        cancel_on_timeout=True,
    )

    tokens = legacy_arguments.build_deploy_release(params, server).tokens

    assert tokens[:7] == [
        "deploy-release",
        "--project",
        "Web",
        "--version",
        "1.0.0",
        "--deployTo",
        "Production",
    ]
    assert _pair(tokens, "--deploymentTimeout") == "00:15:30"
    assert _pair(tokens, "--variable") == "Greeting:Hello"
    assert "--progress" in tokens
    assert tokens[tokens.index("--progress") + 1] == "--waitForDeployment"
    assert "--cancelOnTimeout" in tokens


def test_deploy_without_wait_has_no_wait_flags(server: ServerContext) -> None:
    params = OperationParameters(
        project="Web",
        version="1.0.0",
        environment="Production",
        deployment_timeout="00:15:30",
        cancel_on_timeout=True,
    )

    tokens = legacy_arguments.build_deploy_release(params, server).tokens

    assert "--progress" not in tokens
    assert "--waitForDeployment" not in tokens
    assert "--deploymentTimeout" not in tokens
    assert "--cancelOnTimeout" not in tokens


def test_create_release_carries_deployment_flags(server: ServerContext) -> None:
    params = OperationParameters(
        project="Web",
        version="1.0.0",
        channel="Default",
        release_notes="Fixes",
        default_package_version="1.0.0",
        packages=("Step:1.0.0",),
        git_ref="refs/heads/main",
        git_commit="abc123",
        deploy_to_environment="Staging",
        tenant="Acme",
        tenant_tag="Tier/Gold",
        wait_for_deployment=True,
        deployment_timeout="00:10:00",
    )

    tokens = legacy_arguments.build_create_release(params, server).tokens

    assert tokens[:3] == ["create-release", "--project", "Web"]
    assert _pair(tokens, "--releaseNotes") == "Fixes"
    assert _pair(tokens, "--packageVersion") == "1.0.0"
    assert _pair(tokens, "--gitRef") == "refs/heads/main"
    assert _pair(tokens, "--gitCommit") == "abc123"
    assert _pair(tokens, "--deployTo") == "Staging"
    assert _pair(tokens, "--tenantTag") == "Tier/Gold"
    assert _pair(tokens, "--deploymentTimeout") == "00:10:00"
    assert "--progress" in tokens
    assert "--cancelOnTimeout" not in tokens


def test_api_key_masked_exactly_once(server: ServerContext) -> None:
    params = OperationParameters(project="Web", version="1.0.0", environment="Prod")

    invocation = legacy_arguments.build_deploy_release(params, server)
    argv = invocation.argv("octo")

    assert len(invocation.masked_indices) == 1
    (index,) = invocation.masked_indices
    assert argv[index] == API_KEY
    assert API_KEY not in invocation.render("octo")


def test_credentials_in_environment_omits_connection_flags(server: ServerContext) -> None:
    params = OperationParameters(package_paths=("a.zip",))

    invocation = legacy_arguments.build_push(params, server, inline_credentials=False)

    assert "--server" not in invocation.tokens
    assert "--apiKey" not in invocation.tokens
    assert "--space" not in invocation.tokens
    assert invocation.masked_indices == set()


@pytest.mark.parametrize(
    "operation,params",
    [
        (Operation.PACK, OperationParameters(package_id=" ")),
        (Operation.PUSH, OperationParameters(package_paths=())),
        (Operation.PUSH_BUILD_INFORMATION, OperationParameters(version="1", build_information_file="f")),
        (Operation.PUSH_BUILD_INFORMATION, OperationParameters(package_ids=("Web",), build_information_file="f")),
        (Operation.CREATE_RELEASE, OperationParameters()),
        (Operation.DEPLOY_RELEASE, OperationParameters(project="Web", version="1.0.0")),
        (Operation.DEPLOY_RELEASE, OperationParameters(project="Web", environment="Prod")),
    ],
)
def test_blank_required_fields_raise(server, operation, params) -> None:
    with pytest.raises(InvalidArgumentError):
        build_invocation(operation, params, server, Dialect.LEGACY)


def test_builder_is_deterministic(server: ServerContext) -> None:
    params = OperationParameters(
        project="Web",
        deploy_to_environment="Staging",
        variables=("A:1", "B:2"),
        additional_args="--debug --x 'y z'",
    )

    first = build_invocation(Operation.CREATE_RELEASE, params, server, Dialect.LEGACY)
    second = build_invocation(Operation.CREATE_RELEASE, params, server, Dialect.LEGACY)

    assert first.tokens == second.tokens
    assert first.masked_indices == second.masked_indices
