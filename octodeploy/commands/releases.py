"""octodeploy CLI - Release commands"""

from dataclasses import dataclass, field
from typing import Optional

import click

from octodeploy.base import CommonOptions, OperationCommand
from octodeploy.commands.options import (
    common_options,
    deployment_options,
    pop_common_options,
)
from octodeploy.exceptions import InvalidArgumentError
from octodeploy.models import Operation, OperationParameters
from octodeploy.utils import first_entry, is_blank, parse_variables


@dataclass
class DeploymentOptions:
    """Deployment inputs shared by create-release and deploy-release."""

    tenant: Optional[str] = None
    tenant_tag: Optional[str] = None
    variables: tuple = field(default_factory=tuple)
    wait_for_deployment: bool = False
    deployment_timeout: Optional[str] = None
    cancel_on_timeout: bool = False


@dataclass
class CreateReleaseOptions(DeploymentOptions):
    """Options for create-release command."""

    project: Optional[str] = None
    version: Optional[str] = None
    channel: Optional[str] = None
    release_notes: Optional[str] = None
    release_notes_file: Optional[str] = None
    default_package_version: Optional[str] = None
    package: tuple = field(default_factory=tuple)
    git_ref: Optional[str] = None
    git_commit: Optional[str] = None
    deploy_to: Optional[str] = None


@dataclass
class DeployReleaseOptions(DeploymentOptions):
    """Options for deploy-release command."""

    project: Optional[str] = None
    version: Optional[str] = None
    environment: Optional[str] = None


class ReleaseCommand(OperationCommand):
    """Shared parameter handling for release commands."""

    options: DeploymentOptions

    def deployment_fields(self) -> dict:
        options = self.options
        return dict(
            tenant=first_entry(self.inject(options.tenant)),
            tenant_tag=self.inject(options.tenant_tag),
            variables=tuple(
                parse_variables("\n".join(options.variables), self.environment)
            ),
            wait_for_deployment=options.wait_for_deployment,
            deployment_timeout=options.deployment_timeout,
            cancel_on_timeout=options.cancel_on_timeout,
            additional_args=self.inject(self.common.additional_args),
        )


class CreateReleaseCommand(ReleaseCommand):
    """Create a release, optionally deploying it straight away."""

    operation = Operation.CREATE_RELEASE
    title = "Create Release"

    def __init__(self, options: CreateReleaseOptions, common: CommonOptions):
        super().__init__(common)
        self.options = options

    def header_details(self):
        return {
            "Project": self.options.project,
            "Version": self.options.version,
            "Deploy to": self.options.deploy_to,
        }

    def read_release_notes(self) -> Optional[str]:
        """
        Release notes from the option or from a file in the workspace.

        Raises:
            InvalidArgumentError: If both are given or the file is missing
        """
        options = self.options
        if is_blank(options.release_notes_file):
            return self.inject(options.release_notes)
        if not is_blank(options.release_notes):
            raise InvalidArgumentError(
                "Use either --release-notes or --release-notes-file, not both"
            )

        path = self.workspace / self.inject(options.release_notes_file)
        if not path.exists():
            raise InvalidArgumentError(
                f"OCTOPUS-INPUT-ERROR-0003: {path} does not exist"
            )
        return path.read_text()

    def build_parameters(self) -> OperationParameters:
        options = self.options
        return OperationParameters(
            project=self.inject(options.project),
            version=self.inject(options.version),
            channel=self.inject(options.channel),
            release_notes=self.read_release_notes(),
            default_package_version=self.inject(options.default_package_version),
            packages=tuple(self.inject_lines(options.package)),
            git_ref=self.inject(options.git_ref),
            git_commit=self.inject(options.git_commit),
            deploy_to_environment=first_entry(self.inject(options.deploy_to)),
            **self.deployment_fields(),
        )


class DeployReleaseCommand(ReleaseCommand):
    """Deploy an existing release to an environment."""

    operation = Operation.DEPLOY_RELEASE
    title = "Deploy Release"

    def __init__(self, options: DeployReleaseOptions, common: CommonOptions):
        super().__init__(common)
        self.options = options

    def header_details(self):
        return {
            "Project": self.options.project,
            "Version": self.options.version,
            "Environment": self.options.environment,
        }

    def build_parameters(self) -> OperationParameters:
        options = self.options
        return OperationParameters(
            project=self.inject(options.project),
            version=self.inject(options.version),
            environment=first_entry(self.inject(options.environment)),
            **self.deployment_fields(),
        )


@click.command(name="create-release")
@click.option("--project", help="Project name")
@click.option("--version", help="Release version (server assigns one if omitted)")
@click.option("--channel", help="Channel")
@click.option("--release-notes", help="Release notes text")
@click.option("--release-notes-file", help="Read release notes from a file")
@click.option("--default-package-version", help="Version for packages not listed")
@click.option("--package", multiple=True, help="Package as StepName:Version (repeatable)")
@click.option("--git-ref", help="Git reference for version-controlled projects")
@click.option("--git-commit", help="Git commit for version-controlled projects")
@click.option("--deploy-to", help="Deploy the new release to this environment")
@deployment_options
@common_options
def create_release(**kwargs):
    """
    Create a release in Octopus

    \b
    Examples:
      octodeploy create-release --project Web --version 1.0.0
      octodeploy create-release --project Web --deploy-to Staging --wait --timeout 00:30:00
    """
    common = pop_common_options(kwargs)
    cmd = CreateReleaseCommand(CreateReleaseOptions(**kwargs), common)
    cmd.run()


@click.command(name="deploy-release")
@click.option("--project", help="Project name")
@click.option("--version", help="Release version to deploy")
@click.option("--environment", help="Target environment (first of a comma list)")
@deployment_options
@common_options
def deploy_release(**kwargs):
    """
    Deploy a release with Octopus

    \b
    Examples:
      octodeploy deploy-release --project Web --version 1.0.0 --environment Staging
      octodeploy deploy-release --project Web --version 1.0.0 --environment Prod \\
        --variable Greeting=Hello --wait --timeout 00:15:00 --cancel-on-timeout
    """
    common = pop_common_options(kwargs)
    cmd = DeployReleaseCommand(DeployReleaseOptions(**kwargs), common)
    cmd.run()
