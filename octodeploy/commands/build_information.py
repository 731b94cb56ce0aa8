"""octodeploy CLI - Build information command"""

from dataclasses import dataclass, field
from typing import Optional

import click

from octodeploy.base import CommonOptions, OperationCommand
from octodeploy.commands.options import (
    common_options,
    overwrite_mode_option,
    pop_common_options,
)
from octodeploy.models import Operation, OperationParameters, OverwriteMode
from octodeploy.services.build_information import BuildInformationService
from octodeploy.utils import is_blank


@dataclass
class BuildInformationOptions:
    """Options for build-information command."""

    package_id: tuple = field(default_factory=tuple)
    version: Optional[str] = None
    file: Optional[str] = None
    overwrite_mode: Optional[str] = None
    git_url: Optional[str] = None
    git_commit: Optional[str] = None
    since_commit: Optional[str] = None
    build_number: Optional[str] = None
    build_url: Optional[str] = None


class BuildInformationCommand(OperationCommand):
    """Attach build information to package versions."""

    operation = Operation.PUSH_BUILD_INFORMATION
    title = "Push Build Information"

    def __init__(self, options: BuildInformationOptions, common: CommonOptions):
        super().__init__(common)
        self.options = options

    def header_details(self):
        return {
            "Packages": ", ".join(self.options.package_id),
            "Version": self.options.version,
        }

    def generate_file(self) -> str:
        """Write octopus.buildinfo from git and return its path."""
        self.logger.step("Collecting build information from git")
        service = BuildInformationService(self.logger, self.workspace, self.environment)
        information = service.collect(
            git_url=self.options.git_url,
            git_commit=self.options.git_commit,
            since_commit=self.options.since_commit,
            build_number=self.options.build_number,
            build_url=self.options.build_url,
        )
        path = service.write(information)
        self.logger.success(f"{len(information.commits)} commit(s) written to {path.name}")
        return str(path)

    def build_parameters(self) -> OperationParameters:
        package_ids = tuple(self.inject_lines(self.options.package_id))
        version = self.inject(self.options.version)
        build_information_file = self.inject(self.options.file)

        # generate only once the other required inputs are known to be present
        if is_blank(build_information_file) and package_ids and not is_blank(version):
            build_information_file = self.generate_file()

        overwrite_mode = self.options.overwrite_mode
        return OperationParameters(
            package_ids=package_ids,
            version=version,
            build_information_file=build_information_file,
            overwrite_mode=OverwriteMode.parse(overwrite_mode) if overwrite_mode else None,
            additional_args=self.inject(self.common.additional_args),
        )


@click.command(name="build-information")
@click.option("--package-id", multiple=True, help="Package id (repeatable)")
@click.option("--version", help="Package version")
@click.option("--file", help="Build information JSON (generated from git if omitted)")
@overwrite_mode_option
@click.option("--git-url", help="Repository URL (default: $GIT_URL or origin)")
@click.option("--git-commit", help="Commit hash (default: $GIT_COMMIT or HEAD)")
@click.option(
    "--since-commit",
    help="List commits after this one (default: $GIT_PREVIOUS_SUCCESSFUL_COMMIT)",
)
@click.option("--build-number", help="Build number (default: $BUILD_NUMBER)")
@click.option("--build-url", help="Build URL (default: $BUILD_URL)")
@common_options
def build_information(**kwargs):
    """
    Push build information to Octopus

    \b
    Examples:
      octodeploy build-information --package-id Web --version 1.0.0
      octodeploy build-information --package-id Web --version 1.0.0 --file build.json
    """
    common = pop_common_options(kwargs)
    cmd = BuildInformationCommand(BuildInformationOptions(**kwargs), common)
    cmd.run()
