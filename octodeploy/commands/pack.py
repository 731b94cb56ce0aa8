"""octodeploy CLI - Pack command"""

from dataclasses import dataclass, field
from typing import Optional

import click

from octodeploy.base import CommonOptions, OperationCommand
from octodeploy.commands.options import common_options, pop_common_options
from octodeploy.models import Operation, OperationParameters


@dataclass
class PackOptions:
    """Options for pack command."""

    package_id: Optional[str] = None
    package_version: Optional[str] = None
    package_format: Optional[str] = None
    source_path: Optional[str] = None
    include: tuple = field(default_factory=tuple)
    output_path: Optional[str] = None
    overwrite: bool = False


class PackCommand(OperationCommand):
    """Create a zip or NuGet package from a directory."""

    operation = Operation.PACK
    title = "Pack"
    requires_server = False

    def __init__(self, options: PackOptions, common: CommonOptions):
        super().__init__(common)
        self.options = options

    def header_details(self):
        return {"Package": self.options.package_id, "Version": self.options.package_version}

    def build_parameters(self) -> OperationParameters:
        return OperationParameters(
            package_id=self.inject(self.options.package_id),
            package_version=self.inject(self.options.package_version),
            package_format=self.options.package_format,
            source_path=self.inject(self.options.source_path),
            include_paths=tuple(self.inject_lines(self.options.include)),
            output_path=self.inject(self.options.output_path),
            overwrite_existing=self.options.overwrite,
            additional_args=self.inject(self.common.additional_args),
        )


@click.command()
@click.option("--package-id", "--id", "package_id", help="Package id")
@click.option("--version", "package_version", help="Package version")
@click.option(
    "--format",
    "package_format",
    type=click.Choice(["zip", "nupkg", "nuget"], case_sensitive=False),
    help="Package format (default: zip)",
)
@click.option("--source-path", "--base-path", "source_path", help="Directory to pack")
@click.option("--include", multiple=True, help="File pattern to include (repeatable)")
@click.option("--output-path", "--out-folder", "output_path", help="Output directory")
@click.option("--overwrite", is_flag=True, help="Overwrite an existing package file")
@common_options
def pack(**kwargs):
    """
    Create a package with the Octopus CLI

    \b
    Examples:
      octodeploy pack --id Web --version 1.0.0
      octodeploy pack --id Web --version 1.0.0 --format nupkg --include "**/*.dll"
    """
    common = pop_common_options(kwargs)
    cmd = PackCommand(PackOptions(**kwargs), common)
    cmd.run()
