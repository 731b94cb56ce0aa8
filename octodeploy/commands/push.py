"""octodeploy CLI - Push command"""

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


@dataclass
class PushOptions:
    """Options for push command."""

    package: tuple = field(default_factory=tuple)
    overwrite_mode: Optional[str] = None


class PushCommand(OperationCommand):
    """Upload packages to the Octopus built-in feed."""

    operation = Operation.PUSH
    title = "Push Packages"

    def __init__(self, options: PushOptions, common: CommonOptions):
        super().__init__(common)
        self.options = options

    def header_details(self):
        return {"Packages": ", ".join(self.options.package)}

    def build_parameters(self) -> OperationParameters:
        package_paths = []
        for path in self.inject_lines(self.options.package):
            resolved = self.workspace / path
            if not resolved.exists():
                self.logger.warning(f"Package file not found: {resolved}")
            package_paths.append(path)

        overwrite_mode = self.options.overwrite_mode
        return OperationParameters(
            package_paths=tuple(package_paths),
            overwrite_mode=OverwriteMode.parse(overwrite_mode) if overwrite_mode else None,
            additional_args=self.inject(self.common.additional_args),
        )


@click.command()
@click.option("--package", multiple=True, help="Package file to upload (repeatable)")
@overwrite_mode_option
@common_options
def push(**kwargs):
    """
    Push packages to Octopus

    \b
    Examples:
      octodeploy push --package Web.1.0.0.zip
      octodeploy push --package Web.1.0.0.zip --overwrite-mode OverwriteExisting
    """
    common = pop_common_options(kwargs)
    cmd = PushCommand(PushOptions(**kwargs), common)
    cmd.run()
