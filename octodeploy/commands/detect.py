"""octodeploy CLI - Detect command"""

from pathlib import Path
from typing import Optional

import click

from octodeploy.base import BaseCommand
from octodeploy.core.config_loader import ConfigLoader
from octodeploy.services.dialect_selector import detect_dialect
from octodeploy.services.wrapper_builder import CliWrapperBuilder


class DetectCommand(BaseCommand):
    """Report which Octopus CLI dialect a configured tool speaks."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        tool_id: Optional[str] = None,
        verbose: bool = False,
        json_output: bool = False,
    ):
        super().__init__(verbose=verbose, json_output=json_output)
        self.config_path = config_path
        self.tool_id = tool_id

    def execute(self) -> None:
        self.show_header(title="Detect Octopus CLI")

        config = ConfigLoader(
            config_path=Path(self.config_path) if self.config_path else None
        ).load()
        logger = self.init_logger("detect")

        tool = config.get_tool(self.tool_id)
        builder = CliWrapperBuilder(config, logger)
        executable = builder.resolve_executable(tool.path)

        if tool.dialect is not None:
            dialect, source = tool.dialect, "configured"
        else:
            logger.step(f"Probing {executable}")
            dialect, source = detect_dialect(executable, config.environment), "probed"

        if self.json_output:
            self.output_json(
                {
                    "tool": tool.tool_id,
                    "executable": executable,
                    "dialect": dialect.value,
                    "source": source,
                }
            )
            return

        self.print_success(f"{tool.tool_id}: {dialect.value} CLI ({source})")
        self.print_dim(executable)


@click.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to octodeploy.yml")
@click.option("--tool-id", help="Configured Octopus CLI tool (default tool if omitted)")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def detect(config_path, tool_id, verbose, json_output):
    """
    Show which Octopus CLI dialect a tool uses

    \b
    Examples:
      octodeploy detect
      octodeploy detect --tool-id octo --json
    """
    cmd = DetectCommand(
        config_path=config_path, tool_id=tool_id, verbose=verbose, json_output=json_output
    )
    cmd.run()
