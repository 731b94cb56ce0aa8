#!/usr/bin/env python3
"""octodeploy CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console

# Rich-Click: Beautiful CLI help with colors!
import rich_click as click

from octodeploy import __version__
from octodeploy.commands.build_information import build_information
from octodeploy.commands.detect import detect
from octodeploy.commands.pack import pack
from octodeploy.commands.push import push
from octodeploy.commands.releases import create_release, deploy_release

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_METAVAR = "bold yellow"
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"
click.rich_click.ALIGN_OPTIONS_PANEL = "left"
click.rich_click.ERRORS_EPILOGUE = ""

console = Console()


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""
    from click.exceptions import ClickException, UsageError

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UsageError as e:
            console.print(f"\n[bold red]✗ Error:[/bold red] {e.format_message()}\n")
            if e.ctx and e.ctx.command:
                console.print(
                    f"[dim]Run[/dim] [cyan]octodeploy {e.ctx.command.name} --help[/cyan] "
                    f"[dim]for usage information[/dim]\n"
                )
            sys.exit(2)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(version=__version__, prog_name="octodeploy")
def cli() -> None:
    """
    octodeploy - Package, push and deploy with Octopus Deploy.

    Works with both the legacy `octo` CLI and the current `octopus` CLI;
    the installed flavour is detected automatically.

    \b
    Typical pipeline:
      octodeploy pack --id Web --version 1.0.0
      octodeploy push --package Web.1.0.0.zip
      octodeploy build-information --package-id Web --version 1.0.0
      octodeploy create-release --project Web --version 1.0.0 --deploy-to Staging --wait
    """


cli.add_command(pack)
cli.add_command(push)
cli.add_command(build_information)
cli.add_command(create_release)
cli.add_command(deploy_release)
cli.add_command(detect)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
