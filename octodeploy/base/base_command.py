"""
Base Command Class

Abstract base for all octodeploy CLI commands.
Provides common functionality and structure.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape

from octodeploy.exceptions import OctoDeployError
from octodeploy.logger import BuildLogger
from octodeploy.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling
    - JSON output support
    """

    def __init__(self, verbose: bool = False, json_output: bool = False):
        self.verbose = verbose
        self.json_output = json_output
        self.console = Console()
        self.logger: Optional[BuildLogger] = None

    def init_logger(
        self, command_name: str, log_dir: Optional[Path] = None
    ) -> BuildLogger:
        """
        Initialize command logger.

        In JSON mode the log file is still written but nothing is rendered,
        so stdout carries only the JSON document.

        Args:
            command_name: Command name
            log_dir: Root log directory (None for console-only)

        Returns:
            BuildLogger instance
        """
        output = Console(quiet=True) if self.json_output else self.console
        self.logger = BuildLogger(
            command_name, log_dir=log_dir, verbose=self.verbose, output=output
        )
        return self.logger

    def output_json(self, data: Dict[str, Any], exit_code: int = 0) -> None:
        """
        Output data as JSON and exit on error.

        Args:
            data: Data to output as JSON
            exit_code: Exit code (0 for success, non-zero for error)
        """
        print(json.dumps(data, indent=2))
        if exit_code != 0:
            raise SystemExit(exit_code)

    def output_json_error(
        self, error: str, details: Optional[Dict[str, Any]] = None, exit_code: int = 1
    ) -> None:
        error_data: Dict[str, Any] = {"error": error}
        if details:
            error_data["details"] = details
        self.output_json(error_data, exit_code=exit_code)

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON or verbose mode)."""
        if not self.verbose and not self.json_output:
            show_header(
                title=title,
                subtitle=subtitle,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        """Print success message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[green]✓ {escape(message)}[/green]")

    def print_error(self, message: str) -> None:
        """Print error message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[red]✗ {escape(message)}[/red]")

    def print_warning(self, message: str) -> None:
        """Print warning message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def print_dim(self, message: str) -> None:
        """Print dim message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def handle_error(self, error: OctoDeployError) -> None:
        """
        Report an octodeploy error with consistent formatting.

        Args:
            error: Error raised by a command
        """
        if self.json_output:
            details = {"type": type(error).__name__}
            if error.context:
                details["context"] = error.context
            if self.logger and self.logger.log_path:
                self.logger.log_error(error.message, context=error.context)
                details["log"] = str(self.logger.log_path)
            self.output_json_error(error.message, details=details)
            return

        if self.logger:
            self.logger.log_error(error.message, context=error.context)
            if self.logger.log_path:
                self.console.print(
                    f"\n[dim]Logs saved to:[/dim] {escape(str(self.logger.log_path))}\n"
                )
        else:
            self.print_error(error.message)
            if error.context:
                self.print_dim(f"Context: {error.context}")

    def exit_with_error(self, message: str, code: int = 1) -> None:
        self.print_error(message)
        raise SystemExit(code)

    @abstractmethod
    def execute(self) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self) -> None:
        """
        Run command with error handling.

        Any OctoDeployError becomes exit code 1; the log file is always
        closed.
        """
        try:
            self.execute()
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger and self.logger.log_path:
                self.console.print(
                    f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n"
                )
            raise SystemExit(130)
        except SystemExit:
            raise
        except OctoDeployError as e:
            self.handle_error(e)
            raise SystemExit(1)
        except (FileNotFoundError, PermissionError) as e:
            error_type = type(e).__name__
            if self.json_output:
                self.output_json_error(f"{error_type}: {e}")
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {escape(str(e))}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()
