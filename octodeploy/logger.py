"""
Logging system for octodeploy
Provides real-time logging to files with clean console output
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape

from octodeploy.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT

console = Console()

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class BuildLogger:
    """
    Manages logging for one octodeploy operation
    - Writes all output to a log file in real-time
    - Shows clean progress UI in console (CLI output only when verbose)
    - Never receives secrets: callers pass masked command lines and redacted output
    """

    def __init__(
        self,
        operation: str,
        log_dir: Optional[Path] = None,
        verbose: bool = False,
        output: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            operation: Operation name (e.g., 'pack', 'deploy-release')
            log_dir: Root log directory, or None for console-only logging
            verbose: If True, echo CLI output to the console
            output: Console to render on (defaults to the module console)
        """
        self.operation = operation
        self.verbose = verbose
        self.console = output or console
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        if log_dir is not None:
            # Structure: {log_dir}/{operation}/{date}/{time}.log
            now = datetime.now()
            operation_dir = Path(log_dir) / operation / now.strftime(LOG_DATE_FORMAT)
            operation_dir.mkdir(parents=True, exist_ok=True)

            self.log_path = operation_dir / f"{now.strftime(LOG_TIME_FORMAT)}.log"
            self.log_file = open(self.log_path, "w", buffering=1)
            self._write_log_header()

    def _write_log_header(self):
        header = f"""{"=" * 80}
octodeploy Build Log
{"=" * 80}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def _write(self, text: str):
        if self.log_file:
            self.log_file.write(text)
            self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        self._write(f"[{timestamp}] [{level}] {message}\n")

        if self.verbose:
            if level == "ERROR":
                self.console.print(f"[red]{escape(message)}[/red]")
            elif level == "WARNING":
                self.console.print(f"[yellow]{escape(message)}[/yellow]")
            elif level == "DEBUG":
                self.console.print(f"[dim]{escape(message)}[/dim]")
            else:
                self.console.print(escape(message))

    def log_command(self, command: str):
        """Log a masked command line before it is executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log CLI output

        Always written to the log file, shown in console only if verbose.

        Args:
            output: Redacted command output (single line or multiline)
            stream: Stream name
        """
        if not output:
            return

        clean_output = _ANSI_ESCAPE.sub("", output)
        for line in clean_output.splitlines() or [clean_output]:
            self._write(f"  [{stream}] {line}\n")

        if self.verbose:
            self.console.print(escape(clean_output), highlight=False)

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"
        error_block += f"{'!' * 80}\n\n"
        self._write(error_block)

        self.console.print(f"[bold red]✗ {escape(error)}[/bold red]")
        if context:
            self.console.print(f"  [color(208)]{escape(context)}[/color(208)]")

    def step(self, step_name: str):
        """Start a new step"""
        if self.current_step and not self.verbose:
            self.console.print()

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self.console.print(
                f"[color(214)]▶[/color(214)] [white]{escape(step_name)}[/white]"
            )

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self.console.print(f"  [dim]✓ {escape(message)}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self.console.print(f"  [yellow]⚠[/yellow] [dim]{escape(message)}[/dim]")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        if exc_type is not None and exc_type != SystemExit:
            self.log_error(
                str(exc_val) if exc_val else "Operation failed",
                context=f"{exc_type.__name__}",
            )
        self.close()
        return False
