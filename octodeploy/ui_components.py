"""
octodeploy - UI Components & Branding
Standardized headers for command output
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

BRAND_COLOR = "color(214)"


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized octodeploy command header.

    Args:
        title: Main title (e.g., "Pack", "Deploy Release")
        subtitle: Optional subtitle line
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Deploy Release",
            details={"Project": "Web", "Environment": "Staging"}
        )
    """
    if console is None:
        console = Console()

    console.print(
        f" [bold {BRAND_COLOR}]octodeploy[/bold {BRAND_COLOR}] [dim]›[/dim] "
        f"[bold white]{escape(title)}[/bold white]"
    )

    if subtitle:
        console.print(f" [dim]{escape(subtitle)}[/dim]")

    if details:
        for key, value in details.items():
            if value is None or value == "":
                continue
            console.print(f" [dim]{escape(str(key))}:[/dim] {escape(str(value))}")

    console.print()
