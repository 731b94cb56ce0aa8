"""
Result Models

Dataclass models for operation results and validation outcomes.
"""

from dataclasses import dataclass, field
from typing import Optional

from octodeploy.exceptions import OctoDeployError


@dataclass
class ExecutionResult:
    """Result of a single Octopus CLI process execution."""

    exit_code: int
    stdout: str = ""
    command: str = ""
    error: Optional[OctoDeployError] = None

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.exit_code == 0 and self.error is None

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return not self.is_success

    @classmethod
    def failed(cls, error: OctoDeployError, command: str = "") -> "ExecutionResult":
        """Build a failure result for a process that never ran."""
        return cls(exit_code=1, stdout="", command=command, error=error)

    def __repr__(self) -> str:
        return f"ExecutionResult(exit_code={self.exit_code}, command='{self.command[:50]}...')"


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if validation has errors."""
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if validation has warnings."""
        return len(self.warnings) > 0

    def add_error(self, error: str) -> None:
        """Add an error to the validation result."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning to the validation result."""
        self.warnings.append(warning)

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.is_valid}, errors={len(self.errors)}, warnings={len(self.warnings)})"
