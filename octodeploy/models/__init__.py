"""
octodeploy Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    ExecutionResult,
    ValidationResult,
)
from .operations import (
    Dialect,
    Operation,
    OperationParameters,
    OverwriteMode,
    ServerContext,
)
from .invocation import (
    CommandInvocation,
    EXECUTABLE_OFFSET,
)

__all__ = [
    # Results
    "ExecutionResult",
    "ValidationResult",
    # Operations
    "Dialect",
    "Operation",
    "OperationParameters",
    "OverwriteMode",
    "ServerContext",
    # Invocation
    "CommandInvocation",
    "EXECUTABLE_OFFSET",
]
