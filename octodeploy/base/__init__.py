"""
octodeploy Base Command Classes

Abstract base classes for consistent command structure.
"""

from .base_command import BaseCommand
from .operation_command import CommonOptions, OperationCommand

__all__ = [
    "BaseCommand",
    "CommonOptions",
    "OperationCommand",
]
