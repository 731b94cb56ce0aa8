"""
octodeploy Services Layer

Process execution, dialect detection and adapter construction.
"""

from .build_information import BuildInformation, BuildInformationService, Commit
from .dialect_selector import detect_dialect
from .process_invoker import ProcessInvoker
from .wrapper_builder import CliWrapperBuilder

__all__ = [
    "BuildInformation",
    "BuildInformationService",
    "CliWrapperBuilder",
    "Commit",
    "ProcessInvoker",
    "detect_dialect",
]
