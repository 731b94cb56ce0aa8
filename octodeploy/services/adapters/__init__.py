"""Octopus CLI dialect adapters"""

from .base import ChainState, CliAdapter, CommandChain
from .current import CurrentCliAdapter
from .legacy import LegacyCliAdapter

__all__ = [
    "ChainState",
    "CliAdapter",
    "CommandChain",
    "CurrentCliAdapter",
    "LegacyCliAdapter",
]
