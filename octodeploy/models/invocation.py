"""
Command Invocation Model

Ordered CLI tokens plus the argv positions whose values must never be logged.
"""

import shlex
from dataclasses import dataclass, field
from typing import Iterable, Optional

from octodeploy.constants import MASK

# argv[0] is the executable, prepended by the process invoker
EXECUTABLE_OFFSET = 1


@dataclass
class CommandInvocation:
    """
    Tokens for one Octopus CLI call.

    ``tokens`` excludes the executable. ``masked_indices`` are zero-based
    positions in the executable-prefixed argv, so ``argv(cli)[i]`` is the
    secret for every ``i`` in the set.
    """

    tokens: list[str] = field(default_factory=list)
    masked_indices: set[int] = field(default_factory=set)

    def add(self, *tokens: str) -> "CommandInvocation":
        self.tokens.extend(tokens)
        return self

    def extend(self, tokens: Iterable[str]) -> "CommandInvocation":
        self.tokens.extend(tokens)
        return self

    def add_secret(self, flag: str, value: str) -> "CommandInvocation":
        """Append ``flag value`` and mask the value, never the flag."""
        self.tokens.append(flag)
        self.masked_indices.add(len(self.tokens) + EXECUTABLE_OFFSET)
        self.tokens.append(value)
        return self

    def argv(self, executable: str) -> list[str]:
        return [executable, *self.tokens]

    def masked_argv(self, executable: str) -> list[str]:
        return [
            MASK if index in self.masked_indices else token
            for index, token in enumerate(self.argv(executable))
        ]

    def render(self, executable: Optional[str] = None) -> str:
        """Shell-quoted, masked command line suitable for logs."""
        masked = self.masked_argv(executable or "<cli>")
        if executable is None:
            masked = masked[EXECUTABLE_OFFSET:]
        return shlex.join(masked)

    @property
    def secrets(self) -> list[str]:
        """Values sitting at masked positions."""
        return [
            self.tokens[index - EXECUTABLE_OFFSET]
            for index in sorted(self.masked_indices)
            if 0 <= index - EXECUTABLE_OFFSET < len(self.tokens)
        ]

    def redact(self, text: str) -> str:
        """Scrub every masked value out of captured output."""
        for secret in self.secrets:
            if secret:
                text = text.replace(secret, MASK)
        return text

    @property
    def command_name(self) -> str:
        """Leading non-flag tokens, e.g. ``release deploy``."""
        words = []
        for token in self.tokens:
            if token.startswith("-"):
                break
            words.append(token)
        return " ".join(words)

    def __repr__(self) -> str:
        return f"CommandInvocation({self.render()})"
