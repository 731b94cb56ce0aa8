"""
CLI Utilities

String helpers shared by the argument builders, validators and commands.
"""

import re
import shlex
from typing import Iterable, Mapping, Optional

from octodeploy.constants import ERROR_INPUT_BLANK, ERROR_INVALID_TIMEOUT
from octodeploy.exceptions import InvalidArgumentError

_TIMESPAN_PATTERN = re.compile(r"^(\d{2}):(\d{2}):(\d{2})$")
_ENV_REFERENCE = re.compile(r"\$(?:\{([A-Za-z_][A-Za-z0-9_.]*)\}|([A-Za-z_][A-Za-z0-9_]*))")


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def require(value: Optional[str], field_name: str) -> str:
    """
    Return ``value`` or fail fast when it is blank.

    Raises:
        InvalidArgumentError: If value is blank
    """
    if is_blank(value):
        raise InvalidArgumentError(ERROR_INPUT_BLANK.format(field=field_name))
    return value


def split_arguments(raw: Optional[str]) -> list[str]:
    """
    Split user-supplied extra arguments into argv words.

    POSIX shell-word rules apply: whitespace separates words, single quotes
    are literal, double quotes honour backslash escapes, ``#`` is not a
    comment. Words are never handed to a shell.

    Raises:
        InvalidArgumentError: If quotes are unbalanced
    """
    if is_blank(raw):
        return []
    lexer = shlex.shlex(raw, posix=True, punctuation_chars=False)
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as e:
        raise InvalidArgumentError(
            "Unable to parse additional arguments", context=f"{e}: {raw}"
        )


def is_valid_timespan(value: str) -> bool:
    """Check for a ``HH:mm:ss`` clock value."""
    match = _TIMESPAN_PATTERN.match(value.strip())
    if not match:
        return False
    hours, minutes, seconds = (int(part) for part in match.groups())
    return hours <= 23 and minutes <= 59 and seconds <= 59


def timespan_to_seconds(value: str) -> int:
    """
    Convert ``HH:mm:ss`` to whole seconds.

    Raises:
        InvalidArgumentError: If value is not a valid timespan
    """
    if not is_valid_timespan(value):
        raise InvalidArgumentError(ERROR_INVALID_TIMEOUT, context=f"Got: '{value}'")
    hours, minutes, seconds = (int(part) for part in value.strip().split(":"))
    return hours * 3600 + minutes * 60 + seconds


def inject_environment_variables(
    value: Optional[str], environment: Mapping[str, str]
) -> Optional[str]:
    """Replace ``${NAME}`` and ``$NAME`` with values from ``environment``."""
    if value is None:
        return None

    def _substitute(match: re.Match) -> str:
        name = match.group(1) or match.group(2)
        if name in environment:
            return str(environment[name])
        return match.group(0)

    return _ENV_REFERENCE.sub(_substitute, value)


def split_lines(value: Optional[str]) -> list[str]:
    """Newline-separated list with blank entries dropped."""
    if value is None:
        return []
    return [line.strip() for line in value.splitlines() if line.strip()]


def first_entry(value: Optional[str], separator: str = ",") -> Optional[str]:
    """First non-blank entry of a separated list, or None."""
    if value is None:
        return None
    for entry in value.split(separator):
        if entry.strip():
            return entry.strip()
    return None


def non_blank(values: Iterable[Optional[str]]) -> list[str]:
    return [value for value in values if not is_blank(value)]


def parse_variables(
    text: Optional[str], environment: Optional[Mapping[str, str]] = None
) -> list[str]:
    """
    Parse deployment variables into ``name:value`` entries.

    One variable per line, ``name=value`` or ``name:value``, split on the
    first separator. Lines starting with ``#`` or ``!`` are comments.
    Values get ``${VAR}`` substitution from ``environment``.

    Raises:
        InvalidArgumentError: If a line has no separator or an empty name
    """
    variables = []
    for line in split_lines(text):
        if line.startswith(("#", "!")):
            continue
        positions = [pos for pos in (line.find("="), line.find(":")) if pos >= 0]
        if not positions:
            raise InvalidArgumentError(
                f"Invalid variable '{line}'", context="Expected name=value"
            )
        split_at = min(positions)
        name, value = line[:split_at].strip(), line[split_at + 1 :].strip()
        if not name:
            raise InvalidArgumentError(
                f"Invalid variable '{line}'", context="Variable name is empty"
            )
        value = inject_environment_variables(value, environment or {})
        variables.append(f"{name}:{value}")
    return variables
