"""Argument handling for generated function bodies.

Commands may use ``@N`` as a quoting-independent placeholder for ``$N``. A
command that never references positional or special parameters gets all
arguments forwarded with a trailing ``"$@"``.
"""

import re
from enum import Enum

FORWARD_ALL = '"$@"'

_PLACEHOLDER = re.compile(r"@(?=[0-9])")
_DIGITS = "0123456789"
_SPECIAL = "@*#"


class _State(Enum):
    NORMAL = "normal"
    SINGLE = "single"
    DOUBLE = "double"
    ESCAPED = "escaped"


def replace_placeholders(command: str) -> str:
    """Rewrite every ``@<digit>`` as ``$<digit>``. Not quoting-aware."""
    return _PLACEHOLDER.sub("$", command)


def uses_positional_args(command: str) -> bool:
    """Return True if the shell would expand a positional or special parameter.

    Scans with a four-state machine (normal, single-quoted, double-quoted,
    escaped). ``$1`` inside single quotes is literal text and does not count;
    unquoted or double-quoted it does. ``${...}`` counts only when its interior
    is made of digits and ``@*#``.
    """
    state = _State.NORMAL
    resume = _State.NORMAL
    n = len(command)
    i = 0

    while i < n:
        c = command[i]

        if state is _State.ESCAPED:
            state = resume
        elif state is _State.SINGLE:
            if c == "'":
                state = _State.NORMAL
        elif c == "\\":
            resume = state
            state = _State.ESCAPED
        elif c == "'" and state is _State.NORMAL:
            state = _State.SINGLE
        elif c == '"':
            state = _State.DOUBLE if state is _State.NORMAL else _State.NORMAL
        elif c == "$" and _parameter_at(command, i + 1):
            return True

        i += 1

    return False


def _parameter_at(command: str, start: int) -> bool:
    """Check the text after a ``$`` for a positional or special parameter."""
    if start >= len(command):
        return False
    nxt = command[start]
    if nxt in _DIGITS or nxt in _SPECIAL:
        return True
    if nxt != "{":
        return False

    # Peek to the closing brace without moving the main scan.
    close = command.find("}", start + 1)
    if close == -1:
        return False
    interior = command[start + 1 : close]
    if not interior:
        return False
    return all(ch in _DIGITS or ch in _SPECIAL for ch in interior)


def function_body(command: str) -> str:
    """Rewrite placeholders and forward arguments if the command ignores them."""
    body = replace_placeholders(command)
    if uses_positional_args(body):
        return body
    return f"{body} {FORWARD_ALL}"
