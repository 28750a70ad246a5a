"""Shell source generation.

Two modes:

- bootstrap: a static prologue, evaluated once from the user's rc file, that
  installs the ``aka`` wrapper and re-runs dump mode before every prompt;
- dump: one shell function per alias, routing on the current directory.

Output targets zsh and bash (``[[ ... ]]`` conditionals). Any other shell gets
a single load at startup and no per-prompt refresh.
"""

import logging
import shlex
from enum import Enum

from aka import scope as scopes
from aka.lib.names import validate_alias_name
from aka.models import Definition, Scope, ScopeKind

from .args import FORWARD_ALL, function_body

logger = logging.getLogger(__name__)

MARKER = "__AKA_FUNCTIONS"
INDENT = "    "

_PROLOGUE = """\
__aka_saved_aliases=""
if [ -n "${ZSH_VERSION:-}" ]; then
    if [[ -o aliases ]]; then
        __aka_saved_aliases=zsh
        unsetopt aliases
    fi
elif [ -n "${BASH_VERSION:-}" ]; then
    if shopt -q expand_aliases; then
        __aka_saved_aliases=bash
        shopt -u expand_aliases
    fi
fi
for __aka_fn in $(command printf '%s\\n' "${__AKA_FUNCTIONS:-}"); do
    unset -f "$__aka_fn" 2>/dev/null
done
unset __aka_fn"""

_EPILOGUE = """\
if [ "$__aka_saved_aliases" = zsh ]; then
    setopt aliases
elif [ "$__aka_saved_aliases" = bash ]; then
    shopt -s expand_aliases
fi
unset __aka_saved_aliases"""

_BOOTSTRAP = """\
# aka shell integration
aka() {{
    command {program} "$@"
    local aka_status=$?
    eval "$(command {program} init --dump)"
    return $aka_status
}}

__aka_reload() {{
    eval "$(command {program} init --dump)"
}}

if [ -n "${{ZSH_VERSION:-}}" ]; then
    autoload -Uz add-zsh-hook
    add-zsh-hook precmd __aka_reload
elif [ -n "${{BASH_VERSION:-}}" ]; then
    case ";${{PROMPT_COMMAND:-}};" in
        *";__aka_reload;"*) ;;
        *) PROMPT_COMMAND="__aka_reload${{PROMPT_COMMAND:+;$PROMPT_COMMAND}}" ;;
    esac
fi
# Other shells: load once now; run `aka` to refresh.
__aka_reload"""


class _Branch(Enum):
    NO_BRANCH = "no_branch"
    IN_CHAIN = "in_chain"
    CLOSED = "closed"


def bootstrap(program: str) -> str:
    """Return the one-time shell prologue.

    `program` is the command line that runs aka; it is inserted verbatim, so
    callers must shell-quote it.
    """
    return _BOOTSTRAP.format(program=program)


def condition(scope: Scope) -> str:
    """Shell test selecting `scope` against $current_dir."""
    if scope.kind is ScopeKind.EXACT:
        return f'[[ "$current_dir" == {shlex.quote(scope.path)} ]]'
    if scope.kind is ScopeKind.RECURSIVE:
        if scope.path == "/":
            return '[[ "$current_dir" == /* ]]'
        path = shlex.quote(scope.path)
        subtree = shlex.quote(scope.path + "/")
        return f'[[ "$current_dir" == {path} || "$current_dir" == {subtree}* ]]'
    raise ValueError(f"Global scope has no condition: {scope!r}")


def _close(lines: list[str], state: _Branch, body: str) -> _Branch:
    if state is _Branch.IN_CHAIN:
        lines.append(f"{INDENT}else")
        lines.append(f"{INDENT * 2}{body}")
        lines.append(f"{INDENT}fi")
    else:
        lines.append(f"{INDENT}{body}")
    return _Branch.CLOSED


def render_function(name: str, definitions: list[Definition]) -> str:
    """Render the guarded function definition for one alias."""
    lines = [
        f"unalias {name} 2>/dev/null",
        f"unset -f {name} 2>/dev/null",
        f"{name}() {{",
    ]

    state = _Branch.NO_BRANCH
    # Global sorts last, so it always closes the chain.
    for definition in scopes.ordered(definitions):
        if definition.scope.is_global:
            state = _close(lines, state, function_body(definition.command))
            continue
        if state is _Branch.NO_BRANCH:
            lines.append(f'{INDENT}local current_dir="$PWD"')
            keyword = "if"
        else:
            keyword = "elif"
        lines.append(f"{INDENT}{keyword} {condition(definition.scope)}; then")
        lines.append(f"{INDENT * 2}{function_body(definition.command)}")
        state = _Branch.IN_CHAIN

    if state is not _Branch.CLOSED:
        # Outside every scope the alias must not shadow the real program.
        _close(lines, state, f"command {name} {FORWARD_ALL}")

    lines.append("}")
    return "\n".join(lines)


def dump(aliases: dict[str, list[Definition]]) -> str:
    """Render shell source defining every alias as a function."""
    blocks = [_PROLOGUE]
    names = []
    for name, definitions in aliases.items():
        if not definitions:
            continue
        ok, reason = validate_alias_name(name)
        if not ok:
            logger.warning(f"Skipping alias {name!r}: {reason}")
            continue
        blocks.append(render_function(name, definitions))
        names.append(name)
    blocks.append(f"{MARKER}={shlex.quote(' '.join(names))}")
    blocks.append(_EPILOGUE)
    return "\n".join(blocks)
