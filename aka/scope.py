"""Scope matching, precedence and directory resolution."""

from pathlib import Path

from .errors import InvalidScopeError
from .models import GLOBAL, Definition, Scope, ScopeKind

_RANK = {
    ScopeKind.EXACT: 0,
    ScopeKind.RECURSIVE: 1,
    ScopeKind.GLOBAL: 2,
}


def matches(scope: Scope, directory: str) -> bool:
    """Return True if a definition in `scope` is active in `directory`."""
    if scope.kind is ScopeKind.GLOBAL:
        return True
    if scope.kind is ScopeKind.EXACT:
        return directory == scope.path
    if scope.kind is ScopeKind.RECURSIVE:
        return is_within(directory, scope.path)
    raise ValueError(f"Unknown scope kind: {scope.kind!r}")


def is_within(directory: str, root: str) -> bool:
    if root == "/":
        return directory.startswith("/")
    return directory == root or directory.startswith(root + "/")


def precedence(scope: Scope) -> tuple[int, int]:
    """Sort key: Exact, then Recursive, then Global; deeper paths first within a kind."""
    return (_RANK[scope.kind], -len(scope.path or ""))


def ordered(definitions: list[Definition]) -> list[Definition]:
    return sorted(definitions, key=lambda d: precedence(d.scope))


def canonical(path: str | Path, base: Path | None = None, strict: bool = True) -> str:
    """Resolve `path` to an absolute, symlink-free directory string.

    Raises InvalidScopeError if the path does not exist or is not a directory.
    With strict=False a missing path is resolved as far as it exists, so scopes
    whose directory was deleted can still be named.
    """
    raw = str(path)
    candidate = Path(raw).expanduser()
    if not candidate.is_absolute():
        candidate = (base or Path.cwd()) / candidate
    try:
        resolved = candidate.resolve(strict=strict)
    except (FileNotFoundError, RuntimeError) as e:
        raise InvalidScopeError(raw) from e
    except OSError as e:
        raise InvalidScopeError(raw, str(e)) from e
    if strict and not resolved.is_dir():
        raise InvalidScopeError(raw)
    return str(resolved)


def resolve_scope(
    path: str | None, recursive: bool = False, base: Path | None = None, strict: bool = True
) -> Scope:
    """Build a Scope from user input.

    `None` or the literal "global" yields the global scope; anything else must
    name an existing directory unless `strict` is False.
    """
    if path is None or path.strip().lower() == "global":
        return GLOBAL
    directory = canonical(path, base, strict)
    if recursive:
        return Scope.recursive(directory)
    return Scope.exact(directory)


def current_directory() -> str:
    return str(Path.cwd().resolve())
