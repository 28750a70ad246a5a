"""Shared data models and types."""

from dataclasses import dataclass
from enum import Enum


class ScopeKind(str, Enum):
    GLOBAL = "Global"
    EXACT = "Exact"
    RECURSIVE = "Recursive"


@dataclass(frozen=True)
class Scope:
    """Directory context in which a definition is active.

    A closed tagged value: Global carries no path, Exact and Recursive carry an
    absolute canonical directory fixed at creation time. Build instances with
    the constructors below rather than directly.
    """

    kind: ScopeKind
    path: str | None = None

    def __post_init__(self):
        if self.kind is ScopeKind.GLOBAL:
            if self.path is not None:
                raise ValueError("Global scope takes no path")
        elif not self.path:
            raise ValueError(f"{self.kind.value} scope requires a path")

    @classmethod
    def global_(cls) -> "Scope":
        return cls(ScopeKind.GLOBAL)

    @classmethod
    def exact(cls, path: str) -> "Scope":
        return cls(ScopeKind.EXACT, path)

    @classmethod
    def recursive(cls, path: str) -> "Scope":
        return cls(ScopeKind.RECURSIVE, path)

    @property
    def is_global(self) -> bool:
        return self.kind is ScopeKind.GLOBAL

    def __str__(self) -> str:
        if self.kind is ScopeKind.GLOBAL:
            return "Global"
        return f"{self.kind.value}: {self.path}"


GLOBAL = Scope.global_()


@dataclass(frozen=True)
class Definition:
    """One (command, scope) pairing stored under an alias name."""

    command: str
    scope: Scope = GLOBAL
