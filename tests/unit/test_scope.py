import os

import pytest

from aka import scope as scopes
from aka.errors import InvalidScopeError
from aka.models import GLOBAL, Definition, Scope


def test_global_matches_everywhere():
    assert scopes.matches(GLOBAL, "/")
    assert scopes.matches(GLOBAL, "/home/user/project")


def test_exact_matches_only_same_directory():
    scope = Scope.exact("/a/b")
    assert scopes.matches(scope, "/a/b")
    assert not scopes.matches(scope, "/a/b/c")
    assert not scopes.matches(scope, "/a")


def test_recursive_matches_subtree_on_path_boundary():
    scope = Scope.recursive("/a")
    assert scopes.matches(scope, "/a")
    assert scopes.matches(scope, "/a/b/c")
    assert not scopes.matches(scope, "/ab")
    assert not scopes.matches(scope, "/")


def test_recursive_root_matches_everything():
    assert scopes.matches(Scope.recursive("/"), "/usr/local")


def test_ordered_exact_then_recursive_then_global():
    defs = [
        Definition("g", GLOBAL),
        Definition("r", Scope.recursive("/a")),
        Definition("e", Scope.exact("/a/b")),
    ]
    assert [d.command for d in scopes.ordered(defs)] == ["e", "r", "g"]


def test_ordered_deeper_recursive_first():
    defs = [
        Definition("outer", Scope.recursive("/a")),
        Definition("inner", Scope.recursive("/a/b/c")),
        Definition("middle", Scope.recursive("/a/b")),
    ]
    assert [d.command for d in scopes.ordered(defs)] == ["inner", "middle", "outer"]


def test_scopes_compare_by_value():
    assert Scope.exact("/tmp") == Scope.exact("/tmp")
    assert Scope.exact("/tmp") != Scope.recursive("/tmp")
    assert len({Scope.exact("/tmp"), Scope.exact("/tmp"), GLOBAL}) == 2


def test_scope_requires_path_for_directory_kinds():
    with pytest.raises(ValueError):
        Scope.exact("")


def test_scope_display():
    assert str(GLOBAL) == "Global"
    assert str(Scope.exact("/x")) == "Exact: /x"
    assert str(Scope.recursive("/x")) == "Recursive: /x"


def test_resolve_scope_global_literal():
    assert scopes.resolve_scope(None) == GLOBAL
    assert scopes.resolve_scope("GLOBAL") == GLOBAL


def test_resolve_scope_canonicalizes(dirs):
    raw = str(dirs["sub"]) + "/../sub/"
    assert scopes.resolve_scope(raw) == Scope.exact(str(dirs["sub"]))
    assert scopes.resolve_scope(str(dirs["root"]), recursive=True) == Scope.recursive(
        str(dirs["root"])
    )


def test_resolve_scope_relative_to_base(dirs):
    assert scopes.resolve_scope("sub", base=dirs["root"]) == Scope.exact(str(dirs["sub"]))


def test_resolve_scope_follows_symlinks(dirs):
    link = dirs["base"] / "link"
    os.symlink(dirs["sub"], link)
    assert scopes.resolve_scope(str(link)) == Scope.exact(str(dirs["sub"]))


def test_resolve_scope_missing_directory(tmp_path):
    with pytest.raises(InvalidScopeError, match="Invalid scope path"):
        scopes.resolve_scope(str(tmp_path / "nope"))


def test_resolve_scope_rejects_files(tmp_path):
    f = tmp_path / "file.txt"
    f.write_text("x")
    with pytest.raises(InvalidScopeError):
        scopes.resolve_scope(str(f))


def test_resolve_scope_missing_directory_when_not_strict(dirs):
    gone = dirs["root"] / "gone"
    assert scopes.resolve_scope(str(gone), strict=False) == Scope.exact(str(gone))
    assert scopes.resolve_scope(
        str(dirs["root"]) + "/gone/../gone", recursive=True, strict=False
    ) == Scope.recursive(str(gone))
