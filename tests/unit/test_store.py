import pytest

from aka.errors import AliasNotFoundError, ScopeNotFoundError, StorageError
from aka.lib.store import Transaction
from aka.models import GLOBAL, Definition, Scope
from aka.store import Store

TMP = Scope.exact("/tmp")


def _insert_raw(store, name, value):
    with store.db.begin_write() as txn:
        txn.insert(name, value)
        txn.commit()


def test_empty_store_lists_nothing(store):
    assert store.list() == {}


def test_add_then_list(store):
    store.add("foo", "echo foo", GLOBAL)
    assert store.list() == {"foo": [Definition("echo foo", GLOBAL)]}


def test_add_same_scope_replaces(store):
    store.add("foo", "echo one", TMP)
    store.add("foo", "echo two", TMP)
    assert store.list()["foo"] == [Definition("echo two", TMP)]


def test_add_other_scope_appends(store):
    store.add("foo", "echo foo", GLOBAL)
    store.add("foo", "echo bar", TMP)
    assert store.list()["foo"] == [Definition("echo foo", GLOBAL), Definition("echo bar", TMP)]


def test_replaced_definition_moves_to_end(store):
    store.add("foo", "echo g", GLOBAL)
    store.add("foo", "echo t", TMP)
    store.add("foo", "echo g2", GLOBAL)
    assert store.list()["foo"] == [Definition("echo t", TMP), Definition("echo g2", GLOBAL)]


def test_remove_returns_all_definitions(store):
    scopes = [GLOBAL, TMP, Scope.recursive("/tmp"), Scope.exact("/srv")]
    for i, scope in enumerate(scopes):
        store.add("foo", f"echo {i}", scope)

    removed = store.remove("foo")
    assert [d.scope for d in removed] == scopes
    assert "foo" not in store.list()


def test_remove_missing(store):
    with pytest.raises(AliasNotFoundError, match="Alias not found: ghost"):
        store.remove("ghost")


def test_remove_scope_partial(store):
    store.add("foo", "echo foo", GLOBAL)
    store.add("foo", "echo bar", TMP)

    removed = store.remove_scope("foo", TMP)
    assert removed == Definition("echo bar", TMP)
    assert store.list() == {"foo": [Definition("echo foo", GLOBAL)]}


def test_remove_scope_last_deletes_record(store):
    store.add("foo", "echo foo", GLOBAL)
    store.remove_scope("foo", GLOBAL)
    assert store.list() == {}
    assert store.get("foo") is None


def test_remove_scope_not_found(store):
    store.add("foo", "echo foo", GLOBAL)
    with pytest.raises(ScopeNotFoundError):
        store.remove_scope("foo", TMP)
    assert store.list() == {"foo": [Definition("echo foo", GLOBAL)]}


def test_remove_scope_missing_alias(store):
    with pytest.raises(AliasNotFoundError):
        store.remove_scope("ghost", GLOBAL)


def test_remove_all(store):
    store.add("foo", "echo foo", GLOBAL)
    store.add("bar", "echo bar", GLOBAL)
    store.add("baz", "echo baz", TMP)
    assert store.remove_all() == 3
    assert store.list() == {}
    assert store.remove_all() == 0


def test_remove_all_in_scope_global(store):
    store.add("a", "echo a", GLOBAL)
    store.add("a", "echo a here", Scope.exact("/x"))
    store.add("b", "echo b", GLOBAL)

    removed = store.remove_all_in_scope(GLOBAL)

    assert removed == {"a": [Definition("echo a", GLOBAL)], "b": [Definition("echo b", GLOBAL)]}
    assert store.list() == {"a": [Definition("echo a here", Scope.exact("/x"))]}


def test_remove_all_in_scope_uses_equality_not_prefix(store):
    store.add("outer", "echo outer", Scope.recursive("/a"))
    store.add("inner", "echo inner", Scope.recursive("/a/b"))
    store.add("exact", "echo exact", Scope.exact("/a"))

    removed = store.remove_all_in_scope(Scope.recursive("/a"))

    assert list(removed) == ["outer"]
    assert set(store.list()) == {"inner", "exact"}


def test_list_is_ordered_by_name(store):
    for name in ("zeta", "alpha", "mid"):
        store.add(name, "true", GLOBAL)
    assert list(store.list()) == ["alpha", "mid", "zeta"]


def test_legacy_raw_value_reads_as_global(store):
    _insert_raw(store, "old", "ls -la")
    assert store.list() == {"old": [Definition("ls -la", GLOBAL)]}
    assert store.get("old") == [Definition("ls -la", GLOBAL)]


def test_legacy_value_upgrades_on_add(store):
    _insert_raw(store, "old", "ls -la")
    store.add("old", "ls", TMP)
    assert store.list()["old"] == [Definition("ls -la", GLOBAL), Definition("ls", TMP)]


def test_legacy_value_removal(store):
    _insert_raw(store, "old", "ls -la")
    _insert_raw(store, "other", "pwd")
    assert store.remove_scope("old", GLOBAL) == Definition("ls -la", GLOBAL)
    assert store.remove_all_in_scope(GLOBAL) == {"other": [Definition("pwd", GLOBAL)]}
    assert store.list() == {}


def test_failed_commit_leaves_records_unchanged(store, monkeypatch):
    store.add("foo", "echo one", GLOBAL)
    store.add("bar", "echo bar", GLOBAL)

    def fail(self):
        raise StorageError("disk full")

    with monkeypatch.context() as m:
        m.setattr(Transaction, "commit", fail)
        with pytest.raises(StorageError):
            store.add("foo", "echo two", GLOBAL)
        with pytest.raises(StorageError):
            store.remove_all()
        with pytest.raises(StorageError):
            store.remove_all_in_scope(GLOBAL)

    assert store.list() == {
        "bar": [Definition("echo bar", GLOBAL)],
        "foo": [Definition("echo one", GLOBAL)],
    }


def test_data_persists_across_instances(tmp_path):
    path = tmp_path / "aka.db"
    with Store.open(path) as first:
        first.add("ll", "ls -la", GLOBAL)
    with Store.open(path) as second:
        assert second.list() == {"ll": [Definition("ls -la", GLOBAL)]}


def test_two_writers_do_not_clobber_each_other(tmp_path):
    path = tmp_path / "aka.db"
    with Store.open(path) as a, Store.open(path) as b:
        a.add("one", "echo 1", GLOBAL)
        b.add("two", "echo 2", GLOBAL)
        a.add("one", "echo 1 here", TMP)
        assert set(b.list()) == {"one", "two"}
        assert len(b.list()["one"]) == 2


def test_open_directory_is_storage_error(tmp_path):
    path = tmp_path / "aka.db"
    path.mkdir()
    with pytest.raises(StorageError):
        Store.open(path)


def test_open_defaults_to_data_dir(aka_home):
    with Store.open() as s:
        s.add("x", "true", GLOBAL)
    assert (aka_home / "aka.db").exists()
