import pytest

from aka.lib import config
from aka.store import Store


@pytest.fixture(autouse=True)
def aka_home(tmp_path, monkeypatch):
    """Isolate every test from the real data directory, home and history.

    Provides the temporary data directory used through AKA_DATA_DIR.
    """
    data_dir = tmp_path / "data"
    home = tmp_path / "home"
    home.mkdir()

    monkeypatch.setenv("AKA_DATA_DIR", str(data_dir))
    monkeypatch.setenv("HOME", str(home))
    for var in ("AKA_HISTORY_FILE", "HISTFILE", "AKA_FZF_BIN", "AKA_DEBUG", "XDG_DATA_HOME"):
        monkeypatch.delenv(var, raising=False)

    config.clear_cache()
    yield data_dir
    config.clear_cache()


@pytest.fixture
def store(tmp_path):
    s = Store.open(tmp_path / "store" / "aka.db")
    yield s
    s.close()


@pytest.fixture
def dirs(tmp_path):
    """Real directory tree for scope resolution: root/, root/sub/, root-sibling/."""
    base = (tmp_path / "tree").resolve()
    root = base / "root"
    sub = root / "sub"
    sibling = base / "rootx"
    for d in (sub, sibling):
        d.mkdir(parents=True)
    return {"base": base, "root": root, "sub": sub, "sibling": sibling}
