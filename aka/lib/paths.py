import os
import shlex
import shutil
import sys
from pathlib import Path

_DB_FILE = "aka.db"


def data_dir() -> Path:
    """Return the directory holding the alias database and config.

    AKA_DATA_DIR wins; otherwise follow XDG_DATA_HOME, defaulting to ~/.local/share.
    """
    override = os.environ.get("AKA_DATA_DIR")
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".local" / "share"
    return base / "aka"


def database() -> Path:
    return data_dir() / _DB_FILE


def config_file() -> Path:
    return data_dir() / "config.yaml"


def package_root() -> Path:
    return Path(__file__).resolve().parent.parent


def migrations_dir() -> Path:
    return package_root() / "migrations"


def shell_rc(shell: str | None = None) -> Path:
    """Path to the rc file of `shell` (defaults to $SHELL, then zsh)."""
    name = os.path.basename(shell or os.environ.get("SHELL") or "zsh")
    if name == "zsh":
        return Path.home() / ".zshrc"
    if name == "bash":
        return Path.home() / ".bashrc"
    return Path.home() / f".{name}rc"


def program() -> str:
    """Shell-quoted command line that runs aka, for embedding in generated scripts."""
    exe = shutil.which("aka")
    if exe:
        return shlex.quote(str(Path(exe).resolve()))
    return f"{shlex.quote(sys.executable)} -m aka"
