from pathlib import Path

import typer

from aka.cli.errors import error_feedback
from aka.errors import ConfigError
from aka.lib import paths

HOOK = 'eval "$(aka init)"'
MARKER = "# aka alias manager"


def install_hook(rc: Path | None = None) -> str:
    """Append the init hook to the shell rc file unless it is already there."""
    target = rc or paths.shell_rc()
    try:
        content = target.read_text(encoding="utf-8") if target.exists() else ""
        if HOOK in content:
            return f"Already installed in {target}"
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "a", encoding="utf-8") as f:
            f.write(f"\n\n{MARKER}\n{HOOK}\n")
    except OSError as e:
        raise ConfigError(f"Cannot update {target}: {e}") from e
    return f"Installed to {target}"


@error_feedback
def install(
    shell_name: str = typer.Option(None, "--shell", help="Target shell (default: $SHELL)"),
):
    """Install the shell hook into your rc file."""
    typer.echo(install_hook(paths.shell_rc(shell_name)))
