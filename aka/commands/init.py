import typer

from aka import shell
from aka.cli.errors import error_feedback
from aka.lib import paths
from aka.store import Store


@error_feedback
def init(
    dump: bool = typer.Option(False, "--dump", hidden=True, help="Print alias functions"),
):
    """Print shell integration code. Add `eval "$(aka init)"` to your rc file."""
    if dump:
        with Store.open() as store:
            typer.echo(shell.dump(store.list()))
        return
    typer.echo(shell.bootstrap(paths.program()))
