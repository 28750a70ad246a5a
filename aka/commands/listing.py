import typer

from aka import scope as scopes
from aka.cli import output
from aka.cli.errors import error_feedback
from aka.models import Definition
from aka.store import Store


def visible(aliases: dict[str, list[Definition]], directory: str) -> dict[str, list[Definition]]:
    """Keep only definitions active in `directory`, dropping aliases left empty."""
    result = {}
    for name, definitions in aliases.items():
        active = [d for d in definitions if scopes.matches(d.scope, directory)]
        if active:
            result[name] = active
    return result


def format_line(name: str, definition: Definition) -> str:
    return f"{name} = '{definition.command}' ({definition.scope})"


@error_feedback
def list_aliases(
    ctx: typer.Context,
    show_all: bool = typer.Option(False, "--all", "-a", help="Include aliases scoped elsewhere"),
):
    """List aliases active in the current directory."""
    with Store.open() as store:
        aliases = store.list()
    if not show_all:
        aliases = visible(aliases, scopes.current_directory())

    if output.echo_json(
        {
            name: [{"command": d.command, "scope": str(d.scope)} for d in scopes.ordered(defs)]
            for name, defs in aliases.items()
        },
        ctx,
    ):
        return

    if not aliases:
        typer.echo("No aliases found")
        return
    for name, definitions in aliases.items():
        for definition in scopes.ordered(definitions):
            typer.echo(format_line(name, definition))
