import typer

from aka import history
from aka.cli import output
from aka.cli.errors import error_feedback
from aka.lib.names import validate_alias_name
from aka.scope import resolve_scope
from aka.store import Store


def add_alias(ctx: typer.Context, name: str, command: str, scope: str | None, recursive: bool):
    """Validate input, store the definition and report it."""
    ok, reason = validate_alias_name(name)
    if not ok:
        raise typer.BadParameter(reason, param_hint="'NAME'")
    if recursive and scope is None:
        raise typer.BadParameter("--recursive requires --scope", param_hint="'--recursive'")

    resolved = resolve_scope(scope, recursive)
    with Store.open() as store:
        store.add(name, command, resolved)

    if output.echo_json({"alias": name, "command": command, "scope": str(resolved)}, ctx):
        return
    message = f"Added alias '{name}' for '{command}'"
    if not resolved.is_global:
        message += f" ({resolved})"
    output.out_text(f"{message}\n(Reload shell to apply)", ctx)


@error_feedback
def add(
    ctx: typer.Context,
    name: str = typer.Argument(None, help="Alias name (prompted when importing from history)"),
    command: str = typer.Argument(None, help="Command to alias; omit to pick from shell history"),
    scope: str = typer.Option(
        None, "--scope", "-s", help="Directory the alias applies to ('global' for everywhere)"
    ),
    recursive: bool = typer.Option(
        False, "--recursive", "-r", help="Apply to the whole directory subtree"
    ),
    limit: int = typer.Option(0, "--limit", "-n", help="History entries to offer (0 = config)"),
):
    """Add an alias, or pick one from shell history when COMMAND is omitted."""
    if command is None:
        name, command = history.pick(name, limit)
    add_alias(ctx, name, command, scope, recursive)
