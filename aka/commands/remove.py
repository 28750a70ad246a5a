import typer

from aka.cli import output
from aka.cli.errors import error_feedback
from aka.errors import CancelledError
from aka.scope import resolve_scope
from aka.store import Store


def remove_alias(ctx: typer.Context, name: str, scope: str | None, recursive: bool):
    """Remove a whole alias, or only its definition in one scope."""
    if recursive and scope is None:
        raise typer.BadParameter("--recursive requires --scope", param_hint="'--recursive'")

    if scope is None:
        with Store.open() as store:
            removed = store.remove(name)
        if output.echo_json(
            {"alias": name, "removed": [_entry(d) for d in removed]},
            ctx,
        ):
            return
        output.out_text(f"Removed alias '{name}' ({len(removed)} definitions)", ctx)
        return

    resolved = resolve_scope(scope, recursive, strict=False)
    with Store.open() as store:
        definition = store.remove_scope(name, resolved)
    if output.echo_json({"alias": name, "removed": [_entry(definition)]}, ctx):
        return
    output.out_text(f"Removed alias '{name}' from scope '{resolved}'", ctx)


def remove_everything(ctx: typer.Context, scope: str | None, recursive: bool, force: bool):
    if recursive and scope is None:
        raise typer.BadParameter("--recursive requires --scope", param_hint="'--recursive'")

    with Store.open() as store:
        if scope is None:
            if not force and not typer.confirm("Remove ALL aliases?"):
                raise CancelledError()
            count = store.remove_all()
            if output.echo_json({"removed": count}, ctx):
                return
            output.out_text(f"Removed {count} alias(es)", ctx)
            return

        resolved = resolve_scope(scope, recursive, strict=False)
        if not force and not typer.confirm(f"Remove all aliases in scope '{resolved}'?"):
            raise CancelledError()
        removed = store.remove_all_in_scope(resolved)

    if output.echo_json(
        {name: [_entry(d) for d in defs] for name, defs in removed.items()},
        ctx,
    ):
        return
    output.out_text(f"Removed {len(removed)} alias(es) from scope '{resolved}'", ctx)


def _entry(definition) -> dict:
    return {"command": definition.command, "scope": str(definition.scope)}


@error_feedback
def remove(
    ctx: typer.Context,
    name: str = typer.Argument(None, help="Alias name"),
    scope: str = typer.Option(
        None, "--scope", "-s", help="Only remove the definition in this scope ('global' allowed)"
    ),
    recursive: bool = typer.Option(
        False, "--recursive", "-r", help="The scope is a recursive (subtree) scope"
    ),
    all_: bool = typer.Option(False, "--all", "-a", help="Remove every alias (or every one in --scope)"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """Remove an alias, one of its scopes, or everything."""
    if all_:
        if name is not None:
            raise typer.BadParameter("NAME cannot be combined with --all", param_hint="'NAME'")
        remove_everything(ctx, scope, recursive, force)
        return
    if name is None:
        raise typer.BadParameter("Missing alias name (or use --all)", param_hint="'NAME'")
    remove_alias(ctx, name, scope, recursive)
