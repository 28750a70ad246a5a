import click
import typer
from typer.core import TyperGroup

from aka import __version__
from aka.commands import add, init, install, listing, remove

from . import output
from .errors import error_feedback


class ImplicitGroup(TyperGroup):
    """Treat an unknown command name as an alias name.

    `aka NAME COMMAND` adds, `aka NAME` removes.
    """

    def get_command(self, ctx, cmd_name):
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None or cmd_name.startswith("-"):
            return cmd

        @click.command(name=cmd_name)
        @click.argument("command", required=False)
        @click.option("--scope", "-s", default=None, help="Directory the alias applies to.")
        @click.option("--recursive", "-r", is_flag=True, help="Apply to the whole subtree.")
        @click.pass_context
        @error_feedback
        def implicit(ctx, command, scope, recursive):
            if command is None:
                remove.remove_alias(ctx, cmd_name, scope, recursive)
            else:
                add.add_alias(ctx, cmd_name, command, scope, recursive)

        return implicit


app = typer.Typer(
    cls=ImplicitGroup,
    invoke_without_command=True,
    no_args_is_help=False,
    add_completion=False,
    help="Instant terminal alias manager.",
)

app.command(name="add")(add.add)
app.command(name="remove")(remove.remove)
app.command(name="rm", hidden=True)(remove.remove)
app.command(name="list")(listing.list_aliases)
app.command(name="ls", hidden=True)(listing.list_aliases)
app.command(name="init")(init.init)
app.command(name="install")(install.install)


def _version(value: bool):
    if value:
        typer.echo(f"aka {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_command(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", "-j", help="Output in JSON format."),
    quiet_output: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
    version: bool = typer.Option(
        False, "--version", callback=_version, is_eager=True, help="Show version and exit."
    ),
):
    """Instant terminal alias manager.

    `aka NAME COMMAND` adds an alias, `aka NAME` removes it, `aka` lists them."""
    output.init_context(ctx, json_output, quiet_output, verbose)
    output.configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        listing.list_aliases(ctx, show_all=False)


def main() -> None:
    """Entry point for the aka command."""
    app()
