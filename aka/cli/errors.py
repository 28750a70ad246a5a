"""CLI error handling: report domain errors instead of tracebacks."""

from functools import wraps

import typer
from click.exceptions import Exit

from aka.errors import AkaError


def error_feedback(f):
    """Wrap a command so AkaError and OSError print to stderr and exit 1."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (SystemExit, Exit):
            raise
        except AkaError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from e
        except OSError as e:
            typer.echo(f"File error: {e}", err=True)
            raise typer.Exit(1) from e

    return wrapper
