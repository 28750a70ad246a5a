import json as json_lib
import logging
import os

import typer


def init_context(
    ctx: typer.Context,
    json_output: bool = False,
    quiet_output: bool = False,
    verbose: bool = False,
) -> None:
    """Initialize CLI context with standard flags."""
    if ctx.obj is None or not isinstance(ctx.obj, dict):
        ctx.obj = {}
    ctx.obj["json_output"] = json_output
    ctx.obj["quiet_output"] = quiet_output
    ctx.obj["verbose"] = verbose


def configure_logging(verbose: bool = False) -> None:
    debug = verbose or os.environ.get("AKA_DEBUG", "") not in ("", "0")
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="[aka] %(message)s",
    )


def is_json_mode(ctx: typer.Context) -> bool:
    return _flag(ctx, "json_output")


def is_quiet_mode(ctx: typer.Context) -> bool:
    return _flag(ctx, "quiet_output")


def _flag(ctx: typer.Context, name: str) -> bool:
    # Flags live on the root context; subcommand contexts inherit ctx.obj.
    obj = ctx.find_root().obj if ctx is not None else None
    return bool(obj.get(name, False)) if isinstance(obj, dict) else False


def echo_json(data, ctx: typer.Context) -> bool:
    """Output data as JSON if in JSON mode. Returns True if output, False otherwise."""
    if is_json_mode(ctx):
        typer.echo(json_lib.dumps(data, indent=2, ensure_ascii=False))
        return True
    return False


def out_text(msg: str, ctx: typer.Context) -> None:
    if is_quiet_mode(ctx):
        return
    typer.echo(msg)
