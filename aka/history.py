"""Pick a command from shell history with fzf."""

import logging
import os
import subprocess
from pathlib import Path

import typer

from .errors import CancelledError, ConfigError
from .lib import config

logger = logging.getLogger(__name__)

FZF_ARGS = ["--exit-0", "--reverse", "--height=40%", "--prompt=aka> "]


def resolve_history_path() -> Path:
    """Locate the history file: AKA_HISTORY_FILE, HISTFILE, config, then zsh/bash defaults."""
    for var in ("AKA_HISTORY_FILE", "HISTFILE"):
        value = os.environ.get(var, "").strip()
        if value:
            return Path(value).expanduser()

    configured = config.history_file()
    if configured:
        return Path(configured).expanduser()

    for candidate in (Path.home() / ".zsh_history", Path.home() / ".bash_history"):
        if candidate.exists():
            return candidate

    raise ConfigError("History file not found. Set HISTFILE or AKA_HISTORY_FILE")


def parse_history_line(line: str) -> str | None:
    """Extract the command from one history line.

    zsh extended history (``: 1700000000:0;cmd``) yields ``cmd``; bash
    timestamp lines (``#1700000000``) yield None.
    """
    if line.startswith(": "):
        _, sep, command = line[2:].partition(";")
        if sep:
            return command
    if line.startswith("#") and line[1:].isdigit():
        return None
    return line


def read_history_entries(path: Path, limit: int = 0) -> list[str]:
    """Return unique commands from `path`, newest first, at most `limit` of them."""
    max_entries = limit or config.history_limit()
    try:
        content = path.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        raise ConfigError(f"Cannot read history file {path}: {e}") from e

    entries: list[str] = []
    seen: set[str] = set()
    for line in reversed(content.splitlines()):
        command = parse_history_line(line)
        if command is None:
            continue
        command = command.strip()
        if not command or command in seen:
            continue
        seen.add(command)
        entries.append(command)
        if len(entries) >= max_entries:
            break

    logger.debug(f"Read {len(entries)} history entries from {path}")
    return entries


def select_with_fzf(entries: list[str]) -> str:
    """Let the user pick one entry in fzf. Raises CancelledError if nothing is chosen."""
    if not entries:
        raise CancelledError("No history entries to choose from")

    fzf = config.fzf_bin()
    try:
        result = subprocess.run(
            [fzf, *FZF_ARGS],
            input="\n".join(entries),
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise ConfigError(f"fzf not found: {fzf}") from e

    if result.returncode != 0:
        raise CancelledError()

    selected = result.stdout.strip()
    if not selected:
        raise CancelledError()
    return selected


def prompt_alias_name(command: str) -> str:
    while True:
        name = typer.prompt(f"Alias name (command: {command})").strip()
        if name:
            return name


def pick(alias: str | None = None, limit: int = 0) -> tuple[str, str]:
    """Return (alias name, command) chosen from history."""
    path = resolve_history_path()
    entries = read_history_entries(path, limit)
    if not entries:
        raise CancelledError("No history entries found")
    command = select_with_fzf(entries)
    name = alias or prompt_alias_name(command)
    return name, command
