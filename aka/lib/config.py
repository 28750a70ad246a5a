import os
from functools import lru_cache

import yaml

from aka.errors import ConfigError

from . import paths

DEFAULT_HISTORY_LIMIT = 200
DEFAULT_FZF_BIN = "fzf"


def _validate_config(cfg) -> None:
    """Validate config structure. Fail fast on invalid types."""
    if not isinstance(cfg, dict):
        raise ConfigError(f"Config must be a mapping, got {type(cfg).__name__}")

    limit = cfg.get("history_limit")
    if limit is not None and (not isinstance(limit, int) or isinstance(limit, bool) or limit < 0):
        raise ConfigError("Config 'history_limit' must be a non-negative integer")

    for key in ("history_file", "fzf_bin"):
        if key in cfg and cfg[key] is not None and not isinstance(cfg[key], str):
            raise ConfigError(f"Config '{key}' must be a string")


def clear_cache():
    load_config.cache_clear()


@lru_cache(maxsize=1)
def load_config() -> dict:
    """Load config.yaml from the data directory, or an empty dict if absent."""
    path = paths.config_file()
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    _validate_config(cfg)
    return cfg


def history_limit() -> int:
    return load_config().get("history_limit") or DEFAULT_HISTORY_LIMIT


def fzf_bin() -> str:
    return os.environ.get("AKA_FZF_BIN") or load_config().get("fzf_bin") or DEFAULT_FZF_BIN


def history_file() -> str | None:
    return load_config().get("history_file")
