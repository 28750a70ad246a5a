"""Definition-list serialization.

Records are stored as a JSON array of ``{"command": ..., "scope": ...}`` where
scope is ``"Global"`` or a single-key object ``{"Exact": path}`` /
``{"Recursive": path}``.
"""

import json

from aka.models import GLOBAL, Definition, Scope, ScopeKind


def encode_scope(scope: Scope) -> str | dict[str, str]:
    if scope.kind is ScopeKind.GLOBAL:
        return ScopeKind.GLOBAL.value
    return {scope.kind.value: scope.path}


def decode_scope(value) -> Scope:
    if value == ScopeKind.GLOBAL.value:
        return GLOBAL
    if isinstance(value, dict) and len(value) == 1:
        ((tag, path),) = value.items()
        if tag in (ScopeKind.EXACT.value, ScopeKind.RECURSIVE.value) and isinstance(path, str):
            return Scope(ScopeKind(tag), path)
    raise ValueError(f"Invalid scope value: {value!r}")


def encode(definitions: list[Definition]) -> str:
    payload = [{"command": d.command, "scope": encode_scope(d.scope)} for d in definitions]
    return json.dumps(payload, ensure_ascii=False)


def decode(raw: str) -> list[Definition]:
    """Decode a stored value, raising ValueError if it is not a definition list."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError("Not a definition list") from e
    if not isinstance(payload, list) or not payload:
        raise ValueError("Not a definition list")

    definitions = []
    for item in payload:
        if not isinstance(item, dict) or not isinstance(item.get("command"), str):
            raise ValueError(f"Invalid definition: {item!r}")
        definitions.append(Definition(item["command"], decode_scope(item.get("scope"))))
    return definitions


def decode_or_legacy(raw: str) -> list[Definition]:
    """Decode a stored value, reading anything else as one global command.

    Older releases stored the bare command string; that value keeps working
    without a migration.
    """
    try:
        return decode(raw)
    except ValueError:
        return [Definition(raw, GLOBAL)]


__all__ = ["encode", "decode", "decode_or_legacy", "encode_scope", "decode_scope"]
