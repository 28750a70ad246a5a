import re

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")

RESERVED = frozenset(
    {
        "aka",
        "case",
        "do",
        "done",
        "elif",
        "else",
        "esac",
        "fi",
        "for",
        "function",
        "if",
        "in",
        "select",
        "then",
        "time",
        "until",
        "while",
    }
)


def validate_alias_name(name: str) -> tuple[bool, str]:
    if not name:
        return False, "Alias name cannot be empty"
    if not _NAME.fullmatch(name):
        return False, f"Invalid alias name '{name}': use letters, digits, '_' and '-'"
    if name in RESERVED or name.startswith("__aka"):
        return False, f"Alias name '{name}' is reserved"
    return True, ""
