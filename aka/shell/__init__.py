from aka.shell.args import function_body, replace_placeholders, uses_positional_args
from aka.shell.script import bootstrap, dump, render_function

__all__ = [
    "bootstrap",
    "dump",
    "function_body",
    "render_function",
    "replace_placeholders",
    "uses_positional_args",
]
