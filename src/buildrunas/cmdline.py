"""Command string tokenizing and quoting.

Launcher commands are split the way build agents split configured command
strings: whitespace separates tokens, double quotes group text into a single
token and are removed, and ``\\"`` stands for a literal quote. Other
backslashes are kept as-is so Windows paths survive unchanged.
"""

from collections.abc import Iterable

QUOTE = '"'
ESCAPE = "\\"


def split_command_arguments(text: str) -> list[str]:
    """Split a command string into arguments and unquote them."""
    tokens: list[str] = []
    current: list[str] = []
    in_token = False
    in_quotes = False
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == ESCAPE and text[i + 1 : i + 2] == QUOTE:
            current.append(QUOTE)
            in_token = True
            i += 2
            continue
        if ch == QUOTE:
            in_quotes = not in_quotes
            in_token = True
        elif ch.isspace() and not in_quotes:
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
        else:
            current.append(ch)
            in_token = True
        i += 1
    if in_token:
        tokens.append("".join(current))
    return tokens


def quote_argument(arg: str) -> str:
    """Escape embedded quotes and wrap the argument in quotes if it has spaces."""
    escaped = arg.replace(QUOTE, ESCAPE + QUOTE)
    if " " in arg:
        return f"{QUOTE}{escaped}{QUOTE}"
    return escaped


def render_command_line(executable: str, arguments: Iterable[str]) -> str:
    """Render an executable and its arguments as a single invocation line."""
    return " ".join([executable, *(quote_argument(arg) for arg in arguments)])


def replace_macro(command: str, macro: str, replacement: str | None) -> str:
    """Replace every occurrence of macro, quoting replacements that contain whitespace."""
    if replacement is None:
        return command
    if any(ch.isspace() for ch in replacement):
        replacement = f"{QUOTE}{replacement}{QUOTE}"
    return command.replace(macro, replacement)
