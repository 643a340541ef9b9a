"""
Helmsman argument tokenizer.

The command line after the command name is flattened back into one string and then
scanned for flags:

    -a 5 -flag -name "hello world"   →   [("a", "5"), ("flag", True), ("name", "hello world")]

Grammar
- a flag is '-' followed by word characters; the name drops the '-'.
- an optional value follows after whitespace: a double-quoted literal (spaces kept,
  no escapes) or a run of non-whitespace characters that does not start with '-'.
- a flag with no value is a bare flag and carries True.
- anything that is not a flag or a flag's value is skipped without complaint.
"""
import re
from typing import NamedTuple

_PATTERN = re.compile(r'(?P<name>-\w+)(?:\s+(?!-)(?P<value>"[^"]*"|\S+))?')


class Argument(NamedTuple):
    name: str
    value: str | bool


def stringify(tokens, /):
    """
    Join argv elements into one parsable string.

    Elements containing whitespace, and empty elements, are wrapped in double quotes
    so they come back from tokenize() as a single value.
    """
    return " ".join(
        f'"{token}"' if not token or any(char.isspace() for char in token) else token
        for token in tokens
    )


def tokenize(input, /):
    """
    Scan a stringified command line into an ordered list of Arguments.
    """
    if not isinstance(input, str):
        raise TypeError("tokenize() argument must be a string")
    return [
        Argument(match["name"][1:], match["value"].strip('"') if match["value"] is not None else True)
        for match in _PATTERN.finditer(input)
    ]


__all__ = (
    "Argument",
    "stringify",
    "tokenize",
)
