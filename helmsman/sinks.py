"""
Output sinks and metadata providers consumed by the dispatcher.

- OutputSink: anything with line(text) and error(text). Text is a str or a rich renderable
  (faults render themselves as one rich Text line).
- ConsoleSink: rich consoles, stdout for lines and stderr for errors.
- BufferSink: keeps plain-text copies of everything written (embedding, tests).
- Metadata: name/version/author for the help banner.
"""
import importlib.metadata
from collections import defaultdict
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.text import Text

from .utils import *


@runtime_checkable
class OutputSink(Protocol):
    def line(self, text, /): ...
    def error(self, text, /): ...


class ConsoleSink:
    """
    Rich-backed sink.

    Error lines get the "error" palette entry, overridable through __styles__ in __main__.
    With colorful=False every style is dropped.
    """

    def __init__(self, *, colorful=True, stdout=Unset, stderr=Unset):
        self.colorful = bool(colorful)
        self.stdout = coalesce(stdout, Console(no_color=not self.colorful, highlight=False))
        self.stderr = coalesce(stderr, Console(stderr=True, no_color=not self.colorful, highlight=False))

    def _style(self, name):
        styles = defaultdict(str, {
            "error": "#FF4DA6",
        } | getattr(__import__("__main__"), "__styles__", {}))
        return styles[name] if self.colorful else ""

    def line(self, text, /):
        self.stdout.print(text, soft_wrap=True)

    def error(self, text, /):
        self.stderr.print(text, style=self._style("error"), soft_wrap=True)


class BufferSink:
    """
    Sink that records plain text; `lines` and `errors` keep write order.
    """

    def __init__(self):
        self.lines = []
        self.errors = []

    @staticmethod
    def _plain(text):
        if isinstance(text, Text):
            return text.plain
        return str(text)

    def line(self, text, /):
        self.lines.append(self._plain(text))

    def error(self, text, /):
        self.errors.append(self._plain(text))


class Metadata:
    """
    Display metadata for the help banner.

    Lookup order per field
    - __main__ attributes: __prog__, __version__, __author__.
    - the installed distribution, when one is named.
    Fields that cannot be found are None.
    """

    def __init__(self, distribution=Unset, /):
        if not isinstance(distribution, str | Unset):
            raise TypeError("metadata 'distribution' must be a string")
        self.distribution = coalesce(distribution)

    def _lookup(self, attribute, *fields):
        if (value := getattr(__import__("__main__"), attribute, None)) is not None:
            return str(value)
        if self.distribution is None:
            return None
        try:
            metadata = importlib.metadata.metadata(self.distribution)
        except importlib.metadata.PackageNotFoundError:
            return None
        return next(filter(None, map(metadata.get, fields)), None)

    def name(self):
        return self._lookup("__prog__", "Name")

    def version(self):
        return self._lookup("__version__", "Version")

    def author(self):
        return self._lookup("__author__", "Author", "Author-email")


__all__ = (
    "OutputSink",
    "ConsoleSink",
    "BufferSink",
    "Metadata",
)
