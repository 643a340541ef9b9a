"""
Helmsman faults (dispatch errors) and their rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing dispatch failure.
- CommandException: base type carrying a message plus options; knows how to render itself
  as a single diagnostic line and how to report itself through an output sink.
- trigger(): central entry point to surface a fault with runtime options merged in.
- getdoc(): optional description lookup for a code from the host application.

Integration
- The binder and the dispatcher build a fault, then call trigger(fault, sink=..., **ctx).
  Faults never escape the dispatcher: each one is written to the sink as one line and the
  current dispatch stops.

Host hooks (read from __main__)
- __prog__: program label shown in the header (defaults to the "prog" option).
- __codes__: mapping FaultCode -> label, to remap numeric ids.
- __styles__: palette overrides (see CommandException.__rich__).
- __docs__: mapping FaultCode -> documentation string (see getdoc()).
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used by the dispatcher (stable identifiers).

    grouping
    - routing (1110x): NO_PARAMETERS, UNKNOWN_COMMAND
    - binding (1112x): MISSING_ARGUMENT, CONVERSION_FAILURE
    - delegated (1113x): DELEGATED_ERROR, INTERRUPTED
    """
    # --- routing errors ---
    NO_PARAMETERS       = 11100
    UNKNOWN_COMMAND     = 11101

    # --- binding errors ---
    MISSING_ARGUMENT    = 11125
    CONVERSION_FAILURE  = 11126

    # --- delegated errors ---
    DELEGATED_ERROR     = 11131
    INTERRUPTED         = 11132

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to override
        numeric ids with friendlier labels; otherwise the numeric value is used.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    Base dispatch fault: a lowercased message plus free-form options.

    Common options
    - title, code, hint: header and guidance shown in the diagnostic line.
    - sink: the output sink the fault is reported through.
    - prog: program label for the header (overridden by __main__.__prog__).
    - colorful: whether __rich__ applies the palette.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def text(fragment, style):
            return Text(str(fragment), styles[style] if colorful else "")

        line = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", self.options.get("prog", "helmsman")), "prog-name"),
            " — ",
            text(self.options.get("code", FaultCode.DELEGATED_ERROR).normalize(), "code"),
            " | ",
            text(self.options.get("title", type(self).__name__).title(), "error-title"),
            " ] ",
            text(self.message if self.message is not Unset else "", "error-message"),
        )
        if hint := self.options.get("hint"):
            line.append_text(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
        return line

    def __str__(self):
        return self.__rich__().plain

    def __trigger__(self):
        self.options["sink"].error(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class NoParametersProvidedError(CommandException): ...
class UnknownCommandError(CommandException): ...
class MissingRequiredArgumentError(CommandException): ...
class TypeConversionError(CommandException): ...
class DelegatedCommandError(CommandException): ...
class InterruptedCommandError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - a "sink" option must be present, either on the fault already or in options.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation for a fault code, from a __docs__ mapping in __main__.

    returns None when the host does not document the code.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "CommandException",
    "NoParametersProvidedError",
    "UnknownCommandError",
    "MissingRequiredArgumentError",
    "TypeConversionError",
    "DelegatedCommandError",
    "InterruptedCommandError",
    "trigger",
    "getdoc",
)
