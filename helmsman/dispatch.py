"""
Dispatch entry point: from an argument vector to a finished command.

Phases
- no arguments: render help (default) or report NoParametersProvidedError.
- lookup: the first token names a command, compared case-insensitively;
  unknown names are reported as UnknownCommandError with close matches as a hint.
- tokenize: the remaining tokens are re-quoted, joined and scanned (helmsman.tokens).
- bind/invoke: helmsman.binder; the completion handle is awaited.

Boundaries
- parse() reports every dispatch fault through the sink and returns normally; exceptions
  raised by the command body itself propagate out of it.
- execute() and run() are the outermost boundary: body exceptions become
  DelegatedCommandError, Ctrl-C becomes InterruptedCommandError; neither escapes.

Example
    registry = Registry()
    registry.register("add", lambda a, b=2: print(int(a) + b))
    Dispatcher(registry).run()             # sys.argv[1:]
    Dispatcher(registry).run("add -a 5")   # shell-like string
"""
import asyncio
import difflib
import logging
import os.path
import shlex
import sys
from collections.abc import Iterable

from . import helper
from .binder import invoke
from .faults import *
from .registry import Registry
from .sinks import ConsoleSink, Metadata
from .tokens import stringify, tokenize
from .utils import *

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Runs one command per call against an explicit registry.

    Options
    - sink: OutputSink for lines and faults (default: ConsoleSink).
    - metadata: Metadata provider for the help banner (default: Metadata()).
    - default_to_help: on an empty argument vector, render help (True) or report
      NoParametersProvidedError (False).
    - colorful: style help and faults (default: True for the console sink, else False).
    - prog: program label in fault headers (default: basename of sys.argv[0]).
    """

    def __init__(self, registry, /, sink=Unset, metadata=Unset, *, default_to_help=True, colorful=Unset, prog=Unset):
        if not isinstance(registry, Registry):
            raise TypeError("dispatcher 'registry' must be a registry")
        self.registry = registry
        self.sink = sink if sink is not Unset else ConsoleSink(colorful=coalesce(colorful, True))
        self.metadata = metadata if metadata is not Unset else Metadata()
        self.default_to_help = bool(default_to_help)
        self.colorful = bool(coalesce(colorful, isinstance(self.sink, ConsoleSink) and self.sink.colorful))
        self.prog = coalesce(prog, os.path.basename(sys.argv[0] if sys.argv else "") or "helmsman")

    def trigger(self, fault, /, **options):
        trigger(fault, sink=self.sink, colorful=self.colorful, prog=self.prog, **options)

    def help(self):
        helper.render(self.registry, self.sink, self.metadata, colorful=self.colorful)

    async def parse(self, argv, /):
        """
        Dispatch one argument vector (program name already stripped).
        """
        argv = list(argv)
        if not argv:
            if self.default_to_help:
                return self.help()
            return self.trigger(NoParametersProvidedError(
                "no parameters presented",
                title="no parameters",
                code=FaultCode.NO_PARAMETERS,
                hint="pass a command name; run '%s' without arguments to list commands" % self.prog,
                docs=getdoc(FaultCode.NO_PARAMETERS),
            ))

        name, *tokens = argv
        if (command := self.registry.resolve(name)) is None:
            suggestions = difflib.get_close_matches(name.casefold(), [candidate.key for candidate in self.registry], 3)
            try:
                hint = "did you mean %r?" % self.registry.resolve(suggestions[0]).name
            except IndexError:
                hint = "run '%s' without arguments to see available commands" % self.prog
            return self.trigger(UnknownCommandError(
                "command %r not found" % name,
                title="unknown command",
                code=FaultCode.UNKNOWN_COMMAND,
                input=name,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_COMMAND),
            ))

        arguments = tokenize(stringify(tokens))
        logger.debug("dispatching %r with %r", command.name, arguments)
        await invoke(command, arguments, self.sink, colorful=self.colorful, prog=self.prog)

    async def execute(self, prompt=Unset, /):
        """
        Outermost boundary: parse `prompt` and report anything a command body raises.

        prompt
        - Unset: sys.argv[1:].
        - str: split like a shell (shlex.split).
        - Iterable[str]: used as-is.
        """
        argv = _normalize(prompt)
        try:
            await self.parse(argv)
        except Exception as exception:
            logger.debug("command body failed", exc_info=exception)
            self.trigger(DelegatedCommandError(
                "%s: %s" % (type(exception).__name__, exception) if str(exception) else type(exception).__name__,
                title="command failed",
                code=FaultCode.DELEGATED_ERROR,
                hint="the error was raised by the command itself, not by its arguments",
                exception=exception,
                docs=getdoc(FaultCode.DELEGATED_ERROR),
            ))
        except KeyboardInterrupt:
            self.trigger(InterruptedCommandError(
                "interrupted",
                title="interrupted",
                code=FaultCode.INTERRUPTED,
                docs=getdoc(FaultCode.INTERRUPTED),
            ))

    def run(self, prompt=Unset, /):
        """
        Synchronous entry point: execute() on a fresh event loop.
        """
        argv = _normalize(prompt)
        try:
            asyncio.run(self.execute(argv))
        except KeyboardInterrupt:
            self.trigger(InterruptedCommandError(
                "interrupted",
                title="interrupted",
                code=FaultCode.INTERRUPTED,
                docs=getdoc(FaultCode.INTERRUPTED),
            ))


def _normalize(prompt):
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("prompt must be a string or an iterable of strings")


def dispatch(registry, prompt=Unset, /, **options):
    """
    Convenience runner: Dispatcher(registry, **options).run(prompt).
    """
    Dispatcher(registry, **options).run(prompt)


__all__ = (
    "Dispatcher",
    "dispatch",
)
