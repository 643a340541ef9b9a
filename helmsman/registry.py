"""
Command registry: the set of commands a dispatcher can reach.

- register(name, callback, ...) builds a Command from a callable (or decorates one).
- add(command) stores a pre-built Command.
- include(source) imports modules and registers every function tagged with @command.
- resolve(name) looks a command up case-insensitively.

Names are unique under case-folding. Registering a different command under a taken name
raises ValueError; re-adding the very same Command is a no-op (so including a module twice
is harmless). Iteration follows registration order and is meant for help output only.

The registry is a plain value: build it at start-up, hand it to a Dispatcher, and leave it
alone while a dispatch runs.
"""
import importlib
import logging
from types import ModuleType

from .commands import Command
from .utils import *

logger = logging.getLogger(__name__)


class Registry:
    def __init__(self, commands=(), /):
        self._commands = {}
        for command in commands:
            self.add(command)

    @property
    def commands(self):
        return tuple(self._commands.values())

    def add(self, command, /):
        """
        Store a Command under its case-folded name and return it.
        """
        if not isinstance(command, Command):
            raise TypeError("add() argument must be a command")
        if self._commands.setdefault(command.key, command) is command:
            logger.debug("registered command %r", command.name)
            return command
        raise ValueError(f"command name {command.name!r} is already in use")

    def register(self, source=Unset, /, *args, **kwargs):
        """
        Build a Command from a callable and add it.

        Invocation modes
        - register(callback)                       → name from callback.__name__
        - register("name", callback[, parameters]) → explicit name (and schema)
        - @register("name") / @register(descr=...) → decorator; returns the callable unchanged

        The direct forms return the new Command.
        """
        if isinstance(source, str):
            if args and callable(args[0]):
                callback, *args = args
                return self.add(Command(callback, source, *args, **kwargs))
            return self.register(Unset, source, *args, **kwargs)

        @rename("register")
        def wrapper(callback, /):
            self.add(Command(callback, *args, **kwargs))
            return callback

        if source is Unset:
            return wrapper
        return self.add(Command(source, *args, **kwargs))

    def command(self, source=Unset, /, *args, **kwargs):
        """
        Decorator form of register(); the decorated callable is returned unchanged.
        """
        if isinstance(source, str) or source is Unset:
            return self.register(Unset, *((source,) if source is not Unset else ()), *args, **kwargs)
        self.register(source, *args, **kwargs)
        return source

    def include(self, source, /):
        """
        Register every @command-tagged function found in one or more modules.

        Parameters
        - source: module object, or a module-glob pattern expanded with mglob()
          ("app.commands", "app.commands.*", "app.**.commands").

        Functions are taken in module definition order; modules in sorted name order.

        Raises
        - TypeError: bad source type or an unimportable module.
        - ValueError: name collisions (see add()).
        """
        if isinstance(source, ModuleType):
            modules = [source]
        elif isinstance(source, str):
            def load(name):
                try:
                    return importlib.import_module(name)
                except ImportError:
                    raise TypeError(f"unable to import module {name!r}") from None
            modules = list(map(load, mglob(source)))
        else:
            raise TypeError("include() argument must be a module or a string")

        for module in modules:
            for object in list(vars(module).values()):
                if isinstance(tagged := getattr(object, "__command__", None), Command) and callable(object):
                    self.add(tagged)

    def resolve(self, name, /):
        """
        Return the command named `name` (any casing), or None.
        """
        if not isinstance(name, str):
            raise TypeError("resolve() argument must be a string")
        return self._commands.get(name.casefold())

    def __contains__(self, name):
        return isinstance(name, str) and name.casefold() in self._commands

    def __iter__(self):
        return iter(self.commands)

    def __len__(self):
        return len(self._commands)

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(repr, self._commands))


__all__ = (
    "Registry",
)
