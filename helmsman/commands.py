"""
Helmsman command layer: describe, tag and bind CLI commands.

What this module provides
- Command: a named, invocable unit built once from a callable:
  • Parameter schema from the callable's signature (or an explicit schema).
  • Case-insensitive key used by the registry.
  • Synchronous/asynchronous variant detected at build time.
  • bind(arguments) producing a Binding (see helmsman.binder for the rules).
- Binding: the typed result of binding, ready to be called.
- command(...): tag a plain function as a command so Registry.include() can find it.

Quick start
    from helmsman import Registry, command, dispatch

    @command
    def add(a: int, b: int = 2):
        print(f"result: {a + b}")

    @command("div")
    def divide(a: float, b: float):
        print(f"result: {a / b}")

    registry = Registry()
    registry.include(__name__)
    dispatch(registry, ["add", "-a", "5"])   # result: 7

Design notes
- Parameter types are limited to the Kind set; anything else fails here, at build time.
- Commands are plain data after construction; properties are read-only views.
"""
import inspect
from collections.abc import Iterable
from types import MappingProxyType
from typing import NamedTuple

from .parameters import Parameter, signature
from .utils import *


class Binding(NamedTuple):
    """
    Coerced values for one command call.

    - arguments: positional values, in schema order.
    - keywords: keyword-only values, by name.
    """
    command: "Command"
    arguments: tuple
    keywords: MappingProxyType

    @property
    def values(self):
        names = (parameter.name for parameter in self.command.parameters if not parameter.keyword)
        return MappingProxyType(dict(zip(names, self.arguments)) | dict(self.keywords))

    def __call__(self):
        return self.command.callback(*self.arguments, **self.keywords)


class Command:
    """
    Named, invocable unit of dispatch.

    Fields (read-only)
    - name: display name; registry lookups compare it case-insensitively (see key).
    - descr: one-line description (first docstring line by default) or None.
    - parameters: tuple[Parameter, ...] in declaration order.
    - callback: the wrapped callable.
    - asynchronous: True when the callback (or its __call__) is a coroutine function.

    Errors
    - TypeError/ValueError on non-callables, empty names, unsupported parameter types,
      variadic parameters, schemas with duplicate names or mismatching the callable.
    """
    __introspectable__ = ("name", "descr", "parameters", "callback", "asynchronous")
    __displayable__ = ("name", "descr", "parameters", "asynchronous")

    name = mirror("name")
    descr = mirror("descr")
    parameters = mirror("parameters")
    callback = mirror("callback")
    asynchronous = mirror("asynchronous")

    def __init__(self, callback, /, name=Unset, parameters=Unset, *, descr=Unset):
        if not callable(callback):
            raise TypeError("command 'callback' must be callable")

        name = coalesce(name, getattr(callback, "__name__", None))
        if not isinstance(name, str):
            raise TypeError("command 'name' must be a string")
        elif not (name := name.strip()) or any(char.isspace() for char in name):
            raise ValueError(f"command 'name' must be a non-empty word, not {name!r}")

        descr = coalesce(descr, (inspect.getdoc(callback) or "").partition("\n")[0] or None)
        if not isinstance(descr, str | None):
            raise TypeError("command 'descr' must be a string")

        if parameters is Unset:
            parameters = signature(callback)
        elif isinstance(parameters, Iterable):
            parameters = list(parameters)
            if not all(isinstance(parameter, Parameter) for parameter in parameters):
                raise TypeError("command 'parameters' must be an iterable of parameters")
            if len({parameter.name for parameter in parameters}) != len(parameters):
                raise ValueError(f"command {name!r} parameter names must be unique")
            try:
                inspect.signature(callback).bind(*(
                    parameter.name for parameter in parameters if not parameter.keyword
                ), **{
                    parameter.name: parameter.name for parameter in parameters if parameter.keyword
                })
            except TypeError:
                raise TypeError(f"command {name!r} parameters do not match its callback") from None
            except ValueError:
                pass  # uninspectable callables are trusted with the explicit schema
        else:
            raise TypeError("command 'parameters' must be an iterable of parameters")

        self._name = name
        self._descr = descr
        self._parameters = parameters
        self._callback = callback
        self._asynchronous = inspect.iscoroutinefunction(callback) or (
            not inspect.isroutine(callback) and inspect.iscoroutinefunction(getattr(type(callback), "__call__", None))
        )

    @property
    def key(self):
        """
        Registry key: the case-folded name.
        """
        return self._name.casefold()

    def bind(self, arguments, /):
        """
        Bind parsed arguments to this command's parameters.

        Raises MissingRequiredArgumentError or TypeConversionError (see helmsman.binder).
        """
        from .binder import bind
        return bind(self, arguments)

    def __rich_repr__(self):
        for name in type(self).__displayable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "command(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


def command(source=Unset, /, *args, **kwargs):
    """
    Tag a function as a command, returning the function unchanged.

    Invocation modes
    - @command                   → name from __name__
    - @command("alt")            → explicit (alternative) name
    - @command(descr="...")      → any Command keyword
    - command(func, "alt", ...)  → direct form

    The built Command is stored on the function as __command__; Registry.include()
    collects tagged functions from modules. Building happens now, so schema errors
    surface at import time rather than at dispatch time.
    """
    if isinstance(source, str):
        return command(Unset, source, *args, **kwargs)

    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        source.__command__ = Command(source, *args, **kwargs)
        return source

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "Binding",
    "Command",
    "command",
)
