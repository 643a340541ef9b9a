r"""
Helmsman parameter schemas and scalar kinds.

Overview
- Kind: the closed set of scalar kinds a command parameter may declare
  (INTEGER, FLOAT, BOOLEAN, TEXT), each with an explicit, total conversion.
- Parameter: one formal parameter of a command (name, kind, default, keyword-only marker).
- signature(callback): extract the ordered Parameter schema of a callable.

Conversion rules
- Raw values come from the tokenizer: a string, or True for a bare flag.
- Defaults come from the declaration and may already have the right type.
- The bare-flag True follows the canonical scalar conversion: 1, 1.0, True or "True".
- convert() raises ValueError on failure; the binder turns it into a fault.

Quick example:
    >>> Kind.INTEGER.convert("5")
    5
    >>> Kind.BOOLEAN.convert(True)
    True
    >>> Parameter("b", int, 2)
    parameter(name='b', kind=<Kind.INTEGER: 'int'>, default=2, keyword=False)
"""
import enum
import functools
import inspect
import operator
import re
from inspect import Parameter as Formal

from .utils import *


def _integer(value):
    match value:
        case bool():
            return int(value)
        case int():
            return value
        case float() if value.is_integer():
            return int(value)
        case str() if re.fullmatch(r"\s*[+-]?\d+\s*", value):
            return int(value, 10)
    raise ValueError(f"invalid integer: {value!r}")


def _float(value):
    match value:
        case int() | float():
            return float(value)
        case str() if "_" not in value:
            return float(value)
    raise ValueError(f"invalid float: {value!r}")


def _boolean(value):
    match value:
        case bool():
            return value
        case str() if value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
    raise ValueError(f"invalid boolean: {value!r}")


def _text(value):
    match value:
        case str():
            return value
    return str(value)


class Kind(enum.Enum):
    """
    Supported scalar kinds, valued by their Python type name.

    Anything outside this set is rejected when a command is built, never at call time.
    """
    INTEGER = "int"
    FLOAT = "float"
    BOOLEAN = "bool"
    TEXT = "str"

    @property
    def type(self):
        return {"int": int, "float": float, "bool": bool, "str": str}[self.value]

    def convert(self, value, /):
        return {
            Kind.INTEGER: _integer,
            Kind.FLOAT: _float,
            Kind.BOOLEAN: _boolean,
            Kind.TEXT: _text,
        }[self](value)

    @classmethod
    def of(cls, annotation, /):
        """
        Resolve a kind from a Kind, a supported type, or its name ("int", "float", ...).
        """
        if isinstance(annotation, cls):
            return annotation
        for kind in cls:
            if annotation is kind.type or annotation == kind.value:
                return kind
        raise TypeError(f"unsupported parameter type {getattr(annotation, '__name__', annotation)!r}")


class Parameter:
    """
    Declared shape of one command parameter.

    Fields
    - name: identifier matched case-sensitively against a flag name without its '-'.
    - kind: Kind (accepts a Kind, int/float/bool/str, or their names).
    - default: raw default value, or Unset when the parameter is required.
    - keyword: True for keyword-only parameters (passed by keyword when invoking).
    """
    __slots__ = ("_name", "_kind", "_default", "_keyword")
    __introspectable__ = ("name", "kind", "default", "keyword")

    name = mirror("name")
    kind = mirror("kind")
    default = mirror("default")
    keyword = mirror("keyword")

    def __init__(self, name, kind=str, default=Unset, /, *, keyword=False):
        if not isinstance(name, str):
            raise TypeError("parameter 'name' must be a string")
        elif not name.isidentifier():
            raise ValueError(f"parameter 'name' must be an identifier, not {name!r}")
        self._name = name
        self._kind = Kind.of(kind)
        self._default = default
        self._keyword = bool(keyword)

    @property
    def has_default(self):
        return self._default is not Unset

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__introspectable__)

    def __hash__(self):
        return hash((self._name, self._kind, self._keyword))

    def __rich_repr__(self):
        for name in self.__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "parameter(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))


def _infer(name, formal):
    """
    Kind for a formal parameter: its annotation, else its default's type, else TEXT.
    """
    if formal.annotation is not Formal.empty:
        try:
            return Kind.of(formal.annotation)
        except TypeError as error:
            raise TypeError(f"parameter {name!r}: {error}") from None
    if formal.default is not Formal.empty and formal.default is not None:
        try:
            return Kind.of(type(formal.default))
        except TypeError:
            raise TypeError(f"parameter {name!r}: cannot infer a type from default {formal.default!r}") from None
    return Kind.TEXT


def signature(callback, /):
    """
    Extract the ordered Parameter schema of a callable.

    Errors
    - TypeError: not callable, variadic parameters (*args/**kwargs), unsupported annotations.
    - ValueError: the callable has no inspectable signature.
    """
    if not callable(callback):
        raise TypeError("signature() argument must be callable")
    try:
        formals = inspect.signature(callback, eval_str=True).parameters
    except ValueError:
        raise ValueError("signature() argument must be an inspectable callable") from None

    parameters = []
    for name, formal in formals.items():
        if formal.kind in (Formal.VAR_POSITIONAL, Formal.VAR_KEYWORD):
            raise TypeError(f"parameter {name!r}: variadic parameters cannot be bound from the command line")
        parameters.append(Parameter(
            name,
            _infer(name, formal),
            Unset if formal.default is Formal.empty else formal.default,
            keyword=formal.kind is Formal.KEYWORD_ONLY,
        ))
    return parameters


__all__ = (
    "Kind",
    "Parameter",
    "signature",
)
