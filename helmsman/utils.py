"""
Helmsman utilities (internal helpers shared by the dispatch pipeline).

Overview
- UnsetType / Unset
  • Singleton sentinel for “not provided”, distinct from None (a legitimate default value).
- coalesce(value, default=None)
  • Replace Unset with a concrete default while preserving None/0/""/False.
- rename(callable, name) / @rename("name")
  • Stable __name__/__qualname__ for generated wrappers.
- mirror("attr")
  • Read-only property exposing a private backing field (self._attr) as an immutable view.
- mglob(pattern)
  • Expand "pkg.**.commands" style patterns into importable module names (used by Registry.include).
"""
import builtins
import functools
import importlib
import pkgutil
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Sentinel type for values that were not provided.

    A parameter declared as `b: int = None` has a default (None); a parameter with no
    default at all carries Unset. Keeping both apart is the whole point of this type.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __or__(self, other, /):
        # PEP 604 unions in isinstance checks, e.g. isinstance(x, str | Unset)
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    __ror__ = __or__

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return `object` unless it is Unset, in which case return `default`.

    Falsey values (None, 0, "", False) are preserved; only the sentinel is replaced.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable.

    Forms
    - rename(callable, name) -> callable (updated in place)
    - rename(name) -> decorator
    """
    match parameters:
        case (target, str(name)):
            if not builtins.callable(target):
                raise TypeError("rename() first argument must be callable")
            try:
                target.__qualname__ = name
                target.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return target
        case (str(name),):
            return rename(lambda target: rename(target, name), "rename")
        case (_, _) | (_,):
            raise TypeError("rename() name must be a string")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Shallow read-only snapshot of a container (tuple, mappingproxy, frozenset).
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Read-only property that serves self._{name} through a frozen view.

    Example
    - parameters = mirror("parameters") exposes self._parameters as a tuple.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def _translate(segment):
    """
    Translate one dot-free pattern segment into a regex snippet.

    Supported: '*' (any run of non-dot chars), '?' (one non-dot char),
    '[...]' / '[!...]' (character class / negated class), '\\x' (literal x).
    """
    parts = []
    index = 0
    while index < len(segment):
        char = segment[index]
        if char == "\\" and index + 1 < len(segment):
            parts.append(re.escape(segment[index + 1]))
            index += 2
            continue
        if char == "*":
            parts.append(r"[^.]*")
        elif char == "?":
            parts.append(r"[^.]")
        elif char == "[" and (close := segment.find("]", index + 1)) != -1:
            body = segment[index + 1:close]
            if body[:1] in ("!", "^"):
                body = "^" + body[1:]
            parts.append(f"[{body}]")
            index = close
        else:
            parts.append(re.escape(char))
        index += 1
    return "".join(parts)


@functools.cache
def _compile(pattern):
    """
    Compile a module-glob pattern; '**' spans zero or more whole segments.
    """
    head, *tail = pattern.split(".")
    body = _translate(head)
    for segment in tail:
        body += r"(?:\.[A-Za-z_]\w*)*" if segment == "**" else r"\." + _translate(segment)
    return re.compile(body)


def mglob(source, /):
    """
    Expand a dot-separated module glob into fully-qualified module names.

    rules
    - the pattern must start with at least one concrete package segment.
    - a pattern without wildcards is returned as-is (even if not importable).
    - matches are returned sorted; an unimportable prefix yields no matches.

    examples
    - "tools.commands.*"     → direct children of tools.commands
    - "tools.**.commands"    → any commands module below tools
    """
    if not isinstance(source, str):
        raise TypeError("mglob() argument must be a string")
    elif not (source := source.strip()):
        raise ValueError("mglob() argument must be a non-empty string")

    if re.fullmatch(r"(?!\d)\w+(\.(?!\d)\w+)*", source):
        return [source]

    prefixes = []
    for segment in source.split("."):
        if not re.fullmatch(r"(?!\d)\w+", segment):
            break
        prefixes.append(segment)

    if not prefixes:
        raise ValueError("mglob() pattern must start with a concrete package segment")

    try:
        package = importlib.import_module(prefix := ".".join(prefixes))
    except ImportError:
        return []

    pattern = _compile(source)
    matches = {prefix} if pattern.fullmatch(prefix) else set()

    for module in pkgutil.walk_packages(getattr(package, "__path__", ()), prefix + "."):
        if pattern.fullmatch(module.name):
            matches.add(module.name)

    return sorted(matches)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "mglob",
    "UnsetType",
    "Unset",
)
