"""
Uniopts utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the tokenizer, the registry and the renderers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the higher-level tokens/options layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as an
    immutable view (tuple / MappingProxyType / frozenset).

- graphemes(text) / grapheme(text) / is_grapheme(text)
  • Extended grapheme cluster segmentation (user-perceived characters) on top of
    the `regex` module's \\X class. A short option name is exactly one cluster,
    so "é" written as "e" + U+0301 is still a single name.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> graphemes("e\\u0301x")
    ['é', 'x']
    >>> is_grapheme("😮")
    True
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final

import regex

_GRAPHEME = regex.compile(r"\X")


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support UnsetType | T in isinstance checks and annotations.
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns an
    immutable view for containers:
    - Sequence (non-str) → tuple
    - Mapping           → MappingProxyType
    - Set               → frozenset
    - anything else     → returned as-is
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(getter)


def graphemes(text, /):
    """
    Split text into its extended grapheme clusters.

    Returns a list of strings; the empty string yields an empty list.
    """
    if not isinstance(text, str):
        raise TypeError("graphemes() argument must be a string")
    return _GRAPHEME.findall(text)


def grapheme(text, /):
    """
    Return the first extended grapheme cluster of text ("" for an empty string).

    Two adjacent ASCII characters never share a cluster except "\\r\\n", so a
    leading ASCII pair is split directly. Anything else (a combining mark after
    an ASCII letter included) goes through the segmenter.
    """
    if not isinstance(text, str):
        raise TypeError("grapheme() argument must be a string")
    if not text:
        return ""
    if (head := text[:2]).isascii() and head != "\r\n":
        return text[0]
    return _GRAPHEME.match(text).group()


def is_grapheme(text, /):
    """
    Tell whether text is exactly one extended grapheme cluster.
    """
    return isinstance(text, str) and bool(text) and grapheme(text) == text


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "graphemes",
    "grapheme",
    "is_grapheme",
)
