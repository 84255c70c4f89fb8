"""
Uniopts matches: the outcome of one successful parse.

Overview
- Values (closed family)
  • Flag: presence-only marker (a process-wide singleton, no payload).
  • String(text): raw option argument, kept verbatim (no coercion).

- Matches
  • Per-option value lists addressed by name. The short and long names of one
    option resolve to the same slot, so matches.values("i") and
    matches.values("include") are always identical.
  • remaining: arguments that were not consumed as options or option values,
    in their original order.
  • Built by Options.parse() and frozen before being handed back; after that
    it is read-only and safe to share.

Queries
- contains(name) / name in matches → did the option occur?
- value(name)  → first recorded text, or None (absent, or the option is a flag).
- values(name) → every recorded text in order ([] when absent or for flags).
- count(name)  → number of occurrences.
"""
import functools
from typing import final

from .utils import *


@final
class FlagType:
    """
    Presence-only value recorded for flag options.
    """
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __repr__(self):
        return "Flag"

    def __reduce__(self):
        return (FlagType, ())

    def __init_subclass__(cls):
        raise TypeError("type 'FlagType' is not an acceptable base type")


Flag = FlagType()


@final
class String:
    """
    Text value recorded for single/multiple options.
    """
    __slots__ = ("text",)
    __match_args__ = ("text",)

    def __init__(self, text, /):
        if not isinstance(text, str):
            raise TypeError("String() argument must be a string")
        object.__setattr__(self, "text", text)

    def __setattr__(self, name, value, /):
        raise AttributeError("'String' object is immutable")

    def __eq__(self, other, /):
        if not isinstance(other, String):
            return NotImplemented
        return self.text == other.text

    def __hash__(self):
        return hash(("String", self.text))

    def __repr__(self):
        return f"String({self.text!r})"

    def __str__(self):
        return self.text

    def __init_subclass__(cls):
        raise TypeError("type 'String' is not an acceptable base type")


class Matches:
    """
    Parsed option values plus the leftover arguments.

    Parameters
    - names: Mapping[str, int]
      every registered name (short and long) mapped to its option slot.
    - labels: Sequence[str]
      one display name per slot (the long name when there is one).
    """
    __slots__ = ("_names", "_labels", "_values", "_order", "_remaining", "_frozen")

    remaining = mirror("remaining")

    def __init__(self, names=Unset, labels=Unset, /):
        self._names = dict(coalesce(names, {}))
        self._labels = tuple(coalesce(labels, ()))
        self._values = {}
        self._order = []
        self._remaining = []
        self._frozen = False

    def _record(self, slot, value, /):
        if self._frozen:
            raise RuntimeError("matches are read-only once parsing has finished")
        if not isinstance(value, FlagType | String):
            raise TypeError("recorded values must be Flag or String")
        if slot not in self._values:
            self._values[slot] = []
            self._order.append(slot)
        self._values[slot].append(value)

    def _leave(self, argument, /):
        if self._frozen:
            raise RuntimeError("matches are read-only once parsing has finished")
        self._remaining.append(argument)

    def _freeze(self):
        self._frozen = True
        return self

    def _slot(self, name):
        if not isinstance(name, str):
            raise TypeError("option names must be strings")
        return self._names.get(name)

    def __contains__(self, name):
        return self.contains(name)

    def contains(self, name, /):
        return self._slot(name) in self._values

    def count(self, name, /):
        return len(self._values.get(self._slot(name), ()))

    def value(self, name, /):
        """
        First recorded text for name, or None when absent or when it is a flag.
        """
        match self._values.get(self._slot(name), ()):
            case [String(text), *_]:
                return text
            case _:
                return None

    def values(self, name, /):
        """
        All recorded texts for name, in command-line order.
        """
        return [value.text for value in self._values.get(self._slot(name), ()) if isinstance(value, String)]

    def raw(self, name, /):
        """
        The recorded Flag/String values for name, as a tuple.
        """
        return tuple(self._values.get(self._slot(name), ()))

    @property
    def opts(self):
        """
        Display names of the options that occurred, in order of first occurrence.
        """
        return tuple(self._labels[slot] for slot in self._order)

    def __repr__(self):
        return "matches(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "opts", {self._labels[slot]: tuple(self._values[slot]) for slot in self._order}
        yield "remaining", tuple(self._remaining)


__all__ = (
    "FlagType",
    "Flag",
    "String",
    "Matches",
)
