r"""
Uniopts tokens: lexical units of an argument vector and the tokenizer producing them.

Overview
- Tokens (closed family, immutable, hashable)
  • Short(name): one extended grapheme cluster after a single hyphen ('-h', '-é', '-😮').
  • Long(name): a name after two hyphens, without '=' ('--help').
  • LongPair(name, value): '--name=value'; value may be the empty string.
  • Value(text): a positional argument, or the tail split off a short option.
  • Separator(): the literal '--'.
  Every token knows its textual form: str(Short("v")) == "-v", str(LongPair("o", "x")) == "--o=x".

- Tokenizer
  • A lazy, single-pass, forward-only iterator over an argument vector.
  • Not restartable: once exhausted it stays exhausted (build a new one to lex again).
  • States: DEFAULT (normal lexing), REST (everything after '--' is a Value),
    BUFFERED (a short option's tail is pending and comes out as the next Value).

Classification (DEFAULT state, first rule that applies)
1. '--'                        → Separator, then REST.
2. '--' + at least one char    → LongPair(name, value) split on the first '=', else Long(name).
                                 An empty name ('--=x') is not an option spelling → Value.
3. '-' + at least one char     → Short(first grapheme cluster); a non-empty tail is buffered
                                 verbatim, so '-v=x' gives Short('v') then Value('=x').
4. anything else ('-', '', 'x') → Value.

Quick example
    >>> lex(["-help", "--out=a.txt", "--", "-x"])
    [Short('h'), Value('elp'), LongPair('out', 'a.txt'), Separator(), Value('-x')]
"""
from enum import Enum

from .utils import *


class Token:
    """
    Base of the token family.

    Subclasses declare their payload in __fields__; equality, hashing and
    representation are derived from it. The family is sealed once this module
    is loaded.
    """
    __slots__ = ()
    __fields__ = ()

    def __init__(self, *values):
        if len(values) != len(fields := type(self).__fields__):
            raise TypeError(f"{type(self).__name__}() takes {len(fields)} arguments but {len(values)} were given")
        for field, value in zip(fields, values):
            if not isinstance(value, str):
                raise TypeError(f"{type(self).__name__} {field!r} must be a string")
            object.__setattr__(self, field, value)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __eq__(self, other, /):
        if type(other) is not type(self):
            return NotImplemented
        return self.__astuple() == other.__astuple()

    def __hash__(self):
        return hash((type(self).__name__, *self.__astuple()))

    def __repr__(self):
        return f"{type(self).__name__}({", ".join(map(repr, self.__astuple()))})"

    def __rich_repr__(self):
        yield from self.__astuple()

    def __astuple(self):
        return tuple(getattr(self, field) for field in type(self).__fields__)


class _Named(Token):
    __slots__ = ()

    def __init__(self, *values):
        super().__init__(*values)
        if not self.name:
            raise ValueError(f"{type(self).__name__} name cannot be empty")


class Short(_Named):
    __slots__ = ("name",)
    __fields__ = ("name",)
    __match_args__ = ("name",)

    def __str__(self):
        return "-" + self.name


class Long(_Named):
    __slots__ = ("name",)
    __fields__ = ("name",)
    __match_args__ = ("name",)

    def __str__(self):
        return "--" + self.name


class LongPair(_Named):
    __slots__ = ("name", "value")
    __fields__ = ("name", "value")
    __match_args__ = ("name", "value")

    def __str__(self):
        return "--%s=%s" % (self.name, self.value)


class Value(Token):
    __slots__ = ("text",)
    __fields__ = ("text",)
    __match_args__ = ("text",)

    def __str__(self):
        return self.text


class Separator(Token):
    __slots__ = ()

    def __str__(self):
        return "--"


def _sealed(cls, **options):
    raise TypeError(f"type {cls.__base__.__name__!r} is not an acceptable base type")


Token.__init_subclass__ = classmethod(_sealed)


class State(Enum):
    """
    Tokenizer cursor states.
    """
    DEFAULT = "default"
    REST = "rest"
    BUFFERED = "buffered"


class Tokenizer:
    """
    Lazy iterator turning an argument vector into tokens.

    The argument vector may be any iterable of strings; it is consumed one
    element at a time, only as tokens are requested. A non-string element is a
    programmer error and raises TypeError when reached.
    """
    __slots__ = ("_arguments", "_state", "_pending")

    def __init__(self, arguments, /):
        if isinstance(arguments, str):
            raise TypeError("Tokenizer() argument must be an iterable of strings, not a string")
        self._arguments = iter(arguments)
        self._state = State.DEFAULT
        self._pending = Unset

    @property
    def state(self):
        return self._state

    def __iter__(self):
        return self

    def __next__(self):
        match self._state:
            case State.BUFFERED:
                token, self._pending = self._pending, Unset
                self._state = State.DEFAULT
                return token
            case State.REST:
                return Value(self._pull())
            case State.DEFAULT:
                return self._classify(self._pull())

    def _pull(self):
        argument = next(self._arguments)
        if not isinstance(argument, str):
            raise TypeError(f"arguments must be strings, not {type(argument).__name__}")
        return argument

    def _classify(self, argument):
        if argument == "--":
            self._state = State.REST
            return Separator()

        if argument.startswith("--"):
            # len >= 3 here; '-' and '=' are ASCII so str.partition splits on the first real '='
            name, equals, value = argument[2:].partition("=")
            if not name:
                return Value(argument)
            return LongPair(name, value) if equals else Long(name)

        if argument.startswith("-") and len(argument) >= 2:
            name = grapheme(body := argument[1:])
            if tail := body[len(name):]:
                self._pending = Value(tail)
                self._state = State.BUFFERED
            return Short(name)

        return Value(argument)


def lex(arguments, /):
    """
    Tokenize a whole argument vector at once.

    >>> lex(["-v="])
    [Short('v'), Value('=')]
    """
    return list(Tokenizer(arguments))


__all__ = (
    "Token",
    "Short",
    "Long",
    "LongPair",
    "Value",
    "Separator",
    "State",
    "Tokenizer",
    "lex",
)
