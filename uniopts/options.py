r"""
Uniopts option definitions, registry and parse engine.

Overview
- Kind: FLAG (presence only), SINGLE (one value, at most once), MULTIPLE (one value
  per occurrence, repeatable).
- Opt: one option definition (kind, short name, long name, hint, description).
- Options: the registry of definitions plus the parse engine driving the tokenizer.

Names
- short: "" or exactly one extended grapheme cluster ("h", "é", "😮").
- long: "" or at least two code points ("help", "名前"); a long name cannot contain '='.
- an option needs at least one of them; no name may be registered twice.
Breaking these rules is a programmer mistake: registration raises TypeError/ValueError
immediately, so a broken command line definition never reaches users.

Parsing
- Options.parse(arguments) tokenizes lazily and walks the tokens once:
  • -n / --name     → look the name up; flags record presence, single/multiple options
                      take the next token, which must be a plain value.
  • --name=value    → value-bearing options record value; flags reject it.
  • value           → kept in matches.remaining; with stop_at_first_non_option the rest of
                      the vector is copied verbatim too and parsing ends.
  • --              → everything after it is kept verbatim in matches.remaining.
- The first problem aborts the parse with a ParseFault subclass; no partial result escapes.
- Options.run(arguments) is the shell flavour: faults are rendered on stderr and exit(2).

Quick example
    >>> options = Options()
    >>> options.flag("h", "help", "print this help menu")
    >>> options.single("c", "config", "PATH", "configuration file")
    >>> matches = options.parse(["-c", "app.toml", "input.txt"])
    >>> matches.value("config"), matches.remaining
    ('app.toml', ('input.txt',))
"""
import sys
from enum import Enum

from .faults import *
from .matches import Flag, Matches, String
from .tokens import Long, LongPair, Separator, Short, Tokenizer, Value
from .utils import *


class Kind(Enum):
    """
    Arity/cardinality of an option.
    """
    FLAG = "flag"
    SINGLE = "single"
    MULTIPLE = "multiple"


class Opt:
    """
    A single option definition.

    Instances are immutable. Registration (Options.register) is where the name
    rules are enforced; the constructor only checks types.
    """
    __slots__ = ("_kind", "_short", "_long", "_hint", "_description")

    kind = mirror("kind")
    short = mirror("short")
    long = mirror("long")
    hint = mirror("hint")
    description = mirror("description")

    def __init__(self, kind, short="", long="", hint="", description=""):
        if not isinstance(kind, Kind):
            raise TypeError("option 'kind' must be a Kind")
        for field, value in (("short", short), ("long", long), ("hint", hint), ("description", description)):
            if not isinstance(value, str):
                raise TypeError(f"option {field!r} must be a string")
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_short", short)
        object.__setattr__(self, "_long", long)
        object.__setattr__(self, "_hint", hint)
        object.__setattr__(self, "_description", description)

    def __setattr__(self, name, value, /):
        raise AttributeError("'Opt' object is immutable")

    @property
    def names(self):
        """
        The non-empty names of this option, short first.
        """
        return tuple(name for name in (self._short, self._long) if name)

    def __repr__(self):
        return "opt(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "kind", self._kind.value
        yield "short", self._short
        yield "long", self._long
        yield "hint", self._hint
        yield "description", self._description


def _sanitize_names(opt, names, /):
    """
    Internal: enforce the naming rules for a definition about to be registered.

    Raises
    - ValueError: no names; short not one grapheme cluster; long of a single
      code point or containing '='; short equal to long; any name already taken.
    """
    if not opt.short and not opt.long:
        raise ValueError("an option must have a short name, a long name, or both")

    if opt.short:
        if not is_grapheme(opt.short):
            raise ValueError(f"short option name {opt.short!r} must be exactly one character")
        elif opt.short == "-":
            raise ValueError("short option name cannot be '-'")

    if opt.long:
        if len(opt.long) < 2:
            raise ValueError(f"long option name {opt.long!r} must have at least two characters")
        elif "=" in opt.long:
            raise ValueError(f"long option name {opt.long!r} cannot contain '='")

    if opt.short == opt.long:
        raise ValueError(f"option names cannot be the same ({opt.short!r})")

    for name in opt.names:
        if name in names:
            raise ValueError(f"the option name {name!r} is already registered")


class Options:
    """
    Registry of option definitions and parse engine.

    Settings
    - stop_at_first_non_option: bool
      when True, the first positional argument ends option processing and every
      argument from there on lands in matches.remaining verbatim.
    - colorful / fancy / prog: rendering context attached to faults (see uniopts.faults).

    Sharing
    - the registry is read-only while parsing, so one instance can serve many
      parse() calls as long as nothing registers concurrently.
    """

    def __init__(self, *, stop_at_first_non_option=False, colorful=True, fancy=False, prog=Unset):
        if not isinstance(prog, str | Unset):
            raise TypeError("Options 'prog' must be a string")
        self.stop_at_first_non_option = bool(stop_at_first_non_option)
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)
        self.prog = coalesce(prog)
        self._names = {}
        self._opts = []

    opts = mirror("opts")

    def register(self, opt, /):
        """
        Validate and add a definition; both of its names point to the same slot.

        Returns the registered Opt.
        """
        if not isinstance(opt, Opt):
            raise TypeError("register() argument must be an Opt")
        _sanitize_names(opt, self._names)
        slot = len(self._opts)
        self._opts.append(opt)
        for name in opt.names:
            self._names[name] = slot
        return opt

    def flag(self, short, long, description=""):
        """
        Register a presence-only option.
        """
        self.register(Opt(Kind.FLAG, short, long, "", description))
        return self

    def single(self, short, long, hint="", description=""):
        """
        Register an option taking exactly one value, allowed once.
        """
        self.register(Opt(Kind.SINGLE, short, long, hint, description))
        return self

    def multiple(self, short, long, hint="", description=""):
        """
        Register an option taking one value per occurrence, repeatable.
        """
        self.register(Opt(Kind.MULTIPLE, short, long, hint, description))
        return self

    def lookup(self, name, /):
        """
        Return the Opt registered under name (short or long), or None.
        """
        if not isinstance(name, str):
            raise TypeError("lookup() argument must be a string")
        try:
            return self._opts[self._names[name]]
        except KeyError:
            return None

    def __getitem__(self, name, /):
        if (opt := self.lookup(name)) is None:
            raise KeyError(name)
        return opt

    def __contains__(self, name, /):
        return isinstance(name, str) and name in self._names

    def __iter__(self):
        return iter(tuple(self._opts))

    def __len__(self):
        return len(self._opts)

    def __repr__(self):
        return "options(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "opts", tuple(self._opts)
        yield "stop_at_first_non_option", self.stop_at_first_non_option

    def parse(self, arguments=Unset, /):
        """
        Parse an argument vector (sys.argv[1:] when omitted).

        Returns
        - Matches, frozen.

        Raises
        - InvalidOptionError: the name is not registered.
        - DuplicateOptionError: a flag or single option occurs twice.
        - MissingValueError: a single/multiple option is not followed by a value.
        - UnexpectedValueError: a flag is given '--name=value'.
        """
        return self._parse(sys.argv[1:] if arguments is Unset else arguments, shell=False)

    def run(self, arguments=Unset, /):
        """
        Parse like parse(), but render faults on stderr and exit with status 2.
        """
        return self._parse(sys.argv[1:] if arguments is Unset else arguments, shell=True)

    def trigger(self, fault, /, **options):
        trigger(fault, **options, prog=self.prog, colorful=self.colorful, fancy=self.fancy)

    def _resolve(self, name, shell):
        try:
            slot = self._names[name]
        except KeyError:
            self.trigger(InvalidOptionError(name), shell=shell)
        return self._opts[slot], slot

    def _take(self, tokens, name, shell):
        match next(tokens, None):
            case Value(text):
                return text
            case _:
                self.trigger(MissingValueError(name), shell=shell)

    def _drain(self, tokens, matches):
        for token in tokens:
            matches._leave(str(token))

    def _parse(self, arguments, /, *, shell):
        tokens = Tokenizer(arguments)
        matches = Matches(self._names, [opt.long or opt.short for opt in self._opts])

        for token in tokens:
            match token:
                case Short(name) | Long(name):
                    opt, slot = self._resolve(name, shell)
                    match opt.kind:
                        case Kind.FLAG:
                            if matches.contains(name):
                                self.trigger(DuplicateOptionError(name), shell=shell)
                            matches._record(slot, Flag)
                        case Kind.SINGLE:
                            if matches.contains(name):
                                self.trigger(DuplicateOptionError(name), shell=shell)
                            matches._record(slot, String(self._take(tokens, name, shell)))
                        case Kind.MULTIPLE:
                            matches._record(slot, String(self._take(tokens, name, shell)))

                case LongPair(name, value):
                    opt, slot = self._resolve(name, shell)
                    match opt.kind:
                        case Kind.FLAG:
                            self.trigger(UnexpectedValueError(name), shell=shell)
                        case Kind.SINGLE if matches.contains(name):
                            self.trigger(DuplicateOptionError(name), shell=shell)
                        case Kind.SINGLE | Kind.MULTIPLE:
                            if not value:
                                self.trigger(EmptyValueWarning(name), shell=shell)
                            matches._record(slot, String(value))

                case Value(text):
                    matches._leave(text)
                    if self.stop_at_first_non_option:
                        self._drain(tokens, matches)
                        break

                case Separator():
                    self._drain(tokens, matches)
                    break

        return matches._freeze()


__all__ = (
    "Kind",
    "Opt",
    "Options",
)
