"""
Uniopts faults (parse errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
- ParseFault: base type of the recoverable parse errors. Each fault carries the
  option name as the user wrote it, a stable message, a short title and a hint,
  and knows how to render itself with rich.
- OptionWarning: base type of non-fatal diagnostics surfaced through `warnings`.
- trigger(): central entry point to surface a fault (raise it, or print it and exit
  when running in shell mode).

Message contract (stable, user-visible)
- InvalidOptionError    → "the option '{name}' is unrecognized"
- DuplicateOptionError  → "the option '{name}' is already specified"
- MissingValueError     → "the option '{name}' requires an argument"
- UnexpectedValueError  → "the option '{name}' doesn't accept any arguments"

Configuration mistakes (malformed or clashing option definitions) are not faults:
they raise TypeError/ValueError at registration time.

Integration
- Options.parse() raises the first fault it meets; nothing partial is returned.
- Options.run() catches it and calls trigger(fault, shell=True, ...), which renders
  the fault on stderr via rich and exits with status 2.
- Hosts may define __prog__, __styles__ and __codes__ in __main__ to adjust the
  program name, the palette and the displayed code labels.
"""
import copy
import inspect
import os.path
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import *

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - option errors (1111x)
      • INVALID_OPTION, DUPLICATE_OPTION, MISSING_VALUE, UNEXPECTED_VALUE
    - warnings (1211x)
      • EMPTY_VALUE
    """
    # --- option errors (11xxx) ---
    INVALID_OPTION              = 11111
    DUPLICATE_OPTION            = 11112
    MISSING_VALUE               = 11113
    UNEXPECTED_VALUE            = 11114

    # --- warnings (12xxx) ---
    EMPTY_VALUE                 = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _program(options):
    """
    resolve the program name shown in fault headers.
    """
    main = __import__("__main__")
    if prog := options.get("prog"):
        return prog
    return getattr(main, "__prog__", os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "program")


def _render(fault, palette, title_style, message_style):
    """
    shared rich layout for faults and warnings: header, one-line message, hint.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = fault.options.get("colorful", True)
    fancy = fault.options.get("fancy", False)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), style)

    header = Text.assemble(
        "[ ",
        text(_program(fault.options), styler("prog-name")),
        " — ",
        text(fault.code.normalize(), styler("code")),
        " | ",
        text(fault.title.title(), styler(title_style)),
        " ]"
    )
    message = text(fault.message, styler(message_style))
    hint = Text.assemble(text(" → ", styler("hint-arrow")), text(fault.hint, styler("hint")))

    if fancy:
        return Panel(Group(message, hint), title=header, title_align="left")

    return Group(header, message, hint)


class ParseFault(Exception):
    """
    base of the recoverable parse errors.

    attributes
    - name: the option name as written on the command line (without hyphens).
    - message: the stable, user-visible sentence.
    - code / title / hint: rendering metadata (class-level defaults).
    - options: read-only rendering context (prog, colorful, fancy, shell).
    """
    __template__ = "the option '%s' is invalid"
    code = Unset
    title = "invalid option"
    hint = "check the available options with --help"

    def __init__(self, name, /, **options):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__name__}() argument must be a string")
        super().__init__(type(self).__template__ % name)
        self.name = name
        self.options = MappingProxyType(options)

    @property
    def message(self):
        return self.args[0]

    def __str__(self):
        return self.message

    def __eq__(self, other, /):
        if type(other) is not type(self):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash((type(self).__name__, self.name))

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title", "error-message")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(2)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.name, **{**self.options, **overrides})


class InvalidOptionError(ParseFault):
    __template__ = "the option '%s' is unrecognized"
    code = FaultCode.INVALID_OPTION
    title = "unknown option"
    hint = "check the spelling, or run with --help to see all available options"


class DuplicateOptionError(ParseFault):
    __template__ = "the option '%s' is already specified"
    code = FaultCode.DUPLICATE_OPTION
    title = "duplicated option"
    hint = "pass this option only once"


class MissingValueError(ParseFault):
    __template__ = "the option '%s' requires an argument"
    code = FaultCode.MISSING_VALUE
    title = "missing argument"
    hint = "pass a value right after the option (for example: -o VALUE or --option=VALUE)"


class UnexpectedValueError(ParseFault):
    __template__ = "the option '%s' doesn't accept any arguments"
    code = FaultCode.UNEXPECTED_VALUE
    title = "unexpected argument"
    hint = "remove everything from '=' onwards"


class OptionWarning(Warning):
    """
    base of the non-fatal option diagnostics.
    """
    __template__ = "the option '%s' looks suspicious"
    code = Unset
    title = "suspicious option"
    hint = ""

    def __init__(self, name, /, **options):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__name__}() argument must be a string")
        super().__init__(type(self).__template__ % name)
        self.name = name
        self.options = MappingProxyType(options)

    @property
    def message(self):
        return self.args[0]

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title", "warning-message")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.name, **{**self.options, **overrides})


class EmptyValueWarning(OptionWarning):
    __template__ = "the option '%s' was given an empty inline value"
    code = FaultCode.EMPTY_VALUE
    title = "empty inline value"
    hint = "add a value after '=', or drop '=' to pass the value as the next argument"


def trigger(fault, /, **options):
    """
    surface a fault (or warning) with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - shell=False (default): errors are raised, warnings go through `warnings`.
    - shell=True: the fault is printed on stderr via rich; errors then exit(2).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseFault",
    "InvalidOptionError",
    "DuplicateOptionError",
    "MissingValueError",
    "UnexpectedValueError",
    "OptionWarning",
    "EmptyValueWarning",
    "trigger",
)
