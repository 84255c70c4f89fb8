"""
Uniopts help rendering (usage text over a registry).

What this module provides
- usage(options, brief): plain help text, getopts style:

      Usage: tool [options] FILE

      Options:
          -h, --help          print this help menu
          -c, --config PATH   configuration file
              --verbose       talk more

  rows follow registration order; descriptions start at a fixed column and keep
  their embedded newlines (continuation lines are aligned to the same column).
- synopsis(options, program): one-line summary ("tool [-h] [-c PATH] [-i PATH]...").
- render(options, brief): the same help as a styled rich renderable.
- print_help(options, brief): print render(...) on stdout.

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- colorful=False drops styling; fancy=True wraps the help in a panel.
"""
import os.path
import sys
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .options import Kind
from .utils import *

INDENT = 4
COLUMN = 24


def _palette(colorful):
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "brief-section": "italic #A3A3A3",  # Neutral gray
        "group-label": "bold #FFFFFF",  # Pure white headers
        "option-name": "bold #00E6FF",  # CYAN for value-bearing options
        "flag-name": "bold #22C55E",  # GREEN for flags
        "metavar": "bold #FFD600",  # AMBER for hints
        "argument-description": "#9CA3AF",  # Muted gray
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _program(program):
    if program is not Unset:
        return program
    return getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "program")


def _names(opt, styler):
    """
    "-s, --long HINT" (or "    --long HINT" when there is no short name).
    """
    style = styler("flag-name" if opt.kind is Kind.FLAG else "option-name")
    names = Text()
    if opt.short:
        names.append("-" + opt.short, style)
        if opt.long:
            names.append(", ")
    else:
        names.append(" " * 4)
    if opt.long:
        names.append("--" + opt.long, style)
    if opt.hint:
        names.append(" ").append(opt.hint, styler("metavar"))
    return names


def _row(opt, styler):
    row = Text(" " * INDENT).append(_names(opt, styler))
    if not opt.description:
        return row
    lines = opt.description.split("\n")
    if row.cell_len + 1 > COLUMN:
        row.append("\n").append(" " * COLUMN)
    else:
        row.append(" " * (COLUMN - row.cell_len))
    row.append(lines[0], styler("argument-description"))
    for line in lines[1:]:
        row.append("\n").append(" " * COLUMN).append(line, styler("argument-description"))
    return row


def _document(options, brief, styler):
    document = Text()
    if brief:
        document.append(brief, styler("brief-section")).append("\n\n")
    document.append("Options", styler("group-label")).append(":")
    for opt in options:
        document.append("\n").append(_row(opt, styler))
    return document


def usage(options, brief="", /):
    """
    Plain help text for options, introduced by brief.
    """
    if not isinstance(brief, str):
        raise TypeError("usage() brief must be a string")
    return _document(options, brief, _palette(False)).plain + "\n"


def synopsis(options, program=Unset, /):
    """
    One-line command summary: program name followed by every option in order.

    - flags:    [-h]
    - single:   [-c PATH]
    - multiple: [-i PATH]...
    """
    parts = [_program(program)]
    for opt in options:
        name = "-" + opt.short if opt.short else "--" + opt.long
        match opt.kind:
            case Kind.FLAG:
                parts.append("[%s]" % name)
            case Kind.SINGLE:
                parts.append("[%s %s]" % (name, opt.hint or "VALUE"))
            case Kind.MULTIPLE:
                parts.append("[%s %s]..." % (name, opt.hint or "VALUE"))
    return " ".join(parts)


def render(options, brief="", /, *, colorful=True, fancy=False, program=Unset):
    """
    Styled help as a rich renderable (a panel when fancy).
    """
    styler = _palette(colorful)
    head = Text.assemble(
        ("usage", styler("usage-label")), ": ",
        (synopsis(options, program), styler("program-name")),
    )
    body = _document(options, brief, styler)
    if fancy:
        return Panel(body, title=Text(_program(program), styler("panel-title")), title_align="left")
    return Group(head, Text(""), body)


def print_help(options, brief="", /, *, colorful=True, fancy=False, program=Unset):
    Console().print(render(options, brief, colorful=colorful, fancy=fancy, program=program))


__all__ = (
    "usage",
    "synopsis",
    "render",
    "print_help",
)
