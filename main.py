import sys

from rich.pretty import pprint

from uniopts import Options, print_help

options = (
    Options(stop_at_first_non_option=True, fancy=True)
    .flag("h", "help", "print this help menu")
    .single("c", "config", "PATH", "configuration file")
    .multiple("i", "include", "DIR", "add a directory to the search path\n(may be repeated)")
)


if __name__ == '__main__':
    matches = options.run()
    if "help" in matches:
        print_help(options, "Usage: main.py [options] [--] [ARGS...]")
        sys.exit(0)
    pprint(matches)
