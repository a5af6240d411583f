import argparse
import logging
import sys

from .notation import NotationError, parse_notation

parse_parser = argparse.ArgumentParser(description="Show the keys described by Vim-style key notation.")
parse_parser.add_argument("notation", nargs="+")
parse_parser.add_argument("--strict", action="store_true", help="reject repeated modifier prefixes such as <C-C-x>")
parse_parser.add_argument("--verbose", "-v", action="store_true")


def parse_cli(argv=sys.argv):
    args = parse_parser.parse_args(argv[1:])
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    status = 0
    for notation in args.notation:
        try:
            keys = parse_notation(notation, allow_repeated_modifiers=not args.strict)
        except NotationError as e:
            print(f"{notation}: {e}", file=sys.stderr)
            status = 1
            continue
        print(f"{notation}:")
        for key in keys:
            print(f"  {key!s:<12} {key!r}")
    return status
