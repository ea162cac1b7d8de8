"""Reads a slisp file, or runs in command-line mode, and prints what the reader understood. Also uses error handling
context manager. Called from the slisp console script.

Python version must be >=3.6, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import sys

from slisp.lang.error import ErrorHandler
from slisp.lang.session import Session
from slisp.lang.shell import Shell


def get_parser():
    parser = argparse.ArgumentParser(prog="slisp", description="Scan and parse slisp source into S-expressions.")
    parser.add_argument("file", help="file to read (if empty, goes to command-line mode)", nargs="?")

    display = parser.add_mutually_exclusive_group()
    display.add_argument("--tokens", action="store_const", dest="mode", const="tokens",
                         help="print the scanned tokens instead of the expressions")
    display.add_argument("--tree", action="store_const", dest="mode", const="tree",
                         help="print the expressions as indented trees")

    parser.add_argument("--strict", action="store_true",
                        help="report lists left open at end of input instead of closing them")
    parser.set_defaults(mode="expr")
    return parser


def main(argv=None):
    """Runs slisp reader. Called from the slisp console script."""
    assert sys.version_info >= (3, 6), "slisp cannot be run with python < 3.6"

    with ErrorHandler() as error_handler:
        args = get_parser().parse_args(argv)
        implicit_close = not args.strict

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, implicit_close=implicit_close, mode=args.mode)
            sess.run()

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, implicit_close=implicit_close,
                           mode=args.mode)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
