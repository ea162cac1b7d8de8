"""Reader for a small Lisp-like language: source text -> tokens -> S-expression tree.

Basic program flow:
    1. Scanner: turns the whole source string into a token list ending with an END token (see slisp/core/scanner.py)
    2. Parser: recursive descent from the token list to an S-expression tree (see slisp/core/parser.py)

There is no evaluation stage yet: trees are printed back (see slisp/main.py) or handed to the caller as is.
"""

from slisp.core.parser import parse, parse_all
from slisp.core.scanner import scan

__all__ = ["scan", "parse", "parse_all"]
