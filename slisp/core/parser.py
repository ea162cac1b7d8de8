"""Recursive descent parser from a token list (see scanner.py) to an S-expression tree (see sexpr.py).

```
<expression> ::= <atom> | "(" <list-body> ")"
<list-body>  ::= <expression>*              ; greedy, up to ")" (or END, see implicit_close)
<atom>       ::= NUMBER | STRING | SYMBOL
```

Quote and comma tokens are scanned but have no place in the grammar yet: the parser rejects them as malformed atoms.
No symbol is special to the parser; giving meaning to '+' or 'nil' is left to whatever consumes the tree.
"""

from slisp.core import sexpr
from slisp.core.tokens import TokenType
from slisp.lang.error import MalformedAtom, NestingTooDeep, UnclosedList, UnmatchedCloseParen


class Parser:
    """Walks a token list once, without backtracking. The cursor only moves forward and never moves past END.

    If implicit_close is set, running into END inside a list closes that list (and every enclosing one) instead of
    raising UnclosedList: "(foo" parses as "(foo)". implicitly_closed counts the lists closed that way.
    """

    def __init__(self, tokens, implicit_close=True):
        self.tokens = list(tokens)
        self.cursor = 0
        self.implicit_close = implicit_close
        self.implicitly_closed = 0

        if not self.tokens or self.tokens[-1].type is not TokenType.END:
            raise ValueError("token list must end with an END token")

    def parse(self):
        """Returns the first expression in the token list. Tokens after it are left unread."""
        try:
            return self.parse_expression()
        except RecursionError:
            raise NestingTooDeep(self.peek().line) from None

    def parse_all(self):
        """Returns every top-level expression up to END."""
        exprs = []
        try:
            while not self.at(TokenType.END):
                exprs.append(self.parse_expression())
        except RecursionError:
            raise NestingTooDeep(self.peek().line) from None
        return exprs

    def parse_expression(self):
        if self.at(TokenType.OPEN_PAREN):
            return self.parse_list()
        if self.at(TokenType.CLOSE_PAREN):
            raise UnmatchedCloseParen(self.peek().line)

        atom = self.parse_atom()
        self.cursor += 1
        return atom

    def parse_list(self):
        """Consumes a list from its "(" to its ")", both included."""
        opening = self.peek()
        self.cursor += 1

        nodes = []
        while not self.at(TokenType.CLOSE_PAREN, TokenType.END):
            nodes.append(self.parse_expression())

        if self.at(TokenType.END):
            if not self.implicit_close:
                raise UnclosedList(opening.line)
            self.implicitly_closed += 1
        else:
            self.cursor += 1  # closing paren

        return sexpr.List(nodes)

    def parse_atom(self):
        token = self.peek()
        if token.type is TokenType.STRING:
            return sexpr.String(token.value)
        elif token.type is TokenType.SYMBOL:
            return sexpr.Symbol(token.value)
        elif token.type is TokenType.NUMBER:
            return sexpr.Number(token.value)
        raise MalformedAtom(token)

    def peek(self):
        return self.tokens[self.cursor]

    def at(self, *token_types):
        return self.peek().type in token_types


def parse(tokens, implicit_close=True):
    """Returns the expression tree of the first expression in tokens. Raises a ParseError on invalid input."""
    return Parser(tokens, implicit_close).parse()


def parse_all(tokens, implicit_close=True):
    """Returns the expression trees of every top-level expression in tokens."""
    return Parser(tokens, implicit_close).parse_all()
