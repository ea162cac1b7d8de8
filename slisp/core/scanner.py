"""Lexical analysis for slisp: turns a whole source string into a flat list of tokens in a single left-to-right pass.

```
<token>  ::= "(" | ")" | "'" | ","
           | <string>                      ; '"' <char>* '"', no escape sequences
           | <number>                      ; <digit>+ ("." <digit>+)?, no sign, no exponent
           | <symbol>                      ; anything else, up to a space, "(", ")" or newline
<comment> ::= ";" <char>*                  ; up to (not including) the next newline
```

Spaces, tabs and carriage returns separate tokens; newlines separate tokens and are counted for error messages. The
token list always ends with exactly one END token. Scanning is all-or-nothing: on error, the tokens scanned so far are
discarded and only the ScanError reaches the caller.
"""

import math

from slisp.core.tokens import Token, TokenType
from slisp.lang.error import MalformedNumber, ScanError, UnterminatedString


class Scanner:
    """Scanner over a fully resident source string. Positions are character (not byte) offsets."""
    SINGLE = {"(": TokenType.OPEN_PAREN, ")": TokenType.CLOSE_PAREN, "'": TokenType.QUOTE, ",": TokenType.COMMA}
    WHITESPACE = [" ", "\t", "\r"]
    SYMBOL_DELIMITERS = [" ", "(", ")", "\n"]
    EOF = "\0"  # returned by peek past the end of source

    def __init__(self, source):
        self.source = source
        self.tokens = []

        self.start = 0    # start of the current lexeme
        self.current = 0  # position of the next character to read
        self.line = 1
        self.start_line = 1  # line of self.start

    def scan(self):
        """Scans the whole source and returns the token list."""
        while not self.is_end():
            self.start = self.current  # every round starts a new lexeme
            self.start_line = self.line
            self.scan_token()

        self.tokens.append(Token(TokenType.END, line=self.line, start_line=self.line))
        return self.tokens

    def scan_token(self):
        """Scans the token at point."""
        char = self.advance()
        if char is None:
            raise ScanError("no character available at position {}", str(self.current - 1), line=self.line,
                            diagnosis=False, internal=True)

        if char in Scanner.SINGLE:
            self.add_token(Scanner.SINGLE[char])
        elif char == "\"":
            self.scan_string()
        elif char == ";":
            self.skip_comment()
        elif self.is_digit(char):
            self.scan_number()
        elif char in Scanner.WHITESPACE:
            pass
        elif char == "\n":
            self.line += 1
        else:
            self.scan_symbol()

    def scan_string(self):
        """Scans up to and including the closing quote. The token keeps both quotes."""
        while self.peek() != "\"" and not self.is_end():
            if self.peek() == "\n":
                self.line += 1
            self.current += 1

        if self.is_end():
            raise UnterminatedString(self.lexeme(), self.line)

        self.current += 1  # closing "
        self.add_token(TokenType.STRING, self.lexeme())

    def skip_comment(self):
        """Skips up to the next newline, leaving it to scan_token so that it gets counted."""
        while self.peek() != "\n" and not self.is_end():
            self.current += 1

    def scan_number(self):
        while self.is_digit(self.peek()):
            self.current += 1

        # a trailing "." is only part of the number if a digit follows it
        if self.peek() == "." and self.is_digit(self.peek_next()):
            self.current += 1
            while self.is_digit(self.peek()):
                self.current += 1

        lexeme = self.lexeme()
        try:
            number = float(lexeme)
        except ValueError:
            raise MalformedNumber(lexeme, self.line)
        if math.isinf(number):  # out of float range
            raise MalformedNumber(lexeme, self.line)
        self.add_token(TokenType.NUMBER, number)

    def scan_symbol(self):
        """Symbols are greedy: digits, quotes, commas and semicolons after the first character belong to the symbol."""
        while self.peek() not in Scanner.SYMBOL_DELIMITERS and not self.is_end():
            self.current += 1
        self.add_token(TokenType.SYMBOL, self.lexeme())

    def add_token(self, token_type, value=None):
        self.tokens.append(Token(token_type, value, self.line, self.start_line))

    def lexeme(self):
        return self.source[self.start:self.current]

    def is_end(self):
        return self.current >= len(self.source)

    def advance(self):
        """Consumes and returns the character at point, or None past the end of source."""
        char = self.source[self.current] if not self.is_end() else None
        self.current += 1
        return char

    def peek(self):
        return self.source[self.current] if not self.is_end() else Scanner.EOF

    def peek_next(self):
        return self.source[self.current + 1] if self.current + 1 < len(self.source) else Scanner.EOF

    @staticmethod
    def is_digit(char):
        """ASCII digits only. Other unicode digits start a symbol."""
        return "0" <= char <= "9"


def scan(source):
    """Returns the tokens of source, ending with a single END token. Raises a ScanError on invalid input."""
    return Scanner(source).scan()
