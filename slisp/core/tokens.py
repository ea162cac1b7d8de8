"""Token vocabulary shared by the scanner and the parser."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union


class TokenType(Enum):
    """Token types produced by the scanner."""

    OPEN_PAREN = auto()   # (
    CLOSE_PAREN = auto()  # )
    QUOTE = auto()        # '
    COMMA = auto()        # ,
    SYMBOL = auto()       # anything that is not a delimiter, string or number
    STRING = auto()       # "..." (quotes included)
    NUMBER = auto()       # 12, 3.14
    END = auto()          # end of input, always last


@dataclass(frozen=True)
class Token:
    """A single token. line and start_line (where the lexeme ends and starts) are only used for diagnostics and are
    ignored when comparing tokens.
    """

    type: TokenType
    value: Union[str, float, None] = None
    line: Optional[int] = field(default=None, compare=False)
    start_line: Optional[int] = field(default=None, compare=False)

    NAMES = {
        TokenType.OPEN_PAREN: "OpenParen",
        TokenType.CLOSE_PAREN: "CloseParen",
        TokenType.QUOTE: "Quote",
        TokenType.COMMA: "Comma",
        TokenType.SYMBOL: "Symbol",
        TokenType.STRING: "String",
        TokenType.NUMBER: "Number",
        TokenType.END: "End",
    }

    @property
    def is_atom(self):
        return self.type in (TokenType.SYMBOL, TokenType.STRING, TokenType.NUMBER)

    def __repr__(self):
        name = Token.NAMES[self.type]
        if self.value is None:
            return name
        return f"{name}({self.value!r})"
