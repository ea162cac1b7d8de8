"""Session control for the slisp reader: feeds source text from a file or from the command line through the scanner
and the parser, and keeps the results for printing.
"""

from slisp.core.parser import Parser
from slisp.core.scanner import scan
from slisp.core.tokens import TokenType
from slisp.lang.error import GenericException, UnterminatedString


class Result:
    """Tokens and top-level expressions read from one chunk of source."""

    def __init__(self, tokens, exprs):
        self.tokens = tokens
        self.exprs = exprs

    def __repr__(self):
        return f"Result(tokens={self.tokens!r}, exprs={self.exprs!r})"


class Session:
    """Governs a slisp session: what gets read, how strictly, and how results are shown."""
    SH_FILE = "<in>"  # command-line interpreter filename
    MODES = ["expr", "tree", "tokens"]

    def __init__(self, error_handler, path, cmd_line, implicit_close=True, mode="expr"):
        if mode not in Session.MODES:
            raise GenericException("unknown display mode '{}'", mode, diagnosis=False)

        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                      # used for error messages
        self.cmd_line = cmd_line              # whether or not in command-line mode
        self.implicit_close = implicit_close  # whether "(a" reads as "(a)" or raises UnclosedList
        self.mode = mode

        self.results = []  # Results not yet shown

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    source = file.read()
            except (OSError, UnicodeDecodeError):
                raise GenericException("'{}' could not be read", path, diagnosis=False)

            self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line to the previous unfinished input, if any. Returns the joined text and whether it needs to be
        continued on the next line: either a string literal or a list is still open.
        """
        text = prev + "\n" + line if prev else line

        try:
            tokens = scan(text)
        except UnterminatedString:
            return text, True
        except GenericException:
            return text, False  # add will report it

        opened = sum(token.type is TokenType.OPEN_PAREN for token in tokens)
        closed = sum(token.type is TokenType.CLOSE_PAREN for token in tokens)
        return text, opened > closed

    def add(self, source, line_num):
        """Scans and parses source, which starts at line_num of self.path. Raises the first error encountered."""
        single_line = source.strip() if "\n" not in source.strip() else None
        self.error_handler.register_line(self.path, single_line, line_num)  # in case error is raised

        tokens = scan(source)
        parser = Parser(tokens, self.implicit_close)
        exprs = parser.parse_all()

        if parser.implicitly_closed:
            self.error_handler.warn("{} unclosed list(s) closed at end of input", str(parser.implicitly_closed),
                                    line=tokens[-1].line, diagnosis=False)

        self.results.append(Result(tokens, exprs))
        self.error_handler.remove_line(self.path)  # error was not raised

    def show(self, result):
        """Returns result formatted according to self.mode."""
        if self.mode == "tokens":
            return repr(result.tokens)
        elif self.mode == "tree":
            return "\n".join(expr.display() for expr in result.exprs)
        return "\n".join(str(expr) for expr in result.exprs)

    def pop(self):
        """Removes and returns the oldest result, formatted."""
        return self.show(self.results.pop(0))

    def run(self):
        """Prints every pending result."""
        while self.results:
            shown = self.pop()
            if shown:
                print(shown)
