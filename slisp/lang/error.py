"""Error handling for the slisp reader. Only GenericExceptions should be encountered while scanning or parsing: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Python version must be >=3.6, because the traceback relies on dicts being insertion-ordered.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a slisp error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, line=None, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.line = line
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ScanError(GenericException):
    """Raised by the scanner. No tokens are returned once a ScanError is raised."""


class UnterminatedString(ScanError):

    def __init__(self, lexeme, line):
        super().__init__("unterminated string literal '{}'", lexeme, line=line)


class MalformedNumber(ScanError):

    def __init__(self, lexeme, line):
        super().__init__("'{}' is not a valid number", lexeme, line=line)


class ParseError(GenericException):
    """Raised by the parser on the first token that does not fit the grammar."""


class UnmatchedCloseParen(ParseError):

    def __init__(self, line=None):
        super().__init__("closing '{}' without a matching opening one", ")", line=line)


class MalformedAtom(ParseError):

    def __init__(self, token):
        super().__init__("expected an atom, got '{}'", repr(token), line=token.line, diagnosis=False)
        self.token = token


class UnclosedList(ParseError):

    def __init__(self, line=None):
        super().__init__("end of input reached inside an unclosed '{}'", "(", line=line)


class NestingTooDeep(ParseError):

    def __init__(self, line=None):
        super().__init__("lists are nested too deeply to parse", line=line, diagnosis=False)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report custom slisp errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called before scanning/parsing that line."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a successful scan/parse."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    @staticmethod
    def _location(file, line_num, error):
        """Returns 'file:line: ' where line_num is the first line of the registered source and error.line is relative
        to it. Either may be missing.
        """
        if error.line is not None and line_num is not None:
            line_num += error.line - 1
        elif error.line is not None:
            line_num = error.line
        return colored(f"{file}:{line_num}: ", attrs=["bold"]) if line_num is not None else ""

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args."""
        error = GenericException(*args, **kwargs)

        file, (__, line_num) = next(iter(self.traceback.items()), ("<unknown>", (None, None)))

        warning_msg = self._location(file, line_num, error)
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(warning_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        origin = ("<unknown>", None)
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            origin = (file, line_num)
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        else:
            error_msg += self._location(*origin, error)

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {file: (None, None) for file in self.traceback}  # reset traceback (no need if fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("expression is nested too deeply, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
