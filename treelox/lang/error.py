"""Error handling for treelox. Only LoxErrors should be encountered during running: if another type of error is raised
and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every stage of the pipeline stops at its first error (the parser being the exception, see ParseError) and raises it to
the caller:

```
LoxError
 ├── ScanError          ; raised by the scanner
 │    ├── UnexpectedCharacter
 │    ├── UnterminatedString
 │    ├── UnexpectedEndOfFile
 │    ├── UnterminatedComment
 │    └── InvalidNumber
 ├── ParseError         ; raised by the parser
 │    └── ExpectedExpression
 └── LoxRuntimeError    ; raised by the interpreter
```
"""

import sys

from termcolor import colored


class LoxError(Exception):
    """Base treelox error. Carries a message and, when known, the 1-based source line that caused it."""

    def __init__(self, msg, line=None, internal=False):
        super().__init__(msg)

        self.msg = msg
        self.line = line
        self.internal = internal

    def __str__(self):
        if self.line is None:
            return self.msg
        return f"[line {self.line}] {self.msg}"

    def __eq__(self, other):
        return type(self) is type(other) and (self.msg, self.line) == (other.msg, other.line)

    def __hash__(self):
        return hash((type(self).__name__, self.msg, self.line))


class ScanError(LoxError):
    """Superclass for errors raised while scanning. Scanning is abandoned on the first one."""


class UnexpectedCharacter(ScanError):

    def __init__(self, line, char):
        super().__init__(f"Unexpected character '{char}'.", line)
        self.char = char


class UnterminatedString(ScanError):

    def __init__(self, line):
        super().__init__("Unterminated string.", line)


class UnexpectedEndOfFile(ScanError):

    def __init__(self, line):
        super().__init__("Unexpected end of file.", line)


class UnterminatedComment(ScanError):

    def __init__(self, line):
        super().__init__("Unterminated comment.", line)


class InvalidNumber(ScanError):

    def __init__(self, line, lexeme):
        super().__init__(f"Invalid number '{lexeme}'.", line)
        self.lexeme = lexeme


class ParseError(LoxError):
    """Syntax error. The parser keeps going after an error and collects the rest of them in errors; the message of
    the raised ParseError is always the first one encountered.
    """

    def __init__(self, msg, line=None, errors=None):
        super().__init__(msg, line)
        self.errors = errors if errors else [self]

    @classmethod
    def collect(cls, errors):
        """Returns a single ParseError standing in for all of errors (which must not be empty)."""
        first = errors[0]
        return cls(first.msg, first.line, errors=list(errors))


class ExpectedExpression(ParseError):

    def __init__(self, line):
        super().__init__("Expect expression.", line)


class LoxRuntimeError(LoxError):
    """Fault raised while evaluating. Aborts the rest of the statements of the current run/line."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and display treelox errors."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = None

    def register_source(self, path, source):
        """Registers source lines in traceback given path. Should be called prior to Session run."""
        self.traceback[path] = source.splitlines()

    def remove_source(self, path):
        """Removes source from traceback given path. Should be called after successful Session run."""
        self.traceback[path] = None

    def _locate(self, error):
        """Returns the traceback lines pointing at error.line, if any source is registered."""
        located = ""
        for file, lines in self.traceback.items():  # assumes dict is insertion-ordered
            if lines and error.line is not None and 0 < error.line <= len(lines):
                located += f"  File '{file}', line {error.line}:\n"
                located += f"    {lines[error.line - 1].strip()}\n"
        return located

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a LoxError. ParseErrors that collected several
        syntax errors display all of them.
        """
        for err in getattr(error, "errors", [error]):
            error_msg = self._locate(err)

            if err.internal:
                error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

            error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + str(err)
            print(error_msg)

        if self.fatal:
            sys.exit(1)
        self.traceback = dict.fromkeys(self.traceback)  # if error occurred, reset traceback

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LoxError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LoxError("maximum recursion depth exceeded", internal=True))
        elif exc_type is not None and issubclass(exc_type, LoxError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LoxError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
