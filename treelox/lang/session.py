"""Session control for treelox. Runs source through the scanner, parser and interpreter, either once for a file or line
by line in command-line mode.
"""

import logging

from treelox.core.interpreter import Interpreter
from treelox.core.parser import Parser
from treelox.core.scanner import Scanner
from treelox.core.syntax import AstPrinter
from treelox.core.tokens import TokenType
from treelox.lang.error import LoxError, ScanError

logger = logging.getLogger(__name__)


class Session:
    """Governs a treelox session. Every source run in a session shares one interpreter, so globals defined by one run
    are visible to the next.
    """
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, output=print, parse_only=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path              # used for error messages
        self.cmd_line = cmd_line      # whether or not in command-line mode
        self.output = output          # receives every printed line
        self.parse_only = parse_only  # display syntax trees instead of running

        self.interpreter = Interpreter(output)

        if self.cmd_line:
            self.error_handler.fatal = False
        elif path == Session.SH_FILE:
            raise LoxError("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, pending=""):
        """Preprocesses a line from the command-line. Returns the source accumulated so far and whether a line
        continuation is necessary, which is the case while braces are left open. Braces inside strings and comments
        do not count.
        """
        source = pending + line + "\n"

        depth = 0
        try:
            for token in Scanner(source):
                if token.type is TokenType.LeftBrace:
                    depth += 1
                elif token.type is TokenType.RightBrace:
                    depth -= 1
        except ScanError:
            # reported when the source is run; braces scanned before the error still decide
            return source, depth > 0

        return source, depth > 0

    @staticmethod
    def parse(source):
        """Returns the statements of source. Raises the first ScanError, or a ParseError collecting every syntax
        error.
        """
        return Parser(Scanner(source).scan_tokens()).parse()

    def read(self):
        """Returns the contents of this session's file."""
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                return file.read()
        except OSError:
            raise LoxError(f"'{self.path}' could not be opened")
        except UnicodeDecodeError:
            raise LoxError(f"'{self.path}' is not UTF-8 text")

    def run(self, source):
        """Runs source in this session. Will raise any errors that are encountered."""
        self.error_handler.register_source(self.path, source)  # in case error is raised

        statements = self.parse(source)
        logger.info("Running %d statements from %s", len(statements), self.path)

        if self.parse_only:
            printer = AstPrinter()
            for stmt in statements:
                self.output(printer.print(stmt))
        else:
            self.interpreter.interpret(statements)

        self.error_handler.remove_source(self.path)  # error was not raised

    def run_file(self):
        """Runs this session's file from start to end."""
        self.run(self.read())
