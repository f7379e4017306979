"""Lexical scanning for treelox. Turns a complete source string into tokens.

Lexical grammar:

```
<token>      ::= <punct> | <number> | <string> | <identifier> | <keyword>
<punct>      ::= "(" | ")" | "{" | "}" | "," | "." | "-" | "+" | ";" | "/" | "*"
               | "!" | "!=" | "=" | "==" | ">" | ">=" | "<" | "<="
<number>     ::= <digit>+                        ; no fraction or exponent: "1.5" is 1 . 5
<string>     ::= '"' <any char but '"'>* '"'     ; may span lines, no escapes
<identifier> ::= (<alpha> | "_") (<alnum> | "_")*
<comment>    ::= "//" <any char but newline>* <newline>
```
"""

import logging
import math

from treelox.core.tokens import DOUBLE_CHAR_TOKENS, KEYWORDS, SINGLE_CHAR_TOKENS, Token, TokenType
from treelox.lang.error import (
    InvalidNumber,
    ScanError,
    UnexpectedCharacter,
    UnexpectedEndOfFile,
    UnterminatedComment,
    UnterminatedString,
)

logger = logging.getLogger(__name__)

DIGITS = "0123456789"


class Scanner:
    """Single-pass iterator of the tokens in source, ending with one Eof token. The first error raised aborts the scan;
    an aborted or exhausted scanner yields nothing more.
    """

    def __init__(self, source):
        self.source = source

        self.index = 0
        self.line = 1
        self.done = False

    def __iter__(self):
        return self

    def __next__(self):
        if self.done:
            raise StopIteration

        try:
            token = self.scan_token()
        except ScanError:
            self.done = True
            raise

        if token.type is TokenType.Eof:
            self.done = True
        return token

    def scan_tokens(self):
        """Returns the list of all remaining tokens. Raises the first ScanError instead of returning a partial list."""
        tokens = list(self)
        logger.debug("Scanned %d tokens over %d lines", len(tokens), self.line)
        return tokens

    def is_at_end(self):
        return self.index >= len(self.source)

    def peek(self, offset=0):
        """Returns the character offset places ahead without consuming it, or '' past the end of source."""
        index = self.index + offset
        return self.source[index] if index < len(self.source) else ""

    def advance(self):
        char = self.source[self.index]
        self.index += 1
        return char

    def match(self, expected):
        """Consumes the next character only if it is expected."""
        if self.peek() != expected:
            return False
        self.index += 1
        return True

    def make_token(self, token_type, value=None):
        token = Token(token_type, value, self.line)
        logger.debug("Token %r", token)
        return token

    def skip_all(self):
        """Skips whitespace and comments before the next lexeme."""
        while not self.is_at_end():
            char = self.peek()
            if char == "\n":
                self.line += 1
                self.index += 1
            elif char.isspace():
                self.index += 1
            elif char == "/" and self.peek(1) == "/":
                self.skip_comment()
            else:
                break

    def skip_comment(self):
        end = self.source.find("\n", self.index)
        if end == -1:
            raise UnterminatedComment(self.line)

        logger.debug("Skipping comment: %s", self.source[self.index:end])
        self.index = end  # newline itself is counted by skip_all

    def scan_token(self):
        self.skip_all()
        if self.is_at_end():
            return self.make_token(TokenType.Eof)

        char = self.advance()

        if char in SINGLE_CHAR_TOKENS:
            return self.make_token(SINGLE_CHAR_TOKENS[char])
        elif char in DOUBLE_CHAR_TOKENS:
            single, double = DOUBLE_CHAR_TOKENS[char]
            return self.make_token(double if self.match("=") else single)
        elif char == '"':
            return self.scan_string()
        elif char in DIGITS:
            return self.scan_number()
        elif char.isalpha() or char == "_":
            return self.scan_identifier()
        elif char == "\0":
            raise UnexpectedEndOfFile(self.line)

        raise UnexpectedCharacter(self.line, char)

    def scan_string(self):
        end = self.source.find('"', self.index)
        if end == -1:
            raise UnterminatedString(self.line)

        text = self.source[self.index:end]
        self.line += text.count("\n")
        self.index = end + 1

        return self.make_token(TokenType.String, text)

    def scan_number(self):
        start = self.index - 1
        while self.peek() and self.peek() in DIGITS:
            self.index += 1

        lexeme = self.source[start:self.index]
        value = float(lexeme)
        if math.isinf(value):
            raise InvalidNumber(self.line, lexeme)

        return self.make_token(TokenType.Number, value)

    def scan_identifier(self):
        start = self.index - 1
        while self.peek().isalnum() or self.peek() == "_":
            self.index += 1

        text = self.source[start:self.index]
        if text in KEYWORDS:
            return self.make_token(KEYWORDS[text])
        return self.make_token(TokenType.Identifier, text)


def scan(source):
    """Shortcut for Scanner(source).scan_tokens()."""
    return Scanner(source).scan_tokens()
