"""Token vocabulary shared by the scanner, parser and interpreter."""

from __future__ import annotations

from decimal import Decimal
from enum import IntEnum, auto
from typing import Any, NamedTuple


class TokenType(IntEnum):
    LeftParen = auto()
    RightParen = auto()
    LeftBrace = auto()
    RightBrace = auto()
    Comma = auto()
    Dot = auto()
    Minus = auto()
    Plus = auto()
    Semicolon = auto()
    Slash = auto()
    Star = auto()

    Bang = auto()          # !
    BangEqual = auto()     # !=
    Equal = auto()         # =
    EqualEqual = auto()    # ==
    Greater = auto()       # >
    GreaterEqual = auto()  # >=
    Less = auto()          # <
    LessEqual = auto()     # <=

    Identifier = auto()
    String = auto()
    Number = auto()

    And = auto()
    Class = auto()
    Else = auto()
    False_ = auto()
    Fun = auto()
    For = auto()
    If = auto()
    Nil = auto()
    Or = auto()
    Print = auto()
    Return = auto()
    Super = auto()
    This = auto()
    True_ = auto()
    Var = auto()
    While = auto()

    Eof = auto()


class Token(NamedTuple):
    type: TokenType
    value: Any
    line: int

    @property
    def lexeme(self) -> str:
        if self.type is TokenType.Number:
            return format_number(self.value)
        if self.type in (TokenType.String, TokenType.Identifier):
            return self.value
        return TOKENS_TO_STR[self.type]

    def __repr__(self) -> str:
        if self.value is None:
            return f'<Token type={self.type.name} line={self.line}>'
        return f'<Token type={self.type.name} value={self.value!r} line={self.line}>'

    def __str__(self) -> str:
        return f'[{self.lexeme}]'


def format_number(number: float) -> str:
    """Formats a double the way the language prints it: shortest round-tripping digits, never in exponent form, with
    integral values losing their trailing '.0' (so 1e-07 prints as 0.0000001 and -0.0 as -0).
    """
    if number != number:
        return 'NaN'
    if number in (float('inf'), float('-inf')):
        return 'inf' if number > 0 else '-inf'
    return format(Decimal(repr(number)).normalize(), 'f')


KEYWORDS = {
    "and": TokenType.And,
    "class": TokenType.Class,
    "else": TokenType.Else,
    "false": TokenType.False_,
    "for": TokenType.For,
    "fun": TokenType.Fun,
    "if": TokenType.If,
    "nil": TokenType.Nil,
    "or": TokenType.Or,
    "print": TokenType.Print,
    "return": TokenType.Return,
    "super": TokenType.Super,
    "this": TokenType.This,
    "true": TokenType.True_,
    "var": TokenType.Var,
    "while": TokenType.While,
}

SINGLE_CHAR_TOKENS = {
    '(': TokenType.LeftParen,
    ')': TokenType.RightParen,
    '{': TokenType.LeftBrace,
    '}': TokenType.RightBrace,
    ',': TokenType.Comma,
    '.': TokenType.Dot,
    '-': TokenType.Minus,
    '+': TokenType.Plus,
    ';': TokenType.Semicolon,
    '*': TokenType.Star,
    '/': TokenType.Slash,
}

# a lone character, or the same character followed by '='
DOUBLE_CHAR_TOKENS = {
    '!': (TokenType.Bang, TokenType.BangEqual),
    '=': (TokenType.Equal, TokenType.EqualEqual),
    '<': (TokenType.Less, TokenType.LessEqual),
    '>': (TokenType.Greater, TokenType.GreaterEqual),
}

TOKENS_TO_STR = {v: k for k, v in KEYWORDS.items()}
TOKENS_TO_STR.update({v: k for k, v in SINGLE_CHAR_TOKENS.items()})
TOKENS_TO_STR.update({single: char for char, (single, __) in DOUBLE_CHAR_TOKENS.items()})
TOKENS_TO_STR.update({double: char + '=' for char, (__, double) in DOUBLE_CHAR_TOKENS.items()})
TOKENS_TO_STR[TokenType.Eof] = 'EOF'
