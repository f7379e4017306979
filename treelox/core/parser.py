"""Recursive-descent parser for treelox. One method per precedence tier, lowest precedence first:

```
program     ::= declaration* EOF
declaration ::= "var" varDecl | statement
varDecl     ::= IDENTIFIER ( "=" expression )? ";"
statement   ::= exprStmt | printStmt | ifStmt | whileStmt | forStmt | block
ifStmt      ::= "if" "(" expression ")" statement ( "else" statement )?
whileStmt   ::= "while" "(" expression ")" statement
forStmt     ::= "for" "(" ( varDecl | exprStmt | ";" ) expression? ";" expression? ")" statement
block       ::= "{" declaration* "}"
expression  ::= assignment
assignment  ::= logic_or ( "=" assignment )?      ; target must be a variable
logic_or    ::= logic_and ( "or" logic_and )*
logic_and   ::= equality ( "and" equality )*
equality    ::= comparison ( ( "!=" | "==" ) comparison )*
comparison  ::= term ( ( ">" | ">=" | "<" | "<=" ) term )*
term        ::= factor ( ( "-" | "+" ) factor )*
factor      ::= unary ( ( "/" | "*" ) unary )*
unary       ::= ( "!" | "-" ) unary | primary
primary     ::= "true" | "false" | "nil" | NUMBER | STRING | IDENTIFIER | "(" expression ")"
```

`for` loops have no node of their own: they are desugared into a while loop inside a block.
"""

import logging

from treelox.core.syntax import (
    Assign,
    Binary,
    Block,
    Expression,
    Grouping,
    If,
    Literal,
    Logical,
    Print,
    Unary,
    Var,
    Variable,
    While,
)
from treelox.core.tokens import Token, TokenType
from treelox.lang.error import ExpectedExpression, ParseError

logger = logging.getLogger(__name__)

# tokens that start a statement, where synchronize stops skipping
STATEMENT_STARTS = (
    TokenType.Class, TokenType.Fun, TokenType.Var, TokenType.For,
    TokenType.If, TokenType.While, TokenType.Print, TokenType.Return,
)

EQUALITY_OPS = (TokenType.BangEqual, TokenType.EqualEqual)
COMPARISON_OPS = (TokenType.Greater, TokenType.GreaterEqual, TokenType.Less, TokenType.LessEqual)
TERM_OPS = (TokenType.Minus, TokenType.Plus)
FACTOR_OPS = (TokenType.Slash, TokenType.Star)
UNARY_OPS = (TokenType.Bang, TokenType.Minus)

LITERALS = {
    TokenType.False_: False,
    TokenType.True_: True,
    TokenType.Nil: None,
}


class Parser:
    """Parses a token list (as produced by Scanner.scan_tokens, ending with Eof) into a list of statements."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.current = 0

        self.errors = []

    def parse(self):
        """Returns the list of parsed statements. On a syntax error, the parser synchronizes to the next statement
        and carries on so that every error in the source is reported: a single ParseError holding all of them is
        raised once the end is reached.
        """
        statements = []
        while not self.is_at_end():
            try:
                statements.append(self.declaration())
            except ParseError as error:
                logger.debug("Syntax error, synchronizing: %s", error)
                self.errors.append(error)
                self.synchronize()
            except RecursionError:
                self.errors.append(ParseError("Too much nesting.", self.peek().line))
                break

        if self.errors:
            raise ParseError.collect(self.errors)

        logger.debug("Parsed %d statements", len(statements))
        return statements

    # statements

    def declaration(self):
        if self.match(TokenType.Var):
            return self.var_declaration()
        return self.statement()

    def var_declaration(self):
        name = self.consume(TokenType.Identifier, "Expect variable name.")

        initializer = Literal(None)
        if self.match(TokenType.Equal):
            initializer = self.expression()

        self.consume(TokenType.Semicolon, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self):
        if self.match(TokenType.For):
            return self.for_statement()
        elif self.match(TokenType.If):
            return self.if_statement()
        elif self.match(TokenType.Print):
            return self.print_statement()
        elif self.match(TokenType.While):
            return self.while_statement()
        elif self.match(TokenType.LeftBrace):
            return Block(self.block())
        return self.expression_statement()

    def for_statement(self):
        """Desugars `for (init; cond; incr) body` into `{ init; while (cond) { body; incr; } }`."""
        self.consume(TokenType.LeftParen, "Expect '(' after 'for'.")

        if self.match(TokenType.Semicolon):
            initializer = None
        elif self.match(TokenType.Var):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.Semicolon):
            condition = self.expression()
        self.consume(TokenType.Semicolon, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RightParen):
            increment = self.expression()
        self.consume(TokenType.RightParen, "Expect ')' after for clauses.")

        body = self.statement()

        if increment is not None:
            body = Block([body, Expression(increment)])
        if condition is None:
            condition = Literal(True)
        body = While(condition, body)
        if initializer is not None:
            body = Block([initializer, body])

        return body

    def if_statement(self):
        self.consume(TokenType.LeftParen, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RightParen, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.Else):
            else_branch = self.statement()

        return If(condition, then_branch, else_branch)

    def while_statement(self):
        self.consume(TokenType.LeftParen, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RightParen, "Expect ')' after condition.")

        return While(condition, self.statement())

    def block(self):
        statements = []
        while not self.check(TokenType.RightBrace) and not self.is_at_end():
            statements.append(self.declaration())

        self.consume(TokenType.RightBrace, "Expect '}' after block.")
        return statements

    def print_statement(self):
        value = self.expression()
        self.consume(TokenType.Semicolon, "Expect ';' after value.")
        return Print(value)

    def expression_statement(self):
        value = self.expression()
        self.consume(TokenType.Semicolon, "Expect ';' after value.")
        return Expression(value)

    # expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logic_or()

        if self.match(TokenType.Equal):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise ParseError("Invalid assignment target.", equals.line)

        return expr

    def logic_or(self):
        expr = self.logic_and()
        while self.match(TokenType.Or):
            operator = self.previous()
            expr = Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self):
        expr = self.equality()
        while self.match(TokenType.And):
            operator = self.previous()
            expr = Logical(expr, operator, self.equality())
        return expr

    def equality(self):
        return self.binary(self.comparison, EQUALITY_OPS)

    def comparison(self):
        return self.binary(self.term, COMPARISON_OPS)

    def term(self):
        return self.binary(self.factor, TERM_OPS)

    def factor(self):
        return self.binary(self.unary, FACTOR_OPS)

    def binary(self, operand, operators):
        """Left-associative chain of operand separated by any of operators."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            expr = Binary(expr, operator, operand())
        return expr

    def unary(self):
        if self.match(*UNARY_OPS):
            operator = self.previous()
            return Unary(operator, self.unary())
        return self.primary()

    def primary(self):
        token = self.peek()

        if self.match(*LITERALS):
            return Literal(LITERALS[token.type])
        elif self.match(TokenType.Number, TokenType.String):
            return Literal(token.value)
        elif self.match(TokenType.Identifier):
            return Variable(token)
        elif self.match(TokenType.LeftParen):
            expr = self.expression()
            self.consume(TokenType.RightParen, "Expect ')' after expression.")
            return Grouping(expr)

        raise ExpectedExpression(token.line)

    # token stream helpers

    def synchronize(self):
        """Discards tokens until a probable statement boundary: just past a ';', or right before a keyword that starts
        a statement.
        """
        self.advance()
        while not self.is_at_end():
            if self.previous().type is TokenType.Semicolon:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()

    def consume(self, token_type, message):
        if self.check(token_type):
            return self.advance()
        raise ParseError(message, self.peek().line)

    def match(self, *token_types):
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def check(self, token_type):
        if self.is_at_end():
            return False
        return self.peek().type is token_type

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().type is TokenType.Eof

    def peek(self):
        if self.current < len(self.tokens):
            return self.tokens[self.current]

        line = self.tokens[-1].line if self.tokens else 1
        return Token(TokenType.Eof, None, line)

    def previous(self):
        return self.tokens[self.current - 1]


def parse(tokens):
    """Shortcut for Parser(tokens).parse()."""
    return Parser(tokens).parse()
