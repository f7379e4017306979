"""Abstract syntax tree for treelox: expression and statement variants, produced by the parser and consumed by the
interpreter and AstPrinter. Nodes are plain frozen data with no behavior.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from treelox.core.tokens import Token, format_number
from treelox.lang.error import LoxError


class Expr:
    """Superclass for expressions."""


@dataclass(frozen=True)
class Literal(Expr):
    value: Any


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


class Stmt:
    """Superclass for statements."""


@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Var(Stmt):
    name: Token
    initializer: Expr = field(default_factory=lambda: Literal(None))


@dataclass(frozen=True)
class Block(Stmt):
    statements: List[Stmt]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt


class AstPrinter:
    """Renders a syntax tree as parenthesized prefix notation, one case per node type.

    Format:
    (print (+ 1 (* 2 3)))
    (block
        (var i 0)
        (while (< i 3) ...))
    """
    INDENT = "    "

    def print(self, node, indents=0):
        if isinstance(node, Stmt):
            return self.INDENT * indents + self.print_stmt(node, indents)
        return self.print_expr(node)

    def print_stmt(self, stmt, indents):
        if isinstance(stmt, Expression):
            return f"(; {self.print_expr(stmt.expression)})"
        elif isinstance(stmt, Print):
            return f"(print {self.print_expr(stmt.expression)})"
        elif isinstance(stmt, Var):
            return f"(var {stmt.name.lexeme} {self.print_expr(stmt.initializer)})"
        elif isinstance(stmt, Block):
            if not stmt.statements:
                return "(block)"
            inner = "\n".join(self.print(sub_stmt, indents + 1) for sub_stmt in stmt.statements)
            return f"(block\n{inner})"
        elif isinstance(stmt, If):
            result = f"(if {self.print_expr(stmt.condition)}\n{self.print(stmt.then_branch, indents + 1)}"
            if stmt.else_branch is not None:
                result += f"\n{self.print(stmt.else_branch, indents + 1)}"
            return result + ")"
        elif isinstance(stmt, While):
            return f"(while {self.print_expr(stmt.condition)}\n{self.print(stmt.body, indents + 1)})"

        raise LoxError(f"cannot print unknown statement '{type(stmt).__name__}'", internal=True)

    def print_expr(self, expr):
        if isinstance(expr, Literal):
            return literal_repr(expr.value)
        elif isinstance(expr, Grouping):
            return f"(group {self.print_expr(expr.expression)})"
        elif isinstance(expr, Unary):
            return f"({expr.operator.lexeme} {self.print_expr(expr.right)})"
        elif isinstance(expr, (Binary, Logical)):
            return f"({expr.operator.lexeme} {self.print_expr(expr.left)} {self.print_expr(expr.right)})"
        elif isinstance(expr, Variable):
            return expr.name.lexeme
        elif isinstance(expr, Assign):
            return f"(= {expr.name.lexeme} {self.print_expr(expr.value)})"

        raise LoxError(f"cannot print unknown expression '{type(expr).__name__}'", internal=True)


def literal_repr(value):
    """Source-like representation of a literal value: strings keep their quotes."""
    if value is None:
        return "nil"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float):
        return format_number(value)
    return f'"{value}"'
