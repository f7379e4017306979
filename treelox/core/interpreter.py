"""Tree-walking evaluation of treelox syntax trees.

Runtime values are plain Python objects:

```
number  ->  float
string  ->  str
boolean ->  bool
nil     ->  None
```

Only nil and false are falsy. Equality never coerces between types, so `nil == false` and `true == 1` are both false.
"""

import logging
import math

from treelox.core.environment import Environment
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
from treelox.core.tokens import TokenType, format_number
from treelox.lang.error import LoxError, LoxRuntimeError

logger = logging.getLogger(__name__)


def is_truthy(value):
    return value is not None and value is not False


def is_equal(left, right):
    return type(left) is type(right) and left == right


def is_number(value):
    return isinstance(value, float)


def stringify(value):
    """Formats value the way print displays it."""
    if value is None:
        return "nil"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float):
        return format_number(value)
    return value


def divide(left, right):
    """IEEE-754 division: dividing by zero gives a signed infinity (NaN for 0 / 0) rather than raising."""
    if right != 0:
        return left / right
    if left == 0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


ARITHMETIC = {
    TokenType.Minus: lambda left, right: left - right,
    TokenType.Star: lambda left, right: left * right,
    TokenType.Slash: divide,
}

COMPARISON = {
    TokenType.Greater: lambda left, right: left > right,
    TokenType.GreaterEqual: lambda left, right: left >= right,
    TokenType.Less: lambda left, right: left < right,
    TokenType.LessEqual: lambda left, right: left <= right,
}


class Interpreter:
    """Executes statements against a single Environment. Reusing an Interpreter across runs (as the shell does) keeps
    global variables alive between them.

    output is called with each line produced by a print statement.
    """

    def __init__(self, output=print, environment=None):
        self.output = output
        self.environment = environment if environment is not None else Environment()

    def interpret(self, statements):
        """Executes statements in order. The first LoxRuntimeError aborts the remaining statements and is raised."""
        depth = self.environment.depth
        try:
            for stmt in statements:
                self.execute(stmt)
        except RecursionError:
            # block exits may themselves have hit the recursion limit while unwinding
            self.environment.unwind(depth)
            raise LoxRuntimeError("Too much nesting.") from None

    # statements

    def execute(self, stmt):
        logger.debug("Executing %s", type(stmt).__name__)

        if isinstance(stmt, Expression):
            self.evaluate(stmt.expression)
        elif isinstance(stmt, Print):
            self.output(stringify(self.evaluate(stmt.expression)))
        elif isinstance(stmt, Var):
            self.environment.define(stmt.name.value, self.evaluate(stmt.initializer))
        elif isinstance(stmt, Block):
            self.execute_block(stmt.statements)
        elif isinstance(stmt, If):
            if is_truthy(self.evaluate(stmt.condition)):
                self.execute(stmt.then_branch)
            elif stmt.else_branch is not None:
                self.execute(stmt.else_branch)
        elif isinstance(stmt, While):
            while is_truthy(self.evaluate(stmt.condition)):
                self.execute(stmt.body)
        else:
            raise LoxError(f"unknown statement '{type(stmt).__name__}'", internal=True)

    def execute_block(self, statements):
        """Executes statements in a new innermost frame, which is discarded however the block is left."""
        with self.environment:
            for stmt in statements:
                self.execute(stmt)

    # expressions

    def evaluate(self, expr):
        if isinstance(expr, Literal):
            return expr.value
        elif isinstance(expr, Grouping):
            return self.evaluate(expr.expression)
        elif isinstance(expr, Unary):
            return self.evaluate_unary(expr)
        elif isinstance(expr, Binary):
            return self.evaluate_binary(expr)
        elif isinstance(expr, Logical):
            return self.evaluate_logical(expr)
        elif isinstance(expr, Variable):
            return self.lookup(expr.name)
        elif isinstance(expr, Assign):
            value = self.evaluate(expr.value)
            if not self.environment.assign(expr.name.value, value):
                raise LoxRuntimeError("Undefined variable.", expr.name.line)
            return value

        raise LoxError(f"unknown expression '{type(expr).__name__}'", internal=True)

    def evaluate_unary(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.type is TokenType.Minus:
            if not is_number(right):
                raise LoxRuntimeError("Operand must be a number.", expr.operator.line)
            return -right

        return not is_truthy(right)  # TokenType.Bang

    def evaluate_binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator

        if operator.type is TokenType.EqualEqual:
            return is_equal(left, right)
        elif operator.type is TokenType.BangEqual:
            return not is_equal(left, right)
        elif operator.type is TokenType.Plus:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError("Cannot add these values.", operator.line)

        self.check_numbers(operator, left, right)
        if operator.type in ARITHMETIC:
            return ARITHMETIC[operator.type](left, right)
        return COMPARISON[operator.type](left, right)

    @staticmethod
    def check_numbers(operator, left, right):
        if not is_number(left):
            raise LoxRuntimeError("Left operand must be a number.", operator.line)
        if not is_number(right):
            raise LoxRuntimeError("Right operand must be a number.", operator.line)

    def evaluate_logical(self, expr):
        """Short-circuits, returning whichever operand decided the result rather than a bool."""
        left = self.evaluate(expr.left)

        if expr.operator.type is TokenType.Or:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expr.right)

    def lookup(self, name):
        try:
            return self.environment.get(name.value)
        except KeyError:
            raise LoxRuntimeError("Undefined variable.", name.line) from None
