"""treelox: a tree-walking interpreter for a small Lox dialect.

Basic program flow:
    1. Scanner: turns source text into tokens (treelox/core/scanner.py)
    2. Parser: builds a list of statements by recursive descent (treelox/core/parser.py)
    3. Interpreter: walks the statements against a stack of scopes (treelox/core/interpreter.py)
"""

__version__ = "0.1.0"
