import unittest

from treelox.core.parser import Parser
from treelox.core.scanner import scan
from treelox.core.syntax import (
    Assign,
    AstPrinter,
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


def parse(source):
    return Parser(scan(source)).parse()


def op(token_type, line=1):
    return Token(token_type, None, line)


def name(text, line=1):
    return Token(TokenType.Identifier, text, line)


def show(source):
    printer = AstPrinter()
    return [printer.print(stmt) for stmt in parse(source)]


class ExpressionTestCase(unittest.TestCase):

    def test_precedence(self):
        expected = Expression(Binary(
            Literal(1.0), op(TokenType.Plus), Binary(Literal(2.0), op(TokenType.Star), Literal(3.0))
        ))
        self.assertEqual([expected], parse("1+2*3;"))

    def test_printed_precedence(self):
        cases = {
            "1 - 2 - 3;": "(; (- (- 1 2) 3))",
            "1 + 2 * 3 - 4 / 5;": "(; (- (+ 1 (* 2 3)) (/ 4 5)))",
            "(1 + 2) * 3;": "(; (* (group (+ 1 2)) 3))",
            "1 < 2 == 3 >= 4;": "(; (== (< 1 2) (>= 3 4)))",
            "!!true;": "(; (! (! true)))",
            "-x * -2;": "(; (* (- x) (- 2)))",
            "a or b and c;": "(; (or a (and b c)))",
            "a and b or c and d;": "(; (or (and a b) (and c d)))",
            "a == b != c;": "(; (!= (== a b) c))",
            "nil != \"s\";": "(; (!= nil \"s\"))",
        }
        for case, expected in cases.items():
            self.assertEqual([expected], show(case), case)

    def test_assignment(self):
        self.assertEqual([Expression(Assign(name("x"), Literal(1.0)))], parse("x = 1;"))
        self.assertEqual(["(; (= a (= b (+ a 1))))"], show("a = b = a + 1;"))

    def test_logical_nodes(self):
        expected = Expression(Logical(Variable(name("a")), op(TokenType.Or), Variable(name("b"))))
        self.assertEqual([expected], parse("a or b;"))

    def test_unary_and_grouping(self):
        expected = Expression(Unary(op(TokenType.Minus), Grouping(Literal(1.0))))
        self.assertEqual([expected], parse("-(1);"))

    def test_invalid_assignment_target(self):
        should_fail = ["1 = 2;", "a + b = 3;", "(a) = 3;", "!a = 1;"]
        for case in should_fail:
            with self.assertRaises(ParseError, msg=case) as raised:
                parse(case)
            self.assertEqual("Invalid assignment target.", raised.exception.msg)

    def test_expected_expression(self):
        should_fail = [";", "1 +;", "print;", "var x = ;", ")", "}"]
        for case in should_fail:
            with self.assertRaises(ParseError, msg=case) as raised:
                parse(case)
            self.assertIsInstance(raised.exception.errors[0], ExpectedExpression, case)


class StatementTestCase(unittest.TestCase):

    def test_var(self):
        self.assertEqual([Var(name("x"), Literal(None))], parse("var x;"))
        self.assertEqual([Var(name("x"), Literal("hi"))], parse('var x = "hi";'))

    def test_print(self):
        self.assertEqual([Print(Literal(True))], parse("print true;"))

    def test_block(self):
        expected = Block([Var(name("x"), Literal(1.0)), Block([])])
        self.assertEqual([expected], parse("{ var x = 1; {} }"))

    def test_if(self):
        self.assertEqual([If(Variable(name("a")), Print(Literal(1.0)), None)], parse("if (a) print 1;"))

        dangling = parse("if (a) if (b) print 1; else print 2;")[0]
        self.assertIsNone(dangling.else_branch)
        self.assertEqual(Print(Literal(2.0)), dangling.then_branch.else_branch)

    def test_while(self):
        self.assertEqual([While(Literal(False), Block([]))], parse("while (false) {}"))

    def test_statement_lines(self):
        stmt = parse("\n\nvar answer = 42;")[0]
        self.assertEqual(3, stmt.name.line)


class ForTestCase(unittest.TestCase):

    def test_full(self):
        expected = Block([
            Var(name("i"), Literal(0.0)),
            While(
                Binary(Variable(name("i")), op(TokenType.Less), Literal(3.0)),
                Block([
                    Print(Variable(name("i"))),
                    Expression(Assign(name("i"), Binary(Variable(name("i")), op(TokenType.Plus), Literal(1.0)))),
                ]),
            ),
        ])
        self.assertEqual([expected], parse("for (var i = 0; i < 3; i = i + 1) print i;"))

    def test_empty_clauses(self):
        self.assertEqual([While(Literal(True), Print(Literal(1.0)))], parse("for (;;) print 1;"))

    def test_expression_initializer(self):
        expected = Block([
            Expression(Assign(name("i"), Literal(0.0))),
            While(Variable(name("c")), Print(Literal(1.0))),
        ])
        self.assertEqual([expected], parse("for (i = 0; c;) print 1;"))

    def test_malformed(self):
        cases = {
            "for i = 0; i < 3; i = i + 1) print i;": "Expect '(' after 'for'.",
            "for (var i = 0; i < 3 i = i + 1) print i;": "Expect ';' after loop condition.",
            "for (var i = 0; i < 3; i = i + 1 print i;": "Expect ')' after for clauses.",
        }
        for case, message in cases.items():
            with self.assertRaises(ParseError, msg=case) as raised:
                parse(case)
            self.assertEqual(message, raised.exception.msg, case)


class ErrorTestCase(unittest.TestCase):

    def test_messages(self):
        cases = {
            "var 1 = 2;": "Expect variable name.",
            "var x = 1": "Expect ';' after variable declaration.",
            "print 1": "Expect ';' after value.",
            "1 + 2": "Expect ';' after value.",
            "if 1) print 1;": "Expect '(' after 'if'.",
            "if (1 print 1;": "Expect ')' after if condition.",
            "while 1) print 1;": "Expect '(' after 'while'.",
            "while (1 print 1;": "Expect ')' after condition.",
            "{ print 1;": "Expect '}' after block.",
            "(1 + 2;": "Expect ')' after expression.",
        }
        for case, message in cases.items():
            with self.assertRaises(ParseError, msg=case) as raised:
                parse(case)
            self.assertEqual(message, raised.exception.msg, case)

    def test_error_line(self):
        with self.assertRaises(ParseError) as raised:
            parse("print 1;\nprint 2;\nprint 3")
        self.assertEqual(3, raised.exception.line)

    def test_collects_errors(self):
        with self.assertRaises(ParseError) as raised:
            parse("var = 1;\nprint 2;\nprint ;\nvar y = 3;\n1 = y;")

        errors = raised.exception.errors
        self.assertEqual(["Expect variable name.", "Expect expression.", "Invalid assignment target."],
                         [error.msg for error in errors])
        self.assertEqual([1, 3, 5], [error.line for error in errors])
        self.assertEqual("Expect variable name.", raised.exception.msg)

    def test_too_much_nesting(self):
        with self.assertRaises(ParseError) as raised:
            parse("print " + "(" * 5000 + "1" + ")" * 5000 + ";")
        self.assertEqual("Too much nesting.", raised.exception.msg)


if __name__ == '__main__':
    unittest.main()
