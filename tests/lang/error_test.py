import io
import unittest
from contextlib import redirect_stdout

from treelox.lang.error import (
    ErrorHandler,
    ExpectedExpression,
    LoxError,
    LoxRuntimeError,
    ParseError,
    UnexpectedCharacter,
)


class LoxErrorTestCase(unittest.TestCase):

    def test_str(self):
        self.assertEqual("Undefined variable.", str(LoxRuntimeError("Undefined variable.")))
        self.assertEqual("[line 4] Undefined variable.", str(LoxRuntimeError("Undefined variable.", 4)))
        self.assertEqual("[line 2] Unexpected character '@'.", str(UnexpectedCharacter(2, "@")))

    def test_equality(self):
        self.assertEqual(ExpectedExpression(3), ExpectedExpression(3))
        self.assertNotEqual(ExpectedExpression(3), ParseError("Expect expression.", 3))
        self.assertNotEqual(LoxRuntimeError("a", 1), LoxRuntimeError("a", 2))

    def test_collect(self):
        errors = [ExpectedExpression(1), ParseError("Invalid assignment target.", 4)]
        collected = ParseError.collect(errors)

        self.assertEqual("Expect expression.", collected.msg)
        self.assertEqual(1, collected.line)
        self.assertEqual(errors, collected.errors)

        lone = ParseError("Expect ';' after value.", 2)
        self.assertEqual([lone], lone.errors)


class ErrorHandlerTestCase(unittest.TestCase):

    def throw(self, handler, error):
        out = io.StringIO()
        with redirect_stdout(out):
            with handler:
                raise error
        return out.getvalue()

    def test_fatal(self):
        with self.assertRaises(SystemExit) as raised:
            self.throw(ErrorHandler(), LoxRuntimeError("Undefined variable.", 1))
        self.assertEqual(1, raised.exception.code)

    def test_non_fatal(self):
        output = self.throw(ErrorHandler(fatal=False), LoxRuntimeError("Undefined variable.", 1))
        self.assertIn("error: ", output)
        self.assertIn("[line 1] Undefined variable.", output)

    def test_traceback(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("prog.lox")
        handler.register_source("prog.lox", "var a = 1;\n   print b;\n")

        output = self.throw(handler, LoxRuntimeError("Undefined variable.", 2))
        self.assertIn("File 'prog.lox', line 2:\n    print b;\n", output)
        self.assertEqual({"prog.lox": None}, handler.traceback)

    def test_removed_source(self):
        handler = ErrorHandler(fatal=False)
        handler.register_source("prog.lox", "print b;")
        handler.remove_source("prog.lox")

        self.assertNotIn("File", self.throw(handler, LoxRuntimeError("Undefined variable.", 1)))

    def test_all_parse_errors(self):
        error = ParseError.collect([ExpectedExpression(1), ParseError("Expect ';' after value.", 3)])
        output = self.throw(ErrorHandler(fatal=False), error)

        self.assertIn("[line 1] Expect expression.", output)
        self.assertIn("[line 3] Expect ';' after value.", output)

    def test_internal(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(ZeroDivisionError):
            with ErrorHandler(fatal=False):
                raise ZeroDivisionError("boom")

        self.assertIn("[internal] ", out.getvalue())
        self.assertIn("unknown error: 'ZeroDivisionError: boom'", out.getvalue())

    def test_keyboard_interrupt(self):
        self.assertIn("keyboard interrupt", self.throw(ErrorHandler(fatal=False), KeyboardInterrupt()))

    def test_system_exit_passes(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(fatal=False):
                raise SystemExit(0)

    def test_no_error(self):
        with ErrorHandler() as handler:
            pass
        self.assertTrue(handler.fatal)

    def test_base_error(self):
        self.assertIn("cannot exit", self.throw(ErrorHandler(fatal=False), LoxError("cannot exit", internal=True)))


if __name__ == '__main__':
    unittest.main()
