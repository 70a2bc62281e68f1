import io
import unittest
from contextlib import redirect_stdout

from fnlc.lang.error import (ErrorHandler, GenericException, LambdaSyntaxError, StepLimitExceeded,
                             UnboundReferenceError)


def capture(func, *args, **kwargs):
    out = io.StringIO()
    with redirect_stdout(out):
        func(*args, **kwargs)
    return out.getvalue()


class GenericExceptionTestCase(unittest.TestCase):

    def test_msg(self):
        error = GenericException("'{}' could not be opened", "prog.lc")
        self.assertIn("prog.lc", error.msg)
        self.assertIn("could not be opened", error.msg)
        self.assertEqual("prog.lc", error.expr)
        self.assertEqual((0, len("prog.lc")), (error.start, error.end))

    def test_location(self):
        error = GenericException("oops")
        self.assertEqual("", error.location)

        error.path = "prog.lc"
        self.assertEqual("prog.lc: ", error.location)

        error = LambdaSyntaxError("unexpected '{'", "main := {", 1, 9, "prog.lc")
        self.assertEqual("prog.lc:1:9: ", error.location)
        self.assertIn("{", error.msg)
        self.assertEqual((8, 9), (error.start, error.end))

        error = LambdaSyntaxError("unexpected end of input", "fn x", 3, 5)
        self.assertEqual("<string>:3:5: ", error.location)

    def test_hierarchy(self):
        for error in [LambdaSyntaxError("bad", "x", 1, 1), UnboundReferenceError([("main", "x")]),
                      StepLimitExceeded(10)]:
            self.assertIsInstance(error, GenericException)
        self.assertIsInstance(LambdaSyntaxError("bad", "x", 1, 1), SyntaxError)

    def test_unbound(self):
        error = UnboundReferenceError([("main", "g"), ("four", "succ")], "prog.lc")
        self.assertEqual([("main", "g"), ("four", "succ")], error.unbound)
        self.assertIn("'g' in main", error.msg)
        self.assertIn("'succ' in four", error.msg)
        self.assertEqual("prog.lc: ", error.location)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_diagnose(self):
        error = LambdaSyntaxError("unexpected ')'", "main := x )", 1, 11)
        lines = ErrorHandler.diagnose(error).split("\n")

        self.assertEqual(2, len(lines))
        self.assertTrue(lines[0].startswith("  main := x "))
        self.assertTrue(lines[1].startswith("  " + " " * 10))
        self.assertIn("^", lines[1])

    def test_throw(self):
        handler = ErrorHandler(fatal=False)
        out = capture(handler.throw, LambdaSyntaxError("unexpected ')'", "main := x )", 1, 11, "prog.lc"))

        self.assertIn("prog.lc:1:11:", out)
        self.assertIn("error: ", out)
        self.assertIn("main := x", out)

    def test_throw_fatal(self):
        handler = ErrorHandler()
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as context:
                handler.throw(GenericException("oops"))
        self.assertEqual(1, context.exception.code)

    def test_context_manager(self):
        def raise_in_handler(error):
            with ErrorHandler(fatal=False):
                raise error

        out = capture(raise_in_handler, StepLimitExceeded(5))
        self.assertIn("5", out)
        self.assertIn("reduction steps", out)

        out = capture(raise_in_handler, RecursionError())
        self.assertIn("maximum recursion depth exceeded", out)

    def test_internal_error(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(ZeroDivisionError):
                with ErrorHandler(fatal=False):
                    raise ZeroDivisionError("division by zero")

        self.assertIn("[internal]", out.getvalue())
        self.assertIn("ZeroDivisionError", out.getvalue())

    def test_system_exit(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(fatal=False):
                raise SystemExit(0)

    def test_warn(self):
        out = capture(ErrorHandler().warn, "'{}' has no beta-normal form within {} steps", ["prog.lc", "50"],
                      diagnosis=False)
        self.assertIn("warning: ", out)
        self.assertIn("has no beta-normal form within", out)
        self.assertNotIn("^", out)

    def test_register_step(self):
        self.assertEqual("", capture(ErrorHandler().register_step, "β", "x"))

        out = capture(ErrorHandler(verbose=True).register_step, "β", "fn x => x")
        self.assertIn("β", out)
        self.assertTrue(out.endswith(" fn x => x\n"))


if __name__ == '__main__':
    unittest.main()
