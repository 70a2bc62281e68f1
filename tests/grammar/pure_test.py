import unittest

from fnlc.grammar.pure import parse_file, parse_statement, parse_term
from fnlc.lang.error import LambdaSyntaxError
from fnlc.lang.lexical import Definition, File
from fnlc.pure.lexical import Abstraction, Application, Variable


class ParseTermTestCase(unittest.TestCase):

    def test_structure(self):
        term = parse_term("fn x => x y")
        self.assertIsInstance(term, Abstraction)
        self.assertEqual("x", term.param)
        self.assertIsInstance(term.body, Application)

        term = parse_term("a b c")
        self.assertIsInstance(term.function, Application)
        self.assertEqual(Variable("c"), term.argument)
        self.assertEqual(Variable("a"), term.function.function)

        term = parse_term("f fn x => x y")
        self.assertEqual(Variable("f"), term.function)
        self.assertEqual("fn x => x y", term.argument.expr)

    def test_identifiers(self):
        cases = ["x", "x'", "foo_bar", "x0", "42", "+", "λ", "main x"]
        for case in cases:
            self.assertEqual(case, parse_term(case).expr, case)

    def test_comments(self):
        term = parse_term("fn x => # the identity\n  x")
        self.assertEqual("fn x => x", term.expr)

    def test_errors(self):
        cases = {
            "fn x =>": (1, 8),
            "fn => x": (1, 4),
            "x : y": (1, 3),
            "(x y": (1, 5),
            "x y)": (1, 4),
            "()": (1, 2),
            "": (1, 1),
            "fn x\n=> (x": (2, 6),
        }
        for case, (line_num, column) in cases.items():
            with self.assertRaises(LambdaSyntaxError, msg=case) as context:
                parse_term(case)

            self.assertEqual(line_num, context.exception.lineno, case)
            self.assertEqual(column, context.exception.offset, case)

    def test_error_is_syntax_error(self):
        with self.assertRaises(SyntaxError):
            parse_term("fn x")


class ParseFileTestCase(unittest.TestCase):

    def test_file(self):
        program = parse_file("# identity\n"
                             "id := fn x => x;  # trailing comment\n"
                             "k := fn x => fn y => x;\n"
                             "\n"
                             "main := k id id")

        self.assertIsInstance(program, File)
        self.assertEqual([Definition("id", parse_term("fn x => x")), Definition("k", parse_term("fn x => fn y => x"))],
                         program.definitions)
        self.assertEqual("k id id", program.main.expr)

    def test_main_only(self):
        program = parse_file("main := fn x => x;")
        self.assertEqual([], program.definitions)
        self.assertEqual("fn x => x", program.main.expr)

    def test_path(self):
        self.assertEqual("prog.lc", parse_file("main := x", "prog.lc").path)

        with self.assertRaises(LambdaSyntaxError) as context:
            parse_file("main := (x", "prog.lc")
        self.assertEqual("prog.lc", context.exception.filename)
        self.assertTrue(context.exception.location.startswith("prog.lc:1:"))

    def test_errors(self):
        cases = {
            "id := fn x => x;\nmain := id )": (2, 12),
            "a := x\nmain := a": (2, 6),
            "id := fn x => x;": (1, 17),
            "main := x; y := x;": (1, 12),
            "x = y;\nmain := x": (1, 3),
            ":= x;\nmain := x": (1, 1),
        }
        for case, (line_num, column) in cases.items():
            with self.assertRaises(LambdaSyntaxError, msg=case) as context:
                parse_file(case)

            self.assertEqual(line_num, context.exception.lineno, case)
            self.assertEqual(column, context.exception.offset, case)
            self.assertEqual(case.split("\n")[line_num - 1], context.exception.text, case)

    def test_error_message(self):
        with self.assertRaises(LambdaSyntaxError) as context:
            parse_file("id := fn x => x;\nmain := id )")
        self.assertIn("')'", context.exception.msg)

        with self.assertRaises(LambdaSyntaxError) as context:
            parse_file("main := fn x =>")
        self.assertIn("end of input", context.exception.msg)


class ParseStatementTestCase(unittest.TestCase):

    def test_statement(self):
        self.assertEqual(Definition("id", parse_term("fn x => x")), parse_statement("id := fn x => x"))
        self.assertEqual(Definition("id", parse_term("fn x => x")), parse_statement("id := fn x => x;"))

        for case in ["main := id y", "main := id y;", "id y", "id y;"]:
            stmt = parse_statement(case)
            self.assertNotIsInstance(stmt, Definition, case)
            self.assertEqual("id y", stmt.expr, case)

    def test_errors(self):
        for case in ["id :=", "id := x;;", ":= x", "main :="]:
            with self.assertRaises(LambdaSyntaxError, msg=case):
                parse_statement(case, "<in>")


if __name__ == '__main__':
    unittest.main()
