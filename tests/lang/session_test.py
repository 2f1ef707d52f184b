import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from arrowlang.core.values import Boolean, Number, String
from arrowlang.lang.error import ErrorHandler, GenericException, ParseError, UndeclaredVariable
from arrowlang.lang.session import Session


def command_session(source=None):
    return Session(ErrorHandler(fatal=False), Session.CMD_FILE, cmd_line=False, source=source)


class SessionTestCase(unittest.TestCase):

    def test_run(self):
        sess = command_session('let x = 1; x + 1; "x" * x')
        sess.run()
        self.assertEqual([Number(1), Number(2), String("x")], sess.results)
        self.assertEqual([], sess.to_exec)

    def test_env_shared_between_adds(self):
        sess = command_session()
        sess.add("let x = 1")
        sess.run()
        sess.add("x = x + 1; x == 2")
        sess.run()
        self.assertEqual([Number(1), Number(2), Boolean(True)], sess.results)
        self.assertEqual("true", sess.pop())
        self.assertEqual([], sess.results)

    def test_line_numbers(self):
        sess = command_session("let x = 1;\n\nx + 1;\n  x")
        self.assertEqual([1, 3, 4], [line_num for line_num, __ in sess.to_exec])

        sess.add("1;\n2", line_num=10)
        self.assertEqual([1, 3, 4, 10, 11], [line_num for line_num, __ in sess.to_exec])

    def test_halts_on_first_error(self):
        sess = command_session("let x = 1; x = 2; y; x = 3")
        self.assertRaises(UndeclaredVariable, sess.run)

        self.assertEqual([Number(1), Number(2)], sess.results)
        self.assertEqual(Number(2), sess.env.lookup("x"))
        self.assertEqual([], sess.to_exec)  # statements after the error are dropped

    def test_long_chain(self):
        sess = command_session("let x = 2; " + " * ".join(["x"] * 1000) + " / " + " / ".join(["x"] * 999))
        sess.run()
        self.assertEqual([Number(2), Number(2)], sess.results)

    def test_parse_error(self):
        handler = ErrorHandler(fatal=False)
        sess = Session(handler, Session.CMD_FILE, cmd_line=False)

        self.assertRaises(ParseError, sess.add, "1;\n2 +", 5)
        self.assertEqual(("2 +", 6), handler.traceback[Session.CMD_FILE])
        self.assertEqual([], sess.to_exec)

    def test_file(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "program.arrow")
            with open(path, "w") as file:
                file.write('let greeting = "hello";\ngreeting + " " + 3 * "!"\n')

            sess = Session(ErrorHandler(fatal=False), path, cmd_line=False)
            sess.run()

        self.assertEqual([String("hello"), String("hello !!!")], sess.results)

    def test_bad_paths(self):
        self.assertRaises(GenericException, Session, ErrorHandler(), "/nonexistent/program.arrow", False)
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, False)

    def test_cmd_line_is_not_fatal(self):
        handler = ErrorHandler()
        Session(handler, Session.SH_FILE, cmd_line=True)
        self.assertFalse(handler.fatal)


class DeclareTestCase(unittest.TestCase):

    def test_declare(self):
        sess = command_session()
        cases = {
            "x=5": ("x", Number(5)),
            "s=\"hi there\"": ("s", String("hi there")),
            "n = -2.5": ("n", Number(-2.5)),
            "flag=true": ("flag", Boolean(True)),
            "eq=a=b": None,
        }
        for case, expected in cases.items():
            if expected is None:
                self.assertRaises(GenericException, sess.declare, case)
                continue
            sess.declare(case)
            self.assertEqual(expected[1], sess.env.lookup(expected[0]), case)

    def test_declare_invalid(self):
        sess = command_session()
        should_fail = ["x", "=1", "1x=1", "true=1", "let=2", "x=y", "x=1 + 1", "x="]
        for case in should_fail:
            self.assertRaises(GenericException, sess.declare, case)

    def test_redeclare_warns(self):
        sess = command_session()
        sess.declare("x=1")

        output = io.StringIO()
        with redirect_stdout(output):
            sess.declare("x=2")

        self.assertIn("warning: ", output.getvalue())
        self.assertEqual(Number(2), sess.env.lookup("x"))


class PreprocessLineTestCase(unittest.TestCase):

    def test_preprocess_line(self):
        cases = {
            "1 + 2   ": ("1 + 2", False),
            "(1 +": ("(1 +", True),
            "((1) + 2": ("((1) + 2", True),
            '"abc': ('"abc', True),
            '"a\\"(" + 1': ('"a\\"(" + 1', False),
            '"(" + (': ('"(" + (', True),
            "1)": ("1)", False),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(case), case)


if __name__ == '__main__':
    unittest.main()
