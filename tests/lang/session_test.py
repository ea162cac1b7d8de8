import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from slisp.core.sexpr import List, Number, Symbol
from slisp.lang.error import ErrorHandler, GenericException, UnclosedList, UnterminatedString
from slisp.lang.session import Session


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp_dir.cleanup)

    def write(self, source, name="test.lisp"):
        path = os.path.join(self.tmp_dir.name, name)
        with open(path, "w", encoding="utf-8") as file:
            file.write(source)
        return path

    def test_file(self):
        path = self.write("; squares\n(define (square x) (* x x))\n(square 3)\n")
        sess = Session(ErrorHandler(), path, cmd_line=False)

        self.assertEqual(1, len(sess.results))
        self.assertEqual([
            List([Symbol("define"), List([Symbol("square"), Symbol("x")]), List([Symbol("*"), Symbol("x"), Symbol("x")])]),
            List([Symbol("square"), Number(3)]),
        ], sess.results[0].exprs)

        output = io.StringIO()
        with redirect_stdout(output):
            sess.run()
        self.assertEqual("(define (square x) (* x x))\n(square 3)\n", output.getvalue())
        self.assertEqual([], sess.results)

    def test_bad_file(self):
        self.assertRaises(GenericException, Session, ErrorHandler(), os.path.join(self.tmp_dir.name, "missing.lisp"),
                          cmd_line=False)
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, cmd_line=False)

    def test_file_errors(self):
        path = self.write("(a)\n(b \"c\n")
        with self.assertRaises(UnterminatedString) as context:
            Session(ErrorHandler(), path, cmd_line=False)
        self.assertEqual(3, context.exception.line)

        path = self.write("(a\n(b)", name="strict.lisp")
        self.assertRaises(UnclosedList, Session, ErrorHandler(), path, cmd_line=False, implicit_close=False)

    def test_cmd_line(self):
        handler = ErrorHandler()
        sess = Session(handler, Session.SH_FILE, cmd_line=True)
        self.assertFalse(handler.fatal)

        sess.add("(+ 1 2.5)", 1)
        self.assertEqual("(+ 1 2.5)", sess.pop())
        self.assertEqual([], sess.results)

    def test_modes(self):
        cases = {
            "expr": "(a 1)",
            "tree": "List(nodes=[\n    Symbol('a'),\n    Number(1.0)\n])",
            "tokens": "[OpenParen, Symbol('a'), Number(1.0), CloseParen, End]",
        }
        for mode, expected in cases.items():
            sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True, mode=mode)
            sess.add("(a 1)", 1)
            self.assertEqual(expected, sess.pop(), mode)

        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, cmd_line=True, mode="json")

    def test_implicit_close_warning(self):
        sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True)

        output = io.StringIO()
        with redirect_stdout(output):
            sess.add("(a (b", 1)
        self.assertIn("warning: ", output.getvalue())
        self.assertEqual("(a (b))", sess.pop())

        output = io.StringIO()
        with redirect_stdout(output):
            sess.add("(a (b))", 2)
        self.assertEqual("", output.getvalue())

    def test_preprocess_line(self):
        cases = {
            ("(+ 1 2)", ""): ("(+ 1 2)", False),
            ("(define (f x)", ""): ("(define (f x)", True),
            ("x)", "(define (f x)"): ("(define (f x)\nx)", False),
            ("\"abc", ""): ("\"abc", True),
            ("def\"", "\"abc"): ("\"abc\ndef\"", False),
            ("(a ; )", ""): ("(a ; )", True),
            ("\"(\"", ""): ("\"(\"", False),
            ("a)", ""): ("a)", False),
        }
        for (line, prev), expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(line, prev), line)


if __name__ == '__main__':
    unittest.main()
