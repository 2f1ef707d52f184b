import unittest

from arrowlang.core.expressions import (Assignment, BinaryOp, BoolLiteral, Call, Declaration, Identifier,
                                        NumberLiteral, StringLiteral, UnaryOp)
from arrowlang.core.grammar import parse, parse_literal, parse_statements
from arrowlang.core.operators import BinaryOperator, UnaryOperator
from arrowlang.lang.error import ParseError

ADD, SUB, MUL, DIV = BinaryOperator.ADD, BinaryOperator.SUB, BinaryOperator.MUL, BinaryOperator.DIV


def num(value):
    return NumberLiteral(value)


class PrecedenceTestCase(unittest.TestCase):

    def test_binary_precedence(self):
        cases = {
            "1 + 2 * 3": BinaryOp(ADD, num(1), BinaryOp(MUL, num(2), num(3))),
            "(1 + 2) * 3": BinaryOp(MUL, BinaryOp(ADD, num(1), num(2)), num(3)),
            "1 * 2 + 3": BinaryOp(ADD, BinaryOp(MUL, num(1), num(2)), num(3)),
            "1 + 2 < 4": BinaryOp(BinaryOperator.LT, BinaryOp(ADD, num(1), num(2)), num(4)),
            "1 < 2 == true": BinaryOp(BinaryOperator.EQ, BinaryOp(BinaryOperator.LT, num(1), num(2)), BoolLiteral(True)),
            "a || b == c": BinaryOp(BinaryOperator.OR, Identifier("a"),
                                    BinaryOp(BinaryOperator.EQ, Identifier("b"), Identifier("c"))),
        }
        for case, expected in cases.items():
            self.assertEqual([expected], parse(case), case)

    def test_left_associative(self):
        cases = {
            "2 - 3 - 1": BinaryOp(SUB, BinaryOp(SUB, num(2), num(3)), num(1)),
            "8 / 4 / 2": BinaryOp(DIV, BinaryOp(DIV, num(8), num(4)), num(2)),
            "1 - 2 + 3": BinaryOp(ADD, BinaryOp(SUB, num(1), num(2)), num(3)),
        }
        for case, expected in cases.items():
            self.assertEqual([expected], parse(case), case)

    def test_assignment_right_associative(self):
        expected = Assignment("x", Assignment("y", BinaryOp(ADD, num(1), num(2))))
        self.assertEqual([expected], parse("x = y = 1 + 2"))

    def test_operators(self):
        cases = {
            "a == b": BinaryOperator.EQ,
            "a !== b": BinaryOperator.NEQ,
            "a <= b": BinaryOperator.LEQ,
            "a < b": BinaryOperator.LT,
            "a >= b": BinaryOperator.GEQ,
            "a > b": BinaryOperator.GT,
            "a || b": BinaryOperator.OR,
            "a && b": BinaryOperator.OR,  # && builds the same node as ||
            "a/b": BinaryOperator.DIV,
            "a-b": BinaryOperator.SUB,
        }
        for case, op in cases.items():
            self.assertEqual([BinaryOp(op, Identifier("a"), Identifier("b"))], parse(case), case)

    def test_unary(self):
        cases = {
            "-x": UnaryOp(UnaryOperator.NEGATE, Identifier("x")),
            "-2": UnaryOp(UnaryOperator.NEGATE, num(2)),
            "!!true": UnaryOp(UnaryOperator.NOT, UnaryOp(UnaryOperator.NOT, BoolLiteral(True))),
            "1 - -2": BinaryOp(SUB, num(1), UnaryOp(UnaryOperator.NEGATE, num(2))),
            "-a * b": BinaryOp(MUL, UnaryOp(UnaryOperator.NEGATE, Identifier("a")), Identifier("b")),
        }
        for case, expected in cases.items():
            self.assertEqual([expected], parse(case), case)

    def test_call(self):
        cases = {
            "f :> 1": Call(Identifier("f"), [num(1)]),
            "f :> 1 :: x": Call(Identifier("f"), [num(1), Identifier("x")]),
            "f:>a+1::b": Call(Identifier("f"), [BinaryOp(ADD, Identifier("a"), num(1)), Identifier("b")]),
            "(g) :> \"s\"": Call(Identifier("g"), [StringLiteral("s")]),
            "f": Identifier("f"),
        }
        for case, expected in cases.items():
            self.assertEqual([expected], parse(case), case)


class PrimaryTestCase(unittest.TestCase):

    def test_primary(self):
        cases = {
            "true": BoolLiteral(True),
            "false": BoolLiteral(False),
            "trueish": Identifier("trueish"),
            "lettuce": Identifier("lettuce"),
            "12.5": num(12.5),
            '"a \\"b\\""': StringLiteral('a "b"'),
            "  ( ( x ) )  ": Identifier("x"),
        }
        for case, expected in cases.items():
            self.assertEqual([expected], parse(case), case)

    def test_declaration(self):
        cases = {
            "let x = 1": Declaration("x", num(1)),
            "let  y=x=2": Declaration("y", Assignment("x", num(2))),
        }
        for case, expected in cases.items():
            self.assertEqual([expected], parse(case), case)

    def test_parse_literal(self):
        cases = {
            "1": num(1),
            "-2.5": num(-2.5),
            " true ": BoolLiteral(True),
            '"hi"': StringLiteral("hi"),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_literal(case), case)

        should_fail = ["x", "1 + 1", "", "(1)"]
        for case in should_fail:
            self.assertRaises(ParseError, parse_literal, case)


class ProgramTestCase(unittest.TestCase):

    def test_statements(self):
        cases = {
            "": [],
            "  \n\t ": [],
            "1": [num(1)],
            "1; 2": [num(1), num(2)],
            "1; 2;": [num(1), num(2)],
            " x = 1 ;\n x ": [Assignment("x", num(1)), Identifier("x")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_statement_offsets(self):
        statements = parse_statements("let x = 1;\n  x + 1; x")
        self.assertEqual([0, 13, 20], [offset for offset, __ in statements])

    def test_malformed(self):
        should_fail = ["1 +", "(1 + 2", "1 2", "1;;2", '"abc', "let = 1", "true = 1", "x = ", ")", "f :> 1 ::",
                       "1 <> 2", "let true = 1", ";", "a ! b"]
        for case in should_fail:
            self.assertRaises(ParseError, parse, case)

    def test_error_position(self):
        cases = {
            "1 +": 3,
            "1 2": 2,
            "(1 + 2": 6,
            "x = 1; 3 *": 10,
            '1 + "abc': 8,
        }
        for case, position in cases.items():
            with self.assertRaises(ParseError) as context:
                parse(case)
            self.assertEqual(position, context.exception.position, case)

    def test_error_expected(self):
        with self.assertRaises(ParseError) as context:
            parse("1 +")
        self.assertIn("expression", context.exception.expected)

        with self.assertRaises(ParseError) as context:
            parse("(1 + 2")
        self.assertIn("')'", context.exception.expected)


class DisplayTestCase(unittest.TestCase):

    def test_display(self):
        cases = {
            "1 + 2 * 3": "(1 + (2 * 3))",
            "x = 1.5": "x = 1.5",
            "let x = -y": "let x = -y",
            "f :> 1 :: x": "f :> (1 :: x)",
            "a && b": "(a || b)",
            "a !== !b": "(a !== !b)",
            '"q\\"q"': '"q\\"q"',
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse(case)[0]), case)

    def test_literal_round_trip(self):
        cases = ['"he said \\"hi\\""', '""', "12.5", "0", "1e3", "true", "false"]
        for case in cases:
            expr = parse(case)[0]
            self.assertEqual(expr, parse(str(expr))[0], case)

        # non-finite numbers display as names, so they do not parse back as numbers
        self.assertEqual([Identifier("inf")], parse(str(parse("1e400")[0])))

    def test_long_chain(self):
        expr = parse(" - ".join(["1"] * 1500))[0]
        text = str(expr)
        self.assertTrue(text.startswith("(" * 1499 + "1 - 1)"), text[:20])
        self.assertTrue(text.endswith(" - 1)"), text[-20:])


if __name__ == '__main__':
    unittest.main()
