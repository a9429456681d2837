import unittest

import calc_eval
from calc_eval import (
    ASTBinOp, ASTNum, DivideByZero, InvalidCharacters, InvalidExpression,
    commit, eval_node, evaluate, format_number, normalize, preview,
)


class TestNormalize(unittest.TestCase):
    def test_percent_rewrite(self):
        self.assertEqual(normalize("50%"), "(50/100)")
        self.assertEqual(normalize("12.5%+1"), "(12.5/100)+1")

    def test_trailing_operators_stripped(self):
        self.assertEqual(normalize("3+"), "3")
        self.assertEqual(normalize("3*-"), "3")
        self.assertEqual(normalize("3."), "3")
        self.assertEqual(normalize("-"), "")

    def test_rejects_foreign_characters(self):
        with self.assertRaises(InvalidCharacters):
            normalize("2^3")
        with self.assertRaises(InvalidCharacters):
            normalize("1e5")

    def test_rejects_overlong_text(self):
        with self.assertRaises(InvalidCharacters):
            normalize("1" * 201)


class TestEvaluate(unittest.TestCase):
    def test_precedence(self):
        self.assertEqual(evaluate("2+3*4"), 14)
        self.assertEqual(evaluate("(2+3)*4"), 20)

    def test_left_associative(self):
        self.assertEqual(evaluate("10-4-3"), 3)
        self.assertEqual(evaluate("64/4/2"), 8)

    def test_unary_minus(self):
        self.assertEqual(evaluate("-(2+3)"), -5)
        self.assertEqual(evaluate("2*-3"), -6)
        self.assertEqual(evaluate("-2*-3"), 6)

    def test_decimals_and_spaces(self):
        self.assertAlmostEqual(evaluate("1.5 + .5"), 2.0)
        self.assertEqual(evaluate(" 7 "), 7)

    def test_empty_is_zero(self):
        self.assertEqual(evaluate(""), 0)
        self.assertEqual(evaluate("+"), 0)

    def test_syntax_errors(self):
        for text in ("(2+3", "2+3)", "()", "1.2.3", "1 2", "+5", "--5", "2*%", "(2)%"):
            with self.assertRaises(InvalidExpression, msg=text):
                evaluate(text)

    def test_division_by_zero(self):
        with self.assertRaises(DivideByZero):
            evaluate("6/0")
        with self.assertRaises(DivideByZero):
            evaluate("0/0")
        with self.assertRaises(DivideByZero):
            evaluate("1/(2-2)")

    def test_overflow_is_non_finite(self):
        with self.assertRaises(DivideByZero):
            eval_node(ASTBinOp('*', ASTNum(1e200), ASTNum(1e200)))


class TestFormatNumber(unittest.TestCase):
    def test_snaps_to_integer(self):
        self.assertEqual(format_number(2.9999999999999996), "3")
        self.assertEqual(format_number(14.0), "14")
        self.assertEqual(format_number(-7.0), "-7")

    def test_strips_float_noise(self):
        self.assertEqual(format_number(0.1 + 0.2), "0.3")
        self.assertEqual(format_number(1 / 3), "0.3333333333")
        self.assertEqual(format_number(-0.5), "-0.5")

    def test_no_negative_zero(self):
        self.assertEqual(format_number(-0.0), "0")
        self.assertEqual(format_number(-1e-11), "0")


class TestPreview(unittest.TestCase):
    def test_value(self):
        p = preview("2+3*4")
        self.assertEqual(p.kind, calc_eval.VALUE)
        self.assertEqual(p.value, 14)

    def test_trailing_operator_previews_prefix(self):
        p = preview("3+")
        self.assertEqual(p.kind, calc_eval.VALUE)
        self.assertEqual(p.value, 3)

    def test_unfinished_expression_is_empty(self):
        for text in ("(", "2*(", "(2+3"):
            p = preview(text)
            self.assertEqual(p.kind, calc_eval.EMPTY, text)
            self.assertEqual(p.reason, "")

    def test_divide_by_zero_label(self):
        p = preview("6/0")
        self.assertEqual(p.kind, calc_eval.INVALID)
        self.assertEqual(p.reason, "Divide by zero")

    def test_invalid_input_label(self):
        p = preview("2$")
        self.assertEqual(p.kind, calc_eval.INVALID)
        self.assertEqual(p.reason, "Invalid input")


class TestCommit(unittest.TestCase):
    def test_empty(self):
        c = commit("")
        self.assertEqual(c.kind, calc_eval.VALUE)
        self.assertEqual(c.value, 0)
        self.assertEqual(c.formatted, "0")
        self.assertEqual(c.text, "0")

    def test_precedence(self):
        c = commit("2+3*4")
        self.assertEqual(c.value, 14)
        self.assertEqual(c.text, "14")

    def test_percent(self):
        c = commit("50%")
        self.assertEqual(c.value, 0.5)
        self.assertEqual(c.formatted, "0.5")

    def test_divide_by_zero(self):
        c = commit("6/0")
        self.assertEqual(c.kind, calc_eval.INVALID)
        self.assertEqual(c.error, "DivideByZero")
        self.assertEqual(c.text, "Error")
        self.assertEqual(c.reason, "Cannot divide by zero")

    def test_syntax_error(self):
        c = commit("(2+3")
        self.assertEqual(c.error, "InvalidExpression")
        self.assertEqual(c.text, "Error")
        self.assertEqual(c.reason, "Evaluation error")

    def test_invalid_characters(self):
        c = commit("Error")
        self.assertEqual(c.error, "InvalidCharacters")
        self.assertEqual(c.reason, "Invalid input")

    def test_recommit_is_stable(self):
        for text in ("2+3*4", "0.1+0.2", "50%", "1/3", "-7/2", "6*-1.25", "(1+2)*(3+4)/7"):
            first = commit(text)
            again = commit(first.formatted)
            self.assertEqual(again.kind, calc_eval.VALUE, text)
            self.assertEqual(again.formatted, first.formatted, text)


if __name__ == "__main__":
    unittest.main()
