from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for evaluator tests")
class EvaluatorGrammarTests(unittest.TestCase):
    def _run(self, source: str, **kwargs) -> str:
        from j_jax.evaluator import evaluate_line
        from j_jax.formatter import format_noun

        result = evaluate_line(source, **kwargs)
        self.assertIsNotNone(result)
        return format_noun(result)

    def test_right_to_left_without_precedence(self) -> None:
        cases = {
            "100 - 10 - 1": "91",
            "2 * 3 + 4": "14",
            "2 * (3 + 4)": "14",
            "(2 * 3) + 4": "10",
            "(100 - 10) - 1": "89",
            "1 - - 2": "3",
            "- 1 - 2": "1",
            "1 + - 2 3": "_1 _2",
            "2 - 1 2 - 3": "4 3",
            "- % 4": "_0.25",
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(self._run(source), expected)

    def test_strands_and_parenthesized_nouns_join(self) -> None:
        cases = {
            "1 2 3": "1 2 3",
            "(1 2) 3": "1 2 3",
            "1 (2) 3": "1 2 3",
            "- (1 2) 3": "_1 _2 _3",
            "((((7))))": "7",
            "(-) 5": "_5",
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(self._run(source), expected)

    def test_atom_and_list_results_keep_their_shape(self) -> None:
        from j_jax.evaluator import evaluate_line

        self.assertEqual(evaluate_line("5").shape, ())
        self.assertEqual(evaluate_line("1 + 2").shape, ())
        self.assertEqual(evaluate_line("1 2").shape, (2,))
        self.assertEqual(evaluate_line("1 + 1 2").shape, (2,))
        self.assertEqual(evaluate_line("i. 1").shape, (1,))

    def test_empty_sentences_have_no_value(self) -> None:
        from j_jax.evaluator import evaluate_line

        for source in ("", "   ", "NB. only a comment"):
            with self.subTest(source=source):
                self.assertIsNone(evaluate_line(source))

    def test_unbalanced_parentheses(self) -> None:
        from j_jax.errors import ParseError
        from j_jax.evaluator import evaluate_line

        cases = {"(1 2": 0, "1 2)": 3, "(1))": 3, "()": 0}
        for source, pos in cases.items():
            with self.subTest(source=source):
                with self.assertRaises(ParseError) as ctx:
                    evaluate_line(source)
                self.assertEqual(ctx.exception.pos, pos)

    def test_verbs_without_arguments(self) -> None:
        from j_jax.errors import ArityError
        from j_jax.evaluator import evaluate_line

        for source in ("-", "3 -", "- -", "1 2 -", "(-)", "1 + (%)"):
            with self.subTest(source=source):
                with self.assertRaises(ArityError):
                    evaluate_line(source)

    def test_nesting_depth_is_bounded(self) -> None:
        from j_jax.errors import RecursionLimitError
        from j_jax.evaluator import MAX_PAREN_DEPTH, evaluate_line

        deep = "(" * (MAX_PAREN_DEPTH + 1) + "1" + ")" * (MAX_PAREN_DEPTH + 1)
        with self.assertRaises(RecursionLimitError) as ctx:
            evaluate_line(deep)
        self.assertEqual(ctx.exception.depth, MAX_PAREN_DEPTH + 1)
        self.assertEqual(ctx.exception.limit, MAX_PAREN_DEPTH)

        shallow = "(" * MAX_PAREN_DEPTH + "1" + ")" * MAX_PAREN_DEPTH
        self.assertEqual(self._run(shallow), "1")

    def test_explicit_depth_limit(self) -> None:
        from j_jax.errors import RecursionLimitError
        from j_jax.evaluator import evaluate_line

        self.assertEqual(self._run("((1))", max_depth=2), "1")
        with self.assertRaises(RecursionLimitError):
            evaluate_line("((1))", max_depth=1)

    def test_configured_depth_is_clamped_to_ceiling(self) -> None:
        from j_jax.errors import RecursionLimitError
        from j_jax.evaluator import PAREN_DEPTH_CEILING, Session, evaluate_line

        very_deep = "(" * 3000 + "1" + ")" * 3000
        with self.assertRaises(RecursionLimitError) as ctx:
            evaluate_line(very_deep, max_depth=100000)
        self.assertEqual(ctx.exception.limit, PAREN_DEPTH_CEILING)
        self.assertEqual(ctx.exception.depth, PAREN_DEPTH_CEILING + 1)

        self.assertTrue(
            Session(max_depth=100000).eval_text(very_deep).startswith("|recursion limit error: ")
        )
        at_ceiling = "(" * PAREN_DEPTH_CEILING + "1" + ")" * PAREN_DEPTH_CEILING
        self.assertEqual(self._run(at_ceiling, max_depth=100000), "1")

    def test_malformed_input_is_always_reported_as_a_j_error(self) -> None:
        from j_jax.errors import JError
        from j_jax.evaluator import evaluate_line

        sources = (
            "1_000",
            "(1",
            "1)",
            "1 € 2",
            "-. 3",
            "1 2 + 1 2 3",
            "i. _1",
            "+",
            "a",
            "2 ^ 3",
            "_ - _",
            "1 # 2",
            "(" * 200 + "1" + ")" * 200,
        )
        for source in sources:
            with self.subTest(source=source):
                with self.assertRaises(JError):
                    evaluate_line(source)

    def test_session_reports_errors_as_text(self) -> None:
        from j_jax.evaluator import Session

        session = Session()
        self.assertEqual(session.eval_text("1 + 2"), "3")
        self.assertEqual(session.eval_text(""), "")
        self.assertEqual(session.eval_text("10 20 - 1 2 3"), "|length error: shapes 2 and 3 do not conform")
        self.assertEqual(session.eval_text("-. 2"), "|domain error: -. is only defined for arguments from 0 to 1")
        self.assertEqual(session.eval_text("1 + a"), "|lex error: Names are not supported: 'a' at index 4")
        self.assertEqual(session.eval_text("1 # 2"), "|unimplemented: dyadic # is not implemented")
        self.assertTrue(session.eval_text("(1").startswith("|parse error: "))
        self.assertTrue(session.eval_text("-").startswith("|arity error: "))

    def test_session_applies_display_width(self) -> None:
        from j_jax.evaluator import Session

        self.assertEqual(Session(max_width=10).eval_text("i. 100"), "0 1 2 ...")
        self.assertEqual(Session(max_width=10).eval_text("i. 4"), "0 1 2 3")


if __name__ == "__main__":
    unittest.main()
