from __future__ import annotations

import unittest

from calc_jax.lexer import make_token, tokenize


class LexerAndLiteralCoverageTests(unittest.TestCase):
    def _tokens(self, source: str, *, with_spans: bool = False):
        if with_spans:
            return [(tok.kind, tok.text, tok.pos, tok.end) for tok in tokenize(source)]
        return [(tok.kind, tok.text) for tok in tokenize(source)]

    def test_token_golden_assignment_and_spans(self) -> None:
        self.assertEqual(
            self._tokens("x = 5", with_spans=True),
            [
                ("NAME", "x", 0, 1),
                ("OP", "=", 2, 3),
                ("NUMBER", "5", 4, 5),
            ],
        )

    def test_token_golden_call_and_reverse_assignment(self) -> None:
        self.assertEqual(
            self._tokens("f(x,y)=>z", with_spans=True),
            [
                ("NAME", "f", 0, 1),
                ("LPAREN", "(", 1, 2),
                ("NAME", "x", 2, 3),
                ("COMMA", ",", 3, 4),
                ("NAME", "y", 4, 5),
                ("RPAREN", ")", 5, 6),
                ("OP", "=>", 6, 8),
                ("NAME", "z", 8, 9),
            ],
        )

    def test_bracket_literal_separators(self) -> None:
        self.assertEqual(
            self._tokens("[1,2;3,4]"),
            [
                ("LBRACK", "["),
                ("NUMBER", "1"),
                ("COMMA", ","),
                ("NUMBER", "2"),
                ("SEMI", ";"),
                ("NUMBER", "3"),
                ("COMMA", ","),
                ("NUMBER", "4"),
                ("RBRACK", "]"),
            ],
        )

    def test_braces_are_always_single_tokens(self) -> None:
        self.assertEqual(
            self._tokens("(([]){})"),
            [
                ("LPAREN", "("),
                ("LPAREN", "("),
                ("LBRACK", "["),
                ("RBRACK", "]"),
                ("RPAREN", ")"),
                ("LBRACE", "{"),
                ("RBRACE", "}"),
                ("RPAREN", ")"),
            ],
        )

    def test_symbol_runs_are_maximal(self) -> None:
        self.assertEqual(self._tokens("1,-2"), [("NUMBER", "1"), ("OP", ",-"), ("NUMBER", "2")])
        self.assertEqual(self._tokens("8//2"), [("NUMBER", "8"), ("OP", "//"), ("NUMBER", "2")])
        self.assertEqual(self._tokens("a - -b"), [("NAME", "a"), ("OP", "-"), ("OP", "-"), ("NAME", "b")])

    def test_word_runs_classify_as_number_or_name(self) -> None:
        self.assertEqual(self._tokens("3.5e2"), [("NUMBER", "3.5e2")])
        self.assertEqual(self._tokens(".5"), [("NUMBER", ".5")])
        self.assertEqual(self._tokens("x2"), [("NAME", "x2")])
        self.assertEqual(self._tokens("1.2.3"), [("NAME", "1.2.3")])
        self.assertEqual(self._tokens("e"), [("NAME", "e")])

    def test_whitespace_only_line_has_no_tokens(self) -> None:
        self.assertEqual(tokenize(""), [])
        self.assertEqual(tokenize("  \t "), [])

    def test_make_token_classifies_synthetic_text(self) -> None:
        token = make_token("ans", 4)
        self.assertEqual((token.kind, token.text, token.pos, token.end), ("NAME", "ans", 4, 7))
        self.assertEqual(make_token(";").kind, "SEMI")


if __name__ == "__main__":
    unittest.main()
