"""Tokenization of calculator input lines."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int


_SINGLE_TOKENS = {
    "(": "LPAREN",
    ")": "RPAREN",
    "[": "LBRACK",
    "]": "RBRACK",
    "{": "LBRACE",
    "}": "RBRACE",
}

_SYMBOL_KINDS = {
    ",": "COMMA",
    ";": "SEMI",
}

# Kinds that may stand on either side of a binary operator.
OPERAND_KINDS = frozenset({"NUMBER", "NAME"})


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "."


def _is_number_text(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


def _classify(text: str) -> str:
    kind = _SINGLE_TOKENS.get(text)
    if kind is not None:
        return kind
    if _is_word_char(text[0]):
        return "NUMBER" if _is_number_text(text) else "NAME"
    return _SYMBOL_KINDS.get(text, "OP")


def make_token(text: str, pos: int = 0) -> Token:
    """Build a classified token from raw text (used for synthetic tokens)."""
    return Token(kind=_classify(text), text=text, pos=pos, end=pos + len(text))


def tokenize(source: str) -> list[Token]:
    """Split a line into word runs, symbol runs and single-character braces.

    Word characters are letters, digits and ``.``; every other non-whitespace
    character is a symbol. ``( ) [ ] { }`` are always their own token.
    """
    tokens: list[Token] = []
    start = -1
    word = False
    for i, ch in enumerate(source):
        if ch.isspace():
            if start >= 0:
                tokens.append(make_token(source[start:i], start))
                start = -1
            continue
        if ch in _SINGLE_TOKENS:
            if start >= 0:
                tokens.append(make_token(source[start:i], start))
                start = -1
            tokens.append(make_token(ch, i))
            continue
        is_word = _is_word_char(ch)
        if start >= 0 and is_word != word:
            tokens.append(make_token(source[start:i], start))
            start = -1
        if start < 0:
            start = i
            word = is_word
    if start >= 0:
        tokens.append(make_token(source[start:], start))
    return tokens
