"""Tokenization for the supported J subset."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import LexError
from .values import Numeric, parse_number
from .verbs import lookup


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int
    value: Numeric | None = None


_SINGLE_TOKENS = {
    "(": "LPAREN",
    ")": "RPAREN",
}

# J graphic characters that can start a primitive word; `_` belongs to numbers.
_VERB_START = set("=<>+*-%^$~|.:,;#!/\\[]{}\"`&@?")
_INFLECTIONS = set(".:")
_COMMENT = "NB."


def _is_number_start(ch: str) -> bool:
    return ch == "_" or ("0" <= ch <= "9")


def _is_number_continue(ch: str) -> bool:
    # Letters are included so that `12abc` is one ill-formed literal, not `12` then a name.
    return ch in "_." or (ch.isascii() and ch.isalnum())


def _scan_while(source: str, start: int, predicate) -> tuple[str, int]:
    i = start
    while i < len(source) and predicate(source[i]):
        i += 1
    return source[start:i], i


def _scan_inflected_word(source: str, start: int) -> tuple[str, int]:
    i = start + 1
    while i < len(source) and source[i] in _INFLECTIONS:
        i += 1
    return source[start:i], i


def _check_spelling(spelling: str, pos: int) -> None:
    if lookup(spelling) is None:
        raise LexError(f"Unsupported primitive {spelling!r}", pos)


def tokenize(source: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0

    while i < len(source):
        ch = source[i]

        if ch.isspace():
            i += 1
            continue

        if source.startswith(_COMMENT, i):
            while i < len(source) and source[i] not in {"\n", "\r"}:
                i += 1
            continue

        if ch in _SINGLE_TOKENS:
            tokens.append(Token(_SINGLE_TOKENS[ch], ch, i, i + 1))
            i += 1
            continue

        if _is_number_start(ch):
            text, end = _scan_while(source, i, _is_number_continue)
            tokens.append(Token("NUMBER", text, i, end, parse_number(text, i)))
            i = end
            continue

        if ch in _VERB_START:
            spelling, end = _scan_inflected_word(source, i)
            _check_spelling(spelling, i)
            tokens.append(Token("VERB", spelling, i, end))
            i = end
            continue

        if ch.isascii() and ch.isalpha():
            if i + 1 < len(source) and source[i + 1] in _INFLECTIONS:
                spelling, end = _scan_inflected_word(source, i)
                _check_spelling(spelling, i)
                tokens.append(Token("VERB", spelling, i, end))
                i = end
                continue
            name, _ = _scan_while(source, i, lambda c: c == "_" or (c.isascii() and c.isalnum()))
            raise LexError(f"Names are not supported: {name!r}", i)

        raise LexError(f"Unexpected character {ch!r}", i)

    tokens.append(Token("EOF", "", len(source), len(source)))
    return tokens
