"""Right-to-left evaluator for J sentences.

J has no operator precedence: a verb takes as its right argument the result of
everything to its right. Evaluation therefore scans the words from right to
left, shifting each onto a stack and reducing the leftmost few entries
whenever they match one of a small set of patterns (the "parse table" of the
J dictionary, restricted to nouns and verbs).
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final, Union

from .errors import ArityError, JError, ParseError, RecursionLimitError, describe_error
from .formatter import format_noun
from .lexer import Token, tokenize
from .values import Noun, concatenate
from .verbs import Verb, verb_table

# Each nesting level is one Python frame; configured limits are clamped well
# under the interpreter's own recursion limit.
PAREN_DEPTH_CEILING: Final[int] = 256
MAX_PAREN_DEPTH: Final[int] = min(
    PAREN_DEPTH_CEILING, max(1, int(os.environ.get("J_JAX_MAX_PAREN_DEPTH", "64")))
)


class _Mark:
    """Left end of the sentence."""

    def __repr__(self) -> str:
        return "MARK"


_MARK: Final = _Mark()

Fragment = Union[Noun, Verb]
_Entry = Union[Noun, Verb, _Mark]


def _is_noun(entry: _Entry | None) -> bool:
    return isinstance(entry, Noun)


def _is_verb(entry: _Entry | None) -> bool:
    return isinstance(entry, Verb)


def _window(stack: list[_Entry]) -> list[_Entry | None]:
    # The stack grows to the right; position 0 of the window is its leftmost word.
    return [stack[-1 - i] if i < len(stack) else None for i in range(4)]


def _replace(stack: list[_Entry], first: int, last: int, entry: _Entry) -> None:
    n = len(stack)
    stack[n - 1 - last : n - first] = [entry]


def _reduce(stack: list[_Entry]) -> None:
    while True:
        w = _window(stack)
        if _is_noun(w[0]) and _is_noun(w[1]):
            _replace(stack, 0, 1, concatenate(w[0], w[1]))
        elif w[0] is _MARK and _is_verb(w[1]) and _is_noun(w[2]):
            _replace(stack, 1, 2, w[1].apply_monad(w[2]))
        elif w[0] is not None and _is_verb(w[1]) and _is_verb(w[2]) and _is_noun(w[3]):
            _replace(stack, 2, 3, w[2].apply_monad(w[3]))
        elif w[0] is not None and _is_noun(w[1]) and _is_verb(w[2]) and _is_noun(w[3]):
            _replace(stack, 1, 3, w[2].apply_dyad(w[1], w[3]))
        else:
            return


def _matching_lparen(tokens: Sequence[Token], start: int, close: int) -> int:
    depth = 0
    for i in range(close - 1, start - 1, -1):
        kind = tokens[i].kind
        if kind == "RPAREN":
            depth += 1
        elif kind == "LPAREN":
            if depth == 0:
                return i
            depth -= 1
    raise ParseError("Unmatched )", tokens[close].pos)


def _finish(stack: list[_Entry]) -> Fragment | None:
    # stack[0] is the mark; everything after it is what did not reduce.
    rest = stack[:-1][::-1]
    if not rest:
        return None
    if len(rest) == 1:
        return rest[0]
    for entry in rest:
        if _is_verb(entry):
            raise ArityError(f"{entry} has no right argument", entry.spelling)
    raise ParseError("Sentence does not reduce to a single value")


def _evaluate_span(tokens: Sequence[Token], start: int, end: int, depth: int, limit: int) -> Fragment | None:
    if depth > limit:
        raise RecursionLimitError(depth, limit)

    table = verb_table()
    stack: list[_Entry] = []
    i = end - 1
    while i >= start:
        tok = tokens[i]
        if tok.kind == "NUMBER":
            stack.append(Noun.atom(tok.value))
        elif tok.kind == "VERB":
            stack.append(table[tok.text])
        elif tok.kind == "RPAREN":
            open_index = _matching_lparen(tokens, start, i)
            inner = _evaluate_span(tokens, open_index + 1, i, depth + 1, limit)
            if inner is None:
                raise ParseError("Empty parentheses", tokens[open_index].pos)
            stack.append(inner)
            i = open_index
        elif tok.kind == "LPAREN":
            raise ParseError("Unmatched (", tok.pos)
        elif tok.kind != "EOF":
            raise ParseError(f"Unexpected token {tok.kind}", tok.pos)
        _reduce(stack)
        i -= 1

    stack.append(_MARK)
    _reduce(stack)
    return _finish(stack)


def evaluate(tokens: Sequence[Token], *, max_depth: int | None = None) -> Noun | None:
    """Evaluate a token stream; ``None`` means the sentence was empty."""
    limit = MAX_PAREN_DEPTH if max_depth is None else min(max_depth, PAREN_DEPTH_CEILING)
    result = _evaluate_span(tokens, 0, len(tokens), 0, limit)
    if isinstance(result, Verb):
        raise ArityError(f"{result} has no argument", result.spelling)
    return result


def evaluate_line(text: str, *, max_depth: int | None = None) -> Noun | None:
    """Tokenize and evaluate one line of J."""
    return evaluate(tokenize(text), max_depth=max_depth)


@dataclass(frozen=True)
class Session:
    """Line-at-a-time evaluation that reports errors as text instead of raising."""

    max_depth: int | None = None
    max_width: int | None = None

    def eval_text(self, line: str) -> str:
        try:
            result = evaluate_line(line, max_depth=self.max_depth)
        except JError as err:
            return describe_error(err)
        if result is None:
            return ""
        return format_noun(result, max_width=self.max_width)
