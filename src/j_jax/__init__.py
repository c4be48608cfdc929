"""j-jax public API: a small J interpreter on top of JAX arrays."""

from .errors import (
    ArityError,
    DomainError,
    JError,
    LengthError,
    LexError,
    LimitError,
    ParseError,
    RecursionLimitError,
    UnimplementedError,
    describe_error,
)
from .values import Extent, Noun, Numeric, parse_number
from .formatter import format_noun, format_number
from .lexer import Token, tokenize
from .verbs import Verb, verb_table
from .evaluator import Session, evaluate, evaluate_line

__all__ = [
    "tokenize",
    "Token",
    "evaluate",
    "evaluate_line",
    "Session",
    "format_noun",
    "format_number",
    "describe_error",
    "parse_number",
    "Numeric",
    "Extent",
    "Noun",
    "Verb",
    "verb_table",
    "JError",
    "LexError",
    "ParseError",
    "ArityError",
    "LengthError",
    "DomainError",
    "RecursionLimitError",
    "UnimplementedError",
    "LimitError",
]
