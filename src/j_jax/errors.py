"""Structured error types for the J evaluator."""

from __future__ import annotations

from typing import ClassVar


class JError(Exception):
    """Base class for every error the evaluator reports for bad input."""

    kind: ClassVar[str] = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class LexError(JError):
    """Malformed literal or unrecognized character."""

    kind: ClassVar[str] = "lex error"

    def __init__(self, message: str, pos: int) -> None:
        super().__init__(message)
        self.pos = pos

    def __str__(self) -> str:
        return f"{self.message} at index {self.pos}"


class ParseError(JError):
    """Unmatched parenthesis or a token sequence that does not reduce."""

    kind: ClassVar[str] = "parse error"

    def __init__(self, message: str, pos: int | None = None) -> None:
        super().__init__(message)
        self.pos = pos

    def __str__(self) -> str:
        if self.pos is None:
            return self.message
        return f"{self.message} at index {self.pos}"


class ArityError(JError):
    """A verb used monadically or dyadically when it has no such form."""

    kind: ClassVar[str] = "arity error"

    def __init__(self, message: str, spelling: str) -> None:
        super().__init__(message)
        self.spelling = spelling


class LengthError(JError):
    """Dyadic elementwise application on lists of different length."""

    kind: ClassVar[str] = "length error"

    def __init__(self, left_shape: tuple[int, ...], right_shape: tuple[int, ...]) -> None:
        super().__init__(
            f"shapes {_render_shape(left_shape)} and {_render_shape(right_shape)} do not conform"
        )
        self.left_shape = left_shape
        self.right_shape = right_shape


class DomainError(JError):
    """An operand outside the domain of a primitive."""

    kind: ClassVar[str] = "domain error"


class RecursionLimitError(JError):
    """Parenthesis nesting deeper than the configured bound."""

    kind: ClassVar[str] = "recursion limit error"

    def __init__(self, depth: int, limit: int) -> None:
        super().__init__(f"parenthesis depth {depth} exceeds limit {limit}")
        self.depth = depth
        self.limit = limit


class UnimplementedError(JError):
    """J feature that exists in the language but not in this interpreter."""

    kind: ClassVar[str] = "unimplemented"


class LimitError(JError):
    """A result would be larger than the configured array size limit."""

    kind: ClassVar[str] = "limit error"


def _render_shape(shape: tuple[int, ...]) -> str:
    if not shape:
        return "(atom)"
    return " ".join(str(dim) for dim in shape)


def describe_error(err: JError) -> str:
    """Stable one-line message shown in place of a result."""
    return f"|{err.kind}: {err}"
