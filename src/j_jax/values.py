"""Runtime value model: extended numbers and rank-0/rank-1 nouns."""

from __future__ import annotations

import math
import os
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Final

import jax
import jax.numpy as jnp

from .errors import DomainError, LengthError, LexError, LimitError

# Element storage is complex128; float32 would not print literals back exactly.
jax.config.update("jax_enable_x64", True)

ARRAY_SIZE_LIMIT: Final[int] = max(1, int(os.environ.get("J_JAX_ARRAY_SIZE_LIMIT", "100000000")))

_NUMBER_RE = re.compile(
    r"""
    ^
    (?P<sign>_?)                              # leading negative marker
    (?P<integer>[0-9]+)
    (?:\.(?P<fraction>[0-9]*))?
    (?:
        e
        (?P<exp_sign>_?)
        (?P<exponent>[0-9]+)
    )?
    $
    """,
    re.VERBOSE,
)


class Extent(str, Enum):
    FINITE = "finite"
    POSITIVE_INFINITY = "positive_infinity"
    NEGATIVE_INFINITY = "negative_infinity"


@dataclass(frozen=True)
class Numeric:
    """One J number: complex storage with a real-valued surface."""

    real: float
    imag: float = 0.0

    def __post_init__(self) -> None:
        real = float(self.real)
        imag = float(self.imag)
        if math.isnan(real) or math.isnan(imag):
            raise ValueError("NaN is not a representable J number")
        object.__setattr__(self, "real", real)
        object.__setattr__(self, "imag", imag)

    @classmethod
    def from_complex(cls, value: complex) -> "Numeric":
        return cls(value.real, value.imag)

    @property
    def extent(self) -> Extent:
        if self.real == math.inf:
            return Extent.POSITIVE_INFINITY
        if self.real == -math.inf:
            return Extent.NEGATIVE_INFINITY
        return Extent.FINITE

    @property
    def is_real(self) -> bool:
        return self.imag == 0.0

    def to_complex(self) -> complex:
        return complex(self.real, self.imag)


def parse_number(text: str, pos: int = 0) -> Numeric:
    """Parse one J numeric literal such as ``12``, ``_3.5``, ``1e_4``, ``_`` or ``__``."""
    if text == "_":
        return Numeric(math.inf)
    if text == "__":
        return Numeric(-math.inf)

    if not _NUMBER_RE.match(text):
        raise LexError(f"Ill-formed number {text!r}", pos)

    # The matched text is valid float syntax once `_` is read as `-`; float()
    # saturates any exponent length to inf or 0.
    return Numeric(float(text.replace("_", "-")))


def check_size(count: int, *, where: str) -> None:
    if count > ARRAY_SIZE_LIMIT:
        raise LimitError(f"{where} would build {count} elements; the limit is {ARRAY_SIZE_LIMIT}")


@dataclass(frozen=True, eq=False)
class Noun:
    """An immutable atom (shape ``()``) or flat list (shape ``(n,)``)."""

    shape: tuple[int, ...]
    data: jnp.ndarray

    def __post_init__(self) -> None:
        shape = tuple(int(dim) for dim in self.shape)
        if len(shape) > 1:
            raise ValueError(f"Nouns of rank {len(shape)} are not supported")
        if any(dim < 0 for dim in shape):
            raise ValueError(f"Negative dimension in shape {shape}")
        data = jnp.ravel(jnp.asarray(self.data, dtype=jnp.complex128))
        if data.shape[0] != math.prod(shape):
            raise ValueError(f"Shape {shape} does not match {data.shape[0]} elements")
        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "data", data)

    @classmethod
    def atom(cls, value: Numeric | complex | float) -> "Noun":
        if isinstance(value, Numeric):
            value = value.to_complex()
        return cls((), jnp.asarray([value], dtype=jnp.complex128))

    @classmethod
    def from_values(cls, values: Iterable[Numeric | complex | float]) -> "Noun":
        items = [v.to_complex() if isinstance(v, Numeric) else complex(v) for v in values]
        check_size(len(items), where="list")
        return cls((len(items),), jnp.asarray(items, dtype=jnp.complex128).reshape((len(items),)))

    @classmethod
    def from_reals(cls, reals, shape: tuple[int, ...] | None = None) -> "Noun":
        arr = jnp.ravel(jnp.asarray(reals, dtype=jnp.float64))
        if shape is None:
            shape = (int(arr.shape[0]),)
        return cls(shape, arr.astype(jnp.complex128))

    @classmethod
    def empty(cls) -> "Noun":
        return cls((0,), jnp.zeros((0,), dtype=jnp.complex128))

    @property
    def is_atom(self) -> bool:
        return not self.shape

    @property
    def tally(self) -> int:
        """Number of items along the leading axis; 1 for an atom."""
        if not self.shape:
            return 1
        return self.shape[0]

    def values(self) -> tuple[Numeric, ...]:
        return tuple(Numeric.from_complex(complex(v)) for v in self.data.tolist())

    def is_real(self) -> bool:
        return not bool(jnp.any(jnp.imag(self.data) != 0))

    def reals(self, *, where: str) -> jnp.ndarray:
        """Real parts as float64; non-real elements are outside every real-only domain."""
        if not self.is_real():
            raise DomainError(f"{where} requires real arguments")
        return jnp.real(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Noun):
            return NotImplemented
        return self.shape == other.shape and bool(jnp.array_equal(self.data, other.data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Noun(shape={self.shape!r}, data={self.data.tolist()!r})"


def concatenate(left: Noun, right: Noun) -> Noun:
    """Juxtapose two nouns into one list, as in the strand ``1 2 3``."""
    count = left.data.shape[0] + right.data.shape[0]
    check_size(count, where="strand")
    return Noun((count,), jnp.concatenate([left.data, right.data]))


def conform(x: Noun, y: Noun) -> tuple[int, ...]:
    """Result shape of a rank-0 dyad, or LengthError before any element is touched."""
    if x.shape == y.shape:
        return x.shape
    if x.is_atom:
        return y.shape
    if y.is_atom:
        return x.shape
    raise LengthError(x.shape, y.shape)
