"""J primitive verbs and the fixed, read-only verb table.

See https://code.jsoftware.com/wiki/NuVoc for the full vocabulary; only the
primitives below are implemented, all at rank 0 (elementwise).
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Callable

from jax import lax
import jax.numpy as jnp

from .errors import ArityError, DomainError, UnimplementedError
from .values import Noun, check_size, conform

Monad = Callable[[Noun], Noun]
Dyad = Callable[[Noun, Noun], Noun]


@dataclass(frozen=True)
class Verb:
    """A primitive verb with an optional monadic and dyadic definition."""

    spelling: str
    monad: Monad | None = None
    dyad: Dyad | None = None

    def apply_monad(self, y: Noun) -> Noun:
        if self.monad is None:
            raise ArityError(f"{self.spelling} has no monadic form", self.spelling)
        return self.monad(y)

    def apply_dyad(self, x: Noun, y: Noun) -> Noun:
        if self.dyad is None:
            raise ArityError(f"{self.spelling} has no dyadic form", self.spelling)
        return self.dyad(x, y)

    def __str__(self) -> str:
        return self.spelling


def _real_result(reals: jnp.ndarray, shape: tuple[int, ...], *, where: str) -> Noun:
    if bool(jnp.any(jnp.isnan(reals))):
        raise DomainError(f"{where} has no defined result here")
    return Noun.from_reals(reals, shape)


def _complex_result(re: jnp.ndarray, im: jnp.ndarray, shape: tuple[int, ...], *, where: str) -> Noun:
    if bool(jnp.any(jnp.isnan(re))) or bool(jnp.any(jnp.isnan(im))):
        raise DomainError(f"{where} has no defined result here")
    return Noun(shape, lax.complex(re, im))


def _real_pair(x: Noun, y: Noun, *, where: str) -> tuple[tuple[int, ...], jnp.ndarray, jnp.ndarray]:
    shape = conform(x, y)
    return shape, x.reals(where=where), y.reals(where=where)


def _negate(y: Noun) -> Noun:
    return _complex_result(-jnp.real(y.data), -jnp.imag(y.data), y.shape, where="-")


def _minus(x: Noun, y: Noun) -> Noun:
    shape = conform(x, y)
    re = jnp.real(x.data) - jnp.real(y.data)
    im = jnp.imag(x.data) - jnp.imag(y.data)
    return _complex_result(re, im, shape, where="-")


def _plus(x: Noun, y: Noun) -> Noun:
    shape = conform(x, y)
    re = jnp.real(x.data) + jnp.real(y.data)
    im = jnp.imag(x.data) + jnp.imag(y.data)
    return _complex_result(re, im, shape, where="+")


def _not(y: Noun) -> Noun:
    r = y.reals(where="-.")
    if bool(jnp.any((r < 0) | (r > 1))):
        raise DomainError("-. is only defined for arguments from 0 to 1")
    return _real_result(1 - r, y.shape, where="-.")


def _tally(y: Noun) -> Noun:
    return Noun.atom(float(y.tally))


def _shape_of(y: Noun) -> Noun:
    if y.is_atom:
        return Noun.empty()
    return Noun.from_values(float(dim) for dim in y.shape)


def _signum(y: Noun) -> Noun:
    r = y.reals(where="*")
    return _real_result(jnp.sign(r), y.shape, where="*")


def _times(x: Noun, y: Noun) -> Noun:
    shape, xr, yr = _real_pair(x, y, where="*")
    # Zero times anything, infinity included, is zero.
    out = jnp.where((xr == 0) | (yr == 0), 0.0, xr * yr)
    return _real_result(out, shape, where="*")


def _divide(x: Noun, y: Noun) -> Noun:
    shape, xr, yr = _real_pair(x, y, where="%")
    by_zero = jnp.where(xr == 0, 0.0, jnp.sign(xr) * jnp.inf)
    out = jnp.where(yr == 0, by_zero, xr / jnp.where(yr == 0, 1.0, yr))
    return _real_result(out, shape, where="%")


def _reciprocal(y: Noun) -> Noun:
    return _divide(Noun.atom(1.0), y)


def _integers(y: Noun) -> Noun:
    if not y.is_atom:
        raise UnimplementedError("i. of a list would build an array of rank 2")
    n = float(y.reals(where="i.")[0])
    if math.isinf(n) or not n.is_integer():
        raise DomainError("i. requires an integer argument")
    if n < 0:
        raise DomainError("i. of a negative number is not supported")
    count = int(n)
    check_size(count, where="i.")
    return Noun.from_reals(jnp.arange(count, dtype=jnp.float64), (count,))


def _reserved(spelling: str, form: str) -> Callable[..., Noun]:
    def fail(*_args: Noun) -> Noun:
        raise UnimplementedError(f"{form} {spelling} is not implemented")

    return fail


@lru_cache(maxsize=1)
def verb_table() -> Mapping[str, Verb]:
    """Every supported primitive, keyed by spelling."""
    verbs = (
        Verb("-", _negate, _minus),
        Verb("-.", _not, None),
        Verb("+", None, _plus),
        Verb("#", _tally, _reserved("#", "dyadic")),
        Verb("$", _shape_of, _reserved("$", "dyadic")),
        Verb("%", _reciprocal, _divide),
        Verb("*", _signum, _times),
        Verb("i.", _integers, None),
    )
    return MappingProxyType({verb.spelling: verb for verb in verbs})


def lookup(spelling: str) -> Verb | None:
    return verb_table().get(spelling)
