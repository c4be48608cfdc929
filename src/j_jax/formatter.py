"""Render nouns back to canonical J text."""

from __future__ import annotations

from decimal import Decimal
from typing import Final

from .values import Extent, Noun, Numeric

# Decimal exponents printed in fixed notation; anything outside uses 1e16 / 1e_5 style.
_MIN_FIXED_EXPONENT: Final[int] = -4
_MAX_FIXED_EXPONENT: Final[int] = 15

_ELLIPSIS: Final[str] = " ..."


_INFINITY_TEXT: Final[dict[Extent, str]] = {
    Extent.POSITIVE_INFINITY: "_",
    Extent.NEGATIVE_INFINITY: "__",
}


def _format_real(x: float) -> str:
    extent = Numeric(x).extent
    if extent is not Extent.FINITE:
        return _INFINITY_TEXT[extent]
    if x == 0:
        return "0"

    # repr gives the shortest digit string that reads back as the same float.
    digits = Decimal(repr(abs(x))).normalize()
    exponent = digits.adjusted()
    if _MIN_FIXED_EXPONENT <= exponent <= _MAX_FIXED_EXPONENT:
        text = format(digits, "f")
    else:
        sig = "".join(str(d) for d in digits.as_tuple().digits)
        mantissa = sig[0] if len(sig) == 1 else f"{sig[0]}.{sig[1:]}"
        text = f"{mantissa}e{exponent}".replace("-", "_")
    return f"_{text}" if x < 0 else text


def format_number(value: Numeric) -> str:
    if value.is_real:
        return _format_real(value.real)
    return f"{_format_real(value.real)}j{_format_real(value.imag)}"


def format_noun(noun: Noun, max_width: int | None = None) -> str:
    """Atom as one number, list as space-separated numbers.

    With ``max_width``, a list that does not fit is cut after the values that
    do, followed by `` ...``. The first value is always shown.
    """
    parts = [format_number(v) for v in noun.values()]
    text = " ".join(parts)
    if max_width is None or len(text) <= max_width or len(parts) <= 1:
        return text

    shown = parts[0]
    for part in parts[1:]:
        candidate = f"{shown} {part}"
        if len(candidate) + len(_ELLIPSIS) > max_width:
            break
        shown = candidate
    return shown + _ELLIPSIS
