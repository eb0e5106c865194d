"""
Numeric canonicalization.

Every number held by a JsonValue is stored in its smallest lossless form:
an int within the 32-bit or 64-bit signed range, a finite float that is not
integral (or does not fit 64 bits), or one of the non-finite string tokens.
"""

import math
import numbers
from enum import Enum
from typing import Final
from typing import TypeAlias

from ._errors import IllegalValue

INT32_MIN: Final = -(2**31)
INT32_MAX: Final = 2**31 - 1
INT64_MIN: Final = -(2**63)
INT64_MAX: Final = 2**63 - 1

NAN_TOKEN: Final = "NaN"
POSITIVE_INFINITY_TOKEN: Final = "Infinity"
NEGATIVE_INFINITY_TOKEN: Final = "-Infinity"
NON_FINITE_TOKENS: Final = frozenset(
    (NAN_TOKEN, POSITIVE_INFINITY_TOKEN, NEGATIVE_INFINITY_TOKEN)
)

CanonicalNumber: TypeAlias = int | float | str


class NumberKind(Enum):
    """Storage width of a canonical number."""

    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"


def fits_int32(n: int) -> bool:
    return INT32_MIN <= n <= INT32_MAX


def fits_int64(n: int) -> bool:
    return INT64_MIN <= n <= INT64_MAX


def _non_finite_token(f: float) -> str:
    if math.isnan(f):
        return NAN_TOKEN
    return POSITIVE_INFINITY_TOKEN if f > 0 else NEGATIVE_INFINITY_TOKEN


def canonicalize_float(f: float) -> CanonicalNumber:
    """
    Collapses a float to its canonical form.

    Integral floats inside the int64 range become ints, non-finite floats
    become their string token, everything else stays a float.
    """
    if not math.isfinite(f):
        return _non_finite_token(f)
    if f.is_integer() and INT64_MIN <= f < 2.0**63:
        return int(f)
    return f


def canonicalize_number(number: object) -> CanonicalNumber:
    """
    Produces the canonical form of a number of arbitrary origin.

    Other real types such as Fraction are read through float(). Raises
    IllegalValue for booleans, integers outside the 64-bit range and numbers
    that are not real, such as Decimal and complex.
    """
    if isinstance(number, bool):
        raise IllegalValue(f"Boolean is not a number: {number!r}", number)
    if isinstance(number, int):
        if not fits_int64(number):
            raise IllegalValue(
                f"Cannot convert number to json value: {number!r}", number
            )
        # Drops int subclasses such as IntEnum members
        return int(number)
    if isinstance(number, float):
        return canonicalize_float(float(number))
    if isinstance(number, numbers.Integral):
        return canonicalize_number(int(number))
    if isinstance(number, numbers.Real):
        try:
            return canonicalize_float(float(number))
        except OverflowError as e:
            raise IllegalValue(
                f"Cannot convert number to json value: {number!r}", number
            ) from e
    raise IllegalValue(
        f"Cannot convert number to json value: {number!r}", number
    )


def canonicalize_literal(literal: str) -> CanonicalNumber:
    """
    Canonicalizes a number literal already validated by the grammar.

    Literals without fraction or exponent are read as integers first and
    fall back to float when they overflow 64 bits.
    """
    if "." not in literal and "e" not in literal and "E" not in literal:
        try:
            value = int(literal)
        except ValueError:
            # Beyond the interpreter's int string conversion limit
            value = None
        if value is not None and fits_int64(value):
            return value
    return canonicalize_float(float(literal))


def number_kind(number: int | float) -> NumberKind:
    """Reports the storage width of an already canonical number."""
    if isinstance(number, float):
        return NumberKind.FLOAT
    return NumberKind.INT32 if fits_int32(number) else NumberKind.INT64

