"""
Number text for VMF output.

Hammer reads whatever the editor-side tooling writes, and the existing ramp
files were produced by a JavaScript generator.  To keep documents
byte-comparable with those files, numbers are rendered with the same rules:

- ``format_number``: shortest round-trip text (ECMAScript Number::toString)
- ``format_fixed``: fixed decimals, ties rounded away from zero
  (ECMAScript Number.prototype.toFixed)
"""

from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP


def format_number(value: float) -> str:
    """Render a number the way ECMAScript ``String(value)`` does.

    Examples:
        >>> format_number(256.0)
        '256'
        >>> format_number(-0.0)
        '0'
        >>> format_number(1e-7)
        '1e-7'
        >>> format_number(0.00001)
        '0.00001'
    """
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr() gives the shortest digits that round-trip, same as ECMAScript
    dec = Decimal(repr(float(abs(value)))).normalize()
    _, digit_tuple, exponent = dec.as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = k + exponent  # position of the decimal point relative to digits

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        body = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        exp = f"e{'+' if e >= 0 else '-'}{abs(e)}"
        if k == 1:
            body = digits + exp
        else:
            body = digits[0] + "." + digits[1:] + exp
    return sign + body


def format_fixed(value: float, decimals: int = 4) -> str:
    """Render ``value`` with exactly ``decimals`` places (ECMAScript toFixed).

    The exact binary value is rounded, ties go away from zero, and negative
    zero prints without a sign.
    """
    if math.isnan(value):
        return "NaN"
    if value == 0:
        value = 0.0
    quantum = Decimal(1).scaleb(-decimals)
    return str(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_point(point) -> str:
    """Space-separated ``x y z`` text."""
    return " ".join(format_number(c) for c in point)
