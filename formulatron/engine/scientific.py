"""
Scientific notation codec: value <-> (mantissa, exponent).

Non-finite values pass through as markers rather than raising, so the
recalculation engine can detect them and stop propagating.
"""

import math
from typing import Union

DEFAULT_SIGNIFICANT_DIGITS = 5


def normalize(x: float, significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS) -> tuple[float, int]:
    """
    Split a value into a rounded mantissa and an integer exponent.

    1 <= |mantissa| < 10 for every finite non-zero x. Rounding is done by the
    float formatter, so a carry (9.99996 -> 10.000) moves into the exponent.

    Returns:
        (mantissa, exponent); (0.0, 0) for zero; (x, 0) for a non-finite x
    """
    x = float(x)
    if not math.isfinite(x):
        return (x, 0)
    if x == 0:
        return (0.0, 0)
    mantissa_text, exponent_text = f"{x:.{significant_digits - 1}e}".split("e")
    return (float(mantissa_text), int(exponent_text))


def denormalize(mantissa: float, exponent: float) -> float:
    """Recombine mantissa * 10**exponent; overflow yields a signed infinity."""
    try:
        return mantissa * 10.0 ** exponent
    except OverflowError:
        if math.isnan(mantissa):
            return math.nan
        if mantissa == 0:
            return 0.0
        return math.copysign(math.inf, mantissa)


def parse_field(raw: Union[str, float, int, None]) -> float:
    """
    Read a mantissa or exponent from an input field.

    Partial entries such as "-", "." or "1e" are normal while typing; they
    read as NaN instead of raising.
    """
    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float)):
        return float(raw)
    try:
        return float(str(raw).strip())
    except ValueError:
        return math.nan
