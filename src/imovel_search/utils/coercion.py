"""Fail-soft numeric coercion for loosely typed listing data and query params.

Listing exports and query strings carry numbers as ints, floats, plain strings
and occasionally pt-BR formatted strings ("1.250.000,00"). None of these
helpers raise: anything that does not parse becomes ``None`` and the caller
decides what the neutral default is.
"""

import math

_PT_BR_THOUSANDS = "."
_PT_BR_DECIMAL = ","


def _parse_number_text(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        pass

    # "1.250.000,50" -> "1250000.50", "1.250.000" -> "1250000"
    if text.count(_PT_BR_DECIMAL) == 1:
        candidate = text.replace(_PT_BR_THOUSANDS, "").replace(_PT_BR_DECIMAL, ".")
    elif text.count(_PT_BR_THOUSANDS) > 1:
        candidate = text.replace(_PT_BR_THOUSANDS, "")
    else:
        return None
    try:
        return float(candidate)
    except ValueError:
        return None


def parse_optional_float(value: object) -> float | None:
    """Parse a number, returning None for empty, non-numeric or non-finite values.

    Booleans are rejected even though they are ints in Python.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            parsed: float | None = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip().removeprefix("R$").strip()
        if not text:
            return None
        parsed = _parse_number_text(text)
    else:
        return None

    if parsed is None or not math.isfinite(parsed):
        return None
    return parsed


def parse_optional_int(value: object) -> int | None:
    """Parse an integer (truncating fractional input), None when unparseable."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    parsed = parse_optional_float(value)
    if parsed is None:
        return None
    return int(parsed)
