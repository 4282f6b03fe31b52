"""Amount/date coercion helpers shared by the model and the analyzer.

Malformed inputs never raise here. They degrade to sentinel values instead:

- amounts that cannot be read as a number become ``NaN`` (which then
  propagates through every sum/average it takes part in);
- dates that cannot be parsed become ``None`` (which no date comparison
  matches, so such transactions drop out of date-filtered queries).
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

from .logging_setup import get_logger

INVALID_DATE: date | None = None
"""Sentinel stored in ``Transaction.date`` when the input could not be parsed."""

_logger = get_logger("transaction_analysis.coercion")

_TWO_PLACES = Decimal("0.01")
# Wide enough for the integer digits of any finite float plus two places.
_AMOUNT_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------


# Leading numeric literal, as a lenient prefix parse reads it: optional sign,
# then ``Infinity`` or digits with optional fraction and exponent. Trailing
# text after the prefix is ignored.
_NUMERIC_PREFIX_RE = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


def coerce_amount(raw: Any) -> float:
    """Return ``raw`` as a float, or ``NaN`` when it is not numeric.

    Accepts ints, floats, ``Decimal`` and strings. A string contributes its
    leading numeric prefix after leading whitespace (``"12abc"`` is 12,
    ``"1_000"`` is 1); with no prefix it is ``NaN``. Integers too large for a
    float become a signed infinity. Booleans and ``None`` are not amounts.
    """

    if isinstance(raw, bool) or raw is None:
        _logger.warning("non-numeric amount %r stored as NaN", raw)
        return math.nan
    if isinstance(raw, int):
        try:
            return float(raw)
        except OverflowError:
            return math.inf if raw > 0 else -math.inf
    if isinstance(raw, (float, Decimal)):
        try:
            return float(raw)
        except ValueError:
            # Signaling NaN refuses conversion.
            pass
    elif isinstance(raw, str):
        m = _NUMERIC_PREFIX_RE.match(raw.lstrip())
        if m:
            return float(m.group())
    _logger.warning("non-numeric amount %r stored as NaN", raw)
    return math.nan


def format_amount(value: float) -> str:
    """Render ``value`` with exactly two decimals, halves rounded away from zero.

    Rounding applies to the exact binary value of the float, so ``2.675``
    (stored as 2.67499999...) renders as ``"2.67"``.
    """

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    q = Decimal(float(value)).quantize(_TWO_PLACES, context=_AMOUNT_CONTEXT)
    return f"{q:.2f}"


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def coerce_date(raw: Any) -> date | None:
    """Return the calendar date encoded by ``raw`` or :data:`INVALID_DATE`.

    Accepts ``date``/``datetime`` objects and ISO strings: ``YYYY-MM-DD`` or an
    ISO datetime (``T`` or space separated), of which only the date part is
    kept. Time zones are not interpreted.
    """

    # datetime subclasses date; check it first so the time part is dropped.
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        s = raw.strip()
        try:
            return date.fromisoformat(s)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(s).date()
        except ValueError:
            pass
    _logger.warning("unparseable date %r stored as invalid", raw)
    return INVALID_DATE


def month_key(value: date | None) -> str | None:
    """Return the ``"YYYY-M"`` bucket for ``value`` (month not zero-padded)."""

    if value is None:
        return None
    return f"{value.year}-{value.month}"


__all__ = [
    "INVALID_DATE",
    "coerce_amount",
    "coerce_date",
    "format_amount",
    "month_key",
]
