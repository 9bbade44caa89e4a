"""Points calculation for submitted receipts.

Seven independent rules each contribute a non-negative number of points and
the receipt's score is their sum:

* ``retailer_name`` – one point for every letter or digit in the retailer name.
* ``round_dollar_total`` – 50 points if the total has no cents.
* ``quarter_multiple_total`` – 25 points if the total is a multiple of 0.25.
* ``item_pairs`` – 5 points for every two items on the receipt.
* ``item_descriptions`` – for each item whose trimmed description length is a
  multiple of 3, the price multiplied by 0.2 and rounded up.
* ``odd_purchase_day`` – 6 points if the day of the purchase date is odd.
* ``afternoon_purchase`` – 10 points if the purchase time is after 14:00 and
  before 16:00.

Scoring never fails. Amounts, dates and times are parsed with the
``try_parse_*`` helpers, which return a ``(value, ok)`` pair; a field that
does not parse makes the rule depending on it contribute nothing.

The total rules compare floats for exact equality, so totals that are not
exactly representable in binary floating point behave the way IEEE 754
arithmetic dictates.
"""

from __future__ import annotations

import datetime as dt
import math
import re
from typing import Callable, Dict, Tuple

from receipt_processor.models import Receipt

ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
ITEM_PAIR_POINTS = 5
DESCRIPTION_PRICE_MULTIPLIER = 0.2
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10
AFTERNOON_START = dt.time(14, 0)
AFTERNOON_END = dt.time(16, 0)

_AMOUNT_RE = re.compile(r"\+?([0-9]+(\.[0-9]*)?|\.[0-9]+)")


def try_parse_amount(value: str) -> Tuple[float, bool]:
    """Parse a monetary amount written as plain decimal text.

    Accepts non-negative literals such as ``"12"``, ``"12.50"`` or ``".5"``.
    Returns ``(0.0, False)`` for anything else, including exponents,
    ``nan``/``inf``, negative values, non-ASCII digits and surrounding
    whitespace.
    """
    if not value or not _AMOUNT_RE.fullmatch(value):
        return 0.0, False
    amount = float(value)
    if not math.isfinite(amount):
        return 0.0, False
    return amount, True


def try_parse_date(value: str) -> Tuple[dt.date | None, bool]:
    """Parse an ISO calendar date (``YYYY-MM-DD``)."""
    try:
        return dt.datetime.strptime(value, "%Y-%m-%d").date(), True
    except ValueError:
        return None, False


def try_parse_time(value: str) -> Tuple[dt.time | None, bool]:
    """Parse a 24-hour clock time with minute precision (``HH:MM``)."""
    try:
        return dt.datetime.strptime(value, "%H:%M").time(), True
    except ValueError:
        return None, False


def _retailer_name(receipt: Receipt) -> int:
    return sum(1 for ch in receipt.retailer if ch.isalpha() or ch.isdecimal())


def _round_dollar_total(receipt: Receipt) -> int:
    total, ok = try_parse_amount(receipt.total)
    if ok and total == float(int(total)):
        return ROUND_DOLLAR_POINTS
    return 0


def _quarter_multiple_total(receipt: Receipt) -> int:
    total, ok = try_parse_amount(receipt.total)
    if not ok:
        return 0
    quarters = total / 0.25
    if quarters == float(int(quarters)):
        return QUARTER_MULTIPLE_POINTS
    return 0


def _item_pairs(receipt: Receipt) -> int:
    return (len(receipt.items) // 2) * ITEM_PAIR_POINTS


def _item_descriptions(receipt: Receipt) -> int:
    points = 0
    for item in receipt.items:
        if len(item.short_description.strip()) % 3 != 0:
            continue
        price, ok = try_parse_amount(item.price)
        if ok:
            points += math.ceil(price * DESCRIPTION_PRICE_MULTIPLIER)
    return points


def _odd_purchase_day(receipt: Receipt) -> int:
    purchase_date, ok = try_parse_date(receipt.purchase_date)
    if ok and purchase_date.day % 2 == 1:
        return ODD_DAY_POINTS
    return 0


def _afternoon_purchase(receipt: Receipt) -> int:
    purchase_time, ok = try_parse_time(receipt.purchase_time)
    if ok and AFTERNOON_START < purchase_time < AFTERNOON_END:
        return AFTERNOON_POINTS
    return 0


RULES: Dict[str, Callable[[Receipt], int]] = {
    "retailer_name": _retailer_name,
    "round_dollar_total": _round_dollar_total,
    "quarter_multiple_total": _quarter_multiple_total,
    "item_pairs": _item_pairs,
    "item_descriptions": _item_descriptions,
    "odd_purchase_day": _odd_purchase_day,
    "afternoon_purchase": _afternoon_purchase,
}


def points_breakdown(receipt: Receipt) -> Dict[str, int]:
    """Return each rule's contribution, keyed by rule name, in rule order."""
    return {name: rule(receipt) for name, rule in RULES.items()}


def compute_points(receipt: Receipt) -> int:
    """Compute the loyalty points awarded for a receipt.

    Args:
        receipt (Receipt): The receipt to score.

    Returns:
        int: The sum of all rule contributions. Never negative.
    """
    return sum(points_breakdown(receipt).values())
