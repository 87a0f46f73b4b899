# src/services/price_parser.py

"""Numeric price extraction from locale-formatted price strings."""

import re

UNPARSEABLE_PRICE: float = -1.0

# First run of ASCII digits with an optional fractional part
_NUMBER_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)")


def parse_price(text: str | None) -> float:
    """Extract the first number from a string like '¥12.50' or 'US$0.99'.

    Returns ``UNPARSEABLE_PRICE`` when the text holds no digits, so
    'Free', '' and ``None`` never compare as a real price.  Grouping
    separators are not interpreted: '1,299.00' yields ``1.0``.
    """
    if not text:
        return UNPARSEABLE_PRICE
    match = _NUMBER_RE.search(text)
    if match is None:
        return UNPARSEABLE_PRICE
    return float(match.group(1))


def is_parsed(price: float) -> bool:
    """True unless *price* is the unparseable sentinel."""
    return price != UNPARSEABLE_PRICE
