"""pt-BR text helpers for form input and result display.

The projection engine only deals in raw floats; these run at the edges.
"""

import re

_NON_DIGITS = re.compile(r"\D")
_NON_PERCENT_CHARS = re.compile(r"[^0-9,]")
# leading number, like JavaScript parseFloat; trailing text is ignored
_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)")

# cents; 15 digits stay exact as a float
MAX_AMOUNT_DIGITS = 15


def _pt_br_number(value: float, decimals: int = 2) -> str:
    # 1,234.56 -> 1.234,56
    text = f"{value:,.{decimals}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_brl(value: float) -> str:
    """Render a monetary value as BRL, e.g. ``R$10.000,00``."""
    sign = "-" if value < 0 else ""
    return f"{sign}R${_pt_br_number(abs(value))}"


def format_percent(value: float, decimals: int = 2) -> str:
    """Render a percentage with a comma decimal, e.g. ``1,17%``."""
    return f"{_pt_br_number(value, decimals)}%"


def _cents(digits: str) -> float:
    if len(digits.lstrip("0")) > MAX_AMOUNT_DIGITS:
        raise ValueError(f"amount has more than {MAX_AMOUNT_DIGITS} significant digits")
    return int(digits) / 100


def parse_brl_input(text: str) -> float:
    """
    Digits are read as cents; anything else is ignored.

    Raises ValueError when the digits exceed MAX_AMOUNT_DIGITS.
    """
    digits = _NON_DIGITS.sub("", text)
    if not digits:
        return 0.0
    return _cents(digits)


def format_brl_input(text: str) -> str:
    digits = _NON_DIGITS.sub("", text)
    if not digits:
        return ""
    return _pt_br_number(_cents(digits))


def format_percent_input(text: str) -> str:
    """Keep digits and at most one comma."""
    sanitized = _NON_PERCENT_CHARS.sub("", text)
    head, sep, tail = sanitized.partition(",")
    return head + sep + tail.replace(",", "")


def parse_percent_input(text: str) -> float:
    """Read a comma-decimal percentage such as ``6,5`` or ``6,5%``; 0.0 if none."""
    match = _LEADING_NUMBER.match(text.replace(",", ".", 1))
    if match is None:
        return 0.0
    return float(match.group())
