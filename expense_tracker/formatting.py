"""Formatting utilities for currency and percentage display."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

_CENTS = Decimal('0.01')


def group_indian(digits: str) -> str:
    """Insert Indian-style separators into a string of digits.

    The last three digits form one group and every two digits before
    that form another.

    Example:
        >>> group_indian('12345678')
        '1,23,45,678'
    """
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ','.join(groups + [tail])


def format_number(amount: Union[float, int]) -> str:
    """Format ``amount`` with Indian grouping and at most two decimals.

    Integral values get no decimal part; fractional values keep up to two
    decimals with trailing zeros removed.

    Example:
        >>> format_number(123456)
        '1,23,456'
        >>> format_number(1234.5)
        '1,234.5'
    """
    if math.isnan(amount):
        return 'NaN'
    if math.isinf(amount):
        return '-∞' if amount < 0 else '∞'
    rounded = Decimal(str(amount)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    negative = rounded < 0
    whole, _, fraction = f"{abs(rounded):f}".partition('.')
    fraction = fraction.rstrip('0')
    text = group_indian(whole)
    if fraction:
        text = f"{text}.{fraction}"
    if negative and text != '0':
        text = f"-{text}"
    return text


def format_currency(amount: Union[float, int], symbol: str = '₹') -> str:
    """Format a currency amount with the symbol prepended.

    Example:
        >>> format_currency(123456)
        '₹1,23,456'
        >>> format_currency(0)
        '₹0'
    """
    return f"{symbol}{format_number(amount)}"


def format_percentage(value: float, digits: int = 1) -> str:
    return f"{value:.{digits}f}%"
