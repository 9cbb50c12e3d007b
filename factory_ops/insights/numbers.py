"""
Number formatting shared by insight texts.
"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return math.floor(value + 0.5)


def format_quantity(value: float) -> str:
    """Whole numbers without a decimal part (40.0 -> "40"), others as is (12.5 -> "12.5")."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
