"""
Utility functions for the statistics engine.

Guarded division and 32-bit float formatting shared by the accumulator
and the history export.
"""

import numpy as np


def safe_div(numerator, denominator):
    """
    Divide with the max(denominator, 1) guard.

    An extinct population (or an empty sample) yields numerator / 1
    instead of a division error or NaN.

    Args:
        numerator: Sum to average
        denominator: Sample count (may be 0)

    Returns:
        np.float32 quotient
    """
    return np.float32(numerator) / np.float32(max(denominator, 1))


def format_stat(value) -> str:
    """
    Format a statistic the way exported files store it.

    Values are rendered as the shortest text that round-trips a 32-bit
    float, e.g. 3 -> '3.0', 1/3 -> '0.33333334'.
    """
    return str(np.float32(value))
