"""
Shared numeric helpers for the estimate engine and lead scorer.
"""

import math

import numpy as np


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round with halves going up (towards +inf), e.g. 2.5 -> 3, -2.5 -> -2.

    Python's round() uses banker's rounding, which would move reference
    figures such as a 12.5-point score or a 3.75 kWp size by one step.
    Returns an int when ndigits is 0.
    """
    if not math.isfinite(value):
        return value
    if ndigits == 0:
        return math.floor(value + 0.5)
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def degradation_profile(annual_degradation: float, years: int = 25) -> np.ndarray:
    """
    Output multiplier for each year of operation.

    Year 1 runs at full output; year n at (1 - d)^(n - 1).
    """
    return (1.0 - annual_degradation) ** np.arange(years)
