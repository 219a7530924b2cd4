"""Rounding helpers shared by the engines and the simulation."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties towards +infinity.

    Python's round() uses banker's rounding; quantities shown to users
    must round 2.5 -> 3 and -2.5 -> -2 consistently.
    """
    return int(math.floor(value + 0.5))
