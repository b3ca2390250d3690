"""Numeric helpers shared by the metrics registry."""

import math


def round_to(value: float, places: int) -> float:
    """Round to a fixed number of decimal places, ties away from zero.

    Python's built-in round() uses banker's rounding; station readings are
    quantized the conventional way instead (0.5 -> 1, -0.5 -> -1).
    Non-finite input, and input too large to scale, is returned unchanged.
    """
    if not math.isfinite(value):
        return value
    factor = 10.0 ** places
    scaled = abs(value) * factor
    if not math.isfinite(scaled):
        return value
    # Compare the fraction directly; floor(scaled + 0.5) double-rounds
    whole = math.floor(scaled)
    if scaled - whole >= 0.5:
        whole += 1
    return math.copysign(whole, value) / factor
