import numpy as np


def sigmoid(x: float) -> float:
    """Logistic activation 1 / (1 + e^-x)."""
    return float(1.0 / (1.0 + np.exp(-x)))


def approach(current: float, target: float, factor: float = 0.01) -> float:
    """
    Move a running average a fraction of the way toward a new sample.

    Args:
        current: Current smoothed value
        target: New observation
        factor: Fraction of the gap closed per call (0 keeps current, 1 jumps to target)

    Returns:
        Updated smoothed value
    """
    return current + (target - current) * factor


def round_to_int(value: float) -> int:
    """Round to the nearest integer, ties to even."""
    return int(np.rint(value))


def get_random_number(rng: np.random.Generator, minimum: float, maximum: float) -> float:
    """Uniform random float in [minimum, maximum]."""
    diff = abs(maximum - minimum)
    return minimum + diff * float(rng.random())
