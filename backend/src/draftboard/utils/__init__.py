"""Utility modules for draftboard."""

import math

from draftboard.utils.role_normalizer import ROLE_ALIASES, normalize_role


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up.

    Scores are published as integers and must not depend on banker's
    rounding (round(52.5) == 52 in Python).
    """
    return math.floor(value + 0.5)


__all__ = [
    "ROLE_ALIASES",
    "normalize_role",
    "round_half_up",
]
