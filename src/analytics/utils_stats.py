#!/usr/bin/env python3
"""
Numeric utilities for the popularity ranking engine.

Provides the single coercion policy used by every aggregation step to skip
corrupt or missing scores, plus the cents rounding applied to percentages.
"""

import math
import numbers
from typing import Any, Optional

import numpy as np


def coerce_finite(value: Any) -> Optional[float]:
    """
    Convert an arbitrary input value to a finite float.

    Args:
        value: Raw score pulled from an input document

    Returns:
        The value as a float, or None when it is not usable (NaN, infinite,
        non-numeric, boolean or missing)

    Example:
        >>> coerce_finite("12.5")
        12.5
        >>> coerce_finite(float("nan")) is None
        True
    """
    if value is None or isinstance(value, (bool, np.bool_)):
        return None

    if isinstance(value, numbers.Real):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not np.isfinite(number):
        return None

    return number


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round half toward positive infinity on the last kept digit.

    Args:
        value: Finite number to round
        places: Number of decimal places to keep (default 2)

    Returns:
        Rounded float; values too large to scale are returned unchanged
    """
    factor = 10 ** places
    scaled = value * factor
    if not np.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor
