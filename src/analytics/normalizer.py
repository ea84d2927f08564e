#!/usr/bin/env python3
"""
Percentage normalization for the popularity ranking engine.

Rescales a person -> score mapping so its finite values sum to 100.
"""

import logging
from typing import Any, Dict, Mapping

from src.analytics.utils_stats import coerce_finite, round_half_up

logger = logging.getLogger(__name__)


def normalize_to_100(scores: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Rescale scores so that the finite values sum to 100.

    Keys whose value is not finite stay in the result with a value of 0.
    When the finite values sum to zero or less the mapping is returned
    unchanged, so an empty or degenerate day never divides by zero.

    Args:
        scores: Mapping of person -> raw score

    Returns:
        New mapping of person -> percentage, in the input key order
    """
    finite = {}
    for person, value in scores.items():
        number = coerce_finite(value)
        if number is not None:
            finite[person] = number

    total = sum(finite.values())
    if total <= 0:
        return dict(scores)

    normalized = {}
    for person in scores:
        if person in finite:
            normalized[person] = finite[person] / total * 100
        else:
            normalized[person] = 0

    skipped = len(scores) - len(finite)
    if skipped:
        logger.debug(f"Normalization zeroed {skipped} non-finite scores")

    return normalized


def round_percent_map(percent: Mapping[str, Any], places: int = 2) -> Dict[str, Any]:
    """Round every finite percentage half-up, leaving other values as they are."""
    rounded = {}
    for person, value in percent.items():
        number = coerce_finite(value)
        rounded[person] = round_half_up(number, places) if number is not None else value
    return rounded
