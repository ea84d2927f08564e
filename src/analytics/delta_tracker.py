#!/usr/bin/env python3
"""
Delta Tracker - Detects rank movement between consecutive days.

This module compares today's positions against the previous day's and reports:
- Rank deltas (yesterday's rank minus today's rank, positive = moved up)
- A movement summary (climbers, fallers, unchanged, new entrants) for logging
"""

import logging
from typing import Dict, Mapping, Optional

from src.analytics.utils_stats import coerce_finite


def compute_deltas(today: Mapping[str, int],
                   yesterday: Optional[Mapping[str, int]]) -> Dict[str, int]:
    """
    Compute per-person rank movement against the previous day.

    Args:
        today: Mapping of person -> rank for the current day
        yesterday: Mapping of person -> rank for the previous day, or None
            on the first day

    Returns:
        Mapping of person -> ``yesterday - today``, only for people ranked
        on both days
    """
    deltas = {}
    if not yesterday:
        return deltas

    for person, rank in today.items():
        today_rank = coerce_finite(rank)
        previous_rank = coerce_finite(yesterday.get(person))
        if today_rank is None or previous_rank is None:
            continue
        deltas[person] = int(previous_rank - today_rank)

    return deltas


def summarize_movement(deltas: Mapping[str, int], today: Mapping[str, int],
                       logger: Optional[logging.Logger] = None) -> Dict[str, int]:
    """
    Summarize the rank movement for one day.

    Args:
        deltas: Output of compute_deltas for the day
        today: Mapping of person -> rank for the day
        logger: Optional logger instance for output

    Returns:
        Dictionary with climbers, fallers, unchanged and new_entrants counts
    """
    summary = {
        'climbers': sum(1 for d in deltas.values() if d > 0),
        'fallers': sum(1 for d in deltas.values() if d < 0),
        'unchanged': sum(1 for d in deltas.values() if d == 0),
        'new_entrants': sum(1 for person in today if person not in deltas)
    }

    if logger:
        logger.debug(f"Movement: {summary['climbers']} up, {summary['fallers']} down, "
                     f"{summary['unchanged']} unchanged, {summary['new_entrants']} new")

    return summary
