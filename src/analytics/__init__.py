"""
Analytics module for the daily popularity ranking engine.

This module provides source combination, percentage normalization,
competition ranking and day-over-day rank deltas.
"""

from .ranking_engine import run_aggregation, aggregate_day, percent_to_positions
from .source_combiner import weighted_combine, resolve_weight
from .normalizer import normalize_to_100, round_percent_map
from .delta_tracker import compute_deltas, summarize_movement
from .utils_stats import coerce_finite, round_half_up

__all__ = [
    'run_aggregation',
    'aggregate_day',
    'percent_to_positions',
    'weighted_combine',
    'resolve_weight',
    'normalize_to_100',
    'round_percent_map',
    'compute_deltas',
    'summarize_movement',
    'coerce_finite',
    'round_half_up'
]
