#!/usr/bin/env python3
"""
Weighted source combination for the popularity ranking engine.

Merges the per-person percentages reported by several named sources for one
day into a single weighted aggregate, normalized to 100 and rounded to cents.
"""

import logging
from typing import Any, Dict, List, Mapping, Sequence

from src.analytics.normalizer import normalize_to_100, round_percent_map
from src.analytics.utils_stats import coerce_finite

logger = logging.getLogger(__name__)


def resolve_weight(source_name: Any, weights: Mapping[str, Any]) -> float:
    """
    Look up the configured weight for a source.

    Args:
        source_name: Name of the source
        weights: Mapping of source name -> weight

    Returns:
        Positive finite weight, or 0.0 when the source is missing from the
        table, its name is not a string, or its weight is not a positive number
    """
    if not isinstance(source_name, str):
        return 0.0

    weight = coerce_finite(weights.get(source_name, 0))
    if weight is None or weight <= 0:
        return 0.0
    return weight


def _source_values(source: Any) -> Mapping[str, Any]:
    if not isinstance(source, Mapping):
        return {}
    values = source.get("values")
    if not isinstance(values, Mapping):
        return {}
    return values


def _accumulate(acc: Dict[str, float], values: Mapping[str, Any], weight: float) -> int:
    skipped = 0
    for person, raw in values.items():
        number = coerce_finite(raw)
        if number is None:
            skipped += 1
            continue
        acc[person] = acc.get(person, 0) + number * weight
    return skipped


def weighted_combine(sources: Sequence[Any], weights: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Combine a day's sources into one normalized percentage map.

    Sources with a positive configured weight contribute ``value * weight``
    per person. When no source has a positive weight, every source is
    weighted equally instead (all-or-nothing for the day).

    Args:
        sources: List of ``{"name": str, "values": {person: pct}}`` entries
        weights: Mapping of source name -> weight

    Returns:
        Dictionary containing:
        {
            "percent": person -> percentage rounded to 2 places,
            "people": every person seen in any source, first-seen order
        }
    """
    acc: Dict[str, float] = {}
    people: Dict[str, None] = {}

    for source in sources:
        for person in _source_values(source):
            people.setdefault(person, None)

    skipped = 0
    weighted = []
    for source in sources:
        name = source.get("name") if isinstance(source, Mapping) else None
        weight = resolve_weight(name, weights)
        if weight > 0:
            weighted.append(source)
            skipped += _accumulate(acc, _source_values(source), weight)

    if not weighted and sources:
        equal_weight = 1 / len(sources)
        logger.debug(f"No weighted sources matched, using equal weight {equal_weight:.4f} "
                     f"across {len(sources)} sources")
        for source in sources:
            skipped += _accumulate(acc, _source_values(source), equal_weight)

    if skipped:
        logger.debug(f"Skipped {skipped} non-finite source scores")

    percent = round_percent_map(normalize_to_100(acc))

    return {
        "percent": percent,
        "people": list(people)
    }
