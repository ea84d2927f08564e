#!/usr/bin/env python3
"""
Daily Popularity Ranking Engine

Turns the daily popularity source snapshots into a ranking time series:
per-day weighted percentages, competition ranks, and rank deltas against the
previous day, plus the global roster of everyone ever seen.
"""

import argparse
import logging
from functools import reduce
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence

import numpy as np
import pandas as pd
import yaml

from src.analytics.delta_tracker import compute_deltas, summarize_movement
from src.analytics.source_combiner import weighted_combine
from src.analytics.utils_stats import coerce_finite
from src.io.safe_write import safe_write_csv, safe_write_json, verify_file_integrity
from src.io.snapshot_loader import extract_days, extract_weights, load_snapshot_document
from src.normalizers.text_normalizer import sort_roster
from src.schema.daily_positions_schema import positions_to_frame, validate_dataframe
from src.utils.logger import get_logger
from src.utils.metrics_snapshot import write_run_metrics
from src.utils.timestamps import format_updated_at

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "aggregation_config.yaml"


def percent_to_positions(percent: Mapping[str, Any]) -> Dict[str, int]:
    """
    Convert a percentage map into ranks (1 = highest percentage).

    Tied percentages share a rank and the next distinct value resumes at its
    row position, so ``[90, 90, 80]`` ranks as ``[1, 1, 3]``. Entries whose
    value is not finite are left out.

    Args:
        percent: Mapping of person -> percentage

    Returns:
        Mapping of person -> rank, ordered best first
    """
    finite = {}
    for person, value in percent.items():
        number = coerce_finite(value)
        if number is not None:
            finite[person] = number

    if not finite:
        return {}

    scores = pd.Series(list(finite.values()), index=list(finite.keys()), dtype=np.float64)
    scores = scores.sort_values(ascending=False, kind="mergesort")
    ranks = scores.rank(method="min", ascending=False)

    return {person: int(rank) for person, rank in ranks.items()}


def aggregate_day(day: Mapping[str, Any], weights: Mapping[str, Any],
                  previous_positions: Optional[Mapping[str, int]]) -> Dict[str, Any]:
    """
    Run the per-day step: combine sources, rank, and diff against yesterday.

    Args:
        day: Day record ``{"date", "sources", "votesLabel"?, "news"?}``
        weights: Mapping of source name -> weight
        previous_positions: Ranks of the previous processed day, or None

    Returns:
        Dictionary with date, percent, people, positions, deltas, meta and
        news (None when the day carries no news list)
    """
    date = str(day.get("date", ""))
    sources = day.get("sources")
    if not isinstance(sources, list):
        sources = []

    combined = weighted_combine(sources, weights)
    positions = percent_to_positions(combined["percent"])
    deltas = compute_deltas(positions, previous_positions)

    news = day.get("news")

    return {
        "date": date,
        "percent": combined["percent"],
        "people": combined["people"],
        "positions": positions,
        "deltas": deltas,
        "meta": {
            "sources": len(sources),
            "votesLabel": day.get("votesLabel") or ""
        },
        "news": news if isinstance(news, list) else None
    }


class FoldState(NamedTuple):
    """Accumulator threaded through the chronological fold over days."""
    roster: frozenset
    previous_positions: Optional[Dict[str, int]]
    days: tuple
    positions_by_day: Dict[str, Dict[str, int]]
    deltas_by_day: Dict[str, Dict[str, int]]
    meta_by_day: Dict[str, Dict[str, Any]]
    news_by_day: Dict[str, List[Any]]


def initial_state() -> FoldState:
    return FoldState(frozenset(), None, (), {}, {}, {}, {})


def fold_day(state: FoldState, day: Mapping[str, Any], weights: Mapping[str, Any]) -> FoldState:
    """
    Fold one day into the accumulated run state.

    Args:
        state: State after the previous day (initial_state() for the first)
        day: Day record to process
        weights: Mapping of source name -> weight

    Returns:
        New FoldState; the input state is left untouched
    """
    result = aggregate_day(day, weights, state.previous_positions)
    date = result["date"]

    summary = summarize_movement(result["deltas"], result["positions"])
    logger.debug(f"{date}: {result['meta']['sources']} sources, "
                 f"{len(result['positions'])} ranked, "
                 f"{summary['climbers']} up / {summary['fallers']} down")

    news_by_day = dict(state.news_by_day)
    if result["news"] is not None:
        news_by_day[date] = result["news"]

    return FoldState(
        roster=state.roster | set(result["percent"]) | set(result["people"]),
        previous_positions=result["positions"],
        days=state.days + (date,),
        positions_by_day={**state.positions_by_day, date: result["positions"]},
        deltas_by_day={**state.deltas_by_day, date: result["deltas"]},
        meta_by_day={**state.meta_by_day, date: result["meta"]},
        news_by_day=news_by_day
    )


def run_aggregation(weights: Optional[Mapping[str, Any]], days: Sequence[Mapping[str, Any]],
                    sort_key: Optional[Callable[[str], Any]] = None,
                    updated_at: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the full ranking time series from the daily records.

    Days are processed in ascending date order; each day's deltas are taken
    against the ranks of the day processed before it.

    Args:
        weights: Mapping of source name -> weight (None means no weights,
            which makes every day fall back to equal weighting)
        days: List of day records
        sort_key: Key function ordering the roster (default: collation_key)
        updated_at: Timestamp string for the output (default: now)

    Returns:
        Output snapshot with updatedAt, days, people, positionsByDay,
        deltasByDay, metaByDay and newsByDay

    Raises:
        ValueError: If days is not a list
    """
    if not isinstance(days, (list, tuple)):
        raise ValueError(f"Expected a list of day records, got {type(days).__name__}")

    weights = weights or {}
    ordered = sorted(days, key=lambda d: str(d.get("date", "")) if isinstance(d, Mapping) else "")
    ordered = [d for d in ordered if isinstance(d, Mapping)]

    logger.info(f"Aggregating {len(ordered)} days with {len(weights)} configured source weights")

    final = reduce(lambda state, day: fold_day(state, day, weights), ordered, initial_state())

    people = sort_roster(final.roster, sort_key)
    logger.info(f"Aggregation complete: {len(final.days)} days, {len(people)} people")

    return {
        "updatedAt": updated_at if updated_at is not None else format_updated_at(),
        "days": list(final.days),
        "people": people,
        "positionsByDay": final.positions_by_day,
        "deltasByDay": final.deltas_by_day,
        "metaByDay": final.meta_by_day,
        "newsByDay": final.news_by_day
    }


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load the YAML run configuration, returning an empty dict for an empty file."""
    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def main(argv: Optional[List[str]] = None):
    """CLI entry point for the ranking engine."""
    parser = argparse.ArgumentParser(description="Daily popularity ranking engine")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH,
                        help="Configuration file path")
    parser.add_argument("--input", type=Path, default=None,
                        help="Input snapshots JSON (overrides INPUT_PATH)")
    parser.add_argument("--output", type=Path, default=None,
                        help="Output data JSON (overrides OUTPUT_PATH)")
    parser.add_argument("--export-csv", action="store_true",
                        help="Also write the long-form positions CSV")
    parser.add_argument("--write-metrics", action="store_true",
                        help="Write a run metrics snapshot")

    args = parser.parse_args(argv)

    config = load_config(args.config)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    run_logger = get_logger(config.get('LOG_PATH', 'data/logs/compute.log'))

    input_path = args.input or Path(config.get('INPUT_PATH', 'inputs/daily_snapshots.json'))
    output_path = args.output or Path(config.get('OUTPUT_PATH', 'public/data.json'))

    try:
        document = load_snapshot_document(input_path, run_logger)
        output = run_aggregation(extract_weights(document), extract_days(document))

        write_result = safe_write_json(output, output_path, run_logger)
        if not verify_file_integrity(output_path, write_result["checksum"]):
            raise ValueError(f"Checksum mismatch after writing {output_path}")

        if args.export_csv or config.get('EXPORT_CSV', False):
            frame = validate_dataframe(positions_to_frame(output))
            csv_path = Path(config.get('CSV_OUTPUT_PATH', 'public/positions.csv'))
            safe_write_csv(frame, csv_path, run_logger)

        if args.write_metrics or config.get('WRITE_METRICS', False):
            write_run_metrics(output, write_result, Path(config.get('METRICS_DIR', 'data/metrics')),
                              run_logger)

        print(f"Generated: {output_path}")

    except Exception as e:
        run_logger.error(f"Compute failed: {e}")
        raise


if __name__ == "__main__":
    main()
