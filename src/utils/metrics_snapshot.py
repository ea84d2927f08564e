#!/usr/bin/env python3
"""
Metrics Snapshot System

Captures per-run metrics in JSON format for tracking how the published
ranking snapshot grows over time.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.io.safe_write import safe_write_json


def build_run_metrics(output: Dict[str, Any],
                      write_result: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Summarize a ranking snapshot.

    Args:
        output: Snapshot produced by run_aggregation
        write_result: Optional result of safe_write_json for the snapshot

    Returns:
        Dictionary of run metrics

    Example:
        {
            "updated_at": "2024-01-02 13:45 UTC",
            "day_count": 2,
            "people_count": 12,
            "first_day": "2024-01-01",
            "last_day": "2024-01-02",
            "ranked_last_day": 11,
            "sources_by_day": {"2024-01-01": 3, "2024-01-02": 2},
            "output_checksum": "9e107d9d372bb6826bd81d3542a419d6"
        }
    """
    days = output.get("days", [])
    last_day = days[-1] if days else None

    metrics = {
        "updated_at": output.get("updatedAt"),
        "day_count": len(days),
        "people_count": len(output.get("people", [])),
        "first_day": days[0] if days else None,
        "last_day": last_day,
        "ranked_last_day": len(output.get("positionsByDay", {}).get(last_day, {})),
        "sources_by_day": {date: meta.get("sources", 0)
                           for date, meta in output.get("metaByDay", {}).items()}
    }

    if write_result:
        metrics["output_checksum"] = write_result.get("checksum")
        metrics["output_size_bytes"] = write_result.get("size_bytes")

    return metrics


def write_run_metrics(output: Dict[str, Any], write_result: Optional[Dict[str, Any]],
                      metrics_dir: Path, logger: Optional[logging.Logger] = None) -> Path:
    """
    Write run metrics to a timestamped JSON file.

    The most recent earlier run in metrics_dir, if any, is loaded first and
    the change in day and people counts is logged.

    Args:
        output: Snapshot produced by run_aggregation
        write_result: Result of safe_write_json for the snapshot, if any
        metrics_dir: Directory holding run_<stamp>.json files
        logger: Optional logger instance for output

    Returns:
        Path to the saved metrics file
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    previous = load_latest_run_metrics(metrics_dir)
    metrics = build_run_metrics(output, write_result)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    metrics_file = Path(metrics_dir) / f"run_{stamp}.json"

    try:
        safe_write_json(metrics, metrics_file, logger)
        logger.info(f"Run metrics: {metrics['day_count']} days, {metrics['people_count']} people, "
                    f"last day {metrics['last_day']}")
        if previous:
            logger.info(f"Since last run: {metrics['day_count'] - previous.get('day_count', 0):+d} days, "
                        f"{metrics['people_count'] - previous.get('people_count', 0):+d} people")
        return metrics_file

    except Exception as e:
        logger.error(f"Failed to write run metrics: {e}")
        raise


def list_run_metrics(metrics_dir: Path) -> List[Path]:
    """
    List run metrics files, newest first.

    Returns:
        List of Path objects for metrics files
    """
    metrics_dir = Path(metrics_dir)
    if not metrics_dir.exists():
        return []

    return sorted(metrics_dir.glob("run_*.json"), key=lambda p: p.name, reverse=True)


def load_latest_run_metrics(metrics_dir: Path) -> Optional[Dict[str, Any]]:
    """Load the most recent run metrics, or None if there are none."""
    metrics_files = list_run_metrics(metrics_dir)
    if not metrics_files:
        return None

    with open(metrics_files[0], 'r', encoding='utf-8') as f:
        return json.load(f)
