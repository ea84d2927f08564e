#!/usr/bin/env python3
"""
Snapshot Loader - Reads the daily snapshots input document.

The document is expected to look like:

    {
        "config": {"sourceWeights": {"<source name>": <weight>, ...}},
        "days": [
            {"date": "2024-01-01", "sources": [...], "votesLabel": "...", "news": [...]},
            ...
        ]
    }

``config``, ``sourceWeights`` and ``days`` are all optional. Anything that
does not have this top-level shape is rejected before ranking starts.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


def load_snapshot_document(path: Union[str, Path],
                           logger: Optional[logging.Logger] = None) -> Dict[str, Any]:
    """
    Load and shape-check the snapshots input document.

    Args:
        path: Path to the input JSON file
        logger: Optional logger instance

    Returns:
        Parsed document

    Raises:
        FileNotFoundError: If the input file does not exist
        ValueError: If the file is not valid JSON or has the wrong shape
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input snapshots not found: {path}")

    logger.info(f"Loading snapshots from {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    validate_document_shape(document)

    logger.info(f"Loaded {len(extract_days(document))} day records, "
                f"{len(extract_weights(document))} source weights")
    return document


def validate_document_shape(document: Any) -> None:
    """
    Check the top-level structure of an input document.

    Per-day contents are not checked here; bad scores are skipped during
    aggregation.

    Raises:
        ValueError: If any top-level field has the wrong type
    """
    if not isinstance(document, dict):
        raise ValueError(f"Input document must be a JSON object, got {type(document).__name__}")

    config = document.get("config")
    if config is not None:
        if not isinstance(config, dict):
            raise ValueError(f"'config' must be an object, got {type(config).__name__}")
        weights = config.get("sourceWeights")
        if weights is not None and not isinstance(weights, dict):
            raise ValueError(f"'config.sourceWeights' must be an object, got {type(weights).__name__}")

    days = document.get("days")
    if days is not None and not isinstance(days, list):
        raise ValueError(f"'days' must be a list, got {type(days).__name__}")


def extract_weights(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``config.sourceWeights``, or an empty table when absent."""
    config = document.get("config") or {}
    return config.get("sourceWeights") or {}


def extract_days(document: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return the day records, or an empty list when absent."""
    return document.get("days") or []
