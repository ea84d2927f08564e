#!/usr/bin/env python3
"""
Timestamp formatting for published snapshots.
"""

from datetime import datetime, timezone
from typing import Optional


def format_updated_at(now: Optional[datetime] = None) -> str:
    """
    Format the ``updatedAt`` stamp of an output snapshot.

    Args:
        now: Moment to format (default: current time). Naive datetimes are
            taken as UTC.

    Returns:
        String like ``"2024-01-02 13:45 UTC"``
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    return f"{now.astimezone(timezone.utc).strftime('%Y-%m-%d %H:%M')} UTC"
