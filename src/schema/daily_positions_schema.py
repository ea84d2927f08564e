#!/usr/bin/env python3
"""
Daily Positions Schema Definition

Defines the long-form positions table (one row per person per day) exported
alongside the JSON snapshot, using Pandera for validation.
"""

from typing import Any, Dict

import pandas as pd
import pandera as pa
from pandera.typing import DataFrame, Series

COLUMNS = ['date', 'person', 'position', 'delta']


class DailyPositionSchema(pa.DataFrameModel):
    """
    Pandera schema for the daily positions export.

    Fields:
    - date: Day key exactly as it appears in the snapshot
    - person: Person identifier
    - position: Rank for the day (1 = best)
    - delta: Rank movement against the previous day (null for new entrants
      and for the first day)
    """

    date: Series[str] = pa.Field(
        description="Day key"
    )

    person: Series[str] = pa.Field(
        description="Person identifier"
    )

    position: Series[int] = pa.Field(
        description="Rank for the day, 1 = best",
        ge=1
    )

    delta: Series[pd.Int64Dtype] = pa.Field(
        description="Yesterday's rank minus today's rank",
        nullable=True
    )

    class Config:
        """Pandera configuration."""
        coerce = True
        strict = True

    @pa.dataframe_check
    def each_day_starts_at_one(cls, df: DataFrame) -> Series[bool]:
        """Every day's best position must be 1."""
        return df.groupby("date")["position"].transform("min") == 1

    @pa.dataframe_check
    def unique_person_per_day(cls, df: DataFrame) -> Series[bool]:
        """A person appears at most once per day."""
        return ~df.duplicated(subset=["date", "person"], keep=False)


def positions_to_frame(output: Dict[str, Any]) -> pd.DataFrame:
    """
    Flatten a snapshot's positions and deltas into a long DataFrame.

    Args:
        output: Snapshot produced by run_aggregation

    Returns:
        DataFrame with date, person, position and delta columns, in day
        order then rank order
    """
    rows = []
    positions_by_day = output.get("positionsByDay", {})
    deltas_by_day = output.get("deltasByDay", {})

    for date in dict.fromkeys(output.get("days", [])):
        deltas = deltas_by_day.get(date, {})
        for person, position in positions_by_day.get(date, {}).items():
            rows.append({
                'date': date,
                'person': person,
                'position': position,
                'delta': deltas.get(person)
            })

    df = pd.DataFrame(rows, columns=COLUMNS)
    df['delta'] = pd.array(df['delta'].tolist(), dtype="Int64")
    return df


def validate_dataframe(df, schema: DailyPositionSchema = DailyPositionSchema):
    """
    Validate a DataFrame against the DailyPositionSchema.

    Args:
        df: pandas DataFrame to validate
        schema: Pandera schema class (default: DailyPositionSchema)

    Returns:
        Validated DataFrame

    Raises:
        pa.errors.SchemaError: If validation fails
    """
    return schema.validate(df)
