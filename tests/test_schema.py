#!/usr/bin/env python3
"""
Test suite for DailyPositionSchema validation
"""

import sys
from pathlib import Path

import pandas as pd
import pytest

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from src.analytics.ranking_engine import run_aggregation
from src.schema.daily_positions_schema import COLUMNS, positions_to_frame, validate_dataframe


class TestDailyPositionSchema:
    """Test cases for DailyPositionSchema validation"""

    def test_valid_data_passes_validation(self):
        """Test that valid data passes schema validation"""
        df = pd.DataFrame({
            'date': ['2024-01-01', '2024-01-01', '2024-01-02'],
            'person': ['A', 'B', 'A'],
            'position': [1, 1, 1],
            'delta': pd.array([None, None, 0], dtype="Int64")
        })

        validated_df = validate_dataframe(df)

        assert len(validated_df) == 3
        assert list(validated_df.columns) == COLUMNS

    def test_position_below_one_fails(self):
        """Test that a zero position fails validation"""
        df = pd.DataFrame({
            'date': ['2024-01-01', '2024-01-01'],
            'person': ['A', 'B'],
            'position': [1, 0],
            'delta': pd.array([None, None], dtype="Int64")
        })

        with pytest.raises(Exception):
            validate_dataframe(df)

    def test_day_not_starting_at_one_fails(self):
        """Test that every day must have a leader"""
        df = pd.DataFrame({
            'date': ['2024-01-01', '2024-01-01'],
            'person': ['A', 'B'],
            'position': [2, 3],
            'delta': pd.array([None, None], dtype="Int64")
        })

        with pytest.raises(Exception):
            validate_dataframe(df)

    def test_duplicate_person_per_day_fails(self):
        """Test that a person cannot be ranked twice on one day"""
        df = pd.DataFrame({
            'date': ['2024-01-01', '2024-01-01'],
            'person': ['A', 'A'],
            'position': [1, 2],
            'delta': pd.array([None, None], dtype="Int64")
        })

        with pytest.raises(Exception):
            validate_dataframe(df)

    def test_extra_columns_rejected(self):
        """Test that the export has exactly the schema columns"""
        df = pd.DataFrame({
            'date': ['2024-01-01'],
            'person': ['A'],
            'position': [1],
            'delta': pd.array([None], dtype="Int64"),
            'percent': [100.0]
        })

        with pytest.raises(Exception):
            validate_dataframe(df)


class TestPositionsToFrame:
    """Test cases for flattening a snapshot"""

    def test_flattens_positions_and_deltas(self, two_day_days):
        """Test one row per person per day, with deltas where known"""
        output = run_aggregation({}, two_day_days, updated_at='stamp')

        df = validate_dataframe(positions_to_frame(output))

        assert list(df.columns) == COLUMNS
        assert len(df) == 4
        assert df['date'].tolist() == ['2024-01-01', '2024-01-01', '2024-01-02', '2024-01-02']
        assert df['person'].tolist() == ['A', 'B', 'B', 'A']
        assert df['position'].tolist() == [1, 2, 1, 2]
        assert df['delta'].isna().tolist() == [True, True, False, False]
        assert df['delta'].iloc[2] == 1
        assert df['delta'].iloc[3] == -1

    def test_empty_snapshot(self):
        """Test that an empty snapshot flattens to an empty frame"""
        output = run_aggregation({}, [], updated_at='stamp')

        df = validate_dataframe(positions_to_frame(output))

        assert df.empty
        assert list(df.columns) == COLUMNS
