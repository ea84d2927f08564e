#!/usr/bin/env python3
"""
Pytest configuration and fixtures
"""

import json
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))


@pytest.fixture
def two_day_days():
    """Two days of a single source whose leader swaps"""
    return [
        {
            'date': '2024-01-01',
            'sources': [{'name': 'poll', 'values': {'A': 70, 'B': 30}}]
        },
        {
            'date': '2024-01-02',
            'sources': [{'name': 'poll', 'values': {'A': 40, 'B': 60}}]
        }
    ]


@pytest.fixture
def sample_document():
    """Input document with weights, unsorted days, news and noisy scores"""
    return {
        'config': {
            'sourceWeights': {'poll': 0.75, 'social': 0.25}
        },
        'days': [
            {
                'date': '2024-01-03',
                'votesLabel': '1.2M votes',
                'sources': [
                    {'name': 'poll', 'values': {'Ana': 50, 'Bruno': 30, 'Carla': 20}},
                    {'name': 'social', 'values': {'Ana': 20, 'Bruno': 40, 'Carla': 40}}
                ],
                'news': [{'title': 'Bruno closes the gap'}]
            },
            {
                'date': '2024-01-01',
                'votesLabel': '800k votes',
                'sources': [
                    {'name': 'poll', 'values': {'Ana': 40, 'Bruno': 40, 'Carla': 20}},
                    {'name': 'social', 'values': {'Ana': 40, 'Bruno': 40, 'Carla': 20, 'Davi': 'n/a'}}
                ]
            },
            {
                'date': '2024-01-02',
                'sources': [
                    {'name': 'poll', 'values': {'Ana': 60, 'Bruno': 25, 'Carla': 15}},
                    {'name': 'unweighted', 'values': {'Élia': 100}}
                ],
                'news': []
            }
        ]
    }


@pytest.fixture
def temp_data_dir():
    """Temporary directory for test data"""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def sample_input_file(temp_data_dir, sample_document):
    """Sample snapshots JSON file for testing"""
    file_path = temp_data_dir / 'inputs' / 'daily_snapshots.json'
    file_path.parent.mkdir(parents=True)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(sample_document, f, ensure_ascii=False)
    return file_path


@pytest.fixture
def sample_config_file(temp_data_dir):
    """YAML run configuration pointing every path into the temp directory"""
    config_path = temp_data_dir / 'config.yaml'
    config_path.write_text(
        f"INPUT_PATH: {(temp_data_dir / 'inputs' / 'daily_snapshots.json').as_posix()}\n"
        f"OUTPUT_PATH: {(temp_data_dir / 'public' / 'data.json').as_posix()}\n"
        f"EXPORT_CSV: false\n"
        f"CSV_OUTPUT_PATH: {(temp_data_dir / 'public' / 'positions.csv').as_posix()}\n"
        f"WRITE_METRICS: false\n"
        f"METRICS_DIR: {(temp_data_dir / 'metrics').as_posix()}\n"
        f"LOG_PATH: {(temp_data_dir / 'logs' / 'compute.log').as_posix()}\n",
        encoding='utf-8'
    )
    return config_path
