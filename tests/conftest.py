"""Shared fixtures: small daily-area datasets and an on-disk export directory."""

import json
from datetime import date, timedelta
from typing import List

import pytest

from cache import CacheManager
from datasets import DailyArea, DatasetLoader


def _daily_dates(start: str, n: int) -> List[str]:
    first = date.fromisoformat(start)
    return [(first + timedelta(days=i)).isoformat() for i in range(n)]


@pytest.fixture
def daily_dates():
    return _daily_dates


@pytest.fixture
def mixed_daily_areas() -> List[DailyArea]:
    """Two interleaved layers, deliberately out of date order."""
    return [
        DailyArea('2024-01-03', 'ukraine_control_map', 150.0),
        DailyArea('2024-01-02', 'kursk_russian_advances', 12.0),
        DailyArea('2024-01-01', 'ukraine_control_map', 100.0),
        DailyArea('2024-01-04', 'ukraine_control_map', 150.0),
        DailyArea('2024-01-01', 'kursk_russian_advances', 10.0),
        DailyArea('2024-01-02', 'ukraine_control_map', 100.0),
    ]


@pytest.fixture
def export_records(daily_dates) -> dict:
    """
    A 90-day export: the control map steps up by 300 km2 every 30 days,
    Kursk grows by 1 km2 a day.
    """
    dates = daily_dates('2024-01-01', 90)
    areas = []
    for i, d in enumerate(dates):
        areas.append({'date': d, 'layerType': 'ukraine_control_map', 'areaKm2': 100000.0 + 300.0 * (i // 30)})
        areas.append({'date': d, 'layerType': 'kursk_russian_advances', 'areaKm2': 50.0 + i})

    events = [
        {'date': '2024-01-10', 'name': 'Avdiivka falls', 'importance': 9, 'territorial': 8,
         'strategic': 7, 'cascade': 6, 'confidence': 'high'},
        {'date': '2024-02-05', 'name': 'Local push', 'importance': 5, 'territorial': 3,
         'strategic': 2, 'cascade': 1, 'confidence': 'medium'},
        {'date': '2023-06-01', 'name': 'Counteroffensive', 'importance': 10},
    ]

    metadata = {
        'dateRange': {'start': dates[0], 'end': dates[-1]},
        'layerTypes': ['ukraine_control_map', 'kursk_russian_advances'],
        'totalDailyRecords': len(areas),
        'totalEvents': len(events),
        'territoryChangePoints': 2,
        'kurskChangePoints': 89,
        'exportTimestamp': '2024-04-01T00:00:00Z',
    }
    return {'daily_areas.json': areas, 'events.json': events, 'metadata.json': metadata}


@pytest.fixture
def data_dir(tmp_path, export_records):
    for name, payload in export_records.items():
        (tmp_path / name).write_text(json.dumps(payload), encoding='utf-8')
    return tmp_path


@pytest.fixture
def loader(data_dir) -> DatasetLoader:
    """Loader over the tmp export with its own cache."""
    return DatasetLoader(str(data_dir), cache=CacheManager(ttl=60))
