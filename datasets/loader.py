"""
Dataset Loader - Reads the exported JSON files from the data directory.

Layout written by the export run:
    <data_dir>/daily_areas.json   list of {date, layerType, areaKm2}
    <data_dir>/events.json        list of {date, name, importance, ...}
    <data_dir>/metadata.json      {dateRange, layerTypes, ...}
"""

import json
import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, TypeVar

from cache import CacheManager, cache_manager
from config import config
from .base import (
    DailyArea,
    DashboardMetadata,
    DatasetFormatError,
    DatasetNotFoundError,
    MilitaryEvent,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

DAILY_AREAS_FILE = 'daily_areas.json'
EVENTS_FILE = 'events.json'
METADATA_FILE = 'metadata.json'


class DatasetLoader:
    """
    Loads and parses the exported datasets.

    Parsed records are kept in the dataset cache so that repeated chart
    requests do not re-read the files.
    """

    def __init__(self, data_dir: Optional[str] = None, cache: Optional[CacheManager] = None):
        self._data_dir = Path(data_dir or config.data_dir)
        self._cache = cache if cache is not None else cache_manager

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def available(self) -> dict:
        """Which dataset files exist."""
        return {
            name: (self._data_dir / name).is_file()
            for name in (DAILY_AREAS_FILE, EVENTS_FILE, METADATA_FILE)
        }

    def load_daily_areas(self) -> List[DailyArea]:
        return self._load_records(DAILY_AREAS_FILE, DailyArea.from_dict)

    def load_events(self) -> List[MilitaryEvent]:
        return self._load_records(EVENTS_FILE, MilitaryEvent.from_dict)

    def load_metadata(self) -> DashboardMetadata:
        path = self._data_dir / METADATA_FILE
        cached = self._cache.get_dataset(str(path))
        if cached is not None:
            return cached

        raw = self._read_json(path)
        try:
            metadata = DashboardMetadata.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            raise DatasetFormatError(f"Malformed metadata in {path}: {e!r}") from e

        self._cache.set_dataset(str(path), metadata)
        return metadata

    def _load_records(self, filename: str, parse: Callable[[dict], T]) -> List[T]:
        path = self._data_dir / filename
        cached = self._cache.get_dataset(str(path))
        if cached is not None:
            return cached

        raw = self._read_json(path)
        if not isinstance(raw, list):
            raise DatasetFormatError(f"Expected a JSON list in {path}, got {type(raw).__name__}")

        records = []
        for i, item in enumerate(raw):
            try:
                records.append(parse(item))
            except (KeyError, TypeError, ValueError) as e:
                raise DatasetFormatError(f"Malformed record {i} in {path}: {e!r}") from e

        logger.info(f"Loaded {len(records)} records from {path}")
        self._cache.set_dataset(str(path), records)
        return records

    def _read_json(self, path: Path):
        if not path.is_file():
            logger.warning(f"Dataset file not found: {path}")
            raise DatasetNotFoundError(f"Dataset file not found: {path}")

        try:
            with open(path, encoding='utf-8') as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Could not parse {path}: {e}")
            raise DatasetFormatError(f"Invalid JSON in {path}: {e}") from e


def select_events(
    events: Iterable[MilitaryEvent],
    names: Optional[Iterable[str]] = None,
    min_importance: Optional[float] = None,
) -> List[MilitaryEvent]:
    """
    Pick the events to overlay on a chart.

    Args:
        events: All loaded events
        names: Keep only events with these names (None keeps all)
        min_importance: Keep only events at or above this importance

    Returns:
        Matching events, in their original order
    """
    wanted = set(names) if names is not None else None
    selected = []
    for event in events:
        if wanted is not None and event.name not in wanted:
            continue
        if min_importance is not None and event.importance < min_importance:
            continue
        selected.append(event)
    return selected


# Global loader instance
dataset_loader = DatasetLoader()
