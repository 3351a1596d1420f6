"""
Record types for the exported dashboard datasets.

The export writes camelCase JSON; each record type maps it onto a dataclass
with a from_dict constructor.
"""

from dataclasses import dataclass, field
from typing import List, Optional


class DatasetError(Exception):
    """Base class for dataset loading failures."""


class DatasetNotFoundError(DatasetError):
    """The dataset file does not exist in the data directory."""


class DatasetFormatError(DatasetError):
    """The dataset file is not valid JSON or a record is missing fields."""


@dataclass
class DailyArea:
    """One controlled-area snapshot for one layer on one day."""

    date: str          # YYYY-MM-DD
    layer_type: str
    area_km2: float

    @classmethod
    def from_dict(cls, d: dict) -> "DailyArea":
        return cls(
            date=d['date'],
            layer_type=d['layerType'],
            area_km2=float(d['areaKm2']),
        )


@dataclass
class MilitaryEvent:
    """A key military event drawn as an overlay on territory charts."""

    date: str
    name: str
    importance: float
    territorial: float = 0.0
    strategic: float = 0.0
    cascade: float = 0.0
    confidence: str = ''

    @classmethod
    def from_dict(cls, d: dict) -> "MilitaryEvent":
        return cls(
            date=d['date'],
            name=d['name'],
            importance=float(d['importance']),
            territorial=float(d.get('territorial', 0)),
            strategic=float(d.get('strategic', 0)),
            cascade=float(d.get('cascade', 0)),
            confidence=d.get('confidence', ''),
        )


@dataclass
class DashboardMetadata:
    """Summary written alongside the datasets by the export run."""

    start_date: str
    end_date: str
    layer_types: List[str] = field(default_factory=list)
    total_daily_records: int = 0
    total_events: int = 0
    territory_change_points: int = 0
    kursk_change_points: int = 0
    export_timestamp: Optional[str] = None

    @classmethod
    def from_dict(cls, d: dict) -> "DashboardMetadata":
        date_range = d['dateRange']
        return cls(
            start_date=date_range['start'],
            end_date=date_range['end'],
            layer_types=list(d.get('layerTypes', [])),
            total_daily_records=int(d.get('totalDailyRecords', 0)),
            total_events=int(d.get('totalEvents', 0)),
            territory_change_points=int(d.get('territoryChangePoints', 0)),
            kursk_change_points=int(d.get('kurskChangePoints', 0)),
            export_timestamp=d.get('exportTimestamp'),
        )
