"""Datasets module - Exported dashboard data and its record types."""

from .base import (
    DailyArea,
    MilitaryEvent,
    DashboardMetadata,
    DatasetError,
    DatasetNotFoundError,
    DatasetFormatError,
)
from .loader import DatasetLoader, dataset_loader, select_events

__all__ = [
    'DailyArea',
    'MilitaryEvent',
    'DashboardMetadata',
    'DatasetError',
    'DatasetNotFoundError',
    'DatasetFormatError',
    'DatasetLoader',
    'dataset_loader',
    'select_events',
]
