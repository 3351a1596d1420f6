"""
Territory API Endpoints

Serves processed territory series to the chart frontend. Every request
re-runs the processing on the (cached) dataset records.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from config import LayerType, CRITICAL_EVENT_IMPORTANCE, PRIMARY_LAYER, KURSK_LAYER
from datasets import (
    DatasetFormatError,
    DatasetLoader,
    DatasetNotFoundError,
    dataset_loader,
    select_events,
)
from processing import (
    filter_by_date_range,
    format_kursk_chart,
    format_layer_comparison,
    format_monthly_changes_chart,
    format_rate_of_change_chart,
    format_territory_chart,
    resolve_date_range,
)

territory_router = APIRouter()


def get_loader() -> DatasetLoader:
    """Dataset loader dependency (overridden in tests)."""
    return dataset_loader


def _load_daily_areas(loader: DatasetLoader) -> list:
    try:
        return loader.load_daily_areas()
    except DatasetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatasetFormatError as e:
        raise HTTPException(status_code=500, detail=str(e))


# =============================================================================
# PYDANTIC MODELS FOR JSON API
# =============================================================================

class LayerInfo(BaseModel):
    """A layer present in the daily-area dataset."""
    layer_type: str
    records: int
    known: bool


class LayersResponse(BaseModel):
    layers: List[LayerInfo]


class EventResponse(BaseModel):
    """Military event for chart overlays."""
    date: str
    name: str
    importance: float
    territorial: float
    strategic: float
    cascade: float
    confidence: str


class EventsResponse(BaseModel):
    start: str
    end: str
    events: List[EventResponse]


class MetadataResponse(BaseModel):
    """Export summary written alongside the datasets."""
    start_date: str
    end_date: str
    layer_types: List[str]
    total_daily_records: int
    total_events: int
    territory_change_points: int
    kursk_change_points: int
    export_timestamp: Optional[str] = None


# =============================================================================
# ENDPOINTS
# =============================================================================

@territory_router.get("/api/layers", response_model=LayersResponse)
def list_layers(loader: DatasetLoader = Depends(get_loader)):
    """Layers present in the data, with record counts."""
    data = _load_daily_areas(loader)

    counts = {}
    for record in data:
        counts[record.layer_type] = counts.get(record.layer_type, 0) + 1

    known = {layer.value for layer in LayerType}
    return LayersResponse(layers=[
        LayerInfo(layer_type=name, records=counts[name], known=name in known)
        for name in sorted(counts)
    ])


@territory_router.get("/api/territory/{layer_type}")
def territory_chart(
    layer_type: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    interpolate: bool = True,
    loader: DatasetLoader = Depends(get_loader),
):
    """Area chart data for one layer: raw, interpolated, smoothed and trend."""
    data = _load_daily_areas(loader)
    return format_territory_chart(data, layer_type, start, end, interpolate)


@territory_router.get("/api/territory/{layer_type}/monthly")
def monthly_changes_chart(
    layer_type: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    interpolate: bool = True,
    loader: DatasetLoader = Depends(get_loader),
):
    """Monthly net change for one layer."""
    data = _load_daily_areas(loader)
    return format_monthly_changes_chart(data, layer_type, start, end, interpolate)


@territory_router.get("/api/territory/{layer_type}/rate")
def rate_of_change_chart(
    layer_type: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    interpolate: bool = True,
    window_days: Optional[int] = Query(None, ge=2, le=365),
    loader: DatasetLoader = Depends(get_loader),
):
    """Rolling rate of change for one layer."""
    data = _load_daily_areas(loader)
    return format_rate_of_change_chart(data, layer_type, start, end, interpolate, window_days)


@territory_router.get("/api/kursk")
def kursk_chart(
    start: Optional[date] = None,
    end: Optional[date] = None,
    interpolate: bool = True,
    loader: DatasetLoader = Depends(get_loader),
):
    """Kursk advances chart data."""
    data = _load_daily_areas(loader)
    return format_kursk_chart(data, start, end, interpolate)


@territory_router.get("/api/events", response_model=EventsResponse)
def list_events(
    start: Optional[date] = None,
    end: Optional[date] = None,
    min_importance: float = CRITICAL_EVENT_IMPORTANCE,
    names: Optional[List[str]] = Query(None),
    loader: DatasetLoader = Depends(get_loader),
):
    """Events in the date range for chart overlays."""
    try:
        events = loader.load_events()
    except DatasetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatasetFormatError as e:
        raise HTTPException(status_code=500, detail=str(e))

    start_str, end_str = resolve_date_range(start, end)
    in_range = filter_by_date_range(events, start_str, end_str)
    selected = select_events(in_range, names=names, min_importance=min_importance)

    return EventsResponse(
        start=start_str,
        end=end_str,
        events=[EventResponse(**vars(e)) for e in selected],
    )


@territory_router.get("/api/compare")
def compare_layers(
    layer_a: str = PRIMARY_LAYER,
    layer_b: str = KURSK_LAYER,
    start: Optional[date] = None,
    end: Optional[date] = None,
    interpolate: bool = True,
    lag: int = Query(7, ge=1, le=90),
    loader: DatasetLoader = Depends(get_loader),
):
    """Correlation of two layers, on levels and on lagged percent change."""
    data = _load_daily_areas(loader)
    return format_layer_comparison(data, layer_a, layer_b, start, end, interpolate, lag)


@territory_router.get("/api/metadata", response_model=MetadataResponse)
def dataset_metadata(loader: DatasetLoader = Depends(get_loader)):
    """Summary of the current export."""
    try:
        metadata = loader.load_metadata()
    except DatasetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DatasetFormatError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return MetadataResponse(**vars(metadata))
