"""Processing module - Territory series transforms, analytics and chart formatting."""

from .territory import (
    interpolate_step_function,
    rolling_median,
    compute_monthly_changes,
    compute_rate_of_change,
    linear_trend,
    get_layer_data,
    LayerSeries,
    MonthlyChange,
    RatePoint,
    TrendResult,
)
from .temporal import filter_by_date_range, resolve_date_range
from .analytics import pearson_correlation, percent_change_rate
from .formatter import (
    format_territory_chart,
    format_monthly_changes_chart,
    format_rate_of_change_chart,
    format_kursk_chart,
    format_layer_comparison,
)

__all__ = [
    'interpolate_step_function',
    'rolling_median',
    'compute_monthly_changes',
    'compute_rate_of_change',
    'linear_trend',
    'get_layer_data',
    'LayerSeries',
    'MonthlyChange',
    'RatePoint',
    'TrendResult',
    'filter_by_date_range',
    'resolve_date_range',
    'pearson_correlation',
    'percent_change_rate',
    'format_territory_chart',
    'format_monthly_changes_chart',
    'format_rate_of_change_chart',
    'format_kursk_chart',
    'format_layer_comparison',
]
