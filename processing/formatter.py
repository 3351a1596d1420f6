"""
Chart Data Formatter - Prepare processed series for frontend display.

Each formatter takes the full daily-area dataset, narrows it to the selected
date range, extracts one layer and returns row-oriented data the chart
components plot directly, plus the summary numbers shown beside them.
"""

from dataclasses import asdict
from typing import Any, Dict, Optional, Sequence

from config import config, KURSK_LAYER
from datasets.base import DailyArea
from .analytics import (
    pearson_correlation,
    percent_change_rate,
    summarize_layer,
    summarize_monthly_changes,
    summarize_rate_of_change,
)
from .temporal import DateLike, filter_by_date_range, resolve_date_range
from .territory import (
    LayerSeries,
    compute_monthly_changes,
    compute_rate_of_change,
    get_layer_data,
    linear_trend,
)


def _layer_in_range(
    data: Sequence[DailyArea],
    layer_type: str,
    start: Optional[DateLike],
    end: Optional[DateLike],
) -> LayerSeries:
    start_str, end_str = resolve_date_range(start, end)
    filtered = filter_by_date_range(data, start_str, end_str)
    return get_layer_data(
        filtered,
        layer_type,
        threshold=config.interpolation_threshold,
        window=config.smoothing_window,
    )


def format_territory_chart(
    data: Sequence[DailyArea],
    layer_type: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    use_interpolation: bool = True,
) -> Dict[str, Any]:
    """
    Territory area chart: raw, interpolated and smoothed values with a trend line.

    The trend is fitted to whichever series is being displayed.

    Returns:
        Dict with 'rows', 'trend' (slope/intercept) and 'stats'
    """
    layer = _layer_in_range(data, layer_type, start, end)
    trend = linear_trend(layer.values(use_interpolation))

    rows = [
        {
            'date': date,
            'raw': layer.raw[i],
            'interpolated': layer.interpolated[i],
            'smoothed': layer.smoothed[i],
            'trend': trend.trend_values[i],
        }
        for i, date in enumerate(layer.dates)
    ]

    return {
        'layer_type': layer_type,
        'value_key': 'interpolated' if use_interpolation else 'raw',
        'rows': rows,
        'trend': {'slope': trend.slope, 'intercept': trend.intercept},
        'stats': summarize_layer(layer, use_interpolation, config.interpolation_threshold),
    }


def format_monthly_changes_chart(
    data: Sequence[DailyArea],
    layer_type: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    use_interpolation: bool = True,
) -> Dict[str, Any]:
    """Monthly net change bars with average and peak month."""
    layer = _layer_in_range(data, layer_type, start, end)
    monthly = compute_monthly_changes(layer.dates, layer.values(use_interpolation))

    return {
        'layer_type': layer_type,
        'rows': [asdict(m) for m in monthly],
        'stats': summarize_monthly_changes(monthly),
    }


def format_rate_of_change_chart(
    data: Sequence[DailyArea],
    layer_type: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    use_interpolation: bool = True,
    window_days: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Dual chart: area on top, rolling 30-day rate below.

    The area panel covers every date in range; the rate panel only the
    interior dates that have a full window.
    """
    layer = _layer_in_range(data, layer_type, start, end)
    values = layer.values(use_interpolation)
    window = window_days if window_days is not None else config.rate_window_days
    points = compute_rate_of_change(layer.dates, values, window)

    return {
        'layer_type': layer_type,
        'window_days': window,
        'area': [{'date': d, 'area': v} for d, v in zip(layer.dates, values)],
        'rate': [asdict(p) for p in points],
        'stats': summarize_rate_of_change(points),
    }


def format_kursk_chart(
    data: Sequence[DailyArea],
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    use_interpolation: bool = True,
) -> Dict[str, Any]:
    """Kursk advances area chart."""
    layer = _layer_in_range(data, KURSK_LAYER, start, end)
    values = layer.values(use_interpolation)
    return {
        'layer_type': KURSK_LAYER,
        'rows': [{'date': d, 'area': v} for d, v in zip(layer.dates, values)],
    }


def format_layer_comparison(
    data: Sequence[DailyArea],
    layer_a: str,
    layer_b: str,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    use_interpolation: bool = True,
    lag: int = 7,
) -> Dict[str, Any]:
    """
    Correlate two layers on the dates both have data for.

    Reports r on the levels and r on the `lag`-day percent change, the same
    pair the dashboard shows when comparing event sources.
    """
    series_a = _layer_in_range(data, layer_a, start, end)
    series_b = _layer_in_range(data, layer_b, start, end)

    b_by_date = dict(zip(series_b.dates, series_b.values(use_interpolation)))
    dates, values_a, values_b = [], [], []
    for date, value in zip(series_a.dates, series_a.values(use_interpolation)):
        if date in b_by_date:
            dates.append(date)
            values_a.append(value)
            values_b.append(b_by_date[date])

    rate_a = percent_change_rate(values_a, lag)
    rate_b = percent_change_rate(values_b, lag)

    return {
        'layers': [layer_a, layer_b],
        'lag': lag,
        'rows': [
            {'date': d, 'a': a, 'b': b}
            for d, a, b in zip(dates, values_a, values_b)
        ],
        'correlation': {
            'levels': pearson_correlation(values_a, values_b),
            'rates': pearson_correlation(rate_a, rate_b),
        },
    }
