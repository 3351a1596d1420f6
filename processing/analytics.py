"""
Analytics Layer - Summary statistics shown next to the charts.

Computed with pandas/numpy on top of the processed series: averages and
peaks of monthly changes and rates, headline numbers for a layer, and the
correlation and percent-change helpers used for comparing event counts.
"""

import math
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from .territory import LayerSeries, MonthlyChange, RatePoint


def summarize_monthly_changes(changes: Sequence[MonthlyChange]) -> Dict:
    """
    Average and peak monthly change.

    The peak is the month with the largest absolute change; the earliest such
    month wins on ties.
    """
    if not changes:
        return {'avg_change': 0.0, 'peak_month': '', 'peak_change': 0.0, 'months': 0}

    s = pd.Series([c.change for c in changes], index=[c.month for c in changes], dtype=float)
    peak_month = s.abs().idxmax()

    return {
        'avg_change': float(s.mean()),
        'peak_month': peak_month,
        'peak_change': float(s[peak_month]),
        'months': len(s),
    }


def summarize_rate_of_change(points: Sequence[RatePoint]) -> Dict:
    """Average, fastest and slowest 30-day rate."""
    if not points:
        return {'avg_rate': 0.0, 'max_rate': 0.0, 'min_rate': 0.0, 'points': 0}

    rates = pd.Series([p.rate for p in points], dtype=float)
    return {
        'avg_rate': float(rates.mean()),
        'max_rate': float(rates.max()),
        'min_rate': float(rates.min()),
        'points': len(rates),
    }


def summarize_layer(layer: LayerSeries, use_interpolation: bool = True, threshold: float = 0.5) -> Dict:
    """
    Headline numbers for one layer over the selected range.

    Args:
        layer: Output of get_layer_data
        use_interpolation: Summarize interpolated values instead of raw
        threshold: Jump size counted as a published update

    Returns:
        Dict of computed values, or {'error': ...} for an empty layer
    """
    if len(layer) == 0:
        return {'error': 'Insufficient data'}

    values = layer.values(use_interpolation)
    df = pd.DataFrame({'value': values}, index=pd.to_datetime(layer.dates))

    # Raw jumps above the threshold are the published update batches
    raw_diffs = np.abs(np.diff(np.asarray(layer.raw, dtype=float)))

    return {
        'data_points': len(df),
        'first_date': layer.dates[0],
        'first_value': round(float(values[0]), 2),
        'latest_date': layer.dates[-1],
        'latest_value': round(float(values[-1]), 2),
        'total_change': round(float(values[-1] - values[0]), 2),
        'change_points': int((raw_diffs > threshold).sum()),
        'high': round(float(df['value'].max()), 2),
        'high_date': df['value'].idxmax().strftime('%Y-%m-%d'),
        'low': round(float(df['value'].min()), 2),
        'low_date': df['value'].idxmin().strftime('%Y-%m-%d'),
    }


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation coefficient over the common prefix of x and y.

    Returns 0 for empty input or when either series is constant.
    """
    n = min(len(x), len(y))
    if n == 0:
        return 0.0

    xs = np.asarray(x[:n], dtype=float)
    ys = np.asarray(y[:n], dtype=float)

    numerator = n * (xs * ys).sum() - xs.sum() * ys.sum()
    denominator = math.sqrt(
        max((n * (xs * xs).sum() - xs.sum() ** 2) * (n * (ys * ys).sum() - ys.sum() ** 2), 0.0)
    )

    return 0.0 if denominator == 0 else float(numerator / denominator)


def percent_change_rate(values: Sequence[float], lag: int = 7) -> List[float]:
    """
    Percent change against the value `lag` steps earlier.

    One output per index from `lag` on. A prior value of zero or below gives
    0 rather than an infinite change.
    """
    s = pd.Series(values, dtype=float)
    prior = s.shift(lag)
    pct = ((s - prior) / prior * 100).where(prior > 0, 0.0)
    return pct.iloc[lag:].tolist()
