"""
Territory Series Processing - Interpolation, smoothing, deltas, trends.

Control-map datasets publish area snapshots only when an update batch lands,
so the raw series is a step function with long plateaus. Everything here
turns that into series a chart can draw:

- interpolate_step_function: spread each batch jump across the days since the
  previous update
- rolling_median: centered median filter, window shrinks at the edges
- compute_monthly_changes: month-over-month net change
- compute_rate_of_change: centered rolling daily delta, expressed per 30 days
- linear_trend: least-squares line through the series
- get_layer_data: filter one layer out of the mixed dataset and run the above

All functions are pure. Inputs are expected sorted by date with unique dates;
they are not re-validated here.
"""

import bisect
from dataclasses import dataclass, field
from typing import List, Sequence

from datasets.base import DailyArea


@dataclass
class MonthlyChange:
    """Net change between the last observation of a month and of the month before."""

    month: str  # YYYY-MM
    change: float


@dataclass
class RatePoint:
    """Centered rolling rate at one date, in units per 30 days."""

    date: str
    area: float
    rate: float


@dataclass
class TrendResult:
    """Least-squares fit of value against index."""

    slope: float
    intercept: float
    trend_values: List[float] = field(default_factory=list)


@dataclass
class LayerSeries:
    """One layer's series. All four lists are index-aligned."""

    dates: List[str] = field(default_factory=list)
    raw: List[float] = field(default_factory=list)
    interpolated: List[float] = field(default_factory=list)
    smoothed: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.dates)

    def values(self, use_interpolation: bool = True) -> List[float]:
        """The series charts plot: interpolated when enabled, raw otherwise."""
        return self.interpolated if use_interpolation else self.raw


def interpolate_step_function(
    dates: Sequence[str],
    values: Sequence[float],
    threshold: float = 0.5,
) -> List[float]:
    """
    Convert a step-function series to linearly interpolated values.

    A change point is index 0, the last index, and every index whose value
    differs from its predecessor by more than `threshold`. Values between two
    consecutive change points are placed on the straight line joining them,
    so change-point values come through unchanged.

    Args:
        dates: Date strings (YYYY-MM-DD), parallel to values
        values: Observed values
        threshold: Minimum absolute jump treated as a real update

    Returns:
        New list, same length as values
    """
    n = len(values)
    if n < 2:
        return list(values)

    change_indices = [0]
    for i in range(1, n):
        if abs(values[i] - values[i - 1]) > threshold:
            change_indices.append(i)
    if change_indices[-1] != n - 1:
        change_indices.append(n - 1)

    change_values = [values[i] for i in change_indices]
    last = len(change_indices) - 1

    result = []
    for i in range(n):
        # Largest change point <= i, and the one after it
        lo = bisect.bisect_right(change_indices, i) - 1
        hi = min(lo + 1, last)

        x0, x1 = change_indices[lo], change_indices[hi]
        y0, y1 = change_values[lo], change_values[hi]

        if x0 == x1:
            result.append(y0)
        else:
            result.append(y0 + (y1 - y0) * (i - x0) / (x1 - x0))

    return result


def rolling_median(values: Sequence[float], window: int = 7) -> List[float]:
    """
    Apply a centered rolling median to knock out single-day outliers.

    Near either end the window is truncated rather than padded, and the upper
    middle element is taken for even-length slices, so every output value is
    one of the input values.
    """
    n = len(values)
    half = max(0, window // 2)

    result = []
    for i in range(n):
        start = max(0, i - half)
        end = min(n, i + half + 1)
        window_values = sorted(values[start:end])
        result.append(window_values[len(window_values) // 2])

    return result


def compute_monthly_changes(dates: Sequence[str], values: Sequence[float]) -> List[MonthlyChange]:
    """
    Compute month-over-month change of the end-of-month value.

    The first month has nothing to diff against and produces no record. A
    month with no observations is skipped entirely: the next month is diffed
    against the nearest earlier month that has data.

    Args:
        dates: Date strings (YYYY-MM-DD), in date order
        values: Values parallel to dates

    Returns:
        One MonthlyChange per month after the first
    """
    by_month = {}
    for date, value in zip(dates, values):
        month = date[:7]
        if month not in by_month:
            by_month[month] = {'first': value, 'last': value}
        else:
            by_month[month]['last'] = value

    months = sorted(by_month)
    changes = []
    for prev, curr in zip(months, months[1:]):
        changes.append(MonthlyChange(
            month=curr,
            change=by_month[curr]['last'] - by_month[prev]['last'],
        ))

    return changes


def compute_rate_of_change(
    dates: Sequence[str],
    values: Sequence[float],
    window_days: int = 30,
) -> List[RatePoint]:
    """
    Compute a centered rolling rate of change in units per 30 days.

    Each retained index averages the day-over-day differences inside
    `window_days // 2` steps on either side and scales the average by 30,
    whatever the window size. Indices without a full half-window on both
    sides are dropped, so a series shorter than the window yields nothing.
    """
    n = len(values)
    half = max(0, window_days // 2)

    result = []
    for i in range(half, n - half):
        start = max(0, i - half)
        end = min(n - 1, i + half)
        diffs = [values[j] - values[j - 1] for j in range(start + 1, end + 1)]

        # A zero-width window has no diffs; report NaN like 0/0 would
        avg_daily = sum(diffs) / len(diffs) if diffs else float('nan')
        result.append(RatePoint(date=dates[i], area=values[i], rate=avg_daily * 30))

    return result


def linear_trend(values: Sequence[float]) -> TrendResult:
    """
    Fit an ordinary least-squares line using the index 0..n-1 as x.

    With fewer than two points there is no slope: the result is flat at the
    single value (or 0) and the trend is a copy of the input.
    """
    n = len(values)
    if n < 2:
        return TrendResult(
            slope=0.0,
            intercept=values[0] if n else 0.0,
            trend_values=list(values),
        )

    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for i, y in enumerate(values):
        sum_x += i
        sum_y += y
        sum_xy += i * y
        sum_x2 += i * i

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    trend_values = [intercept + slope * i for i in range(n)]

    return TrendResult(slope=slope, intercept=intercept, trend_values=trend_values)


def get_layer_data(
    data: Sequence[DailyArea],
    layer_type: str,
    threshold: float = 0.5,
    window: int = 7,
) -> LayerSeries:
    """
    Extract one layer from the mixed daily-area dataset and process it.

    Records are matched on layer_type exactly and sorted by date before the
    interpolation and smoothing passes run. Returns empty lists when nothing
    matches.

    Args:
        data: DailyArea records for any mix of layers
        layer_type: Layer to extract (a LayerType value or any string)
        threshold: Change-point threshold for interpolation
        window: Rolling median window

    Returns:
        LayerSeries with dates, raw, interpolated and smoothed values
    """
    filtered = sorted(
        (d for d in data if d.layer_type == layer_type),
        key=lambda d: d.date,
    )

    dates = [d.date for d in filtered]
    raw = [d.area_km2 for d in filtered]
    interpolated = interpolate_step_function(dates, raw, threshold)
    smoothed = rolling_median(interpolated, window)

    return LayerSeries(dates=dates, raw=raw, interpolated=interpolated, smoothed=smoothed)
