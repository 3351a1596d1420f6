"""Tests for chart summary statistics."""

import pytest

from processing.analytics import (
    pearson_correlation,
    percent_change_rate,
    summarize_layer,
    summarize_monthly_changes,
    summarize_rate_of_change,
)
from processing.territory import LayerSeries, MonthlyChange, RatePoint, get_layer_data


class TestSummaries:

    def test_monthly_summary_peak_by_absolute_change(self):
        changes = [
            MonthlyChange('2024-02', 10.0),
            MonthlyChange('2024-03', -30.0),
            MonthlyChange('2024-04', 30.0),
        ]
        stats = summarize_monthly_changes(changes)

        assert stats['avg_change'] == pytest.approx(10 / 3)
        assert stats['peak_month'] == '2024-03'
        assert stats['peak_change'] == -30.0
        assert stats['months'] == 3

    def test_monthly_summary_empty(self):
        assert summarize_monthly_changes([]) == {
            'avg_change': 0.0, 'peak_month': '', 'peak_change': 0.0, 'months': 0,
        }

    def test_rate_summary(self):
        points = [RatePoint('2024-01-16', 1.0, r) for r in (10.0, 20.0, 60.0)]
        stats = summarize_rate_of_change(points)

        assert stats['avg_rate'] == pytest.approx(30.0)
        assert stats['max_rate'] == 60.0
        assert stats['min_rate'] == 10.0
        assert summarize_rate_of_change([])['avg_rate'] == 0.0

    def test_layer_summary(self, mixed_daily_areas):
        layer = get_layer_data(mixed_daily_areas, 'ukraine_control_map')
        stats = summarize_layer(layer)

        assert stats['first_value'] == 100.0
        assert stats['latest_value'] == 150.0
        assert stats['total_change'] == 50.0
        assert stats['change_points'] == 1
        assert stats['high_date'] == '2024-01-03'
        assert stats['low_date'] == '2024-01-01'
        assert stats['data_points'] == 4

    def test_layer_summary_empty(self):
        assert summarize_layer(LayerSeries()) == {'error': 'Insufficient data'}


class TestPearsonCorrelation:

    def test_perfect_positive_and_negative(self):
        assert pearson_correlation([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
        assert pearson_correlation([1, 2, 3], [6, 4, 2]) == pytest.approx(-1.0)

    def test_uses_common_prefix(self):
        assert pearson_correlation([1, 2, 3, 99], [1, 2, 3]) == pytest.approx(1.0)

    def test_degenerate_inputs_give_zero(self):
        assert pearson_correlation([], []) == 0.0
        assert pearson_correlation([5, 5, 5], [1, 2, 3]) == 0.0


class TestPercentChangeRate:

    def test_lagged_percent_change(self):
        assert percent_change_rate([10, 20, 0, 30], lag=1) == pytest.approx([100.0, -100.0, 0.0])

    def test_default_weekly_lag(self):
        values = [10.0] * 7 + [15.0]
        assert percent_change_rate(values) == pytest.approx([50.0])

    def test_too_short(self):
        assert percent_change_rate([1, 2, 3], lag=7) == []
