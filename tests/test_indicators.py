"""Tests for the technical indicator functions."""

from __future__ import annotations

import pytest

from dashboard.exception import EmptySeriesError
from dashboard.indicators import moving_average, price_change, rsi, volatility, volume_trend


def test_moving_average_uses_last_period_points():
    """MA over the last three of five prices."""
    assert moving_average([100, 102, 104, 103, 105], 3) == pytest.approx(104.0)


def test_moving_average_period_longer_than_series():
    """A period beyond the series length averages the whole series."""
    series = [10.0, 20.0, 30.0]
    assert moving_average(series, 21) == pytest.approx(20.0)


def test_moving_average_empty_series_raises():
    with pytest.raises(EmptySeriesError):
        moving_average([], 7)


def test_volatility_constant_series_is_zero():
    assert volatility([50, 50, 50, 50]) == 0


def test_volatility_is_population_cv_percent():
    """stddev([90, 110]) = 10, mean = 100 -> 10%."""
    assert volatility([90, 110]) == pytest.approx(10.0)


@pytest.mark.parametrize("series", [[1, 2], [100, 99, 101, 98], [5.5, 5.5, 5.6]])
def test_volatility_positive_when_prices_differ(series):
    assert volatility(series) > 0


def test_rsi_neutral_with_insufficient_points():
    """Fewer than period + 1 prices gives a neutral 50."""
    assert rsi([50, 50, 50, 50]) == 50
    assert rsi(list(range(14))) == 50


def test_rsi_all_gains_floors_average_loss():
    """14 straight gains of 1: avgLoss floors at 0.01, so RSI = 100 - 100/101."""
    value = rsi([float(i) for i in range(15)])
    assert value < 100
    assert value == pytest.approx(100 - 100 / 101)


def test_rsi_all_losses_floors_average_gain():
    value = rsi([float(20 - i) for i in range(15)])
    assert value > 0
    assert value == pytest.approx(100 - 100 / 1.01)


def test_rsi_only_looks_at_last_period_deltas():
    """Old losses outside the 14-delta window do not count."""
    series = [100, 50, 40] + [40 + i for i in range(1, 15)]
    assert rsi(series) == pytest.approx(100 - 100 / 101)


def test_rsi_balanced_moves():
    """Equal gains and losses give RSI 50."""
    series = [100, 101] * 7 + [100]
    assert rsi(series) == pytest.approx(50.0)


@pytest.mark.parametrize("series", [
    [100, 120, 80, 130, 70, 140, 60, 150, 50, 160, 40, 170, 30, 180, 20],
    [float(i % 3) + 1 for i in range(40)],
])
def test_rsi_bounded(series):
    assert 0 <= rsi(series) <= 100


def test_volume_trend_needs_twenty_points():
    assert volume_trend([100.0] * 19) == 0


def test_volume_trend_percent_change_between_windows():
    """Previous 10 average 100, latest 10 average 110 -> +10%."""
    series = [100.0] * 10 + [110.0] * 10
    assert volume_trend(series) == pytest.approx(10.0)


def test_volume_trend_ignores_older_points():
    series = [1.0] * 5 + [200.0] * 10 + [100.0] * 10
    assert volume_trend(series) == pytest.approx(-50.0)


def test_price_change_without_base_is_zero():
    assert price_change(0, 10) == 0
    assert price_change(100, 105) == pytest.approx(5.0)


@pytest.mark.parametrize("value", [0.1, 1.1, 33.33, 100.1])
def test_volatility_flat_series_without_exact_float_is_zero(value):
    """A mean that rounds must not leave residual deviation on a flat series."""
    assert volatility([value] * 30) == 0.0
