"""Tests for the signal rules and the BUY/SELL/HOLD vote."""

from __future__ import annotations

import pytest

from dashboard.recommendation import IndicatorSnapshot, Signal, evaluate, evaluate_signals, recommend


def _signals(side: str, n: int) -> list[Signal]:
    return [Signal(f"rule_{i}", side, f"{side} reason {i}") for i in range(n)]


def _snapshot(**overrides) -> IndicatorSnapshot:
    """A quiet market: no rule fires."""
    values = dict(
        current_price=100.0, ma7=100.0, ma21=100.0, rsi=50.0,
        support=80.0, resistance=120.0, predicted_change=0.0, volume_trend=0.0,
    )
    values.update(overrides)
    return IndicatorSnapshot(**values)


def _mirror(s: IndicatorSnapshot) -> IndicatorSnapshot:
    """Reflect every indicator so each buy condition becomes its sell counterpart.

    Prices reflect through K / x so the multiplicative support/resistance bands swap exactly.
    """
    k = 10_000.0
    return IndicatorSnapshot(
        current_price=k / s.current_price,
        ma7=k / s.ma7,
        ma21=k / s.ma21,
        rsi=100 - s.rsi,
        support=k / (s.resistance * 0.95 * 1.05),
        resistance=k / (s.support * 1.05 * 0.95),
        predicted_change=-s.predicted_change,
        volume_trend=-s.volume_trend,
    )


def test_three_buys_one_sell_is_high_confidence_buy():
    rec = recommend(_signals("BUY", 3), _signals("SELL", 1))
    assert rec.action == "BUY"
    assert rec.confidence == "High"
    assert rec.signal_count == 4


def test_one_signal_lead_is_moderate():
    rec = recommend(_signals("BUY", 1), _signals("SELL", 2))
    assert rec.action == "SELL"
    assert rec.confidence == "Moderate"


def test_tie_is_hold():
    assert recommend([], []).action == "HOLD"
    assert recommend(_signals("BUY", 2), _signals("SELL", 2)).action == "HOLD"


def test_quiet_market_fires_nothing():
    buy, sell = evaluate_signals(_snapshot())
    assert buy == [] and sell == []


def test_all_buy_rules_fire():
    snapshot = _snapshot(
        current_price=100.0, ma7=98.0, ma21=95.0, rsi=30.0,
        support=99.0, resistance=150.0, predicted_change=3.5, volume_trend=6.25,
    )
    buy, sell = evaluate_signals(snapshot)
    assert [s.rule for s in buy] == [
        "rsi_oversold", "ma_bullish_crossover", "near_support", "predicted_gain", "volume_increasing",
    ]
    assert sell == []
    rec = evaluate(snapshot)
    assert rec.action == "BUY" and rec.confidence == "High"


def test_signal_descriptions_carry_literal_values():
    snapshot = _snapshot(rsi=72.4, predicted_change=-3.21, volume_trend=-7.04)
    _, sell = evaluate_signals(snapshot)
    descriptions = [s.description for s in sell]
    assert "RSI overbought (72 > 65)" in descriptions
    assert "AI predicts -3.21% loss" in descriptions
    assert "Volume decreasing (-7.0%)" in descriptions
    rsi_signal = next(s for s in sell if s.rule == "rsi_overbought")
    assert rsi_signal.values == {"rsi": 72.4}


def test_buy_descriptions():
    buy, _ = evaluate_signals(_snapshot(rsi=20.0, predicted_change=4.65, volume_trend=8.73))
    descriptions = [s.description for s in buy]
    assert "RSI oversold (20 < 35)" in descriptions
    assert "AI predicts +4.65% gain" in descriptions
    assert "Volume increasing (+8.7%)" in descriptions


def test_thresholds_are_strict():
    buy, sell = evaluate_signals(_snapshot(rsi=35.0, predicted_change=2.0, volume_trend=5.0))
    assert buy == [] and sell == []
    buy, sell = evaluate_signals(_snapshot(rsi=65.0, predicted_change=-2.0, volume_trend=-5.0))
    assert buy == [] and sell == []


def test_crossover_needs_price_confirmation():
    """MA7 above MA21 alone is not enough; price must also be above MA7."""
    buy, _ = evaluate_signals(_snapshot(current_price=97.0, ma7=98.0, ma21=95.0))
    assert buy == []


def test_tight_range_fires_support_and_resistance():
    buy, sell = evaluate_signals(_snapshot(current_price=100.0, support=98.0, resistance=101.0))
    assert [s.rule for s in buy] == ["near_support"]
    assert [s.rule for s in sell] == ["near_resistance"]


@pytest.mark.parametrize("snapshot", [
    _snapshot(rsi=30.0, ma7=98.0, ma21=95.0, current_price=100.0, predicted_change=3.0),
    _snapshot(rsi=70.0, volume_trend=-8.0),
    _snapshot(rsi=30.0, predicted_change=-3.0),
    _snapshot(current_price=100.0, support=99.0, volume_trend=9.0, predicted_change=-4.0),
])
def test_mirrored_indicators_flip_the_call(snapshot):
    original = evaluate(snapshot)
    mirrored = evaluate(_mirror(snapshot))
    flipped = {"BUY": "SELL", "SELL": "BUY", "HOLD": "HOLD"}
    assert mirrored.action == flipped[original.action]
    assert mirrored.confidence == original.confidence
    assert len(mirrored.buy_signals) == len(original.sell_signals)
    assert len(mirrored.sell_signals) == len(original.buy_signals)
