"""
BUY / SELL / HOLD recommendation built from independent indicator rules.

Each indicator owns one buy rule and one sell rule. A fired rule is kept as a
Signal carrying the literal values that triggered it, so the final call can be
explained line by line.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

RSI_OVERSOLD = 35
RSI_OVERBOUGHT = 65
SUPPORT_BAND = 1.05
RESISTANCE_BAND = 0.95
PREDICTION_THRESHOLD = 2.0
VOLUME_THRESHOLD = 5.0


@dataclass(frozen=True)
class IndicatorSnapshot:
    current_price: float
    ma7: float
    ma21: float
    rsi: float
    support: float
    resistance: float
    predicted_change: float
    volume_trend: float


@dataclass(frozen=True)
class Signal:
    rule: str
    side: str
    description: str
    values: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Recommendation:
    action: str
    confidence: str
    buy_signals: Tuple[Signal, ...]
    sell_signals: Tuple[Signal, ...]

    @property
    def signal_count(self) -> int:
        return len(self.buy_signals) + len(self.sell_signals)


def _rsi_rules(s: IndicatorSnapshot) -> List[Signal]:
    values = {"rsi": s.rsi}
    if s.rsi < RSI_OVERSOLD:
        return [Signal("rsi_oversold", "BUY", f"RSI oversold ({s.rsi:.0f} < {RSI_OVERSOLD})", values)]
    if s.rsi > RSI_OVERBOUGHT:
        return [Signal("rsi_overbought", "SELL", f"RSI overbought ({s.rsi:.0f} > {RSI_OVERBOUGHT})", values)]
    return []


def _ma_rules(s: IndicatorSnapshot) -> List[Signal]:
    values = {"ma7": s.ma7, "ma21": s.ma21, "current_price": s.current_price}
    if s.ma7 > s.ma21 and s.current_price > s.ma7:
        return [Signal("ma_bullish_crossover", "BUY", "Bullish MA crossover + price above MA7", values)]
    if s.ma7 < s.ma21 and s.current_price < s.ma7:
        return [Signal("ma_bearish_crossover", "SELL", "Bearish MA crossover + price below MA7", values)]
    return []


def _level_rules(s: IndicatorSnapshot) -> List[Signal]:
    # In a tight range the price can sit near both levels; both signals fire.
    fired = []
    if s.current_price < s.support * SUPPORT_BAND:
        fired.append(Signal(
            "near_support", "BUY", "Near support level (bounce potential)",
            {"current_price": s.current_price, "support": s.support},
        ))
    if s.current_price > s.resistance * RESISTANCE_BAND:
        fired.append(Signal(
            "near_resistance", "SELL", "Near resistance (pullback likely)",
            {"current_price": s.current_price, "resistance": s.resistance},
        ))
    return fired


def _prediction_rules(s: IndicatorSnapshot) -> List[Signal]:
    values = {"predicted_change": s.predicted_change}
    if s.predicted_change > PREDICTION_THRESHOLD:
        return [Signal("predicted_gain", "BUY", f"AI predicts +{s.predicted_change:.2f}% gain", values)]
    if s.predicted_change < -PREDICTION_THRESHOLD:
        return [Signal("predicted_loss", "SELL", f"AI predicts {s.predicted_change:.2f}% loss", values)]
    return []


def _volume_rules(s: IndicatorSnapshot) -> List[Signal]:
    values = {"volume_trend": s.volume_trend}
    if s.volume_trend > VOLUME_THRESHOLD:
        return [Signal("volume_increasing", "BUY", f"Volume increasing (+{s.volume_trend:.1f}%)", values)]
    if s.volume_trend < -VOLUME_THRESHOLD:
        return [Signal("volume_decreasing", "SELL", f"Volume decreasing ({s.volume_trend:.1f}%)", values)]
    return []


RULES = (_rsi_rules, _ma_rules, _level_rules, _prediction_rules, _volume_rules)


def evaluate_signals(snapshot: IndicatorSnapshot) -> Tuple[List[Signal], List[Signal]]:
    """Run every rule and split the fired signals into (buy, sell)."""
    buy, sell = [], []
    for rule in RULES:
        for signal in rule(snapshot):
            (buy if signal.side == "BUY" else sell).append(signal)
    return buy, sell


def recommend(buy_signals: List[Signal], sell_signals: List[Signal]) -> Recommendation:
    """Majority vote between buy and sell signals; a lead of two or more is High confidence."""
    if len(buy_signals) > len(sell_signals):
        action = "BUY"
    elif len(sell_signals) > len(buy_signals):
        action = "SELL"
    else:
        action = "HOLD"
    confidence = "High" if abs(len(buy_signals) - len(sell_signals)) >= 2 else "Moderate"
    return Recommendation(action, confidence, tuple(buy_signals), tuple(sell_signals))


def evaluate(snapshot: IndicatorSnapshot) -> Recommendation:
    return recommend(*evaluate_signals(snapshot))
