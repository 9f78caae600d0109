"""Markdown templates for the report panels. Formatting only; all figures come from AnalysisReport."""
from typing import Dict, Iterable

from dashboard.recommendation import Signal
from dashboard.report import AnalysisReport, Explainer

SECTION_TITLES = {
    "summary": "Company Summary",
    "historical": "Historical Performance",
    "technical": "Technical Analysis",
    "reasoning": "Prediction Reasoning",
    "risk": "Risk Assessment",
    "outlook": "Outlook & Recommendation",
}

DISCLAIMER = [
    "This is AI analysis, not financial advice",
    "Always do your own research (DYOR)",
    "Never invest more than you can afford to lose",
    "Past performance doesn't guarantee future results",
]


def _bullets(items: Iterable[str], marker: str = "-") -> str:
    return "\n".join(f"{marker} {item}" for item in items)


def _signal_lines(signals: Iterable[Signal], marker: str = "-") -> str:
    return _bullets((s.description for s in signals), marker)


def render_summary(r: AnalysisReport) -> str:
    s = r.stats
    direction = "upward by" if s.change_pct >= 0 else "downward by"
    return (
        f"{r.profile.name} ({r.ticker}) operates in the {r.profile.sector} sector focusing on "
        f"{r.profile.focus}. Over the past {s.days} trading days, the stock has moved {direction} "
        f"{abs(s.change_pct):.2f}%, trading in a range of ${s.minimum:.2f} to ${s.maximum:.2f} "
        f"with an average price of ${s.average:.2f}."
    )


def render_historical(r: AnalysisReport) -> str:
    s, up = r.stats, r.stats.change_pct >= 0
    return (
        f"The stock's recent performance shows {r.volatility_descriptor} with a "
        f"{r.derived.volatility:.2f}% volatility level. Price momentum over the month has been "
        f"{'positive, indicating buyer interest' if up else 'negative, suggesting seller pressure'}. "
        f"The {s.days}-day moving average shows the stock trading "
        f"{'above average' if s.current > s.average else 'below average'}, which is typical for "
        f"{'bullish periods' if up else 'bearish periods'}."
    )


def render_technical(r: AnalysisReport) -> str:
    d, s = r.derived, r.stats
    ma_signal = (
        "**BULLISH** - Short-term momentum is UP" if d.ma7 > d.ma21
        else "**BEARISH** - Short-term momentum is DOWN"
    )
    rsi_text = {
        "OVERBOUGHT": "OVERBOUGHT (>70) - Sell pressure likely",
        "OVERSOLD": "OVERSOLD (<30) - Buy opportunity",
        "NEUTRAL": "NEUTRAL (30-70) - Balanced market",
    }[r.rsi_status]
    dist7 = (s.current - d.ma7) / d.ma7 * 100
    dist21 = (s.current - d.ma21) / d.ma21 * 100
    volume = (
        f"Increasing (+{d.volume_trend:.1f}%)" if d.volume_trend > 0
        else f"Decreasing ({d.volume_trend:.1f}%)"
    )
    return "\n\n".join([
        "**Moving Averages (Trend Indicators):**\n" + _bullets([
            f"7-day MA = (Last 7 prices sum) / 7 = ${d.ma7:.2f}",
            f"21-day MA = (Last 21 prices sum) / 21 = ${d.ma21:.2f}",
            f"Current Price: **${s.current:.2f}**",
        ]),
        f"**Calculation:** MA7 (${d.ma7:.2f}) {'>' if d.ma7 > d.ma21 else '<'} MA21 (${d.ma21:.2f})  \n"
        f"**Signal:** {ma_signal}",
        "**RSI (Momentum Strength):**\n" + _bullets([
            "RSI Formula: 100 - (100 / (1 + (Avg Gain / Avg Loss)))",
            f"RSI Value = **{d.rsi:.2f}**",
            f"Status: {rsi_text}",
        ]),
        "**Price Positioning:**\n" + _bullets([
            f"Distance from MA7: {dist7:.2f}% {'(Above - Strong)' if s.current > d.ma7 else '(Below - Weak)'}",
            f"Distance from MA21: {dist21:.2f}% {'(Above)' if s.current > d.ma21 else '(Below)'}",
            f"Support Level: ${s.minimum:.2f} | Resistance: ${s.maximum:.2f}",
            f"Volume Trend: {volume}",
        ]),
    ])


def render_reasoning(r: AnalysisReport) -> str:
    low, high = r.confidence_range
    heading = "BULLISH" if r.bullish else "BEARISH"
    detected = "Bullish Signals Detected:" if r.bullish else "Bearish Signals Detected:"
    return "\n\n".join([
        f"**AI Prediction: ${r.predicted_price:.2f}** ({r.prediction_change:+.2f}% from current)",
        f"**WHY {heading} Trend?**  \n{detected}\n"
        + "\n".join(f"{i}. {line}" for i, line in enumerate(r.trend_rationale(), start=1)),
        "**How Prediction Was Calculated:**\n" + _bullets([
            f"{r.model_name} analyzed 60-day price patterns (60 days x 5 indicators = 300 data points)",
            "Features weighted: Close (35%), MA7 (25%), MA21 (20%), RSI (12%), MACD (8%)",
            f"Model accuracy: {r.metrics.accuracy}% (Error: ±${r.metrics.rmse})",
            f"Confidence range: ${low:.2f} - ${high:.2f} (±3%)",
        ]),
    ])


def render_risk(r: AnalysisReport) -> str:
    risk, s = r.risk, r.stats
    return "\n\n".join([
        f"**Risk Level: {risk.level}**",
        "**Volatility Analysis:**\n" + _bullets([
            f"Standard Deviation: {risk.volatility:.2f}%",
            f"Price Range: ${s.minimum:.2f} - ${s.maximum:.2f} (Spread: ${s.spread:.2f})",
            f"Daily swing potential: ±{risk.daily_swing:.2f}%",
            f"Risk Category: {risk.level} ({risk.label})",
        ]),
        "**Risk Factors:**\n" + _bullets([
            "Earnings announcements can cause sudden moves",
            f"{r.profile.sector} sector news affects {r.profile.name}",
            "Fed policy, inflation data impact stock prices",
            f"Model error margin: ±${r.metrics.rmse}",
        ]),
        "**Recommended Stop-Loss:**\n" + _bullets([
            f"{risk.stop_label}: ${risk.stop_loss_price:.2f} ({risk.stop_loss_pct:.0f}% from current)",
            f"Position size: {risk.position_size} of capital",
        ]),
    ])


def render_outlook(r: AnalysisReport) -> str:
    rec, s, d = r.recommendation, r.stats, r.derived
    buy, sell = rec.buy_signals, rec.sell_signals
    parts = [
        f"**RECOMMENDATION: {rec.action}**  \n"
        f"**Confidence: {rec.confidence}** ({rec.signal_count} signals detected)"
    ]
    if rec.action == "BUY":
        parts.append(f"**BUY Signals ({len(buy)}):**\n" + _signal_lines(buy))
        if sell:
            parts.append(f"**Warning Signs ({len(sell)}):**\n" + _signal_lines(sell))
    elif rec.action == "SELL":
        parts.append(f"**SELL Signals ({len(sell)}):**\n" + _signal_lines(sell))
        if buy:
            parts.append(f"**Positive Factors ({len(buy)}):**\n" + _signal_lines(buy))
    else:
        parts.append(f"**HOLD / WAIT ({max(len(buy), len(sell))} signals each side)**")
        parts.append(f"**Buy Signals ({len(buy)}):**\n" + (_signal_lines(buy) or "- none"))
        parts.append(f"**Sell Signals ({len(sell)}):**\n" + (_signal_lines(sell) or "- none"))

    parts.append("**Action Plan:**\n" + _bullets(f"**{label}:** {text}" for label, text in r.action_plan()))
    parts.append("**Key Price Levels:**\n" + _bullets([
        f"Current: **${s.current:.2f}**",
        f"AI Target: ${r.predicted_price:.2f} ({r.prediction_change:+.2f}%)",
        f"Support: ${s.minimum:.2f} (floor)",
        f"Resistance: ${s.maximum:.2f} (ceiling)",
        f"MA7: ${d.ma7:.2f} | MA21: ${d.ma21:.2f}",
    ]))
    parts.append("**Important Notes:**\n" + _bullets(DISCLAIMER))
    return "\n\n".join(parts)


RENDERERS = {
    "summary": render_summary,
    "historical": render_historical,
    "technical": render_technical,
    "reasoning": render_reasoning,
    "risk": render_risk,
    "outlook": render_outlook,
}


def render_sections(report: AnalysisReport) -> Dict[str, str]:
    """Markdown body for each report panel, keyed by panel name."""
    return {name: render(report) for name, render in RENDERERS.items()}


def render_explainer(explainer: Explainer) -> Dict[str, str]:
    return {
        "summary": explainer.summary,
        "technical": _bullets(explainer.technical_analysis),
        "reasoning": _bullets(explainer.model_reasoning),
        "factors": _bullets(explainer.prediction_factors),
    }
