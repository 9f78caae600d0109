from typing import Optional

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from dashboard.indicators import price_change
from dashboard.schemas import Overview, PredictionResult

UP_COLOR = "#00ff88"
DOWN_COLOR = "#ff3860"
HISTORY_COLOR = "#00d4ff"


def build_overview(result: PredictionResult) -> Overview:
    """Headline figures; safe on empty series (prices fall back to 0)."""
    current = result.historical_prices[-1] if result.historical_prices else 0.0
    predicted = result.predictions[-1] if result.predictions else 0.0
    change = f"{price_change(current, predicted):.2f}" if current > 0 else "0.00"
    return Overview(
        ticker=result.ticker,
        current_price=current,
        predicted_price=predicted,
        predicted_change=change,
        accuracy=result.metrics.accuracy,
        mse=result.metrics.mse,
        rmse=result.metrics.rmse,
        trend=result.metrics.trend,
    )


def history_frame(result: PredictionResult) -> pd.DataFrame:
    """OHLC table rows with an up-day flag (Close >= Open) for colouring."""
    columns = ["Date", "Open", "Close", "High", "Low", "Up"]
    rows = [
        {
            "Date": row.date,
            "Open": row.open,
            "Close": row.close,
            "High": row.high,
            "Low": row.low,
            "Up": row.close >= row.open,
        }
        for row in result.historical_data
    ]
    return pd.DataFrame(rows, columns=columns)


def _dark_layout(fig: go.Figure, title: str, yaxis_title: str) -> go.Figure:
    fig.update_layout(
        template="plotly_dark",
        title=dict(text=title, font=dict(size=18, color=HISTORY_COLOR)),
        showlegend=True,
        legend=dict(orientation="h", y=-0.2),
        margin=dict(t=50, b=50, l=60, r=30),
        xaxis_title="Date",
        yaxis_title=yaxis_title,
        plot_bgcolor="rgba(26, 31, 46, 0.7)",
        paper_bgcolor="rgba(26, 31, 46, 0.7)",
        hovermode="x unified",
    )
    return fig


def price_chart(result: PredictionResult, window: int = 30) -> go.Figure:
    """Historical line with the predictions overlaid on the most recent dates.

    Predictions are right-aligned to the date axis: the last n predictions map
    onto the last n dates, n = min(window, len(predictions), len(dates)).
    """
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=result.dates,
        y=result.historical_prices,
        mode="lines",
        name="Historical",
        line=dict(color=HISTORY_COLOR, width=3),
    ))

    n = min(window, len(result.predictions), len(result.dates))
    if n > 0:
        fig.add_trace(go.Scatter(
            x=result.dates[-n:],
            y=result.predictions[-n:],
            mode="lines+markers",
            name="Predictions",
            line=dict(color=UP_COLOR, width=3, dash="dash"),
            marker=dict(size=8, symbol="diamond", color=UP_COLOR),
        ))

    return _dark_layout(fig, f"{result.ticker} Stock Price Analysis", "Price ($)")


def synthetic_volume(prices, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Illustrative volume: price * (1000 + U[0, 500)), floored to whole shares."""
    rng = rng or np.random.default_rng()
    arr = np.asarray(prices, dtype=float)
    return np.floor(arr * (1000 + rng.random(arr.size) * 500)).astype(int)


def volume_chart(result: PredictionResult, rng: Optional[np.random.Generator] = None) -> go.Figure:
    prices = result.historical_prices
    volume = synthetic_volume(prices, rng)
    previous = [0.0] + list(prices[:-1])
    colors = [UP_COLOR if price > prev else DOWN_COLOR for price, prev in zip(prices, previous)]
    fig = go.Figure(go.Bar(
        x=result.dates[:len(prices)],
        y=volume,
        name="Volume",
        marker=dict(color=colors, opacity=0.8),
    ))
    return _dark_layout(fig, f"{result.ticker} Trading Volume", "Volume")
