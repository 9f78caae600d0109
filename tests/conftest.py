"""Shared pytest fixtures: canned /predict payloads and a recording render target."""

from __future__ import annotations

import os
import tempfile

# Keep test log files out of the working tree; must run before logger.logger is imported.
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "stock-dashboard-test-logs"))

import numpy as np
import pandas as pd
import pytest

from dashboard.config import Config


def _payload(ticker: str, prices: list[float], predictions: list[float]) -> dict:
    dates = [str(d.date()) for d in pd.bdate_range("2024-01-01", periods=len(prices))]
    return {
        "ticker": ticker,
        "dates": dates,
        "historical_prices": prices,
        "predictions": predictions,
        "historical_data": [
            {"date": d, "Open": p - 0.5, "Close": p, "High": p + 1, "Low": p - 1}
            for d, p in zip(dates, prices)
        ],
        "metrics": {"mse": 6.25, "rmse": 2.5, "mae": 1.75},
    }


@pytest.fixture
def config():
    """Default config pointed at a fake host."""
    return Config(api_url="http://predict.test")


@pytest.fixture
def rising_payload():
    """30 days climbing 100 -> 129, model expects a further rise to 135."""
    return _payload("AAPL", [100.0 + i for i in range(30)], [130.0, 131.0, 132.0, 133.0, 135.0])


@pytest.fixture
def falling_payload():
    """Mirror image of rising_payload: 129 -> 100, model expects a drop to 94."""
    return _payload("TSLA", [129.0 - i for i in range(30)], [99.0, 98.0, 97.0, 96.0, 94.0])


@pytest.fixture
def rng():
    return np.random.default_rng(42)


class RecordingTarget:
    """RenderTarget that remembers every call."""

    def __init__(self):
        self.busy: list[bool] = []
        self.notifications: list[tuple[str, str]] = []
        self.shown: dict = {}

    def set_busy(self, busy):
        self.busy.append(busy)

    def notify(self, message, kind="success"):
        self.notifications.append((kind, message))

    def show_overview(self, overview):
        self.shown["overview"] = overview

    def show_table(self, frame):
        self.shown["table"] = frame

    def show_charts(self, price_fig, volume_fig):
        self.shown["charts"] = (price_fig, volume_fig)

    def show_report(self, report, sections):
        self.shown["report"] = (report, sections)

    def show_explainer(self, explainer, sections):
        self.shown["explainer"] = (explainer, sections)


@pytest.fixture
def target():
    return RecordingTarget()
