"""
Prediction request lifecycle: validate -> fetch -> normalize -> render -> report.

The controller never checks which widgets exist. It hands complete value objects
to a RenderTarget and lets the target decide what to show.
"""
from typing import Dict, Optional, Protocol

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from dashboard.charts import build_overview, history_frame, price_chart, volume_chart
from dashboard.client import GENERIC_ERROR, PredictionClient, validate_ticker
from dashboard.config import Config
from dashboard.exception import PredictionServiceError, TickerValidationError
from dashboard.normalizer import normalize_response
from dashboard.report import AnalysisReport, Explainer, build_explainer, build_report
from dashboard.schemas import Overview, PredictionResult
from dashboard.templates import render_explainer, render_sections
from logger.logger import get_logger

logger = get_logger()


class RenderTarget(Protocol):
    def set_busy(self, busy: bool) -> None: ...

    def notify(self, message: str, kind: str = "success") -> None: ...

    def show_overview(self, overview: Overview) -> None: ...

    def show_table(self, frame: pd.DataFrame) -> None: ...

    def show_charts(self, price_fig: go.Figure, volume_fig: go.Figure) -> None: ...

    def show_report(self, report: AnalysisReport, sections: Dict[str, str]) -> None: ...

    def show_explainer(self, explainer: Explainer, sections: Dict[str, str]) -> None: ...


class DashboardController:
    def __init__(self, target: RenderTarget, client: Optional[PredictionClient] = None,
                 config: Optional[Config] = None, rng: Optional[np.random.Generator] = None):
        self.config = config or Config()
        self.client = client or PredictionClient(self.config)
        self.target = target
        self.rng = rng or np.random.default_rng()

    def analyze(self, raw_ticker: Optional[str]) -> Optional[PredictionResult]:
        """Run one prediction end to end. Returns the result, or None if the request failed."""
        try:
            ticker = validate_ticker(raw_ticker, self.config.tickers)
        except TickerValidationError as e:
            logger.warning(f"Rejected ticker input {raw_ticker!r}: {e}")
            self.target.notify(str(e), "error")
            return None

        self.target.set_busy(True)
        try:
            try:
                raw = self.client.predict(ticker)
            except PredictionServiceError as e:
                self.target.notify(str(e) or GENERIC_ERROR, "error")
                return None

            try:
                result = self._render(raw, ticker)
            except Exception as e:
                logger.exception(f"Processing prediction data for {ticker} failed")
                self.target.notify(f"Error processing prediction data: {e}", "error")
                return None

            self.target.notify(f"Successfully analyzed {ticker} with {self.config.model_name} model", "success")
            return result
        finally:
            self.target.set_busy(False)

    def _render(self, raw, ticker: str) -> PredictionResult:
        result = normalize_response(raw, ticker)
        self.target.show_overview(build_overview(result))
        self.target.show_table(history_frame(result))
        self.target.show_charts(
            price_chart(result, self.config.chart_window),
            volume_chart(result, self.rng),
        )

        explainer = build_explainer(result, self.config, self.rng)
        self.target.show_explainer(explainer, render_explainer(explainer))

        report = build_report(result, self.config)
        self.target.show_report(report, render_sections(report))
        return result
