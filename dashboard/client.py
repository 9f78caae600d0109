"""
Client for the model-serving /predict endpoint.
Tickers are validated against the configured catalog before any request is made.
"""
from typing import Any, Dict, List, Optional, Sequence

import requests

from dashboard.config import Config
from dashboard.exception import PredictionServiceError, TickerValidationError
from logger.logger import get_logger

logger = get_logger()

SERVER_ERROR = "Server error"
GENERIC_ERROR = "Error analyzing stock data"


# ---------------------------------------------------------
# TICKER INPUT
# ---------------------------------------------------------
def validate_ticker(raw: Optional[str], catalog: Sequence[str]) -> str:
    """Normalize user input to an upper-case symbol known to the catalog."""
    ticker = (raw or "").strip().upper()
    if not ticker:
        raise TickerValidationError("Please enter a stock ticker")
    if ticker not in catalog:
        raise TickerValidationError("Invalid stock ticker")
    return ticker


def suggest_tickers(query: Optional[str], catalog: Sequence[str], limit: int = 8) -> List[str]:
    """Autocomplete: catalog symbols starting with the typed prefix."""
    prefix = (query or "").strip().upper()
    if not prefix:
        return []
    return [symbol for symbol in catalog if symbol.startswith(prefix)][:limit]


# ---------------------------------------------------------
# PREDICTIONS
# ---------------------------------------------------------
def _error_from_body(response: requests.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


class PredictionClient:
    """POSTs a ticker to the prediction service and returns the raw JSON payload."""

    def __init__(self, config: Optional[Config] = None, session: Optional[requests.Session] = None):
        self.config = config or Config()
        self.session = session

    def _post(self, url: str, data: Dict[str, str]) -> requests.Response:
        poster = self.session.post if self.session is not None else requests.post
        return poster(url, data=data, timeout=self.config.request_timeout)

    def predict(self, ticker: str) -> Dict[str, Any]:
        url = self.config.predict_url
        logger.info(f"Requesting prediction for {ticker} from {url}")
        try:
            r = self._post(url, {"ticker": ticker})
        except requests.RequestException as e:
            logger.error(f"Prediction request for {ticker} failed: {e}")
            raise PredictionServiceError(str(e) or GENERIC_ERROR) from e

        if not r.ok:
            message = _error_from_body(r) or SERVER_ERROR
            logger.error(f"Prediction service returned {r.status_code} for {ticker}: {message}")
            raise PredictionServiceError(message, status_code=r.status_code)

        try:
            payload = r.json()
        except ValueError as e:
            logger.error(f"Prediction service sent a non-JSON body for {ticker}")
            raise PredictionServiceError(GENERIC_ERROR, status_code=r.status_code) from e

        if not isinstance(payload, dict):
            raise PredictionServiceError(GENERIC_ERROR, status_code=r.status_code)
        if payload.get("error"):
            logger.error(f"Prediction service reported an error for {ticker}: {payload['error']}")
            raise PredictionServiceError(str(payload["error"]), status_code=r.status_code)

        logger.debug(f"Received prediction payload for {ticker}: keys={sorted(payload)}")
        return payload
