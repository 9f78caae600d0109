"""Tests for ticker validation, autocomplete and the /predict client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from dashboard.client import PredictionClient, suggest_tickers, validate_ticker
from dashboard.exception import PredictionServiceError, TickerValidationError

CATALOG = ["AAPL", "AMZN", "AMD", "MSFT", "META"]


def _response(status: int, body=None, json_error: bool = False):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    if json_error:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body
    return resp


def test_validate_ticker_normalizes_case_and_whitespace():
    assert validate_ticker("  aapl ", CATALOG) == "AAPL"


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_validate_ticker_empty(raw):
    with pytest.raises(TickerValidationError, match="Please enter a stock ticker"):
        validate_ticker(raw, CATALOG)


def test_validate_ticker_unknown():
    with pytest.raises(TickerValidationError, match="Invalid stock ticker"):
        validate_ticker("XYZ", CATALOG)


def test_suggest_tickers_prefix_match():
    assert suggest_tickers("a", CATALOG) == ["AAPL", "AMZN", "AMD"]
    assert suggest_tickers("am", CATALOG, limit=1) == ["AMZN"]


def test_suggest_tickers_empty_query():
    assert suggest_tickers("  ", CATALOG) == []
    assert suggest_tickers("ZZ", CATALOG) == []


def test_predict_posts_ticker_as_form_field(config, rising_payload):
    """The ticker goes out as a single form field to {api_url}/predict."""
    with patch("dashboard.client.requests.post", return_value=_response(200, rising_payload)) as post:
        payload = PredictionClient(config).predict("AAPL")

    assert payload == rising_payload
    post.assert_called_once_with(
        "http://predict.test/predict", data={"ticker": "AAPL"}, timeout=config.request_timeout
    )


def test_predict_uses_injected_session(config, rising_payload):
    session = MagicMock()
    session.post.return_value = _response(200, rising_payload)
    assert PredictionClient(config, session=session).predict("AAPL") == rising_payload
    session.post.assert_called_once()


def test_predict_surfaces_server_error_message(config):
    with patch("dashboard.client.requests.post", return_value=_response(404, {"error": "Ticker not supported"})):
        with pytest.raises(PredictionServiceError, match="Ticker not supported") as exc:
            PredictionClient(config).predict("AAPL")
    assert exc.value.status_code == 404


def test_predict_generic_server_error(config):
    with patch("dashboard.client.requests.post", return_value=_response(500, json_error=True)):
        with pytest.raises(PredictionServiceError, match="Server error"):
            PredictionClient(config).predict("AAPL")


def test_predict_error_field_in_ok_response(config):
    with patch("dashboard.client.requests.post", return_value=_response(200, {"error": "Model not loaded"})):
        with pytest.raises(PredictionServiceError, match="Model not loaded"):
            PredictionClient(config).predict("AAPL")


def test_predict_transport_failure(config):
    with patch("dashboard.client.requests.post", side_effect=requests.ConnectionError("connection refused")):
        with pytest.raises(PredictionServiceError, match="connection refused"):
            PredictionClient(config).predict("AAPL")


def test_predict_transport_failure_without_message(config):
    with patch("dashboard.client.requests.post", side_effect=requests.Timeout()):
        with pytest.raises(PredictionServiceError, match="Error analyzing stock data"):
            PredictionClient(config).predict("AAPL")
