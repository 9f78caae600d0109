from numbers import Real
from typing import Any, Dict, List, Optional

from dashboard.schemas import HistoricalRow, ModelMetrics, PredictionResult
from logger.logger import get_logger

logger = get_logger()

BASELINE_PRICE = 100.0
ZERO_METRIC = "0.0000"


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _float_list(value: Any, field: str = "series") -> List[float]:
    items = _as_list(value)
    numbers = [float(v) for v in items if _is_number(v)]
    dropped = len(items) - len(numbers)
    if dropped:
        logger.warning(f"Dropped {dropped} non-numeric entries from {field}")
    return numbers


def _format_metric(metrics: Dict[str, Any], key: str) -> str:
    value = metrics.get(key)
    return f"{value:.4f}" if _is_number(value) else ZERO_METRIC


def compute_accuracy(rmse: Any, historical_prices: List[float]) -> float:
    """100 minus the RMSE as a percentage of the average historical price, clamped to [0, 100].

    With no historical prices the average falls back to a baseline of 100; this is a
    rough confidence proxy, not a calibrated accuracy.
    """
    error = float(rmse) if _is_number(rmse) else 0.0
    avg_price = sum(historical_prices) / len(historical_prices) if historical_prices else BASELINE_PRICE
    if avg_price == 0:
        return 0.0
    error_percent = error / avg_price * 100
    return max(0.0, min(100.0, 100 - error_percent))


def compute_trend(historical_prices: List[float], predictions: List[float]) -> str:
    if not historical_prices or not predictions:
        return "Neutral"
    avg_hist = sum(historical_prices) / len(historical_prices)
    avg_pred = sum(predictions) / len(predictions)
    return "Bullish" if avg_pred >= avg_hist else "Bearish"


def _parse_rows(value: Any) -> List[HistoricalRow]:
    rows = []
    for item in _as_list(value):
        if not isinstance(item, dict):
            continue
        rows.append(HistoricalRow(
            date=str(item.get("date", "")),
            Open=float(item["Open"]) if _is_number(item.get("Open")) else 0.0,
            Close=float(item["Close"]) if _is_number(item.get("Close")) else 0.0,
            High=float(item["High"]) if _is_number(item.get("High")) else 0.0,
            Low=float(item["Low"]) if _is_number(item.get("Low")) else 0.0,
        ))
    return rows


def normalize_response(raw: Optional[Dict[str, Any]], requested_ticker: str) -> PredictionResult:
    """Map a /predict payload of any shape onto a fully-defaulted PredictionResult."""
    raw = raw if isinstance(raw, dict) else {}
    metrics = raw.get("metrics") if isinstance(raw.get("metrics"), dict) else {}

    historical_prices = _float_list(raw.get("historical_prices"), "historical_prices")
    predictions = _float_list(raw.get("predictions"), "predictions")
    dates = [str(d) for d in _as_list(raw.get("dates"))]

    if len(dates) != len(historical_prices):
        logger.warning(
            f"Response for {requested_ticker} has {len(dates)} dates but {len(historical_prices)} prices"
        )

    model_metrics = ModelMetrics(
        mse=_format_metric(metrics, "mse"),
        rmse=_format_metric(metrics, "rmse"),
        mae=_format_metric(metrics, "mae"),
        accuracy=f"{compute_accuracy(metrics.get('rmse'), historical_prices):.2f}",
        trend=compute_trend(historical_prices, predictions),
    )

    return PredictionResult(
        ticker=str(raw.get("ticker") or requested_ticker),
        dates=dates,
        historical_prices=historical_prices,
        predictions=predictions,
        historical_data=_parse_rows(raw.get("historical_data")),
        metrics=model_metrics,
    )
