from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class HistoricalRow(BaseModel):
    """One OHLC row as delivered by /predict (capitalised keys are the wire format)."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date: str
    open: float = Field(0.0, alias="Open")
    close: float = Field(0.0, alias="Close")
    high: float = Field(0.0, alias="High")
    low: float = Field(0.0, alias="Low")


class ModelMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    mse: str = "0.0000"
    rmse: str = "0.0000"
    mae: str = "0.0000"
    accuracy: str = "0.00"
    trend: Literal["Bullish", "Bearish", "Neutral"] = "Neutral"


class PredictionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: str
    dates: List[str] = Field(default_factory=list)
    historical_prices: List[float] = Field(default_factory=list)
    predictions: List[float] = Field(default_factory=list)
    historical_data: List[HistoricalRow] = Field(default_factory=list)
    metrics: ModelMetrics = Field(default_factory=ModelMetrics)


class DerivedMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    accuracy: float
    trend: Literal["Bullish", "Bearish", "Neutral"]
    ma7: float
    ma21: float
    rsi: float
    volatility: float
    volume_trend: float
    recommendation: Literal["BUY", "SELL", "HOLD"]
    confidence: Literal["High", "Moderate"]


class Overview(BaseModel):
    """Headline numbers shown above the charts."""
    model_config = ConfigDict(frozen=True)

    ticker: str
    current_price: float
    predicted_price: float
    predicted_change: str
    accuracy: str
    mse: str
    rmse: str
    trend: str
