import os
from dataclasses import dataclass, field
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PROFILE_KEY = "__default__"


@dataclass(frozen=True)
class CompanyProfile:
    name: str
    sector: str
    focus: str


def _default_catalog() -> List[str]:
    return [
        "AAPL", "GOOGL", "MSFT", "AMZN", "TSLA", "NFLX", "NVDA", "JPM", "META", "AMD",
        "INTC", "CSCO", "ORCL", "IBM", "UBER", "LYFT", "SNAP", "TWTR", "SPOT", "ZM",
    ]


def _default_profiles() -> Dict[str, CompanyProfile]:
    return {
        "AAPL": CompanyProfile("Apple Inc.", "Technology", "consumer electronics and software"),
        "GOOGL": CompanyProfile("Alphabet Inc.", "Technology", "digital advertising and cloud services"),
        "MSFT": CompanyProfile("Microsoft Corporation", "Technology", "cloud computing and enterprise software"),
        "AMZN": CompanyProfile("Amazon.com Inc.", "E-commerce & Cloud", "retail and AWS services"),
        "TSLA": CompanyProfile("Tesla Inc.", "Automotive & Energy", "electric vehicles and renewables"),
        "NFLX": CompanyProfile("Netflix Inc.", "Entertainment", "streaming content"),
        "NVDA": CompanyProfile("NVIDIA Corporation", "Semiconductors", "GPUs and AI chips"),
        "JPM": CompanyProfile("JPMorgan Chase", "Finance", "banking and investment services"),
        "META": CompanyProfile("Meta Platforms", "Technology", "social media and metaverse"),
        "AMD": CompanyProfile("AMD Inc.", "Semiconductors", "processors and graphics"),
        # name is replaced by the ticker itself at lookup time
        DEFAULT_PROFILE_KEY: CompanyProfile("", "Unknown", "business operations"),
    }


@dataclass
class Config:
    """Configuration for the prediction dashboard."""
    api_url: str = field(default_factory=lambda: os.getenv("API_URL", "http://localhost:5000"))
    predict_path: str = "/predict"
    request_timeout: float = field(default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "60")))
    tickers: List[str] = field(default_factory=_default_catalog)
    company_profiles: Dict[str, CompanyProfile] = field(default_factory=_default_profiles)
    rsi_period: int = 14
    ma_short: int = 7
    ma_long: int = 21
    volume_window: int = 10
    chart_window: int = 30
    suggestion_limit: int = 8
    model_name: str = "GRU"

    @property
    def predict_url(self) -> str:
        return f"{self.api_url.rstrip('/')}{self.predict_path}"

    def profile_for(self, ticker: str) -> CompanyProfile:
        """Look up a company profile, falling back to the default entry for unknown tickers."""
        profile = self.company_profiles.get(ticker)
        if profile is not None:
            return profile
        fallback = self.company_profiles.get(
            DEFAULT_PROFILE_KEY, CompanyProfile("", "Unknown", "business operations")
        )
        return CompanyProfile(ticker, fallback.sector, fallback.focus)
