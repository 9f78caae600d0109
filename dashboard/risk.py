from dataclasses import dataclass

HIGH_VOLATILITY = 3.0
MODERATE_VOLATILITY = 1.5


@dataclass(frozen=True)
class RiskTier:
    level: str
    stop_loss_pct: float
    stop_label: str
    position_size: str
    label: str


RISK_TIERS = {
    "HIGH": RiskTier("HIGH", -5.0, "Tight stop", "2-5%", "Large swings expected"),
    "MODERATE": RiskTier("MODERATE", -8.0, "Normal stop", "5-10%", "Normal fluctuations"),
    "LOW": RiskTier("LOW", -10.0, "Wide stop", "10-15%", "Stable, predictable"),
}


@dataclass(frozen=True)
class RiskProfile:
    level: str
    volatility: float
    stop_loss_pct: float
    stop_loss_price: float
    stop_label: str
    position_size: str
    label: str

    @property
    def daily_swing(self) -> float:
        return self.volatility / 2


def risk_level(volatility: float) -> str:
    if volatility > HIGH_VOLATILITY:
        return "HIGH"
    if volatility > MODERATE_VOLATILITY:
        return "MODERATE"
    return "LOW"


def classify_risk(volatility: float, current_price: float) -> RiskProfile:
    """Map volatility onto a fixed tier with its stop-loss and position size."""
    tier = RISK_TIERS[risk_level(volatility)]
    return RiskProfile(
        level=tier.level,
        volatility=volatility,
        stop_loss_pct=tier.stop_loss_pct,
        stop_loss_price=current_price * (1 + tier.stop_loss_pct / 100),
        stop_label=tier.stop_label,
        position_size=tier.position_size,
        label=tier.label,
    )
