from typing import Optional


class DashboardError(Exception):
    """Base class for every error the dashboard reports to the user."""


class TickerValidationError(DashboardError):
    """Ticker input rejected before any request is made."""


class PredictionServiceError(DashboardError):
    """Transport failure, non-OK status, or an explicit error payload from /predict."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProcessingError(DashboardError):
    """Fault raised while turning a received payload into metrics or a report."""


class EmptySeriesError(ProcessingError):
    """An indicator or report was asked to work on an empty price series."""
