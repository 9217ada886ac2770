from dataclasses import asdict, dataclass
from typing import List


@dataclass
class ForecastResponseDTO:
    """Complete forecast response: daily timeline plus analytics."""
    account_id: str
    currency: str
    start_date: str  # ISO format, "" when there is no anchor
    end_date: str  # ISO format
    warning_threshold: float
    timeline: List[dict]
    analytics: dict

    @classmethod
    def from_forecast(cls, account, forecast, warning_threshold):
        """Convert a Forecast into a JSON-serializable DTO."""
        timeline = forecast.timeline
        return cls(
            account_id=account.id,
            currency=account.currency,
            start_date=timeline[0].date if timeline else "",
            end_date=timeline[-1].date if timeline else "",
            warning_threshold=warning_threshold,
            timeline=[asdict(point) for point in timeline],
            analytics=asdict(forecast.summary),
        )
