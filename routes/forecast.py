from dataclasses import asdict
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query

import config
from services.forecast_dto import ForecastResponseDTO
from services.forecast_service import calculate_account_forecast
from utils.dates import is_valid_iso_date

router = APIRouter()


def _run_forecast(account_id, months, mode, today, threshold=None):
    if today and not is_valid_iso_date(today):
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD.")

    result = calculate_account_forecast(
        account_id,
        months=months,
        mode=mode,
        today=today,
        warning_threshold=threshold,
    )
    if result is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return result


@router.get("/accounts/{account_id}/forecast")
def get_forecast(
    account_id: str,
    months: Optional[int] = Query(None, ge=1, le=config.MAX_HORIZON_MONTHS),
    mode: Literal["latest", "segments"] = Query("latest"),
    today: Optional[str] = Query(None),
):
    """
    Return the daily balance projection and its analytics for an account.

    Query Parameters:
        months (optional): Horizon in months. Defaults to the preferred view length.
        mode (optional): "latest" projects from the newest snapshot;
                         "segments" replays every snapshot segment.
        today (optional): Reference date in ISO format (YYYY-MM-DD).
                          Defaults to today if not provided.

    Deterministic and read-only.
    """
    account, forecast = _run_forecast(account_id, months, mode, today)
    dto = ForecastResponseDTO.from_forecast(account, forecast, account.warning_threshold)
    return asdict(dto)


@router.get("/accounts/{account_id}/analytics")
def get_analytics(
    account_id: str,
    months: Optional[int] = Query(None, ge=1, le=config.MAX_HORIZON_MONTHS),
    mode: Literal["latest", "segments"] = Query("latest"),
    today: Optional[str] = Query(None),
    threshold: Optional[float] = Query(None),
):
    """Analytics only; ``threshold`` overrides the account's warning threshold."""
    _, forecast = _run_forecast(account_id, months, mode, today, threshold)
    return asdict(forecast.summary)
