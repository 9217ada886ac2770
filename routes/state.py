from dataclasses import asdict
from typing import Literal, Optional

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

import config
from services.account_service import get_preferences, update_preferences
from services.state_transfer_service import export_state, import_state, reset_state

router = APIRouter()


class PreferencesUpdate(BaseModel):
    default_view_months: Optional[int] = None
    chart_type: Optional[Literal["line", "area"]] = None
    show_weekends: Optional[bool] = None


# -------------------------
# PREFERENCES
# -------------------------

@router.get("/preferences")
def read_preferences():
    return asdict(get_preferences())


@router.put("/preferences")
def edit_preferences(payload: PreferencesUpdate):
    months = payload.default_view_months
    if months is not None and not 1 <= months <= config.MAX_HORIZON_MONTHS:
        raise HTTPException(
            status_code=422,
            detail=f"default_view_months must be between 1 and {config.MAX_HORIZON_MONTHS}"
        )
    return asdict(update_preferences(payload.model_dump(exclude_unset=True)))


# -------------------------
# EXPORT / IMPORT
# -------------------------

@router.get("/state/export")
def download_state():
    return Response(
        content=export_state(),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="future-money-state.json"'},
    )


@router.post("/state/import")
def upload_state(file: UploadFile = File(...)):
    contents_bytes = file.file.read()

    try:
        contents = contents_bytes.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded JSON")

    try:
        summary = import_state(contents)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"success": True, "imported": summary}


@router.post("/state/reset")
def reset():
    account = reset_state()
    return {"success": True, "account": asdict(account)}
