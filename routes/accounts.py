from dataclasses import asdict
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.account_service import (
    create_account,
    delete_account,
    delete_snapshot,
    get_account,
    list_accounts,
    list_snapshots,
    record_snapshot,
    update_account,
)
from services.sample_data_service import load_sample_data
from utils.dates import is_valid_iso_date

router = APIRouter()


class AccountCreate(BaseModel):
    name: str
    initial_balance: float = 0.0
    currency: Optional[str] = None
    warning_threshold: float = 0.0
    type_label: Optional[str] = None
    color: Optional[str] = None
    icon_key: Optional[str] = None


class AccountUpdate(BaseModel):
    name: Optional[str] = None
    initial_balance: Optional[float] = None
    currency: Optional[str] = None
    warning_threshold: Optional[float] = None
    type_label: Optional[str] = None
    color: Optional[str] = None
    icon_key: Optional[str] = None


class SnapshotCreate(BaseModel):
    date: str
    balance: float
    source: Literal["initial", "manual", "import"] = "manual"
    note: Optional[str] = None


def _require_account(account_id):
    account = get_account(account_id)
    if account is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


@router.get("/accounts")
def get_accounts():
    accounts = list_accounts()
    return {
        "count": len(accounts),
        "accounts": [asdict(a) for a in accounts]
    }


@router.post("/accounts")
def add_account(payload: AccountCreate):
    if not payload.name.strip():
        raise HTTPException(status_code=422, detail="Account name must not be empty")
    account = create_account(**payload.model_dump())
    return asdict(account)


@router.get("/accounts/{account_id}")
def get_account_detail(account_id: str):
    return asdict(_require_account(account_id))


@router.put("/accounts/{account_id}")
def edit_account(account_id: str, payload: AccountUpdate):
    account = update_account(account_id, payload.model_dump(exclude_unset=True))
    if account is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return asdict(account)


@router.delete("/accounts/{account_id}")
def remove_account(account_id: str):
    _require_account(account_id)
    if not delete_account(account_id):
        raise HTTPException(status_code=409, detail="The last account cannot be deleted")
    return {"success": True}


# -------------------------
# BALANCE SNAPSHOTS
# -------------------------

@router.get("/accounts/{account_id}/snapshots")
def get_snapshots(account_id: str):
    _require_account(account_id)
    snapshots = list_snapshots(account_id)
    return {
        "count": len(snapshots),
        "snapshots": [asdict(s) for s in snapshots]
    }


@router.post("/accounts/{account_id}/snapshots")
def add_snapshot(account_id: str, payload: SnapshotCreate):
    """Record a balance calibration. A snapshot on the same date is overwritten."""
    _require_account(account_id)
    if not is_valid_iso_date(payload.date):
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD.")
    snapshot = record_snapshot(account_id, **payload.model_dump())
    return asdict(snapshot)


@router.delete("/snapshots/{snapshot_id}")
def remove_snapshot(snapshot_id: str):
    if not delete_snapshot(snapshot_id):
        raise HTTPException(status_code=404, detail="Snapshot not found")
    return {"success": True}


# -------------------------
# SAMPLE DATA
# -------------------------

@router.post("/accounts/{account_id}/sample-data")
def seed_sample_data(account_id: str):
    events = load_sample_data(account_id)
    if events is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return {"success": True, "events": len(events)}
