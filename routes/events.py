from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.account_service import get_account
from services.event_service import add_event, delete_event, list_events, toggle_event, update_event

router = APIRouter()


class EventCreate(BaseModel):
    name: str
    amount: float
    category: str
    type: str
    start_date: str
    end_date: Optional[str] = None
    once_date: Optional[str] = None
    monthly_day: Optional[int] = None
    yearly_month: Optional[int] = None
    yearly_day: Optional[int] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    enabled: bool = True


class EventUpdate(BaseModel):
    name: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    type: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    once_date: Optional[str] = None
    monthly_day: Optional[int] = None
    yearly_month: Optional[int] = None
    yearly_day: Optional[int] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    enabled: Optional[bool] = None


class EventToggle(BaseModel):
    enabled: bool


def _unwrap(result):
    if result is None:
        raise HTTPException(status_code=404, detail="Not found")
    if not result["success"]:
        raise HTTPException(status_code=422, detail={"errors": result["errors"]})
    return asdict(result["event"])


@router.get("/accounts/{account_id}/events")
def get_events(account_id: str):
    if get_account(account_id) is None:
        raise HTTPException(status_code=404, detail="Account not found")
    events = list_events(account_id)
    return {
        "count": len(events),
        "events": [asdict(e) for e in events]
    }


@router.post("/accounts/{account_id}/events")
def create_event(account_id: str, payload: EventCreate):
    return _unwrap(add_event(account_id, payload.model_dump()))


@router.put("/events/{event_id}")
def edit_event(event_id: str, payload: EventUpdate):
    # only fields the client actually sent; an explicit null clears the field
    return _unwrap(update_event(event_id, payload.model_dump(exclude_unset=True)))


@router.post("/events/{event_id}/toggle")
def set_event_enabled(event_id: str, payload: EventToggle):
    event = toggle_event(event_id, payload.enabled)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return asdict(event)


@router.delete("/events/{event_id}")
def remove_event(event_id: str):
    if not delete_event(event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return {"success": True}
