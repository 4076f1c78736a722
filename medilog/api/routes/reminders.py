"""Medication reminder routes, always scoped to the signed-in user."""
from fastapi import APIRouter, Body, Depends, HTTPException

from medilog.api.deps import get_records, require_session
from medilog.models.records import ReminderIn
from medilog.models.user import User
from medilog.services.record_store import NotFoundError, RecordStore

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.get("/")
async def list_reminders(
    user: User = Depends(require_session),
    records: RecordStore = Depends(get_records),
):
    return {"items": [r.model_dump() for r in records.list_reminders(user.id)]}


@router.post("/", status_code=201)
async def create_reminder(
    payload: ReminderIn = Body(...),
    user: User = Depends(require_session),
    records: RecordStore = Depends(get_records),
):
    reminder = records.create_reminder(user.id, payload)
    return {"message": "Reminder added", "item": reminder.model_dump()}


@router.delete("/{reminder_id}")
async def delete_reminder(
    reminder_id: str,
    user: User = Depends(require_session),
    records: RecordStore = Depends(get_records),
):
    try:
        records.delete_reminder(user.id, reminder_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"message": "Reminder deleted", "id": reminder_id}
