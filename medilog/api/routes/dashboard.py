from datetime import datetime

from fastapi import APIRouter, Depends

from medilog.api.deps import get_records, require_role
from medilog.models.user import Role, User
from medilog.services.navigation import quick_actions, render_shell
from medilog.services.record_store import RecordStore
from medilog.services.time_utils import upcoming_today

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/patient")
async def patient_dashboard(
    user: User = Depends(require_role([Role.PATIENT])),
    records: RecordStore = Depends(get_records),
):
    """
    Patient dashboard:
    - quick actions into the main features
    - today's remaining medication reminders
    """
    reminders = records.list_reminders(user.id)
    content = {
        "greeting": f"Welcome, {user.name}" if user.name else "Welcome",
        "quick_actions": [a.model_dump() for a in quick_actions(user.role)],
        "upcoming_reminders": [r.model_dump() for r in upcoming_today(reminders, datetime.now())],
    }
    return render_shell(user, "/dashboard/patient", content)


@router.get("/caregiver")
async def caregiver_dashboard(
    user: User = Depends(require_role([Role.CAREGIVER])),
    records: RecordStore = Depends(get_records),
):
    content = {
        "greeting": f"Welcome, {user.name}" if user.name else "Welcome",
        "quick_actions": [a.model_dump() for a in quick_actions(user.role)],
        "flashcard_count": len(records.list_flashcards(user.id)),
        "reminder_count": len(records.list_reminders(user.id)),
    }
    return render_shell(user, "/dashboard/caregiver", content)
