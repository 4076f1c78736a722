from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from medilog.models.records import Flashcard, Reminder, ReminderIn
from medilog.models.user import Role
from medilog.services.logger import log_debug


class NotFoundError(Exception):
    pass


# -------------------------
# Helpers
# -------------------------
def _user_ref(db, uid: str):
    return db.collection("users").document(uid)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _flashcard_from_doc(doc) -> Flashcard:
    data = doc.to_dict() or {}
    return Flashcard(
        id=doc.id,
        title=data.get("title") or "Untitled",
        content=data.get("content") or "No content available",
        category=data.get("category") or "Uncategorized",
        date=data.get("date") or None,
    )


def _reminder_from_doc(doc) -> Reminder:
    data = doc.to_dict() or {}
    return Reminder(
        id=doc.id,
        medicine=data.get("medicine") or "",
        dosage=data.get("dosage") or "",
        frequency=data.get("frequency") or "",
        time=data.get("time") or "",
        days=list(data.get("days") or []),
        notes=data.get("notes"),
    )


# -------------------------
# Core API
# -------------------------
class RecordStore:
    """
    Profiles, flashcards and reminders in Firestore:
      users/{uid}
      users/{uid}/flashcards/{flashcard_id}
      users/{uid}/reminders/{reminder_id}
    """

    def __init__(self, db):
        self.db = db

    # ---- profiles ----
    def get_profile(self, uid: str) -> Optional[dict]:
        doc = _user_ref(self.db, uid).get()
        if not doc.exists:
            return None
        return doc.to_dict() or {}

    def create_profile(self, uid: str, name: str, email: str, role: Role) -> dict:
        profile = {
            "name": name,
            "email": email,
            "role": role.value,
            "createdAt": _now_iso(),
        }
        _user_ref(self.db, uid).set(profile)
        return profile

    # ---- flashcards ----
    def list_flashcards(self, uid: str) -> list[Flashcard]:
        docs = _user_ref(self.db, uid).collection("flashcards").stream()
        return [_flashcard_from_doc(d) for d in docs]

    def create_flashcard(
        self,
        uid: str,
        title: Optional[str],
        content: Optional[str],
        category: Optional[str],
    ) -> Flashcard:
        payload: dict[str, Any] = {
            "title": title or "Untitled",
            "content": content or "No content available",
            "category": category or "Uncategorized",
            "date": _now_iso(),
        }
        _, ref = _user_ref(self.db, uid).collection("flashcards").add(payload)
        log_debug("flashcard_created", {"uid": uid, "id": ref.id, "category": payload["category"]})
        return Flashcard(id=ref.id, **payload)

    # ---- reminders ----
    def list_reminders(self, uid: str) -> list[Reminder]:
        docs = _user_ref(self.db, uid).collection("reminders").stream()
        return [_reminder_from_doc(d) for d in docs]

    def create_reminder(self, uid: str, reminder: ReminderIn) -> Reminder:
        payload = reminder.model_dump()
        if payload.get("notes") is None:
            payload.pop("notes")
        payload["createdAt"] = _now_iso()

        _, ref = _user_ref(self.db, uid).collection("reminders").add(payload)
        log_debug("reminder_created", {"uid": uid, "id": ref.id, "medicine": reminder.medicine})
        return Reminder(id=ref.id, **reminder.model_dump())

    def delete_reminder(self, uid: str, reminder_id: str) -> None:
        ref = _user_ref(self.db, uid).collection("reminders").document(reminder_id)
        if not ref.get().exists:
            raise NotFoundError("Reminder not found")
        ref.delete()
        log_debug("reminder_deleted", {"uid": uid, "id": reminder_id})
