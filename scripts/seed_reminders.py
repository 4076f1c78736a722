"""
Seed a user's medication reminders and a couple of flashcards.

Usage: python scripts/seed_reminders.py <uid>
Reads FIREBASE_CREDENTIALS like the API does.
"""
import sys

from medilog.core.firebase import get_db
from medilog.models.records import ReminderIn
from medilog.services.record_store import RecordStore

reminders = [
    ReminderIn(medicine="Lisinopril", dosage="10mg", frequency="daily", time="08:00",
               days=["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"], notes="Take with food"),
    ReminderIn(medicine="Metformin", dosage="500mg", frequency="twice daily", time="19:00",
               days=["Mon", "Wed", "Fri"]),
]

flashcards = [
    ("Blood Pressure", "Normal range: 120/80 mmHg.", "Vitals"),
    ("Follow-up Appointment", "Cardiology follow-up in 3 months.", "Appointments"),
]


def seed(uid: str):
    store = RecordStore(get_db())
    if store.get_profile(uid) is None:
        print(f"No profile at users/{uid}; register the user first.")
        return

    for r in reminders:
        saved = store.create_reminder(uid, r)
        print(f"Added reminder {saved.medicine} ({saved.id})")

    for title, content, category in flashcards:
        card = store.create_flashcard(uid, title, content, category)
        print(f"Added flashcard {card.title} ({card.id})")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    seed(sys.argv[1])
