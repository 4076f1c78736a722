"""Per-user documents stored under users/{uid} in Firestore."""
from typing import List, Optional

from pydantic import BaseModel, Field


class Flashcard(BaseModel):
    id: Optional[str] = None
    title: str = "Untitled"
    content: str = "No content available"
    category: str = "Uncategorized"
    date: Optional[str] = None


class FlashcardIn(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None


class Reminder(BaseModel):
    id: Optional[str] = None
    medicine: str = ""
    dosage: str = ""
    frequency: str = ""
    time: str = ""                                  # "HH:MM"
    days: List[str] = Field(default_factory=list)   # ["Mon", "Wed", ...]
    notes: Optional[str] = None


class ReminderIn(BaseModel):
    medicine: str = ""
    dosage: str = ""
    frequency: str = ""
    time: str = ""
    days: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
