# medilog/services/assistant.py
"""
The assistant behind the chat widget and the summarize/suggest buttons.

There is no model here: replies come from an ordered list of keyword
rules and summaries from a fixed template, each after a simulated delay.
Anything implementing `Assistant` can replace KeywordAssistant without
touching the callers.
"""
from __future__ import annotations

import asyncio
from typing import List, Optional, Protocol, Sequence

from medilog.core.config import settings
from medilog.models.schemas import ChatMessage

DEFAULT_REPLY = "I'm your MediLog assistant. How can I help you today?"

# First matching rule wins, so order matters ("hi" also matches "this").
REPLY_RULES = [
    (
        ("medication", "medicine"),
        "MediLog can help you track your medications and set reminders. "
        "Would you like me to show you how to set up medication reminders?",
    ),
    (
        ("record", "voice"),
        "You can record medical interactions using our voice-to-text feature. "
        "Just navigate to the 'Record Interaction' page from your dashboard and "
        "click the microphone button to start recording.",
    ),
    (
        ("flashcard",),
        "MediLog's flashcard feature helps you remember important medical information. "
        "You can create flashcards manually or let our AI generate them from your medical records.",
    ),
    (
        ("search",),
        "You can search through your medical records using the Search feature. "
        "It allows you to filter by date, record type, and keywords to find exactly "
        "what you're looking for.",
    ),
    (
        ("hello", "hi"),
        "Hello! Welcome to MediLog. I'm here to help you navigate the app and "
        "answer any questions you might have.",
    ),
    (
        ("thank",),
        "You're welcome! If you have any other questions, feel free to ask anytime.",
    ),
    (
        ("help",),
        "I can help you with various aspects of MediLog, such as recording medical "
        "interactions, setting medication reminders, creating flashcards, or searching "
        "through your records. What would you like assistance with?",
    ),
]

SUMMARY_TEMPLATE = (
    "Patient presented with {symptoms}.\n"
    "Assessment indicates {diagnosis}.\n"
    "Recommended treatment includes {medications}.\n"
    "Follow-up appointment scheduled in 2 weeks."
)

SUMMARY_DEFAULTS = {
    "symptoms": "symptoms that include fatigue and headaches",
    "diagnosis": "possible hypertension",
    "medications": "regular monitoring and lifestyle changes",
}

SUGGESTED_FLASHCARDS = [
    {
        "title": "Blood Pressure",
        "content": "Normal range: 120/80 mmHg. Your current reading: 130/85 mmHg.",
    },
    {
        "title": "Medication Schedule",
        "content": "Take Lisinopril 10mg once daily in the morning with food.",
    },
    {
        "title": "Follow-up Appointment",
        "content": "Schedule a follow-up in 3 months for blood pressure monitoring.",
    },
]


class Assistant(Protocol):
    async def summarize(self, text: str, **details: Optional[str]) -> str: ...

    async def respond(self, history: Sequence[ChatMessage]) -> str: ...


def match_reply(message: str) -> str:
    text = message.lower()
    for keywords, reply in REPLY_RULES:
        if any(k in text for k in keywords):
            return reply
    return DEFAULT_REPLY


class KeywordAssistant:
    def __init__(
        self,
        chat_delay: Optional[float] = None,
        summary_delay: Optional[float] = None,
        flashcard_delay: Optional[float] = None,
    ):
        self.chat_delay = settings.CHAT_DELAY_SECONDS if chat_delay is None else chat_delay
        self.summary_delay = settings.SUMMARY_DELAY_SECONDS if summary_delay is None else summary_delay
        self.flashcard_delay = (
            settings.FLASHCARD_DELAY_SECONDS if flashcard_delay is None else flashcard_delay
        )

    async def respond(self, history: Sequence[ChatMessage]) -> str:
        await asyncio.sleep(self.chat_delay)
        if not history:
            return DEFAULT_REPLY
        return match_reply(history[-1].content)

    async def summarize(self, text: str, **details: Optional[str]) -> str:
        await asyncio.sleep(self.summary_delay)
        fields = {k: details.get(k) or v for k, v in SUMMARY_DEFAULTS.items()}
        return SUMMARY_TEMPLATE.format(**fields)

    async def suggest_flashcards(self, text: str) -> List[dict]:
        await asyncio.sleep(self.flashcard_delay)
        return [dict(card) for card in SUGGESTED_FLASHCARDS]
