"""Flashcard routes, always scoped to the signed-in user."""
from fastapi import APIRouter, Body, Depends

from medilog.api.deps import get_assistant, get_records, require_session
from medilog.models.records import FlashcardIn
from medilog.models.schemas import SuggestRequest
from medilog.models.user import User
from medilog.services.record_store import RecordStore

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


@router.get("/")
async def list_flashcards(
    user: User = Depends(require_session),
    records: RecordStore = Depends(get_records),
):
    return {"items": [c.model_dump() for c in records.list_flashcards(user.id)]}


@router.post("/", status_code=201)
async def create_flashcard(
    payload: FlashcardIn = Body(...),
    user: User = Depends(require_session),
    records: RecordStore = Depends(get_records),
):
    card = records.create_flashcard(user.id, payload.title, payload.content, payload.category)
    return {"message": "Flashcard saved", "item": card.model_dump()}


@router.post("/suggest")
async def suggest_flashcards(
    payload: SuggestRequest = Body(...),
    user: User = Depends(require_session),
    assistant=Depends(get_assistant),
):
    """Draft flashcards for the user to review; nothing is saved here."""
    if not payload.content.strip():
        return {
            "items": [],
            "notice": {
                "title": "No content",
                "description": "Please enter some medical information first.",
                "variant": "destructive",
            },
        }

    cards = await assistant.suggest_flashcards(payload.content)
    return {
        "items": cards,
        "notice": {
            "title": "Flashcards generated",
            "description": "AI has generated flashcards based on your medical information.",
            "variant": "default",
        },
    }
