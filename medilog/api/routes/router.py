from fastapi import APIRouter

from medilog.api.routes import auth, chat, dashboard, flashcards, navigation, record, reminders

api_router = APIRouter()

# Session + routing
api_router.include_router(auth.router)
api_router.include_router(navigation.router)
api_router.include_router(dashboard.router)

# Per-user records
api_router.include_router(flashcards.router)
api_router.include_router(reminders.router)
api_router.include_router(record.router)

# Assistant
api_router.include_router(chat.router)
