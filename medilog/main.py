from fastapi import FastAPI

from medilog.api.routes.router import api_router
from medilog.core import firebase
from medilog.services.assistant import KeywordAssistant
from medilog.services.identity import FirebaseIdentityProvider
from medilog.services.logger import get_logger, setup_logging
from medilog.services.record_capture import CaptureRegistry
from medilog.services.record_store import RecordStore
from medilog.services.session_store import build_session_manager

logger = get_logger(__name__)


def _wire(app: FastAPI, db) -> None:
    records = RecordStore(db)
    app.state.records = records
    app.state.captures = CaptureRegistry(app.state.assistant, records)


def create_app(db=None, identity=None, sessions=None, assistant=None) -> FastAPI:
    """
    Build the API. Anything not passed in is created from settings; the
    Firestore client is only created at startup when `db` is omitted.
    """
    app = FastAPI(title="MediLog Backend")

    app.state.sessions = sessions if sessions is not None else build_session_manager()
    app.state.identity = identity if identity is not None else FirebaseIdentityProvider()
    app.state.assistant = assistant if assistant is not None else KeywordAssistant()

    if db is not None:
        _wire(app, db)

    @app.on_event("startup")
    def startup():
        """Configure logging and connect to Firebase."""
        setup_logging()
        if db is None:
            firebase.init_firebase()
            _wire(app, firebase.get_db())
        logger.info("Sessions stored in %s", type(app.state.sessions.store).__name__)

    @app.get("/")
    async def root():
        return {"message": "MediLog Backend is running"}

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    app.include_router(api_router)
    return app


app = create_app()
