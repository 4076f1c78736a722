"""Record Capture Flow routes.

The browser runs speech recognition and forwards its onresult/onerror
events here; the transcript, recording state and summary live in the
user's RecordCapture.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends

from medilog.api.deps import get_captures, require_session
from medilog.models.schemas import (
    CaptureStatus,
    RecognitionBatch,
    RecognitionErrorIn,
    SummaryRequest,
    ToggleRequest,
    TranscriptIn,
)
from medilog.models.user import User
from medilog.services.record_capture import CaptureRegistry

router = APIRouter(prefix="/record", tags=["record"])


@router.get("/", response_model=CaptureStatus)
async def capture_status(
    user: User = Depends(require_session),
    captures: CaptureRegistry = Depends(get_captures),
):
    return captures.get(user.id).status()


@router.post("/toggle", response_model=CaptureStatus)
async def toggle_recording(
    payload: Optional[ToggleRequest] = Body(None),
    user: User = Depends(require_session),
    captures: CaptureRegistry = Depends(get_captures),
):
    capture = captures.get(user.id)
    payload = payload or ToggleRequest()
    # Support is reported when recording starts; a stop always goes through.
    if capture.recording == "idle":
        capture.recognizer.supported = payload.speech_supported
    capture.toggle_recording()
    return capture.status()


@router.post("/results", response_model=CaptureStatus)
async def recognition_results(
    payload: RecognitionBatch = Body(...),
    user: User = Depends(require_session),
    captures: CaptureRegistry = Depends(get_captures),
):
    capture = captures.get(user.id)
    capture.recognizer.push_results(payload)
    return capture.status()


@router.post("/error", response_model=CaptureStatus)
async def recognition_error(
    payload: RecognitionErrorIn = Body(...),
    user: User = Depends(require_session),
    captures: CaptureRegistry = Depends(get_captures),
):
    capture = captures.get(user.id)
    capture.recognizer.push_error(payload.error)
    return capture.status()


@router.post("/transcript", response_model=CaptureStatus)
async def edit_transcript(
    payload: TranscriptIn = Body(...),
    user: User = Depends(require_session),
    captures: CaptureRegistry = Depends(get_captures),
):
    capture = captures.get(user.id)
    capture.set_transcript(payload.transcript)
    return capture.status()


@router.post("/clear", response_model=CaptureStatus)
async def clear_capture(
    user: User = Depends(require_session),
    captures: CaptureRegistry = Depends(get_captures),
):
    capture = captures.get(user.id)
    capture.clear()
    return capture.status()


@router.post("/summary", response_model=CaptureStatus)
async def generate_summary(
    payload: Optional[SummaryRequest] = Body(None),
    user: User = Depends(require_session),
    captures: CaptureRegistry = Depends(get_captures),
):
    capture = captures.get(user.id)
    payload = payload or SummaryRequest()
    await capture.generate_summary(
        payload.text,
        symptoms=payload.symptoms,
        diagnosis=payload.diagnosis,
        medications=payload.medications,
    )
    return capture.status()
