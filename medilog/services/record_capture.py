"""
Record Capture Flow.

Recording:      idle -> recording -> idle  (toggle)
Summarizing:    idle -> summarizing -> summarized

Speech recognition runs in the browser; its results are posted back and
fed into a ClientRecognizer. A capture subscribes to the recognizer when
recording starts and unsubscribes when it stops, so there is at most one
listener per recording session.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional, Protocol, Tuple

from medilog.models.schemas import CaptureStatus, Notice, RecognitionBatch
from medilog.services.assistant import Assistant
from medilog.services.logger import get_logger, log_debug
from medilog.services.record_store import RecordStore

logger = get_logger(__name__)

ResultHandler = Callable[[RecognitionBatch], None]
ErrorHandler = Callable[[str], None]

SUMMARY_TITLE = "Generated Summary"
SUMMARY_CATEGORY = "Summaries"


class SpeechRecognizer(Protocol):
    supported: bool

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def subscribe(self, on_result: ResultHandler, on_error: ErrorHandler) -> Callable[[], None]: ...


class ClientRecognizer:
    """Recognizer whose events arrive from the browser over HTTP."""

    def __init__(self, supported: bool = True):
        self.supported = supported
        self.running = False
        self._listeners: List[Tuple[ResultHandler, ErrorHandler]] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        self.running = False

    def subscribe(self, on_result: ResultHandler, on_error: ErrorHandler) -> Callable[[], None]:
        pair = (on_result, on_error)
        self._listeners.append(pair)

        def unsubscribe():
            if pair in self._listeners:
                self._listeners.remove(pair)

        return unsubscribe

    def push_results(self, batch: RecognitionBatch) -> None:
        # Late results after stop() are dropped
        if not self.running:
            return
        for on_result, _ in list(self._listeners):
            on_result(batch)

    def push_error(self, error: str) -> None:
        for _, on_error in list(self._listeners):
            on_error(error)


class RecordCapture:
    def __init__(self, recognizer: SpeechRecognizer, assistant: Assistant, store: RecordStore, uid: str):
        self.recognizer = recognizer
        self.assistant = assistant
        self.store = store
        self.uid = uid

        self.recording = "idle"
        self.summary_state = "idle"
        self.transcript = ""
        self.summary = ""
        self.last_notice: Optional[Notice] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    def _notice(self, title: str, description: str, variant: str = "default") -> Notice:
        self.last_notice = Notice(title=title, description=description, variant=variant)
        return self.last_notice

    # ---------------- Recording ----------------
    def toggle_recording(self) -> Notice:
        if not self.recognizer.supported:
            return self._notice(
                "Not supported",
                "Speech recognition is not supported in your browser.",
                "destructive",
            )

        if self.recording == "recording":
            self._stop()
            return self._notice("Recording stopped", "Voice recording has been stopped.")

        self.transcript = ""
        self._unsubscribe = self.recognizer.subscribe(self._on_result, self._on_error)
        self.recognizer.start()
        self.recording = "recording"
        log_debug("recording_started", {"uid": self.uid})
        return self._notice("Recording started", "Voice recording has started. Speak clearly.")

    def _stop(self) -> None:
        self.recognizer.stop()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.recording = "idle"
        log_debug("recording_stopped", {"uid": self.uid, "chars": len(self.transcript)})

    def _on_result(self, batch: RecognitionBatch) -> None:
        for result in batch.results[batch.result_index:]:
            if result.is_final:
                self.transcript += result.transcript + " "

    def _on_error(self, error: str) -> None:
        logger.warning("Speech recognition error for %s: %s", self.uid, error)
        self._stop()
        self._notice("Error", f"Speech recognition error: {error}", "destructive")

    def set_transcript(self, text: str) -> None:
        """Manual entry / edits replace the transcript."""
        self.transcript = text

    def clear(self) -> None:
        self.transcript = ""
        self.summary = ""
        self.summary_state = "idle"

    def close(self) -> None:
        if self.recording == "recording":
            self._stop()

    # ---------------- Summary ----------------
    async def generate_summary(self, text: Optional[str] = None, **details: Optional[str]) -> Notice:
        content = self.transcript if text is None else text
        if not content or not content.strip():
            return self._notice(
                "No transcript",
                "Please record or enter text before generating a summary.",
                "destructive",
            )

        self.summary_state = "summarizing"
        try:
            summary = await self.assistant.summarize(content, **details)
            self.store.create_flashcard(self.uid, SUMMARY_TITLE, summary, SUMMARY_CATEGORY)
        except Exception:
            logger.exception("Error generating summary for %s", self.uid)
            self.summary_state = "idle"
            return self._notice(
                "Error",
                "Failed to generate summary. Please try again.",
                "destructive",
            )

        self.summary = summary
        self.summary_state = "summarized"
        return self._notice("Summary saved", "The summary has been saved as a flashcard.")

    def status(self) -> CaptureStatus:
        return CaptureStatus(
            recording=self.recording,
            summary_state=self.summary_state,
            transcript=self.transcript,
            summary=self.summary,
            notice=self.last_notice,
        )


class CaptureRegistry:
    """One RecordCapture per signed-in user, kept in process memory."""

    def __init__(self, assistant: Assistant, store: RecordStore):
        self.assistant = assistant
        self.store = store
        self._captures: Dict[str, RecordCapture] = {}

    def get(self, uid: str) -> RecordCapture:
        capture = self._captures.get(uid)
        if capture is None:
            capture = RecordCapture(ClientRecognizer(), self.assistant, self.store, uid)
            self._captures[uid] = capture
        return capture

    def discard(self, uid: str) -> None:
        capture = self._captures.pop(uid, None)
        if capture is not None:
            capture.close()

    def active_uids(self) -> List[str]:
        return list(self._captures)
