from typing import List, Literal, Optional

from pydantic import BaseModel, Field

# Request/response models for the chat, navigation and record-capture APIs

ChatRole = Literal["user", "assistant"]
NoticeVariant = Literal["default", "destructive"]
RecordingState = Literal["idle", "recording"]
SummaryState = Literal["idle", "summarizing", "summarized"]


class ChatMessage(BaseModel):
    id: Optional[str] = None
    role: ChatRole
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(..., min_length=1)


class Notice(BaseModel):
    """What the frontend shows as a toast."""
    title: str
    description: str
    variant: NoticeVariant = "default"


class NavItem(BaseModel):
    title: str
    href: str
    icon: str
    active: bool = False


class ShellHeader(BaseModel):
    app_name: str = "MediLog"
    user_name: Optional[str] = None
    account_menu: List[str] = Field(default_factory=lambda: ["Profile", "Settings", "Log out"])


class Shell(BaseModel):
    role: str
    header: ShellHeader
    sidebar: List[NavItem]
    content: Optional[dict] = None


class QuickAction(BaseModel):
    title: str
    description: str
    href: str
    icon: str


class RecognitionResult(BaseModel):
    transcript: str
    is_final: bool = False


class RecognitionBatch(BaseModel):
    """One onresult event from the browser's speech recognition."""
    result_index: int = 0
    results: List[RecognitionResult] = Field(default_factory=list)


class RecognitionErrorIn(BaseModel):
    error: str


class ToggleRequest(BaseModel):
    # The browser reports whether SpeechRecognition exists
    speech_supported: bool = True


class TranscriptIn(BaseModel):
    transcript: str = ""


class SummaryRequest(BaseModel):
    text: Optional[str] = None
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    medications: Optional[str] = None


class SuggestRequest(BaseModel):
    content: str = ""


class CaptureStatus(BaseModel):
    recording: RecordingState
    summary_state: SummaryState
    transcript: str
    summary: str
    notice: Optional[Notice] = None
