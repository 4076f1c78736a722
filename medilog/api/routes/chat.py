# medilog/api/routes/chat.py

import json

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from medilog.api.deps import get_assistant
from medilog.models.schemas import ChatRequest
from medilog.services.logger import log_debug

router = APIRouter(prefix="/api", tags=["chat"])

FINISH_PART = {
    "finishReason": "stop",
    "usage": {"promptTokens": 0, "completionTokens": 0},
}


async def _data_stream(assistant, messages):
    # The whole reply arrives at once, after the assistant's delay
    reply = await assistant.respond(messages)
    log_debug("chat_reply", {"message": messages[-1].content, "reply": reply})
    yield f"0:{json.dumps(reply)}\n"
    yield f"d:{json.dumps(FINISH_PART)}\n"


@router.post("/chat")
async def chat(req: ChatRequest, assistant=Depends(get_assistant)):
    """
    Chat widget endpoint. No auth; the reply is streamed in the AI data
    stream line format (text part, then finish part).
    """
    return StreamingResponse(
        _data_stream(assistant, req.messages),
        media_type="text/plain; charset=utf-8",
        headers={"x-vercel-ai-data-stream": "v1"},
    )
