# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-23
# Description: chat.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_chat_service
from api.schemas.chat import ChatRequest, ChatResponse
from services.RetailChatService import RetailChatService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def post_chat(
        req: ChatRequest,
        svc: RetailChatService = Depends(get_chat_service),
):
    logger.info("POST /api/chat (start) messages=%d", len(req.messages))

    try:
        out = await svc.chat([m.model_dump() for m in req.messages])
    except Exception as e:
        logger.exception("post_chat failed: %s", e)
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    logger.info(
        "POST /api/chat (done) answer_len=%d tool_results=%d",
        len(out.get("message") or ""),
        len(out.get("toolResults") or []),
    )
    return ChatResponse(**out)
