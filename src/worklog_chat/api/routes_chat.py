"""Chat endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from worklog_chat.api.dependencies import get_chat_service
from worklog_chat.chat.service import ChatService
from worklog_chat.exceptions import EmptyIndexError, IndexUnavailable, WorklogChatError
from worklog_chat.models.schemas import ChatRequest, ChatResponse

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    try:
        return await service.process_query(request)
    except IndexUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except EmptyIndexError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except WorklogChatError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
