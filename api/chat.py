"""Chat assistant API router."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.deps import get_chat_service, get_current_user
from core.logger import get_logger
from database import models
from database.deps import get_db_read, get_db_write
from schemas import ChatExchange, ChatMessageRequest, ChatReply, DataResponse, SuccessResponse
from services.chat_service import ChatService

logger = get_logger("api.chat")
router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/message", response_model=ChatReply, response_model_by_alias=True)
def send_message(
    payload: ChatMessageRequest,
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
    service: ChatService = Depends(get_chat_service),
):
    """Answer a nutrition question using the caller's goals and intake.

    Returns:
        `{success, response, messageId}`. A provider outage yields a
        canned reply rather than an error.
    """
    response, message_id = service.process_message(db, user.id, payload.message, payload.language)
    return ChatReply(response=response, message_id=str(message_id))


@router.get("/history", response_model=DataResponse[List[ChatExchange]])
def chat_history(
    limit: int = Query(50, ge=1, le=500),
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_read),
    service: ChatService = Depends(get_chat_service),
):
    """Most recent exchanges, oldest first."""
    rows = service.history(db, user.id, limit)
    return DataResponse(data=[ChatExchange.from_model(r) for r in rows])


@router.delete("/history", response_model=SuccessResponse)
def clear_chat_history(
    user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db_write),
    service: ChatService = Depends(get_chat_service),
):
    deleted = service.clear_history(db, user.id)
    logger.info("Cleared %d chat messages for user %s", deleted, user.id)
    return SuccessResponse()
