"""
Chat Routes

GET /chat/{user_a}/{user_b} - Latest messages between two users, oldest first
POST /send-message - Append a message

There is no authorization on either route; any pair can be read.
"""

from typing import List

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from udyog_saathi.core.logging import get_logger
from udyog_saathi.services.mongo_service import MessageService
from udyog_saathi.schemas.schemas import ChatMessageCreate, ChatMessageResponse, AckResponse

router = APIRouter(tags=["Chat"])
logger = get_logger(__name__)


@router.get("/chat/{user_a}/{user_b}", response_model=List[ChatMessageResponse])
async def chat_history(user_a: str, user_b: str):
    """Symmetric: /chat/a/b and /chat/b/a return the same list."""
    try:
        return MessageService().history(user_a, user_b)
    except PyMongoError:
        logger.exception("Chat history query failed for %s <-> %s", user_a, user_b)
        return JSONResponse(status_code=500, content=[])


@router.post("/send-message", response_model=AckResponse)
async def send_message(message: ChatMessageCreate):
    MessageService().insert(message.sender_email, message.receiver_email, message.text)
    return AckResponse(msg="sent")
