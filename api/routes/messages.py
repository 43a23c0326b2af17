"""
Extension Message Routes

HTTP transport for the extension message contract. The compose view and
the popup post messages here and receive the coordinator's reply.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.services.assistant_service import get_background_service
from atom_mail.orchestration.background import BackgroundService
from atom_mail.orchestration.messages import ExtensionMessage, MessageType

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Extension Messages"])


@router.post(
    "/messages",
    response_model=ExtensionMessage,
    summary="Dispatch an extension message"
)
async def post_message(
    message: ExtensionMessage,
    background: BackgroundService = Depends(get_background_service)
):
    """
    Route a message to the background coordinator.

    Args:
        message: Inbound message (ANALYZE_EMAIL, GENERATE_RESPONSE,
            UPDATE_PREFERENCES or GET_STATE)

    Returns:
        The coordinator's reply message

    Raises:
        HTTPException: If the message type is not supported
    """
    reply = await background.handle_message(message)
    if reply is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported message type: {message.type}"
        )
    return reply


@router.get(
    "/state",
    summary="Get the extension state"
)
async def get_state(background: BackgroundService = Depends(get_background_service)):
    """Return the coordinator state in its wire form."""
    reply = await background.handle_message(ExtensionMessage(type=MessageType.GET_STATE.value))
    return reply.data
