"""
Messaging API endpoints.
"""
from typing import Any
from fastapi import APIRouter, Body, Depends, status

from agroconnect.api.deps import get_caller, get_store
from agroconnect.core.security import CallerIdentity
from agroconnect.schemas.message import MessageResponse
from agroconnect.services import messaging
from agroconnect.storage import EntityStore

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.get("", response_model=list[MessageResponse])
def list_messages(
    caller: CallerIdentity = Depends(get_caller),
    store: EntityStore = Depends(get_store)
):
    """Messages the caller sent or received, newest first."""
    return messaging.list_messages(store, caller.id)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: dict[str, Any] = Body(...),
    caller: CallerIdentity = Depends(get_caller),
    store: EntityStore = Depends(get_store)
):
    """
    Contact another user, optionally about a product.

    - **receiverId**: Recipient user id
    - **productId**: Optional related product
    - **content**: Message text
    """
    return messaging.send_message(store, caller.id, payload)


@router.get("/conversation/{user_id}", response_model=list[MessageResponse])
def get_conversation(
    user_id: str,
    caller: CallerIdentity = Depends(get_caller),
    store: EntityStore = Depends(get_store)
):
    """Messages between the caller and another user, oldest first."""
    return messaging.get_conversation(store, caller.id, user_id)


@router.post("/{message_id}/read", response_model=MessageResponse)
def mark_message_read(
    message_id: str,
    caller: CallerIdentity = Depends(get_caller),
    store: EntityStore = Depends(get_store)
):
    """Mark a message addressed to the caller as read."""
    return messaging.mark_read(store, caller.id, message_id)
