"""
Contact messages between users.

There is no conversation entity: a conversation is every message whose
sender/receiver pair is the same unordered pair of user ids.
"""
from typing import Any, Mapping

from agroconnect.error_handlers import ResourceNotFoundError, ValidationError
from agroconnect.logging_config import get_logger
from agroconnect.schemas.message import MessageCreate
from agroconnect.services.validation import parse_payload
from agroconnect.storage import EntityKind, EntityStore, MessageRecord

logger = get_logger("messaging")


def conversation_key(user_a: str, user_b: str) -> tuple[str, str]:
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)


def send_message(store: EntityStore, caller_id: str, payload: Mapping[str, Any]) -> MessageRecord:
    """
    Store a message from the caller.

    Raises:
        ValidationError: empty content, unknown receiver or unknown product
    """
    data = parse_payload(MessageCreate, payload, "Invalid message data")

    errors = []
    if store.get(EntityKind.USERS, data.receiver_id) is None:
        errors.append({"field": "receiverId", "message": "unknown recipient"})
    if data.product_id is not None:
        product = store.get(EntityKind.PRODUCTS, data.product_id)
        if product is None or not product.active:
            errors.append({"field": "productId", "message": "unknown product"})
    if errors:
        raise ValidationError("Invalid message data", errors)

    message = store.insert(EntityKind.MESSAGES, {
        "sender_id": caller_id,
        "receiver_id": data.receiver_id,
        "product_id": data.product_id,
        "content": data.content,
        "read": False,
    })
    logger.info(f"Message {message.id} sent from {caller_id} to {data.receiver_id}")
    return message


def list_messages(store: EntityStore, user_id: str) -> list[MessageRecord]:
    """Messages the user sent or received, newest first."""
    messages = [
        m for m in store.list_all(EntityKind.MESSAGES)
        if m.sender_id == user_id or m.receiver_id == user_id
    ]
    return sorted(messages, key=lambda m: m.created_at, reverse=True)


def get_conversation(store: EntityStore, user_id: str, other_id: str) -> list[MessageRecord]:
    """Messages exchanged between two users, oldest first."""
    key = conversation_key(user_id, other_id)
    messages = [
        m for m in store.list_all(EntityKind.MESSAGES)
        if conversation_key(m.sender_id, m.receiver_id) == key
    ]
    return sorted(messages, key=lambda m: m.created_at)


def mark_read(store: EntityStore, caller_id: str, message_id: str) -> MessageRecord:
    """
    Mark a received message as read.

    Raises:
        ResourceNotFoundError: no such message, or the caller is not its receiver
    """
    message = store.get(EntityKind.MESSAGES, message_id)
    if message is None or message.receiver_id != caller_id:
        raise ResourceNotFoundError("Message", message_id)
    if message.read:
        return message

    updated = store.update(EntityKind.MESSAGES, message_id, {"read": True})
    if updated is None:
        raise ResourceNotFoundError("Message", message_id)
    return updated
