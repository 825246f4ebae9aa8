"""Telegram-to-core message mapping adapter.

This keeps Telethon-specific details out of the core pipeline.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from telethon.tl.custom import Message
from telethon.tl.types import PeerChannel, PeerChat

from core.models import MessageContext
from core.source_keys import build_source_key

LOGGER = logging.getLogger(__name__)


class MembershipResolver:
    """Resolve and cache the participant count of group chats."""

    def __init__(self, client) -> None:
        self._client = client
        self._cache: dict[Union[int, str], int] = {}

    async def member_count(self, chat_id: Union[int, str]) -> int:
        """Return the participant count of a chat id or @username (0 if unknown)."""

        if chat_id in self._cache:
            return self._cache[chat_id]
        try:
            entity = await self._client.get_entity(chat_id)
            participants = await self._client.get_participants(entity, limit=0)
        except Exception:
            LOGGER.exception("Failed to resolve members of chat %s", chat_id)
            return 0
        count = int(getattr(participants, "total", None) or len(participants))
        self._cache[chat_id] = count
        return count

    def forget(self, chat_id: Union[int, str]) -> None:
        self._cache.pop(chat_id, None)


def source_key_from_message(message: Message) -> str:
    """Normalize a source key using a single rule enforced across the app."""

    chat = getattr(message, "chat", None)
    return build_source_key(getattr(chat, "username", None), message.chat_id)


def _is_group(message: Message) -> bool:
    peer_id = getattr(message, "peer_id", None)
    if isinstance(peer_id, PeerChat):
        return True
    if isinstance(peer_id, PeerChannel):
        # Broadcast channels have no members posting results.
        return bool(getattr(getattr(message, "chat", None), "megagroup", False))
    return False


def _author_name(message: Message) -> str:
    sender = getattr(message, "sender", None)
    first = getattr(sender, "first_name", None)
    last = getattr(sender, "last_name", None)
    if first or last:
        return " ".join(part for part in [first, last] if part)
    username = getattr(sender, "username", None)
    if username:
        return str(username)
    title = getattr(sender, "title", None)
    if title:
        return str(title)
    sender_id = getattr(message, "sender_id", None)
    return str(sender_id) if sender_id is not None else "Unknown"


def build_context(message: Message) -> MessageContext:
    """Build a core MessageContext from a Telethon Message."""

    sender_id: Optional[int] = getattr(message, "sender_id", None)
    return MessageContext(
        source_key=source_key_from_message(message),
        chat_id=message.chat_id,
        message_id=message.id,
        author_id=str(sender_id) if sender_id is not None else "",
        author_name=_author_name(message),
        date=message.date,
        text=message.raw_text or "",
        is_group=_is_group(message),
    )
