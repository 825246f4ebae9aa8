"""Telegram delivery adapter.

Turns a core Directive into a reaction on the original message plus plain
chat messages in the same group.
"""

from __future__ import annotations

import asyncio
import logging

from telethon import errors
from telethon.tl.functions.messages import SendReactionRequest
from telethon.tl.types import ReactionEmoji

from core.models import Directive, MessageContext

LOGGER = logging.getLogger(__name__)


class TelegramDelivery:
    """Delivers directives through a connected Telethon client."""

    def __init__(self, client, followup_delay: float = 2.0) -> None:
        self._client = client
        self._followup_delay = followup_delay

    async def react(self, context: MessageContext, emoji: str) -> None:
        try:
            await self._client(
                SendReactionRequest(
                    peer=context.chat_id,
                    msg_id=context.message_id,
                    reaction=[ReactionEmoji(emoticon=emoji)],
                )
            )
        except errors.RPCError as exc:
            # Groups may restrict the allowed reactions; the reply still goes out.
            LOGGER.warning("Reaction %s rejected in %s: %s", emoji, context.source_key, exc)

    async def deliver(self, context: MessageContext, directive: Directive) -> None:
        """Send everything the directive asks for, in order."""

        if directive.is_silent:
            return
        if directive.reaction:
            await self.react(context, directive.reaction)
        if directive.reply_text:
            await self._client.send_message(context.chat_id, directive.reply_text, parse_mode="html")
        for text in directive.followups:
            # Space announcements out so they arrive as separate, readable posts.
            await asyncio.sleep(self._followup_delay)
            await self._client.send_message(context.chat_id, text, parse_mode="html")
        LOGGER.info(
            "Delivered reply to %s (reaction=%s, followups=%s)",
            context.source_key,
            directive.reaction,
            len(directive.followups),
        )
