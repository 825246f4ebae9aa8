"""Core message processing pipeline.

This module is integration-agnostic. It only relies on the storage port and
returns a Directive describing what the transport should send back, enabling
other chat frontends without changes here.

Order of operations for one message:
1) Fast-exit for untracked sources, private chats or empty text
2) Message-level idempotency (per source)
3) Commands
4) Recognize, parse and score results
5) Append to the chat store + persist
6) Update per-source last_message_id
"""

from __future__ import annotations

import logging
from datetime import date, tzinfo
from typing import Optional

from core import rendering
from core.commands import CommandHandler
from core.config import CommandConfig, ReplyConfig
from core.errors import ParseError
from core.models import Directive, MessageContext, ScoredResult
from core.parser import parse_result
from core.ports import StoragePort
from core.recognizer import is_result
from core.scoring import score
from core.store import ChatStore

LOGGER = logging.getLogger(__name__)


class MessageProcessor:
    """Orchestrates recognition, scoring, persistence, and chat replies."""

    def __init__(
        self,
        storage: StoragePort,
        allowed_sources: set[str],
        command_config: CommandConfig,
        reply_config: ReplyConfig,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self._storage = storage
        self._allowed_sources = allowed_sources
        self._replies = reply_config
        self._tz = tz
        self._commands = CommandHandler(storage, command_config)

    def submission_day(self, context: MessageContext) -> date:
        """Calendar day a message counts for, in the configured timezone."""

        if self._tz is None:
            return context.date.astimezone().date()
        return context.date.astimezone(self._tz).date()

    async def handle(self, context: MessageContext, store: ChatStore) -> Directive:
        """Process one message context and return what to send back."""

        if context.source_key not in self._allowed_sources:
            return Directive.silent()

        # Results are a group activity; direct messages are ignored.
        if not context.is_group or not context.text.strip():
            return Directive.silent()

        # Message-level idempotency: Telegram message ids are monotonically increasing
        # per chat, so we can safely skip anything we've already processed.
        last_id = self._storage.get_last_id(context.source_key) or 0
        if context.message_id <= last_id:
            return Directive.silent()

        today = self.submission_day(context)
        reply = self._commands.handle(context, store, today)
        if reply is not None:
            self._storage.set_last_id(context.source_key, context.message_id)
            return Directive(reply_text=reply)

        directive = Directive.silent()
        if is_result(context.text):
            directive = self._handle_result(context, store, today)

        # Update the last_message_id after all handling to ensure restart safety.
        self._storage.set_last_id(context.source_key, context.message_id)
        return directive

    def _handle_result(self, context: MessageContext, store: ChatStore, today: date) -> Directive:
        try:
            parsed = parse_result(context.text)
        except ParseError as exc:
            # Ordinary chatter that happens to look like a result: stay silent.
            LOGGER.debug("Ignoring message %s in %s: %s", context.message_id, context.source_key, exc)
            return Directive.silent()

        result = ScoredResult(
            player=context.author_name,
            player_id=context.author_id,
            date=today,
            arrived_at=context.date,
            result=parsed,
            score=score(parsed.attempts_label, parsed.grid),
        )
        completed = store.append(result)
        self._storage.save_result(context, result.to_record())
        LOGGER.info(
            "Result saved for %s: Wordle %s %s/6, %s points (%s submitted)",
            result.player,
            result.game_number,
            result.attempts_label,
            result.total_score,
            store.submissions.count(result.game_number),
        )

        followups: tuple[str, ...] = ()
        if completed and self._replies.announce_on_complete:
            LOGGER.info(
                "All %s members submitted Wordle %s in %s",
                store.submissions.expected,
                result.game_number,
                context.source_key,
            )
            followups = (
                self._commands.daily_leaderboard(context.source_key, result.game_number),
                self._commands.overall_leaderboard(context.source_key),
            )

        reaction = self._replies.solved_reaction if result.solved else self._replies.failed_reaction
        return Directive(
            reaction=reaction or None,
            reply_text=rendering.render_result_reply(result) if self._replies.enabled else None,
            followups=followups,
        )
