"""Application entry point for the wordlescope bot."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from art import tprint
from dotenv import load_dotenv
from telethon import events

import settings
from adapters.sqlite_storage import SQLiteStorage
from adapters.telegram_delivery import TelegramDelivery
from adapters.telegram_mapper import MembershipResolver, build_context
from client import build_client
from core.config import CommandConfig, ReplyConfig
from core.processor import MessageProcessor
from core.source_keys import build_source_key, chat_id_from_source_key
from core.store import StoreRegistry
from get_session import authorize

NAME = "WORDLESCOPE"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = _RedactingFormatter(_collect_redaction_values(config), fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/wordlescope.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        file_handler = RotatingFileHandler(
            path,
            maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
            backupCount=int(file_cfg.get("backup_count", 5)),
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)
    # Telethon is chatty at INFO; keep our own messages readable.
    logging.getLogger("telethon").setLevel(max(level, logging.WARNING))


def _build_processor(storage: SQLiteStorage) -> MessageProcessor:
    return MessageProcessor(
        storage=storage,
        allowed_sources=settings.SOURCES,
        command_config=CommandConfig(prefix=settings.COMMAND_PREFIX),
        reply_config=ReplyConfig(
            enabled=settings.REPLIES_ENABLED,
            announce_on_complete=settings.ANNOUNCE_ON_COMPLETE,
            solved_reaction=settings.SOLVED_REACTION,
            failed_reaction=settings.FAILED_REACTION,
        ),
        tz=settings.TIMEZONE,
    )


def _pinned_size(variants: set[str]) -> int:
    return max((settings.EXPECTED_MEMBERS.get(key, 0) for key in variants), default=0)


async def _resolve_group_sizes(
    storage: SQLiteStorage,
    registry: StoreRegistry,
    resolver: MembershipResolver,
) -> None:
    """Set the expected submitter count of every configured group.

    A size pinned in config.json wins over the live participant count.
    """

    logger = logging.getLogger(__name__)
    for source_key, variants in settings.GROUPS.items():
        pinned = _pinned_size(variants)
        if pinned:
            for key in variants:
                registry.set_expected(key, pinned)
            continue
        chat_id = chat_id_from_source_key(source_key)
        count = await resolver.member_count(chat_id if chat_id is not None else source_key)
        if not count:
            continue
        title = settings.SOURCE_ALIASES.get(source_key, source_key)
        for key in variants:
            registry.set_expected(key, count)
            storage.set_group_members(key, title, count)
        logger.info("Group %s has %s members", title, count)


async def _catch_up_scan(
    client,
    storage: SQLiteStorage,
    processor: MessageProcessor,
    registry: StoreRegistry,
    delivery: TelegramDelivery,
) -> None:
    """Score results posted while the bot was offline, before going live."""

    if not settings.CATCH_UP_ENABLED:
        return

    logger = logging.getLogger(__name__)
    tracked_sources = storage.list_sources_state() & settings.SOURCES
    messages_checked = 0
    results_found = 0

    for source_key in sorted(tracked_sources):
        chat_id = chat_id_from_source_key(source_key)
        try:
            entity = await client.get_entity(chat_id if chat_id is not None else source_key)
        except Exception:
            logger.exception("Failed to resolve source %s during catchup", source_key)
            continue

        messages = []
        async for message in client.iter_messages(entity, limit=settings.CATCH_UP_MESSAGES_PER_SOURCE):
            messages.append(message)

        for message in reversed(messages):
            messages_checked += 1
            await message.get_sender()
            context = build_context(message)
            directive = await processor.handle(context, registry.for_chat(context.source_key))
            if directive.reaction:
                results_found += 1
            await delivery.deliver(context, directive)

    logger.info(
        "Catch-up scan complete: sources=%s, messages=%s, results=%s",
        len(tracked_sources),
        messages_checked,
        results_found,
    )


def _run() -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)

    logger.info("Starting wordlescope")

    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()
    registry = StoreRegistry(settings.EXPECTED_MEMBERS)
    processor = _build_processor(storage)
    logger.info("Watching %s source keys", len(settings.SOURCES))

    client = build_client()
    client.loop.run_until_complete(client.connect())
    client.loop.run_until_complete(authorize(client))

    delivery = TelegramDelivery(client, followup_delay=settings.FOLLOWUP_DELAY_SECONDS)
    resolver = MembershipResolver(client)
    client.loop.run_until_complete(_resolve_group_sizes(storage, registry, resolver))

    # Run catch-up before wiring real-time handlers to keep history
    # processing explicit and ordered.
    client.loop.run_until_complete(_catch_up_scan(client, storage, processor, registry, delivery))

    # Chat stores assume a single writer; handle one message at a time.
    lock = asyncio.Lock()

    # Outgoing messages are included: the account owner plays too.
    @client.on(events.NewMessage())
    async def handler(event) -> None:
        try:
            await event.get_sender()
            context = build_context(event.message)
            async with lock:
                directive = await processor.handle(context, registry.for_chat(context.source_key))
            await delivery.deliver(context, directive)
        except Exception:
            logger.exception("Error while processing message")

    # Group sizes change; refresh the expected count on membership events.
    @client.on(events.ChatAction())
    async def membership_handler(event) -> None:
        if not (event.user_joined or event.user_added or event.user_left or event.user_kicked):
            return
        try:
            chat = await event.get_chat()
            event_key = build_source_key(getattr(chat, "username", None), event.chat_id)
            for source_key, variants in settings.GROUPS.items():
                if event_key not in variants or _pinned_size(variants):
                    continue
                resolver.forget(event.chat_id)
                count = await resolver.member_count(event.chat_id)
                if not count:
                    continue
                title = settings.SOURCE_ALIASES.get(source_key, source_key)
                for key in variants:
                    registry.set_expected(key, count)
                    storage.set_group_members(key, title, count)
                logger.info("Member count of %s is now %s", title, count)
        except Exception:
            logger.exception("Error while refreshing member count")

    logger.info("Client connected. Listening for Wordle results...")
    client.run_until_disconnected()


def _board() -> None:
    _print_banner()
    from frontend.app import BoardApp

    BoardApp(db_path=settings.DB_PATH).run()


def _dialog_title(dialog: Any) -> str:
    entity = getattr(dialog, "entity", None)
    title = getattr(entity, "title", None) or getattr(dialog, "name", None)
    if title:
        return str(title)
    entity_id = getattr(entity, "id", None)
    return str(entity_id or "unknown")


def _source_key_from_dialog(dialog: Any) -> str:
    entity = getattr(dialog, "entity", None)
    username = getattr(entity, "username", None)
    if username:
        return f"@{str(username).lower()}"
    dialog_id = getattr(dialog, "id", None) or getattr(entity, "id", None)
    return f"chat_id:{dialog_id}"


async def _list_group_dialogs(client) -> None:
    # Only groups can host a results thread; channels and 1:1 chats are skipped.
    dialogs = []
    async for dialog in client.iter_dialogs():
        entity = getattr(dialog, "entity", None)
        if dialog.is_group or getattr(entity, "megagroup", False):
            dialogs.append(dialog)

    if not dialogs:
        print("No group chats found.")
        return

    for index, dialog in enumerate(dialogs, start=1):
        print(f"{index}. {_dialog_title(dialog)} | {_source_key_from_dialog(dialog)}")


def _discover() -> None:
    _print_banner()
    client = build_client()

    async def _run_discover() -> None:
        await client.connect()
        if not await client.is_user_authorized():
            print("Authorization required. Starting login...")
            await authorize(client)
        await _list_group_dialogs(client)
        await client.disconnect()

    client.loop.run_until_complete(_run_discover())


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="wordlescope")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")
    subparsers.add_parser("board", help="Browse stored results and standings")
    subparsers.add_parser("discover", help="List group chats and their source keys")

    args = parser.parse_args(argv)
    if args.command == "board":
        _board()
        return
    if args.command == "discover":
        _discover()
        return
    _run()


if __name__ == "__main__":
    main()
