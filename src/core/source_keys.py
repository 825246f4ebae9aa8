"""Helpers for working with chat source keys.

A source key identifies one group chat: `@username` for public groups and
`chat_id:<id>` for everything else.
"""

from __future__ import annotations

from typing import Optional

CHAT_ID_PREFIX = "chat_id:"


def build_source_key(username: Optional[str], chat_id: int) -> str:
    """Return the normalized key for a chat, preferring its public username."""

    if isinstance(username, str) and username:
        return f"@{username.lower()}"
    return f"{CHAT_ID_PREFIX}{chat_id}"


def chat_id_from_source_key(source_key: str) -> Optional[int]:
    if not source_key.startswith(CHAT_ID_PREFIX):
        return None
    try:
        return int(source_key[len(CHAT_ID_PREFIX):])
    except ValueError:
        return None


def _expand_chat_id_variants(raw_chat_id: int) -> set[int]:
    """Return equivalent chat id variants (peer id, chat id, channel id)."""

    variants: set[int] = {raw_chat_id}
    if raw_chat_id < 0:
        raw_text = str(raw_chat_id)
        if raw_text.startswith("-100"):
            # Supergroup peer id: -100<channel_id>
            channel_part = raw_text[4:]
            if channel_part.isdigit():
                variants.add(int(channel_part))
        else:
            variants.add(abs(raw_chat_id))
        return variants

    variants.add(-raw_chat_id)
    variants.add(-1000000000000 - raw_chat_id)
    return variants


def expand_source_key_variants(source_key: str) -> set[str]:
    """Expand a configured key so any id form of the same group matches."""

    raw_chat_id = chat_id_from_source_key(source_key)
    if raw_chat_id is None:
        return {source_key.lower()} if source_key.startswith("@") else {source_key}
    return {f"{CHAT_ID_PREFIX}{variant}" for variant in _expand_chat_id_variants(raw_chat_id)}
