"""Static configuration for wordlescope.

All user-editable settings (groups, commands, reactions, logging) live in a
single JSON file for quick edits without touching Python.
"""

import json
import os
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from core.source_keys import expand_source_key_variants

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# Settings are loaded from config.json so users can enable/disable groups,
# set aliases, and tweak replies without editing code.
CONFIG_PATH = os.environ.get("WORDLESCOPE_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _normalize_sources(
    raw_sources: list[dict],
) -> tuple[dict[str, set[str]], set[str], dict[str, str], dict[str, int]]:
    """Normalize sources and build alias and expected-member maps keyed by source_key."""

    groups: dict[str, set[str]] = {}
    sources: set[str] = set()
    aliases: dict[str, str] = {}
    expected: dict[str, int] = {}
    for entry in raw_sources:
        source_key = entry.get("source_key")
        if not source_key:
            continue
        if not entry.get("enabled", True):
            continue
        expanded_keys = expand_source_key_variants(source_key)
        groups[source_key] = expanded_keys
        sources.update(expanded_keys)
        alias = entry.get("alias")
        members = int(entry.get("expected_members", 0) or 0)
        for key in expanded_keys:
            # Mirror settings onto equivalent chat_id forms to avoid mismatches.
            if alias:
                aliases.setdefault(key, alias)
            if members:
                expected.setdefault(key, members)
    return groups, sources, aliases, expected


def _resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    # None means "the machine's local timezone".
    if not name:
        return None
    return ZoneInfo(name)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Where to store the SQLite database (relative paths are under the project root).
DB_PATH = _CONFIG.get("db_path", "wordlescope.db")
if not os.path.isabs(DB_PATH):
    DB_PATH = os.path.join(PROJECT_ROOT, DB_PATH)

# Enabled group chats; messages from anywhere else are ignored. GROUPS maps each
# configured key to its equivalent chat_id forms.
GROUPS, SOURCES, SOURCE_ALIASES, EXPECTED_MEMBERS = _normalize_sources(_CONFIG.get("sources", []))

# Chat commands, e.g. "!wordle leaderboard".
_commands = _CONFIG.get("commands", {})
COMMAND_PREFIX = _commands.get("prefix", "!wordle")

# Reactions must be part of Telegram's allowed reaction set.
_reactions = _CONFIG.get("reactions", {})
SOLVED_REACTION = _reactions.get("solved", "🎉")
FAILED_REACTION = _reactions.get("failed", "😢")

# Reply behaviour after each result and when everyone has submitted.
_replies = _CONFIG.get("replies", {})
REPLIES_ENABLED = bool(_replies.get("enabled", True))
ANNOUNCE_ON_COMPLETE = bool(_replies.get("announce_on_complete", True))
FOLLOWUP_DELAY_SECONDS = float(_replies.get("followup_delay_seconds", 2))

# Submission days and tournament boundaries follow this timezone.
TIMEZONE = _resolve_timezone(_CONFIG.get("timezone"))

# Catch-up scan settings for startup backfill.
_catch_up = _CONFIG.get("catch_up", {})
CATCH_UP_ENABLED = bool(_catch_up.get("enabled", False))
CATCH_UP_MESSAGES_PER_SOURCE = int(_catch_up.get("messages_per_source", 50))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
