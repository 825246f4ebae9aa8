"""Chat command handling (core domain).

Commands look like `!wordle <name> [argument]`. Every command returns reply
text; unknown names fall back to the help text.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, List, Optional

from core import rendering
from core.config import CommandConfig
from core.leaderboard import rank_results, rank_standings
from core.models import MessageContext
from core.ports import StoragePort
from core.stats import aggregate, aggregate_by_player
from core.store import ChatStore
from core.tournament import parse_period_id, period_for, previous_tournaments, tournament_standings

LOGGER = logging.getLogger(__name__)


class CommandHandler:
    """Answers `!wordle` commands from the chat store and persisted results."""

    def __init__(self, storage: StoragePort, config: CommandConfig) -> None:
        self._storage = storage
        self._config = config
        self._commands: Dict[str, Callable[[ChatStore, List[str], date], str]] = {
            "stats": self._stats,
            "leaderboard": self._leaderboard,
            "daily": self._daily,
            "tournament": self._tournament,
            "tournaments": self._tournaments,
            "members": self._members,
            "help": self._help,
        }

    def is_command(self, text: str) -> bool:
        parts = text.strip().split()
        return bool(parts) and parts[0].lower() == self._config.prefix.lower()

    def handle(self, context: MessageContext, store: ChatStore, today: date) -> Optional[str]:
        """Return the reply for a command message, or None if it is not one."""

        if not self.is_command(context.text):
            return None

        parts = context.text.strip().split()
        name = parts[1].lower() if len(parts) > 1 else "help"
        args = parts[2:]
        command = self._commands.get(name, self._help)
        LOGGER.info("Command %r from %s in %s", name, context.author_name, context.source_key)
        return command(store, args, today)

    def _stats(self, store: ChatStore, args: List[str], today: date) -> str:
        stats_by_player = {player: aggregate(store.results_for(player)) for player in store.players()}
        return rendering.render_group_stats(stats_by_player)

    def _leaderboard(self, store: ChatStore, args: List[str], today: date) -> str:
        return self.overall_leaderboard(store.source_key)

    def _daily(self, store: ChatStore, args: List[str], today: date) -> str:
        prefix = rendering.escape_text(self._config.prefix)
        if args:
            try:
                game_number = int(args[0].replace(",", ""))
            except ValueError:
                return f"📅 Invalid game number: {rendering.escape_text(args[0])}. Try <code>{prefix} daily 1234</code>"
        else:
            game_number = store.latest_game() or self._storage.latest_game(store.source_key)
            if not game_number:
                return (
                    "📅 No daily results found yet! Submit a Wordle result first "
                    f"or specify a game number: <code>{prefix} daily 1234</code>"
                )
        return self.daily_leaderboard(store.source_key, game_number)

    def daily_leaderboard(self, source_key: str, game_number: int) -> str:
        records = self._storage.daily_results(source_key, game_number)
        return rendering.render_game_leaderboard(game_number, rank_results(records))

    def overall_leaderboard(self, source_key: str) -> str:
        records = self._storage.results_for_source(source_key)
        return rendering.render_standings(rank_standings(aggregate_by_player(records)))

    def _tournament(self, store: ChatStore, args: List[str], today: date) -> str:
        try:
            period = parse_period_id(args[0]) if args else period_for(today)
        except ValueError:
            return f"🏆 Unknown tournament id. Use the form <code>{rendering.escape_text(self._config.prefix)} tournament 2024-03-T1</code>"
        records = self._storage.results_between(store.source_key, period.start_date, period.end_date)
        return rendering.render_tournament(period, tournament_standings(records, period.id))

    def _tournaments(self, store: ChatStore, args: List[str], today: date) -> str:
        records = self._storage.results_for_source(store.source_key)
        return rendering.render_previous_tournaments(previous_tournaments(records, today))

    def _members(self, store: ChatStore, args: List[str], today: date) -> str:
        expected = store.submissions.expected or self._storage.get_group_members(store.source_key)
        latest = store.latest_game()
        current = store.submissions.count(latest) if latest is not None else 0
        return rendering.render_members(expected, current)

    def _help(self, store: ChatStore, args: List[str], today: date) -> str:
        return rendering.render_help(self._config.prefix)
