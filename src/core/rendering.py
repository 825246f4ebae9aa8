"""Chat text rendering for replies and leaderboards.

Keeping formatting here prevents drift between commands and the completion
announcement. Output is Telegram HTML (`<b>bold</b>`); player names are
escaped because they are user-controlled.
"""

from __future__ import annotations

import html
from typing import Iterable, List, Mapping, Sequence

from core.leaderboard import RankedEntry
from core.models import ATTEMPT_LABELS, FAILED_LABEL, PlayerStats, ScoredLike, ScoredResult, Standing, TournamentPeriod
from core.scoring import BASE_SCORES, SYMBOL_POINTS
from core.tournament import TournamentSummary

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}
BAR = "█"
BAR_WIDTH = 10


def escape_text(value: str) -> str:
    return html.escape(value, quote=False)


def medal(rank: int) -> str:
    return MEDALS.get(rank, f"{rank}.")


def format_attempts(result: ScoredLike) -> str:
    return f"{result.attempts_label}/6" if result.solved else f"{FAILED_LABEL}/6"


def difficulty_remark(rows: int) -> str:
    if rows <= 2:
        return "🔥 Incredible solve! Lightning fast!"
    if rows == 3:
        return "⚡ Excellent solve! Very impressive!"
    if rows == 4:
        return "👍 Solid solve! Well done!"
    if rows == 5:
        return "😅 Close call, but you got it!"
    if rows == 6:
        return "😰 Phew! That was a nail-biter!"
    return "🎯 Nice solve!"


def render_result_reply(result: ScoredResult) -> str:
    """Reply sent right after a result has been scored."""

    player = escape_text(result.player)
    if result.solved:
        lines = [
            f"🎯 Great job {player}!",
            f"📊 Wordle {result.game_number} - {format_attempts(result)}",
            f"🏆 Score: {result.total_score} points ({result.base_score} base + {result.bonus_points} bonus)",
            difficulty_remark(len(result.result.grid)),
        ]
    else:
        lines = [
            f"💪 Keep trying {player}!",
            f"📊 Wordle {result.game_number} - {format_attempts(result)}",
            f"🏆 Score: {result.total_score} points ({result.bonus_points} bonus)",
        ]
    return "\n".join(lines)


def render_game_leaderboard(game_number: int, ranked: Sequence[RankedEntry], title: str = "Daily Leaderboard") -> str:
    if not ranked:
        return f"📅 No results for Wordle {game_number} yet!"

    lines = [f"🏆 <b>{title} - Wordle {game_number}</b>", ""]
    for entry in ranked:
        result = entry.item
        lines.append(f"{medal(entry.rank)} <b>{escape_text(result.player)}</b>")
        lines.append(f"   {format_attempts(result)} - {result.total_score} points")
        lines.append(f"   ({result.base_score} base + {result.bonus_points} bonus)")
        lines.append("")
    return "\n".join(lines).rstrip()


def render_standings(ranked: Sequence[RankedEntry[Standing]], title: str = "Total Leaderboard - All Time") -> str:
    if not ranked:
        return "🏆 No Wordle results found for the leaderboard!"

    lines = [f"🏆 <b>{title}</b>", ""]
    for entry in ranked:
        stats = entry.item.stats
        lines.append(f"{medal(entry.rank)} <b>{escape_text(entry.item.player)}</b>")
        lines.append(f"   🏆 {stats.total_score} total points")
        lines.append(
            f"   📊 {stats.solve_rate:.1f}% solve rate ({stats.solved_games}/{stats.total_games})"
        )
        lines.append(f"   ⚡ {stats.average_attempts:.1f} avg attempts")
        lines.append("")
    return "\n".join(lines).rstrip()


def render_tournament(period: TournamentPeriod, ranked: Sequence[RankedEntry[Standing]]) -> str:
    header = f"🏆 <b>Tournament {period.id}</b>"
    if not ranked:
        return f"{header}\n\nNo results found for this tournament period."

    lines = [
        "🏆 <b>Tournament Leaderboard</b>",
        f"📅 Tournament: {period.id}",
        f"📆 Period: {period.start_date.isoformat()} - {period.end_date.isoformat()}",
        "",
    ]
    for entry in ranked:
        stats = entry.item.stats
        lines.append(f"{medal(entry.rank)} <b>{escape_text(entry.item.player)}</b>")
        lines.append(
            f"   📊 {stats.total_score} pts | 🎯 {stats.total_games} games | 📈 {stats.average_score:.1f} avg"
        )
        lines.append("")
    return "\n".join(lines).rstrip()


def render_previous_tournaments(summaries: Iterable[TournamentSummary]) -> str:
    summaries = list(summaries)
    if not summaries:
        return "📜 No previous tournaments found."

    lines = ["📜 <b>Previous Tournaments</b>", ""]
    for summary in summaries:
        lines.append(f"🏆 <b>{summary.period.id}</b>")
        lines.append(f"🥇 Winner: {escape_text(summary.winner)} ({summary.winner_score} pts)")
        lines.append(f"👥 Participants: {summary.participants}")
        lines.append("")
    return "\n".join(lines).rstrip()


def render_distribution_chart(distribution: Mapping[str, int]) -> str:
    """Horizontal bar chart scaled to the most frequent bucket.

    The "X" row is only shown when the player has failed at least once.
    """

    max_count = max(distribution.values(), default=0)
    lines = ["📊 <b>Attempt Distribution:</b>"]
    for label in ATTEMPT_LABELS:
        count = distribution.get(label, 0)
        if label == FAILED_LABEL and count == 0:
            continue
        bars = BAR * round(count / max_count * BAR_WIDTH) if max_count else ""
        lines.append(f"{label}: {bars} {count}")
    return "\n".join(lines)


def render_group_stats(stats_by_player: Mapping[str, PlayerStats]) -> str:
    if not stats_by_player:
        return "📊 No Wordle results found in this group yet!"

    lines = ["📊 <b>Group Wordle Statistics</b>", ""]
    for player, stats in stats_by_player.items():
        lines.append(f"👤 <b>{escape_text(player)}</b>")
        lines.append(f"   ✅ Solved: {stats.solved_games}/{stats.total_games} ({stats.solve_rate:.1f}%)")
        lines.append(f"   📈 Avg attempts: {stats.average_attempts:.1f}")
        lines.append(f"   🏆 Total score: {stats.total_score} points")
        lines.append(f"   📊 Avg score: {stats.average_score:.1f} points")
        lines.append(render_distribution_chart(stats.distribution))
        lines.append("")
    return "\n".join(lines).rstrip()


def render_members(expected: int, current: int) -> str:
    participation = (current / expected * 100) if expected > 0 else 0.0
    return "\n".join(
        [
            "👥 <b>Group Member Info</b>",
            "",
            f"📊 Total members: {expected}",
            f"🎯 Current submissions: {current}/{expected}",
            f"📈 Participation: {participation:.1f}%",
        ]
    )


def render_help(prefix: str) -> str:
    prefix = escape_text(prefix)
    scoring: List[str] = []
    for label in ATTEMPT_LABELS:
        if label == FAILED_LABEL:
            scoring.append(f"• Failed ({FAILED_LABEL}): {BASE_SCORES[label]} points")
        else:
            noun = "attempt" if label == "1" else "attempts"
            scoring.append(f"• {label} {noun}: {BASE_SCORES[label]} points")
    bonus = ", ".join(f"{symbol} = +{points} pts" for symbol, points in SYMBOL_POINTS.items())

    lines = [
        "🤖 <b>Wordle Bot Commands</b>",
        "",
        f"📊 <code>{prefix} stats</code> - View group statistics",
        f"🏆 <code>{prefix} leaderboard</code> - View overall leaderboard",
        f"📅 <code>{prefix} daily [game#]</code> - View daily leaderboard",
        f"🏆 <code>{prefix} tournament [id]</code> - View current/specific tournament",
        f"📜 <code>{prefix} tournaments</code> - View previous tournaments",
        f"👥 <code>{prefix} members</code> - View group member count",
        f"❓ <code>{prefix} help</code> - Show this help",
        "",
        "💡 <b>How it works:</b>",
        "Share your Wordle results in the group and they are scored automatically.",
        "",
        "🏆 <b>Tournament System:</b>",
        "• Two tournaments per month",
        "• 1st-15th: T1, 16th-end of month: T2",
        "",
        "🏆 <b>Scoring System:</b>",
        *scoring,
        f"• Bonus: {bonus}",
    ]
    return "\n".join(lines)
