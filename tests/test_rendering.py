from __future__ import annotations

from datetime import date, datetime, timezone

from telethon.extensions import html as telegram_html

from core.models import ParsedResult, ScoredResult
from core.recognizer import GREEN
from core.rendering import (
    difficulty_remark,
    escape_text,
    medal,
    render_distribution_chart,
    render_help,
    render_members,
    render_result_reply,
)
from core.scoring import score
from core.stats import empty_distribution


def _scored(player: str) -> ScoredResult:
    grid = ((GREEN,) * 5,)
    return ScoredResult(
        player=player,
        player_id="1",
        date=date(2024, 3, 1),
        arrived_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        result=ParsedResult(game_number=1000, attempts_label="1", solved=True, grid=grid),
        score=score("1", grid),
    )


def test_escape_html_in_names() -> None:
    assert escape_text("a<b>&c") == "a&lt;b&gt;&amp;c"
    assert escape_text("ana_lee *star*") == "ana_lee *star*"


def test_usernames_reach_the_chat_unchanged() -> None:
    for name in ("ana_lee", "__init__", "a*b", "x<y>", "[team] `bo`"):
        text, _ = telegram_html.parse(render_result_reply(_scored(name)))
        assert f"Great job {name}!" in text


def test_help_is_valid_html() -> None:
    text, entities = telegram_html.parse(render_help("!wordle"))
    assert "!wordle daily [game#]" in text
    assert entities


def test_medals() -> None:
    assert medal(1) == "🥇"
    assert medal(3) == "🥉"
    assert medal(4) == "4."


def test_difficulty_remarks() -> None:
    assert "Incredible" in difficulty_remark(1)
    assert "nail-biter" in difficulty_remark(6)


def test_distribution_chart_scales_to_max_bucket() -> None:
    distribution = empty_distribution()
    distribution["3"] = 4
    distribution["4"] = 2
    chart = render_distribution_chart(distribution)
    lines = chart.splitlines()
    assert lines[3] == "3: " + "█" * 10 + " 4"
    assert lines[4] == "4: " + "█" * 5 + " 2"
    # No failures, no X row.
    assert not any(line.startswith("X:") for line in lines)

    distribution["X"] = 1
    assert "X: " in render_distribution_chart(distribution)


def test_members_with_unknown_size() -> None:
    assert "Participation: 0.0%" in render_members(0, 3)
