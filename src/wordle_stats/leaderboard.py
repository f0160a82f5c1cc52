"""Generate the Wordle leaderboard report from channel history."""

from __future__ import annotations

from collections.abc import AsyncIterable, Awaitable, Callable, Iterable, Sequence
from datetime import datetime

from wordle_stats.dates import DEFAULT_FROM, DEFAULT_TO, DateWindow, DateWindowError, resolve_window
from wordle_stats.identity import resolve_records
from wordle_stats.line_parser import parse_message
from wordle_stats.models import ChatMessage, GuildMember, ScoreRecord, UserStats
from wordle_stats.stats import aggregate, rank
from wordle_stats.window import messages_in_window

# Discord rejects messages over 2000 characters; leave room for the marker.
MAX_REPORT_CHARS = 1950
TRUNCATION_MARKER = "\n... (truncated)"

_HEADER = "## 🏆 Wordle Leaderboard"
_DATE_FMT = "%Y/%m/%d %H:%M"
_NO_RESULTS = "No results in this range."


def _log(msg: str) -> None:
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {msg}")


def format_row(position: int, s: UserStats) -> str:
    avg = f"{s.avg_score:.2f}" if s.avg_score is not None else "-"
    return (
        f"{position}. {s.user.mention()} — **{s.winrate:.0%}** "
        f"({s.wins} wins / {s.games} games; {avg} avg score)"
    )


def truncate_report(text: str, limit: int = MAX_REPORT_CHARS) -> str:
    """Cut the report to ``limit`` characters plus a marker. May split a row."""
    if len(text) <= limit:
        return text
    return text[:limit] + TRUNCATION_MARKER


def render_leaderboard(stats: Iterable[UserStats], window: DateWindow) -> str:
    """Render ranked stats as a chat message, bounded to MAX_REPORT_CHARS (+ marker)."""
    rows = [format_row(i, s) for i, s in enumerate(rank(stats), 1)]
    lines = [
        _HEADER,
        f" > From {window.from_text} ({window.start:{_DATE_FMT}}) "
        f"to before {window.to_text} ({window.end:{_DATE_FMT}})",
    ]
    lines.extend(rows or [_NO_RESULTS])
    return truncate_report("\n".join(lines))


async def collect_records(messages: AsyncIterable[ChatMessage]) -> list[ScoreRecord]:
    """Parse recap lines out of bot-authored messages. Human chatter is ignored."""
    records: list[ScoreRecord] = []
    async for message in messages:
        if not message.author_is_bot:
            continue
        records.extend(parse_message(message.content))
    return records


async def generate_leaderboard(
    history: AsyncIterable[ChatMessage],
    members: Sequence[GuildMember],
    window: DateWindow,
) -> str:
    """Run the whole pipeline for an already resolved window.

    ``history`` must be newest first (see wordle_stats.window).
    """
    records = await collect_records(messages_in_window(history, window))
    resolved = resolve_records(records, members)
    return render_leaderboard(aggregate(resolved), window)


async def build_report(
    history: AsyncIterable[ChatMessage],
    load_members: Callable[[], Awaitable[Sequence[GuildMember]]],
    from_text: str | None = None,
    to_text: str | None = None,
    now: datetime | None = None,
) -> str:
    """Resolve the date phrases and generate the report.

    Date errors come back as the report text instead of raising. Members are
    loaded once, and only when the range is valid.
    """
    from_text = from_text or DEFAULT_FROM
    to_text = to_text or DEFAULT_TO
    if now is None:
        now = datetime.now().astimezone()
    try:
        window = resolve_window(from_text, to_text, now)
    except DateWindowError as e:
        _log(f"[leaderboard] Rejected range {from_text!r} -> {to_text!r}: {e}")
        return str(e)

    _log(f"[leaderboard] Range {window.start:{_DATE_FMT}} -> {window.end:{_DATE_FMT}}")
    members = tuple(await load_members())
    return await generate_leaderboard(history, members, window)
