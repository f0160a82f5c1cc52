#!/usr/bin/env python3
"""Render the Wordle leaderboard from exported JSON instead of a live channel.

Messages file: a JSON list of {"content": str, "timestamp": ISO-8601, "bot": bool}.
Members file (optional): a JSON list of {"id": int, "name": str, "nick": str | null}.
"""

import argparse
import asyncio
import json
import sys
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from pathlib import Path

from wordle_stats.dates import DEFAULT_FROM, DEFAULT_TO
from wordle_stats.leaderboard import build_report
from wordle_stats.models import ChatMessage, GuildMember


def _parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def load_messages(path: Path) -> list[ChatMessage]:
    """Load exported messages, sorted newest first as the window filter requires."""
    data = json.loads(path.read_text())
    messages = [
        ChatMessage(
            author_is_bot=bool(m.get("bot", False)),
            content=m.get("content", ""),
            timestamp=_parse_timestamp(m["timestamp"]),
        )
        for m in data
    ]
    messages.sort(key=lambda m: m.timestamp, reverse=True)
    return messages


def load_members(path: Path | None) -> list[GuildMember]:
    if path is None:
        return []
    data = json.loads(path.read_text())
    return [GuildMember(user_id=int(m["id"]), display_name=m.get("name", ""), nickname=m.get("nick")) for m in data]


async def _stream(messages: list[ChatMessage]) -> AsyncIterator[ChatMessage]:
    for message in messages:
        yield message


def main() -> int:
    parser = argparse.ArgumentParser(description="Render a Wordle leaderboard from exported messages")
    parser.add_argument("messages", type=Path, help="JSON file with exported messages")
    parser.add_argument("--members", type=Path, help="JSON file with the guild member list")
    parser.add_argument("--from", dest="from_text", default=DEFAULT_FROM, help=f"Start date (default: {DEFAULT_FROM})")
    parser.add_argument("--to", dest="to_text", default=DEFAULT_TO, help=f"End date (default: {DEFAULT_TO})")
    parser.add_argument("--now", help="Reference time for relative dates (ISO-8601, default: now)")
    args = parser.parse_args()

    try:
        messages = load_messages(args.messages)
        members = load_members(args.members)
        now = _parse_timestamp(args.now) if args.now else datetime.now(timezone.utc)
    except (OSError, json.JSONDecodeError, KeyError, ValueError) as e:
        print(f"[render] ERROR: {e}", file=sys.stderr)
        return 1

    async def _members() -> list[GuildMember]:
        return members

    report = asyncio.run(build_report(_stream(messages), _members, args.from_text, args.to_text, now))
    print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
