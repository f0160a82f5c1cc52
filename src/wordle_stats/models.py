"""Data types shared by the parsing, resolution and aggregation stages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ById:
    """A user referenced by platform snowflake (e.g. a ``<@123>`` mention)."""

    user_id: int

    def mention(self) -> str:
        return f"<@{self.user_id}>"


@dataclass(frozen=True)
class ByName:
    """A user referenced by raw display-name text, not (yet) matched to an id."""

    name: str

    def mention(self) -> str:
        return f"@{self.name}"


# Union type for both reference kinds. Dataclass equality compares the class
# first, so ById(1) and ByName("1") never collide as dict keys.
UserRef = ById | ByName


@dataclass(frozen=True)
class ScoreRecord:
    """One (user, result) pair from a recap line. score=None is a failed game."""

    user: UserRef
    score: int | None


@dataclass(frozen=True)
class GuildMember:
    user_id: int
    display_name: str
    nickname: str | None = None


@dataclass(frozen=True)
class ChatMessage:
    """Gateway-neutral view of a chat message."""

    author_is_bot: bool
    content: str
    timestamp: datetime  # timezone-aware


@dataclass
class UserStats:
    user: UserRef
    games: int
    wins: int
    winrate: float
    avg_score: float | None  # None when the user never solved a puzzle
