"""Match free-text player names against the guild member list."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence

from wordle_stats.models import ById, ByName, GuildMember, ScoreRecord


def determine_user(members: Sequence[GuildMember], name: str) -> int | None:
    """Return the id of the first member whose username or nickname equals ``name``.

    Duplicate names resolve to whichever member comes first in the list.
    """
    for member in members:
        if member.display_name == name or member.nickname == name:
            return member.user_id
    return None


def resolve_records(records: Iterable[ScoreRecord], members: Sequence[GuildMember]) -> list[ScoreRecord]:
    """Upgrade ByName records to ById where the name matches a member.

    Unmatched names keep their ByName reference.
    """
    resolved: list[ScoreRecord] = []
    for record in records:
        if isinstance(record.user, ByName):
            found_id = determine_user(members, record.user.name)
            if found_id is not None:
                record = dataclasses.replace(record, user=ById(found_id))
        resolved.append(record)
    return resolved
