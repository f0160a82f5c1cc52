"""Extract score records from Wordle recap lines.

A recap line looks like ``3/6: <@123456789012345678> @Bob, Alice``: a guess count
from 1 to 6 (or ``X`` for a failed puzzle) over 6, then the players who got that
result. Mentions resolve to ids right away; plain names are kept as text and
resolved later against the guild member list.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from wordle_stats.models import ById, ByName, ScoreRecord, UserRef

_RECAP_LINE_RE = re.compile(r"(?P<val>[1-6X])/6: (?P<users>.*)")
_USERS_SPLIT_RE = re.compile(r"[,\s]+")
_SNOWFLAKE_RE = re.compile(r"[0-9]+")

# Characters trimmed from both ends of each user token: mention markup
# (<@123>, <@!123>), list punctuation and bold/quote wrappers.
_TOKEN_STRIP_CHARS = '<>@!,*"'

_MAX_SNOWFLAKE = 2**64 - 1


def _parse_snowflake(token: str) -> int | None:
    if not _SNOWFLAKE_RE.fullmatch(token):
        return None
    value = int(token)
    if value == 0 or value > _MAX_SNOWFLAKE:
        return None
    return value


def parse_user_token(token: str) -> UserRef | None:
    """Turn one users-block token into a UserRef, or None if nothing is left after trimming."""
    cleaned = token.strip(_TOKEN_STRIP_CHARS)
    if not cleaned:
        return None
    user_id = _parse_snowflake(cleaned)
    if user_id is not None:
        return ById(user_id)
    return ByName(cleaned)


def parse_line(line: str) -> Iterator[ScoreRecord]:
    """Yield a ScoreRecord per user listed on a recap line.

    Lines without a ``N/6:`` value field yield nothing.
    """
    m = _RECAP_LINE_RE.search(line)
    if not m:
        return
    val = m.group("val")
    score = None if val == "X" else int(val)
    for token in _USERS_SPLIT_RE.split(m.group("users")):
        if not token:
            continue
        user = parse_user_token(token)
        if user is not None:
            yield ScoreRecord(user=user, score=score)


def parse_message(content: str) -> Iterator[ScoreRecord]:
    """Yield records from every line of a (multi-line) message."""
    for line in content.splitlines():
        yield from parse_line(line)
