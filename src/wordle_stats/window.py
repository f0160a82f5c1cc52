"""Bound a newest-first message stream to a report date window.

Recap messages are posted the day after the games they report, so a window
of [start, end) in game days is matched against publish timestamps in
[start + 1 day, end + 1 day).

The source MUST yield messages newest first. The filter relies on that to
stop pulling as soon as it sees a message older than the window; an
unordered source would silently drop results.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator
from datetime import datetime, timedelta

from wordle_stats.dates import DateWindow
from wordle_stats.models import ChatMessage

PUBLISH_OFFSET = timedelta(days=1)


def _log(msg: str) -> None:
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {msg}")


def publish_bounds(window: DateWindow) -> tuple[datetime, datetime]:
    """Return (lower inclusive, upper exclusive) publish timestamps for the window."""
    return window.start + PUBLISH_OFFSET, window.end + PUBLISH_OFFSET


async def messages_in_window(
    source: AsyncIterable[ChatMessage],
    window: DateWindow,
) -> AsyncIterator[ChatMessage]:
    """Yield messages published inside the window.

    Messages newer than the window are skipped; the first message older than
    it ends the stream without requesting anything further. A message that
    fails to load is logged and skipped, and pulling continues until the
    source is exhausted.
    """
    lower, upper = publish_bounds(window)
    iterator = aiter(source)
    while True:
        try:
            message = await anext(iterator)
        except StopAsyncIteration:
            return
        except Exception as e:
            _log(f"[window] Skipping message that failed to load: {e}")
            continue

        if message.timestamp >= upper:
            continue
        if message.timestamp < lower:
            return
        yield message
