"""Configuration for the leaderboard bot."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

TOKEN_ENV = "DISCORD_TOKEN"
GUILD_ID_ENV = "LEADERBOARD_GUILD_ID"


class ConfigError(ValueError):
    """Raised when required settings are missing or malformed."""


def _parse_guild_id(raw: str) -> int | None:
    raw = raw.strip()
    if not raw:
        return None
    if not raw.isdigit():
        raise ConfigError(f"{GUILD_ID_ENV} must be a numeric guild id, got {raw!r}")
    return int(raw)


@dataclass
class Config:
    """Bot settings, normally read from the environment (.env supported by the entry point)."""

    discord_token: str
    # Register slash commands in this guild only (instant); None syncs globally.
    guild_id: int | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        env = os.environ if environ is None else environ
        token = env.get(TOKEN_ENV, "").strip()
        if not token:
            raise ConfigError(f"{TOKEN_ENV} is not set")
        return cls(discord_token=token, guild_id=_parse_guild_id(env.get(GUILD_ID_ENV, "")))
