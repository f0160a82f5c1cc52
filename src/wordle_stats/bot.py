"""Discord front end: the /leaderboard slash command and gateway adapters."""

from __future__ import annotations

import argparse
import sys
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from pathlib import Path

import discord
from discord import app_commands
from dotenv import load_dotenv

from wordle_stats.config import Config, ConfigError
from wordle_stats.dates import DEFAULT_FROM, DEFAULT_TO
from wordle_stats.leaderboard import build_report
from wordle_stats.models import ChatMessage, GuildMember

# Mentions in the report are decorative; never ping anyone.
NO_PINGS = discord.AllowedMentions(users=False, roles=False, everyone=False)


class MissingContext(Exception):
    """Raised when the command is used outside a guild (e.g. in DMs)."""


def _log(msg: str) -> None:
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {msg}")


def to_chat_message(message: discord.Message) -> ChatMessage:
    return ChatMessage(
        author_is_bot=message.author.bot,
        content=message.content,
        timestamp=message.created_at,
    )


def to_guild_member(member: discord.Member) -> GuildMember:
    """Map a guild member; display_name is the account username, nickname the per-guild nick."""
    return GuildMember(user_id=member.id, display_name=member.name, nickname=member.nick)


async def channel_history(channel: discord.abc.Messageable) -> AsyncIterator[ChatMessage]:
    """Stream channel history newest first (discord.py's default order without ``after``)."""
    async for message in channel.history(limit=None):
        yield to_chat_message(message)


async def fetch_members(guild: discord.Guild) -> list[GuildMember]:
    """Fetch the full member list in one pass. Needs the members intent."""
    return [to_guild_member(m) async for m in guild.fetch_members(limit=None)]


async def run_leaderboard(
    interaction: discord.Interaction,
    channel: discord.abc.Messageable | None,
    from_text: str | None,
    to_text: str | None,
) -> str:
    """Build the report for an interaction. Raises MissingContext outside a guild."""
    guild = interaction.guild
    if guild is None:
        raise MissingContext("This command must be run in a server")

    target = channel or interaction.channel
    _log(f"[leaderboard] {interaction.user} requested {from_text or DEFAULT_FROM!r} -> {to_text or DEFAULT_TO!r}")

    async def load_members() -> list[GuildMember]:
        # Without the member list, plain names just stay unresolved.
        try:
            return await fetch_members(guild)
        except discord.HTTPException as e:
            _log(f"[leaderboard] Could not fetch members, names stay unresolved: {e}")
            return []

    return await build_report(
        channel_history(target),
        load_members,
        from_text,
        to_text,
        datetime.now(timezone.utc),
    )


@app_commands.command(name="leaderboard", description="Wordle leaderboard from recap messages")
@app_commands.rename(from_="from")
@app_commands.describe(
    channel="Channel to read history from",
    from_=f"Starting date. Default: {DEFAULT_FROM}",
    to=f"End date. Default: {DEFAULT_TO}",
)
async def leaderboard_command(
    interaction: discord.Interaction,
    channel: discord.TextChannel | None = None,
    from_: str | None = None,
    to: str | None = None,
) -> None:
    await interaction.response.defer(thinking=True)
    try:
        report = await run_leaderboard(interaction, channel, from_, to)
    except MissingContext as e:
        report = str(e)
    await interaction.followup.send(report, allowed_mentions=NO_PINGS)
    _log(f"[leaderboard] Sent report ({len(report)} chars)")


class LeaderboardBot(discord.Client):
    def __init__(self, config: Config):
        intents = discord.Intents.default()
        intents.message_content = True  # recap text
        intents.members = True  # name -> id resolution
        super().__init__(intents=intents)
        self.config = config
        self.tree = app_commands.CommandTree(self)
        self.tree.add_command(leaderboard_command)

    async def setup_hook(self) -> None:
        if self.config.guild_id is not None:
            guild = discord.Object(id=self.config.guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            _log(f"[bot] Synced {len(synced)} command(s) to guild {self.config.guild_id}")
        else:
            synced = await self.tree.sync()
            _log(f"[bot] Synced {len(synced)} command(s) globally")

    async def on_ready(self) -> None:
        _log(f"[bot] Logged in as {self.user}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Wordle leaderboard Discord bot")
    parser.add_argument("--env-file", type=Path, default=Path(".env"), help="dotenv file to load (default: .env)")
    parser.add_argument("--guild-id", type=int, help="Register commands in this guild (overrides LEADERBOARD_GUILD_ID)")
    args = parser.parse_args(argv)

    load_dotenv(args.env_file)
    try:
        config = Config.from_env()
    except ConfigError as e:
        _log(f"[bot] ERROR: {e}")
        return 2
    if args.guild_id is not None:
        config.guild_id = args.guild_id

    bot = LeaderboardBot(config)
    try:
        bot.run(config.discord_token)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
