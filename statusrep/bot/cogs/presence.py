"""
statusrep.bot.cogs.presence — Custom Status Watcher
====================================================

Listens for presence updates, extracts the custom status text from the
before/after snapshots, and hands them to the reward service.

Requires the GUILD_PRESENCES and GUILD_MEMBERS privileged intents.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from statusrep.services.reward_target import DiscordRewardTarget, custom_status_of

if TYPE_CHECKING:
    from statusrep.bot.core import StatusRepBot

logger = logging.getLogger(__name__)


class Presence(commands.Cog, name="Presence"):
    """Rewards members whose custom status starts showing the vanity marker."""

    def __init__(self, bot: StatusRepBot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_presence_update(
        self, before: discord.Member, after: discord.Member
    ) -> None:
        try:
            await self._handle_presence(before, after)
        except Exception:
            logger.exception(
                "Error processing presence update for %s", after.id,
                extra={"event_type": "presence_update", "user_id": after.id},
            )

    async def _handle_presence(
        self, before: discord.Member, after: discord.Member
    ) -> None:
        """Inner presence handler (separated for error isolation)."""
        if after.bot or after.guild is None:
            return

        old_status = custom_status_of(before)
        new_status = custom_status_of(after)

        decision, result = await self.bot.service.handle_presence_change(
            DiscordRewardTarget(after.guild, after), old_status, new_status,
        )
        logger.debug(
            "Presence update: %s in %s → %s",
            after, after.guild.name, decision.outcome.value,
        )
        if result is not None and not result.ok:
            logger.debug("Reward dispatch for %s did not complete", after)


async def setup(bot: StatusRepBot) -> None:
    await bot.add_cog(Presence(bot))
