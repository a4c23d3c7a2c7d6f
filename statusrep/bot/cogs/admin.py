"""
statusrep.bot.cogs.admin — Admin Prefix Commands
=================================================

Prefix commands for server admins:
- !setup <vanity_url> <#channel> — set the marker and reward channel
- !setstatus <text> — tell admins what members should put in their status
- !stats — marker, rewards given, members currently repping
- !checkstatus <@user> — a member's last-known status
- !resetcooldown <@user> — let a member be rewarded again right away

All commands are guild-only and require the Administrator permission.
Each command takes the rest of the message as one raw string and splits
it on whitespace itself, so quotes are ordinary characters.  Misuse gets
a short reply and aborts just that invocation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord.ext import commands

from statusrep.constants import MARKER_PLACEHOLDER, parse_channel_id, parse_member_id
from statusrep.services.embeds import (
    build_check_status_embed,
    build_setup_embed,
    build_stats_embed,
)

if TYPE_CHECKING:
    from statusrep.bot.core import StatusRepBot

logger = logging.getLogger(__name__)

PERMISSION_DENIED = "❌ You need Administrator permissions to use this command."


class Admin(commands.Cog, name="Admin"):
    """Vanity reward configuration and reporting."""

    def __init__(self, bot: StatusRepBot) -> None:
        self.bot = bot

    @property
    def service(self):
        return self.bot.service

    async def cog_check(self, ctx: commands.Context) -> bool:
        if ctx.guild is None:
            raise commands.NoPrivateMessage()
        if not ctx.author.guild_permissions.administrator:
            raise commands.MissingPermissions(["administrator"])
        return True

    # -------------------------------------------------------------------
    # !setup
    # -------------------------------------------------------------------
    @commands.command(name="setup")
    async def setup_cmd(self, ctx: commands.Context, *, rest: str = "") -> None:
        """Set the vanity marker and the channel rewards are announced in."""
        prefix = self.bot.cfg.bot_prefix
        args = rest.split()
        if len(args) < 2:
            await ctx.reply(f"❌ Usage: `{prefix}setup <vanity_url> <#channel>`")
            return

        marker, channel_token = args[0], args[1]
        channel_id = parse_channel_id(channel_token)
        if channel_id is None or ctx.guild.get_channel(channel_id) is None:
            await ctx.reply("❌ Invalid channel")
            return

        try:
            self.service.configure_guild(ctx.guild.id, marker, channel_id)
        except ValueError:
            await ctx.reply("❌ Invalid vanity URL format.")
            return

        await ctx.reply(embed=build_setup_embed(marker, channel_id))

    # -------------------------------------------------------------------
    # !setstatus
    # -------------------------------------------------------------------
    @commands.command(name="setstatus")
    async def set_status(self, ctx: commands.Context, *, rest: str = "") -> None:
        """Informational only — bots can't set members' statuses."""
        if not rest.split():
            await ctx.reply(f"❌ Usage: `{self.bot.cfg.bot_prefix}setstatus <text>`")
            return

        marker = self.service.marker_for(ctx.guild.id) or MARKER_PLACEHOLDER
        await ctx.reply(
            "This is a demo. Ask users to set their custom status to include "
            f"`{marker}`"
        )

    # -------------------------------------------------------------------
    # !stats
    # -------------------------------------------------------------------
    @commands.command(name="stats")
    async def stats(self, ctx: commands.Context) -> None:
        stats = self.service.stats(ctx.guild.id)
        await ctx.reply(
            embed=build_stats_embed(stats.marker, stats.rewards_given, stats.tracked_users)
        )

    # -------------------------------------------------------------------
    # !checkstatus
    # -------------------------------------------------------------------
    @commands.command(name="checkstatus")
    async def check_status(self, ctx: commands.Context, *, rest: str = "") -> None:
        args = rest.split()
        if not args:
            await ctx.reply(f"❌ Usage: `{self.bot.cfg.bot_prefix}checkstatus <@user>`")
            return

        member_id = parse_member_id(args[0])
        member = ctx.guild.get_member(member_id) if member_id is not None else None
        if member is None:
            await ctx.reply("❌ User not found.")
            return

        report = self.service.check_status(ctx.guild.id, member.id)
        await ctx.reply(
            embed=build_check_status_embed(str(member), report.status, report.has_marker)
        )

    # -------------------------------------------------------------------
    # !resetcooldown
    # -------------------------------------------------------------------
    @commands.command(name="resetcooldown")
    async def reset_cooldown(self, ctx: commands.Context, *, rest: str = "") -> None:
        args = rest.split()
        usage = f"❌ Usage: `{self.bot.cfg.bot_prefix}resetcooldown <@user>`"
        if not args:
            await ctx.reply(usage)
            return

        member_id = parse_member_id(args[0])
        if member_id is None:
            await ctx.reply(usage)
            return

        self.service.reset_cooldown(member_id)
        await ctx.reply(f"✅ Cooldown reset for <@{member_id}>")

    # -------------------------------------------------------------------
    # Error handler for the admin gate
    # -------------------------------------------------------------------
    async def cog_command_error(
        self, ctx: commands.Context, error: commands.CommandError
    ) -> None:
        if isinstance(error, commands.NoPrivateMessage):
            return
        if isinstance(error, commands.MissingPermissions):
            await ctx.reply(PERMISSION_DENIED)
            return
        logger.error(
            "Command %s failed for %s: %s",
            ctx.command, ctx.author, error,
            exc_info=getattr(error, "original", error),
        )


async def setup(bot: StatusRepBot) -> None:
    await bot.add_cog(Admin(bot))
