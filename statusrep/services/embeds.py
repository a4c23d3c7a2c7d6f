"""
statusrep.services.embeds — Discord embed builders
===================================================

All embed construction lives here so the dispatcher and cogs only need
to supply data — no layout concerns.
"""

from __future__ import annotations

import discord

from statusrep.constants import (
    COLOR_FAILURE,
    COLOR_INFO,
    COLOR_SUCCESS,
    NO_STATUS,
    REWARD_PERKS,
    truncate_status,
)


def build_reward_embed(
    member_id: int,
    member_mention: str,
    avatar_url: str,
    marker: str,
    status: str,
    preview_limit: int = 100,
) -> discord.Embed:
    """Build the public "repped the vanity" celebration embed."""
    embed = discord.Embed(
        title="Status Rep Reward! \U0001f389",
        description=f"{member_mention} repped **{marker}**!",
        color=discord.Color(COLOR_SUCCESS),
        timestamp=discord.utils.utcnow(),
    )
    embed.add_field(
        name="Rewards",
        value="\n".join(f"• {perk}" for perk in REWARD_PERKS),
        inline=False,
    )
    embed.add_field(
        name="Current Status",
        value=truncate_status(status or NO_STATUS, preview_limit),
        inline=False,
    )
    if avatar_url:
        embed.set_thumbnail(url=avatar_url)
    embed.set_footer(text=f"User ID: {member_id}")
    return embed


def build_setup_embed(marker: str, channel_id: int) -> discord.Embed:
    embed = discord.Embed(
        title="✅ Setup Complete!",
        color=discord.Color(COLOR_SUCCESS),
        timestamp=discord.utils.utcnow(),
    )
    embed.add_field(name="Vanity URL", value=f"`{marker}`", inline=False)
    embed.add_field(name="Reward Channel", value=f"<#{channel_id}>", inline=False)
    return embed


def build_stats_embed(
    marker: str | None, rewards_given: int, tracked_users: int
) -> discord.Embed:
    embed = discord.Embed(
        title="\U0001f4ca Stats",
        color=discord.Color(COLOR_INFO),
        timestamp=discord.utils.utcnow(),
    )
    embed.add_field(name="Vanity URL", value=marker or "Not set", inline=False)
    embed.add_field(name="Rewards Given", value=str(rewards_given), inline=False)
    embed.add_field(name="Tracked Users", value=str(tracked_users), inline=False)
    return embed


def build_check_status_embed(
    member_tag: str, status: str, has_marker: bool
) -> discord.Embed:
    """Build the ``!checkstatus`` report: green when repping, red otherwise."""
    embed = discord.Embed(
        title=f"{member_tag} Status Check",
        color=discord.Color(COLOR_SUCCESS if has_marker else COLOR_FAILURE),
        timestamp=discord.utils.utcnow(),
    )
    embed.add_field(name="Current Status", value=status, inline=False)
    embed.add_field(
        name="Has Vanity URL",
        value="✅ Yes" if has_marker else "❌ No",
        inline=False,
    )
    return embed
