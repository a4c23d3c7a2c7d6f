"""
statusrep.services.reward_target — Capability interface for rewards
====================================================================

The dispatcher never touches ``discord.Guild`` / ``discord.Member``
directly.  It talks to a :class:`RewardTarget`, which exposes only the
handful of things a reward needs: find a channel, check the bot's
permissions, find/create/grant a role, read the member's status.

:class:`DiscordRewardTarget` is the live implementation; tests supply
their own fakes.
"""

from __future__ import annotations

import logging
from typing import Protocol

import discord
from discord.abc import Messageable

logger = logging.getLogger(__name__)

__all__ = ["DiscordRewardTarget", "RewardTarget", "custom_status_of"]


def custom_status_of(member: discord.Member | None) -> str:
    """Return *member*'s custom status text, or ``""`` if they have none."""
    if member is None:
        return ""
    for activity in member.activities:
        if isinstance(activity, discord.CustomActivity):
            return activity.state or activity.name or ""
    return ""


class RewardTarget(Protocol):
    """Everything the dispatcher may do to a guild on a member's behalf."""

    guild_id: int
    member_id: int

    @property
    def member_mention(self) -> str: ...

    @property
    def member_tag(self) -> str: ...

    @property
    def avatar_url(self) -> str: ...

    def current_status(self) -> str: ...

    def get_channel(self, channel_id: int) -> Messageable | None: ...

    def missing_send_permissions(self, channel: Messageable) -> list[str]: ...

    def can_manage_roles(self) -> bool: ...

    def find_role(self, name: str) -> discord.abc.Snowflake | None: ...

    async def create_role(
        self, name: str, permissions: discord.Permissions, colour: discord.Colour
    ) -> discord.abc.Snowflake: ...

    def member_has_role(self, role: discord.abc.Snowflake) -> bool: ...

    async def grant_role(self, role: discord.abc.Snowflake) -> None: ...


# Permissions the bot needs in the reward channel to post the embed.
REQUIRED_CHANNEL_PERMISSIONS: tuple[str, ...] = ("send_messages", "embed_links")


class DiscordRewardTarget:
    """:class:`RewardTarget` backed by a live guild and member."""

    def __init__(self, guild: discord.Guild, member: discord.Member) -> None:
        self.guild = guild
        self.member = member
        self.guild_id = guild.id
        self.member_id = member.id

    @property
    def member_mention(self) -> str:
        return self.member.mention

    @property
    def member_tag(self) -> str:
        return str(self.member)

    @property
    def avatar_url(self) -> str:
        return self.member.display_avatar.with_format("png").with_size(256).url

    def current_status(self) -> str:
        return custom_status_of(self.member)

    def get_channel(self, channel_id: int) -> Messageable | None:
        channel = self.guild.get_channel(channel_id)
        if channel is None or not isinstance(channel, Messageable):
            return None
        return channel

    def missing_send_permissions(self, channel: Messageable) -> list[str]:
        perms = channel.permissions_for(self.guild.me)  # type: ignore[attr-defined]
        return [p for p in REQUIRED_CHANNEL_PERMISSIONS if not getattr(perms, p)]

    def can_manage_roles(self) -> bool:
        return self.guild.me.guild_permissions.manage_roles

    def find_role(self, name: str) -> discord.Role | None:
        return discord.utils.get(self.guild.roles, name=name)

    async def create_role(
        self, name: str, permissions: discord.Permissions, colour: discord.Colour
    ) -> discord.Role:
        return await self.guild.create_role(
            name=name,
            permissions=permissions,
            colour=colour,
            reason="StatusRep: reward role for vanity status",
        )

    def member_has_role(self, role: discord.abc.Snowflake) -> bool:
        return self.member.get_role(role.id) is not None

    async def grant_role(self, role: discord.abc.Snowflake) -> None:
        await self.member.add_roles(role, reason="StatusRep: repped the vanity marker")
