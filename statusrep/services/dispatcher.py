"""
statusrep.services.dispatcher — Reward Dispatcher
==================================================

Performs the externally visible side of a reward:

1. Resolve the reward channel and check the bot can post embeds there.
2. Ensure the shared reward role exists (created lazily).
3. Grant it to the member if they don't already hold it.
4. Post the announcement embed.
5. Bump the guild's reward counter.

Every step is fail-soft.  A :class:`DispatchError` (or any unexpected
exception) is logged and returned in the :class:`DispatchResult`; it
never reaches the event loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import discord

from statusrep.config import StatusRepConfig
from statusrep.engine.state import RewardCounter
from statusrep.errors import (
    ChannelMissing,
    DispatchError,
    InsufficientPermission,
    RoleCreationFailed,
    SendFailed,
)
from statusrep.services.embeds import build_reward_embed
from statusrep.services.reward_target import RewardTarget

logger = logging.getLogger(__name__)


def reward_role_permissions() -> discord.Permissions:
    """Perks carried by the reward role."""
    return discord.Permissions(
        attach_files=True,
        embed_links=True,
        use_external_emojis=True,
    )


@dataclass
class DispatchResult:
    """Outcome of one :meth:`RewardDispatcher.dispatch` call."""

    ok: bool = False
    error: DispatchError | None = None
    role_granted: bool = False
    # Set when the reward role could not be created; the announcement still goes out.
    role_error: RoleCreationFailed | None = None


class RewardDispatcher:
    """Hands out the reward role and announces it.

    Parameters
    ----------
    cfg:
        Role name/colour and status preview limit come from here.
    counter:
        Incremented once per successfully posted announcement.
    """

    def __init__(self, cfg: StatusRepConfig, counter: RewardCounter) -> None:
        self.cfg = cfg
        self.counter = counter

    async def dispatch(
        self, target: RewardTarget, marker: str, channel_id: int
    ) -> DispatchResult:
        result = DispatchResult()
        try:
            await self._dispatch(target, marker, channel_id, result)
        except DispatchError as exc:
            result.error = exc
            logger.warning(
                "Reward for %s in guild %d aborted: %s",
                target.member_tag, target.guild_id, exc,
            )
        except Exception:
            logger.exception(
                "Error rewarding %s in guild %d", target.member_tag, target.guild_id,
            )
        return result

    async def _dispatch(
        self,
        target: RewardTarget,
        marker: str,
        channel_id: int,
        result: DispatchResult,
    ) -> None:
        channel = target.get_channel(channel_id)
        if channel is None:
            raise ChannelMissing(channel_id)

        missing = target.missing_send_permissions(channel)
        if missing:
            raise InsufficientPermission(missing)

        role = await self._get_or_create_role(target, result)
        if role is not None:
            result.role_granted = await self._grant_role(target, role)

        embed = build_reward_embed(
            member_id=target.member_id,
            member_mention=target.member_mention,
            avatar_url=target.avatar_url,
            marker=marker,
            status=target.current_status(),
            preview_limit=self.cfg.status_preview_limit,
        )
        try:
            await channel.send(embed=embed)
        except discord.HTTPException as exc:
            raise SendFailed(f"Could not post reward announcement: {exc}") from exc

        total = self.counter.increment(target.guild_id)
        result.ok = True
        logger.info(
            "Rewarded %s in guild %d (%d total)",
            target.member_tag, target.guild_id, total,
        )

    async def _get_or_create_role(self, target: RewardTarget, result: DispatchResult):
        """Find the shared reward role, creating it when allowed.

        Returns ``None`` (and logs) when the bot can't manage roles or
        creation fails.  A creation failure is kept in ``result.role_error``.
        """
        role = target.find_role(self.cfg.reward_role_name)
        if role is not None:
            return role

        if not target.can_manage_roles():
            logger.warning(
                "Missing Manage Roles in guild %d — skipping reward role",
                target.guild_id,
            )
            return None

        try:
            role = await target.create_role(
                self.cfg.reward_role_name,
                reward_role_permissions(),
                discord.Colour(self.cfg.reward_role_color_value),
            )
        except discord.HTTPException as exc:
            result.role_error = RoleCreationFailed(str(exc))
            logger.error(
                "Failed to create role %r in guild %d: %s",
                self.cfg.reward_role_name, target.guild_id, exc,
            )
            return None

        logger.info(
            "Created reward role %r in guild %d", self.cfg.reward_role_name, target.guild_id,
        )
        return role

    async def _grant_role(self, target: RewardTarget, role) -> bool:
        """Grant *role* unless the member already has it.  Returns True if held afterwards."""
        if target.member_has_role(role):
            return True
        try:
            await target.grant_role(role)
        except discord.HTTPException:
            logger.exception(
                "Failed to grant reward role to %s in guild %d",
                target.member_tag, target.guild_id,
            )
            return False
        return True
