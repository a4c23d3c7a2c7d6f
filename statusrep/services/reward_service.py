"""
statusrep.services.reward_service — Status Reward Service
==========================================================

The single owner of all bot state.  One :class:`StatusRewardService` is
built at startup and attached to the bot; cogs call into it and never
touch the stores directly.

- :meth:`handle_presence_change` runs the decision engine and, on a
  reward, the dispatcher.
- The ``configure_guild`` / ``stats`` / ``check_status`` /
  ``reset_cooldown`` methods are the store-touching halves of the admin
  commands; the cog does argument parsing and replies.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from statusrep.config import StatusRepConfig
from statusrep.constants import NO_STATUS_TRACKED, contains_marker, is_valid_marker
from statusrep.engine.decision import Decision, Outcome, RewardDecisionEngine
from statusrep.engine.state import (
    CooldownTracker,
    GuildConfig,
    GuildConfigStore,
    PresenceLedger,
    RewardCounter,
)
from statusrep.services.dispatcher import DispatchResult, RewardDispatcher
from statusrep.services.reward_target import RewardTarget

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class GuildStats:
    marker: str | None
    rewards_given: int
    tracked_users: int


@dataclass(frozen=True, slots=True)
class StatusReport:
    status: str
    has_marker: bool


class StatusRewardService:
    """Holds the ledger, guild configs, cooldowns and reward counter.

    Parameters
    ----------
    cfg:
        Parsed :class:`StatusRepConfig`.
    clock:
        Returns "now" in epoch milliseconds.  Tests pass a fake.
    dispatcher:
        Optional pre-built dispatcher (tests pass a recording fake).
    """

    def __init__(
        self,
        cfg: StatusRepConfig,
        *,
        clock=now_ms,
        dispatcher: RewardDispatcher | None = None,
    ) -> None:
        self.cfg = cfg
        self.clock = clock

        self.ledger = PresenceLedger()
        self.configs = GuildConfigStore()
        self.cooldowns = CooldownTracker(cfg.cooldown_ms)
        self.counter = RewardCounter()

        self.engine = RewardDecisionEngine(self.ledger, self.configs, self.cooldowns)
        self.dispatcher = dispatcher or RewardDispatcher(cfg, self.counter)

    # -------------------------------------------------------------------
    # Presence pipeline
    # -------------------------------------------------------------------
    async def handle_presence_change(
        self, target: RewardTarget, old_status: str, new_status: str
    ) -> tuple[Decision, DispatchResult | None]:
        """Evaluate one status change and dispatch a reward if it qualifies.

        The decision (and its ledger/cooldown writes) completes before the
        first ``await``, so no other event can interleave with it.
        """
        decision = self.engine.decide(
            target.guild_id, target.member_id, old_status, new_status, self.clock(),
        )
        if decision.outcome is Outcome.ON_COOLDOWN:
            logger.info("%s repped %s but is on cooldown", target.member_tag, decision.marker)
        if not decision.should_reward:
            return decision, None

        result = await self.dispatcher.dispatch(target, decision.marker, decision.channel_id)
        return decision, result

    # -------------------------------------------------------------------
    # Admin command backends
    # -------------------------------------------------------------------
    def configure_guild(self, guild_id: int, marker: str, channel_id: int) -> GuildConfig:
        """Create or overwrite the guild's marker + reward channel.

        Raises
        ------
        ValueError
            If *marker* does not contain a dot.
        """
        if not is_valid_marker(marker):
            raise ValueError(f"Invalid vanity marker: {marker!r}")
        config = GuildConfig(marker=marker, channel_id=channel_id)
        self.configs.set(guild_id, config)
        logger.info(
            "Guild %d configured: marker=%r channel=%d", guild_id, marker, channel_id,
        )
        return config

    def marker_for(self, guild_id: int) -> str | None:
        config = self.configs.get(guild_id)
        return config.marker if config else None

    def stats(self, guild_id: int) -> GuildStats:
        marker = self.marker_for(guild_id)
        tracked = self.ledger.count_containing(marker) if marker else 0
        return GuildStats(
            marker=marker,
            rewards_given=self.counter.get(guild_id),
            tracked_users=tracked,
        )

    def check_status(self, guild_id: int, member_id: int) -> StatusReport:
        status = self.ledger.get(member_id)
        marker = self.marker_for(guild_id)
        has_marker = marker is not None and contains_marker(status, marker)
        return StatusReport(status=status or NO_STATUS_TRACKED, has_marker=has_marker)

    def reset_cooldown(self, member_id: int) -> bool:
        existed = self.cooldowns.reset(member_id)
        logger.info("Cooldown reset for %d (had cooldown: %s)", member_id, existed)
        return existed
