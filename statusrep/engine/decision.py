"""
statusrep.engine.decision — Reward Decision Engine
===================================================

Pure decision logic: no Discord I/O.  Given a member's new custom status,
decide whether they just started repping the guild's vanity marker.

Pipeline stages:
  unchanged? → ledger write → configured? → rising edge? → cooldown? → REWARD

The ``had_marker`` side of the edge test always reads the ledger's value
from *before* this event, never the gateway's ``before`` snapshot.  The
snapshot is only compared for a debug log line.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from statusrep.constants import contains_marker
from statusrep.engine.state import CooldownTracker, GuildConfigStore, PresenceLedger

logger = logging.getLogger(__name__)

__all__ = ["Decision", "Outcome", "RewardDecisionEngine"]


class Outcome(enum.Enum):
    """Why the engine did (or did not) reward."""

    UNCHANGED = "unchanged"        # same status as the ledger; nothing touched
    UNCONFIGURED = "unconfigured"  # guild never ran !setup
    NO_EDGE = "no_edge"            # not a transition into the marker
    ON_COOLDOWN = "on_cooldown"    # rising edge, but rewarded < window ago
    REWARD = "reward"


@dataclass(frozen=True, slots=True)
class Decision:
    """Output of :meth:`RewardDecisionEngine.decide`."""

    outcome: Outcome
    marker: str | None = None
    channel_id: int | None = None

    @property
    def should_reward(self) -> bool:
        return self.outcome is Outcome.REWARD


class RewardDecisionEngine:
    """Edge-triggered, cooldown-gated reward decisions.

    Owns no state of its own; it reads and writes the stores handed to it.
    """

    def __init__(
        self,
        ledger: PresenceLedger,
        configs: GuildConfigStore,
        cooldowns: CooldownTracker,
    ) -> None:
        self.ledger = ledger
        self.configs = configs
        self.cooldowns = cooldowns

    def decide(
        self,
        guild_id: int,
        member_id: int,
        old_status: str,
        new_status: str,
        now_ms: int,
    ) -> Decision:
        previous = self.ledger.get(member_id)
        if new_status == previous:
            return Decision(Outcome.UNCHANGED)

        if old_status != previous:
            logger.debug(
                "Presence snapshot for %d disagrees with ledger (%r vs %r); using ledger",
                member_id, old_status, previous,
            )

        self.ledger.set(member_id, new_status)

        config = self.configs.get(guild_id)
        if config is None:
            return Decision(Outcome.UNCONFIGURED)

        has_marker = contains_marker(new_status, config.marker)
        had_marker = contains_marker(previous, config.marker)
        if not has_marker or had_marker:
            return Decision(Outcome.NO_EDGE, config.marker, config.channel_id)

        if self.cooldowns.is_on_cooldown(member_id, now_ms):
            logger.debug(
                "Member %d is on cooldown (%d ms left)",
                member_id, self.cooldowns.remaining_ms(member_id, now_ms),
            )
            return Decision(Outcome.ON_COOLDOWN, config.marker, config.channel_id)

        self.cooldowns.record(member_id, now_ms)
        return Decision(Outcome.REWARD, config.marker, config.channel_id)
