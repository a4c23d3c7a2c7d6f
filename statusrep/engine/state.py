"""
statusrep.engine.state — In-memory stores
==========================================

The four maps the bot keeps for its whole lifetime.  None of them is
persisted; a restart forgets everything.

All mutation happens on the discord.py event loop thread, so there are
no locks here.  If these are ever shared across threads, wrap them the
way a thread-safe tracker would (one ``threading.Lock`` per store).
"""

from __future__ import annotations

from dataclasses import dataclass

from statusrep.constants import contains_marker

__all__ = [
    "CooldownTracker",
    "GuildConfig",
    "GuildConfigStore",
    "PresenceLedger",
    "RewardCounter",
]


class PresenceLedger:
    """member id → last observed custom status text.

    A member with no entry reads as ``""`` (no custom status).
    """

    def __init__(self) -> None:
        self._statuses: dict[int, str] = {}

    def get(self, member_id: int) -> str:
        return self._statuses.get(member_id, "")

    def has(self, member_id: int) -> bool:
        return member_id in self._statuses

    def set(self, member_id: int, status: str) -> None:
        self._statuses[member_id] = status

    def count_containing(self, marker: str) -> int:
        """How many tracked members currently show *marker* in their status."""
        return sum(1 for s in self._statuses.values() if contains_marker(s, marker))

    def __len__(self) -> int:
        return len(self._statuses)


@dataclass(frozen=True, slots=True)
class GuildConfig:
    """Per-guild reward settings written by ``!setup``."""

    marker: str
    channel_id: int


class GuildConfigStore:
    """guild id → :class:`GuildConfig`.  Absence means unconfigured."""

    def __init__(self) -> None:
        self._configs: dict[int, GuildConfig] = {}

    def get(self, guild_id: int) -> GuildConfig | None:
        return self._configs.get(guild_id)

    def set(self, guild_id: int, config: GuildConfig) -> None:
        self._configs[guild_id] = config


class CooldownTracker:
    """member id → epoch-ms timestamp of the member's last reward."""

    def __init__(self, window_ms: int) -> None:
        self.window_ms = window_ms
        self._last_reward: dict[int, int] = {}

    def last_reward(self, member_id: int) -> int | None:
        return self._last_reward.get(member_id)

    def is_on_cooldown(self, member_id: int, now_ms: int) -> bool:
        """True while fewer than ``window_ms`` have passed since the last reward."""
        last = self._last_reward.get(member_id)
        if last is None:
            return False
        return now_ms - last < self.window_ms

    def remaining_ms(self, member_id: int, now_ms: int) -> int:
        last = self._last_reward.get(member_id)
        if last is None:
            return 0
        return max(0, self.window_ms - (now_ms - last))

    def record(self, member_id: int, now_ms: int) -> None:
        self._last_reward[member_id] = now_ms

    def reset(self, member_id: int) -> bool:
        """Forget the member's cooldown.  Returns whether one existed."""
        return self._last_reward.pop(member_id, None) is not None


class RewardCounter:
    """guild id → rewards handed out since process start."""

    def __init__(self) -> None:
        self._counts: dict[int, int] = {}

    def get(self, guild_id: int) -> int:
        return self._counts.get(guild_id, 0)

    def increment(self, guild_id: int) -> int:
        self._counts[guild_id] = self._counts.get(guild_id, 0) + 1
        return self._counts[guild_id]
