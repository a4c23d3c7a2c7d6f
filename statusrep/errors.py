"""
statusrep.errors — Exception taxonomy
======================================

Dispatch errors never escape :meth:`RewardDispatcher.dispatch`; they are
logged and returned inside a :class:`DispatchResult`.  The only error
allowed to stop the process is :class:`MissingCredential`, raised before
the event loop starts.
"""

from __future__ import annotations


class StatusRepError(Exception):
    """Base class for all StatusRep errors."""


class MissingCredential(StatusRepError):
    """``DISCORD_TOKEN`` is absent or still the placeholder value."""


# ---------------------------------------------------------------------------
# Dispatch failures
# ---------------------------------------------------------------------------
class DispatchError(StatusRepError):
    """A reward step failed.  Caught and logged at the dispatch boundary."""


class ChannelMissing(DispatchError):
    def __init__(self, channel_id: int) -> None:
        super().__init__(f"Reward channel {channel_id} not found in guild")
        self.channel_id = channel_id


class InsufficientPermission(DispatchError):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Bot lacks permissions: {', '.join(missing)}")
        self.missing = missing


class RoleCreationFailed(DispatchError):
    """Creating the shared reward role raised."""


class SendFailed(DispatchError):
    """Posting the announcement embed raised."""
