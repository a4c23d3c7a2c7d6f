"""
statusrep.constants — Shared Constants & Helpers
=================================================

Single source of truth for presentation constants, the marker match rule,
and mention parsing.  Import from here instead of duplicating in cogs and
services.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Reward defaults
# ---------------------------------------------------------------------------
DAY_MS = 24 * 60 * 60 * 1000

DEFAULT_REWARD_ROLE_NAME = "Image Permissions"

# Perks listed in the announcement embed.  Keep in sync with the role's
# permission set in services.dispatcher.
REWARD_PERKS: list[str] = [
    "Image permissions",
    "Embed permissions",
    "File upload permissions",
]

NO_STATUS = "No status"
NO_STATUS_TRACKED = "No status tracked"
MARKER_PLACEHOLDER = "your-vanity"


# ---------------------------------------------------------------------------
# Embed colours
# ---------------------------------------------------------------------------
COLOR_SUCCESS = 0x00FF00
COLOR_FAILURE = 0xFF0000
COLOR_INFO = 0x0099FF


# ---------------------------------------------------------------------------
# Marker matching — THE single canonical implementation
# ---------------------------------------------------------------------------
def contains_marker(status: str | None, marker: str) -> bool:
    """Case-insensitive substring test of *marker* inside *status*.

    Plain containment: no word boundaries, no exact match.  An empty or
    missing status never contains a marker.
    """
    if not status or not marker:
        return False
    return marker.casefold() in status.casefold()


def is_valid_marker(marker: str) -> bool:
    """A marker must look like a link/domain, i.e. contain a dot."""
    return bool(marker) and "." in marker


# ---------------------------------------------------------------------------
# Text processing helpers
# ---------------------------------------------------------------------------
def truncate_status(status: str, limit: int = 100) -> str:
    """Clip *status* to *limit* characters, appending ``...`` when clipped."""
    if len(status) > limit:
        return status[:limit] + "..."
    return status


_MENTION_CHANNEL_REGEX = re.compile(r"[<#>]")
_MENTION_USER_REGEX = re.compile(r"[<@!>]")


def parse_channel_id(token: str) -> int | None:
    """``<#123>`` or ``123`` → ``123``; anything else → ``None``."""
    raw = _MENTION_CHANNEL_REGEX.sub("", token)
    return int(raw) if raw.isdecimal() else None


def parse_member_id(token: str) -> int | None:
    """``<@123>``, ``<@!123>`` or ``123`` → ``123``; anything else → ``None``."""
    raw = _MENTION_USER_REGEX.sub("", token)
    return int(raw) if raw.isdecimal() else None
