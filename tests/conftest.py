"""
tests/conftest.py — Shared Test Fixtures
=========================================

Fakes for the Discord-facing seams: a :class:`FakeTarget` implementing
the ``RewardTarget`` capability interface, a mock text channel, and a
controllable clock.
"""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from statusrep.config import StatusRepConfig
from statusrep.constants import DAY_MS
from statusrep.services.reward_service import StatusRewardService

GUILD_ID = 100
CHANNEL_ID = 555
MEMBER_ID = 1001
MARKER = "example.gg"


def run_async(coro):
    """Run an async coroutine in a new event loop."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def make_http_error(cls: type[discord.HTTPException] = discord.HTTPException, status: int = 500):
    """Build a discord HTTP exception without a real aiohttp response."""
    response = MagicMock(status=status, reason="Test Error")
    return cls(response, "boom")


def make_channel(channel_id: int = CHANNEL_ID) -> MagicMock:
    """Create a mock Messageable text channel."""
    ch = MagicMock(spec=discord.TextChannel)
    ch.id = channel_id
    ch.send = AsyncMock()
    return ch


class FakeClock:
    """Epoch-ms clock the test advances by hand."""

    def __init__(self, start: int = 10 * DAY_MS) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeTarget:
    """In-memory ``RewardTarget``: records role creation and grants."""

    def __init__(
        self,
        *,
        guild_id: int = GUILD_ID,
        member_id: int = MEMBER_ID,
        channels: dict[int, object] | None = None,
        missing_permissions: list[str] | None = None,
        can_manage_roles: bool = True,
        roles: list[SimpleNamespace] | None = None,
        status: str = "",
        create_error: Exception | None = None,
        grant_error: Exception | None = None,
    ) -> None:
        self.guild_id = guild_id
        self.member_id = member_id
        self.channels = channels if channels is not None else {}
        self.missing_permissions = missing_permissions or []
        self._can_manage_roles = can_manage_roles
        self.roles = roles if roles is not None else []
        self.status = status
        self.create_error = create_error
        self.grant_error = grant_error

        self.held_role_ids: set[int] = set()
        self.created: list[SimpleNamespace] = []
        self.grant_calls = 0

    @property
    def member_mention(self) -> str:
        return f"<@{self.member_id}>"

    @property
    def member_tag(self) -> str:
        return f"member#{self.member_id}"

    @property
    def avatar_url(self) -> str:
        return "https://cdn.example.com/avatar.png"

    def current_status(self) -> str:
        return self.status

    def get_channel(self, channel_id: int):
        return self.channels.get(channel_id)

    def missing_send_permissions(self, channel) -> list[str]:
        return list(self.missing_permissions)

    def can_manage_roles(self) -> bool:
        return self._can_manage_roles

    def find_role(self, name: str):
        for role in self.roles:
            if role.name == name:
                return role
        return None

    async def create_role(self, name, permissions, colour):
        if self.create_error is not None:
            raise self.create_error
        role = SimpleNamespace(
            id=9000 + len(self.roles), name=name, permissions=permissions, colour=colour,
        )
        self.roles.append(role)
        self.created.append(role)
        return role

    def member_has_role(self, role) -> bool:
        return role.id in self.held_role_ids

    async def grant_role(self, role) -> None:
        self.grant_calls += 1
        if self.grant_error is not None:
            raise self.grant_error
        self.held_role_ids.add(role.id)


@pytest.fixture
def cfg() -> StatusRepConfig:
    return StatusRepConfig()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(cfg, clock) -> StatusRewardService:
    return StatusRewardService(cfg, clock=clock)


@pytest.fixture
def channel() -> MagicMock:
    return make_channel()
