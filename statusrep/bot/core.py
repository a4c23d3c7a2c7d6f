"""
statusrep.bot.core — Bot Instance & Cog Loader
===============================================

Defines :class:`StatusRepBot`, a ``commands.Bot`` subclass that:

1. Enables the intents the reward flow depends on (presences, members,
   message content).
2. Carries the shared config (``bot.cfg``) and the single
   :class:`StatusRewardService` (``bot.service``) so every Cog reaches
   them via ``self.bot``.
3. Loads every Cog in ``statusrep/bot/cogs/``.
"""

from __future__ import annotations

import logging

import discord
from discord.ext import commands

from statusrep.config import StatusRepConfig
from statusrep.services.reward_service import StatusRewardService

logger = logging.getLogger(__name__)

# Cog modules to load on startup.
EXTENSIONS: list[str] = [
    "statusrep.bot.cogs.presence",
    "statusrep.bot.cogs.admin",
]


def build_intents() -> discord.Intents:
    """Gateway intents for status tracking + prefix commands."""
    intents = discord.Intents.default()
    intents.presences = True          # Privileged: custom status text
    intents.members = True            # Privileged: member cache for presence + role grants
    intents.message_content = True    # Privileged: prefix command parsing
    return intents


class StatusRepBot(commands.Bot):
    """Custom Bot subclass that carries project-wide state.

    Parameters
    ----------
    cfg:
        The parsed :class:`StatusRepConfig`.
    service:
        Optional pre-built service; one is created from *cfg* otherwise.
    """

    def __init__(
        self, cfg: StatusRepConfig, service: StatusRewardService | None = None
    ) -> None:
        super().__init__(
            command_prefix=cfg.bot_prefix,
            intents=build_intents(),
            case_insensitive=True,
            help_command=None,
            description="Rewards members who rep the server's vanity link",
        )
        self.cfg = cfg
        self.service = service or StatusRewardService(cfg)

    # -----------------------------------------------------------------------
    # Lifecycle hooks
    # -----------------------------------------------------------------------
    async def setup_hook(self) -> None:
        """Load all Cog extensions before connecting.

        A broken Cog is logged and skipped rather than taking the bot down.
        """
        for ext in EXTENSIONS:
            try:
                await self.load_extension(ext)
                logger.info("Loaded extension: %s", ext)
            except Exception as exc:
                logger.error("Failed to load extension %s: %s", ext, exc)

    async def on_ready(self) -> None:
        if self.user is not None:
            logger.info("Bot is ready! Logged in as %s (ID: %s)", self.user, self.user.id)
        logger.info("Watching %d guild(s)", len(self.guilds))

    async def on_command_error(
        self, ctx: commands.Context, error: commands.CommandError
    ) -> None:
        """Unknown commands are ignored; anything a Cog didn't handle is logged."""
        if isinstance(error, commands.CommandNotFound):
            return
        if ctx.cog is not None and ctx.cog.has_error_handler():
            return
        logger.error("Unhandled command error in %s: %s", ctx.command, error)

    async def on_error(self, event_method: str, /, *args, **kwargs) -> None:
        logger.exception("Client error in %s", event_method)
