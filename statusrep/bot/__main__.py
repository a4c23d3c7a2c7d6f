"""
statusrep.bot.__main__ — Entry point for ``python -m statusrep.bot``
====================================================================

Wiring:
1. Load .env (secrets).
2. Refuse to start without ``DISCORD_TOKEN``.
3. Load config.yaml (soft settings).
4. Install SIGINT/SIGTERM handlers (immediate exit; nothing to drain).
5. Create the StatusRepBot and run it (blocking).

Run with::

    python -m statusrep.bot
"""

from __future__ import annotations

import logging
import os
import signal
import sys

from dotenv import load_dotenv

from statusrep.bot.core import StatusRepBot
from statusrep.config import load_config
from statusrep.errors import MissingCredential

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("statusrep")

TOKEN_PLACEHOLDER = "your-discord-bot-token-here"


def read_token() -> str:
    """Return ``DISCORD_TOKEN`` or raise :class:`MissingCredential`."""
    token = os.getenv("DISCORD_TOKEN")
    if not token or token == TOKEN_PLACEHOLDER:
        raise MissingCredential(
            "DISCORD_TOKEN is not set.  "
            "Copy .env.example → .env and paste your bot token."
        )
    return token


def _exit_now(signum: int, _frame) -> None:
    logger.info("Received %s — exiting", signal.Signals(signum).name)
    sys.exit(0)


def install_signal_handlers() -> None:
    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _exit_now)


def main() -> None:
    """Bootstrap and run the StatusRep bot."""

    # 1. Environment variables (secrets).
    load_dotenv()

    # 2. Credential — the only fatal startup condition.
    try:
        token = read_token()
    except MissingCredential as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    # 3. Soft configuration.
    cfg = load_config()
    logging.getLogger().setLevel(cfg.log_level)
    logger.info(
        "Config loaded — prefix %r, cooldown %gh", cfg.bot_prefix, cfg.cooldown_hours,
    )

    # 4. Signals.
    install_signal_handlers()

    # 5. Bot.
    bot = StatusRepBot(cfg)
    logger.info("Starting StatusRep bot…")
    bot.run(token, log_handler=None)


if __name__ == "__main__":
    main()
