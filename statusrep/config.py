"""
statusrep.config — YAML Configuration Loader
=============================================

**Why this file exists:**
This module reads ``config.yaml`` for soft, non-secret settings (command
prefix, cooldown length, reward role presentation).  The bot token is a
secret and lives in the environment / ``.env`` instead.

Per-guild state (vanity marker, reward channel) is *not* configured here;
admins set it at runtime with ``!setup``.

Usage::

    from statusrep.config import load_config

    cfg = load_config()          # reads ./config.yaml by default
    print(cfg.bot_prefix)        # "!"
    print(cfg.cooldown_ms)       # 86400000
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from statusrep.constants import DEFAULT_REWARD_ROLE_NAME

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "STATUSREP_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class StatusRepConfig:
    """Immutable configuration loaded from ``config.yaml``.

    Every field has a default so the bot runs without a config file.
    """

    # Discord
    bot_prefix: str = "!"

    # Rewards
    cooldown_hours: float = 24
    reward_role_name: str = DEFAULT_REWARD_ROLE_NAME
    reward_role_color: str = "#00ff00"
    status_preview_limit: int = 100

    # Logging
    log_level: str = "INFO"

    @property
    def cooldown_ms(self) -> int:
        """Cooldown window in milliseconds (what the decision engine compares)."""
        return int(self.cooldown_hours * 60 * 60 * 1000)

    @property
    def reward_role_color_value(self) -> int:
        """The role colour as an integer suitable for ``discord.Colour``."""
        return int(self.reward_role_color.lstrip("#"), 16)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path | None = None) -> StatusRepConfig:
    """Read *path* and return a :class:`StatusRepConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.  Defaults to
        ``$STATUSREP_CONFIG`` or ``config.yaml`` in the working directory.
        A missing file is not an error: defaults are used.

    Raises
    ------
    ValueError
        If a key has a value of the wrong shape (non-numeric cooldown,
        bad colour hex, non-positive preview limit, empty prefix).
    """
    config_path = Path(path or os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    if not config_path.exists():
        logger.info(
            "No configuration file at %s — using defaults", config_path.resolve()
        )
        return StatusRepConfig()

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    defaults = StatusRepConfig()
    cfg = StatusRepConfig(
        bot_prefix=str(raw.get("bot_prefix", defaults.bot_prefix)),
        cooldown_hours=float(raw.get("cooldown_hours", defaults.cooldown_hours)),
        reward_role_name=str(raw.get("reward_role_name", defaults.reward_role_name)),
        reward_role_color=str(raw.get("reward_role_color", defaults.reward_role_color)),
        status_preview_limit=int(
            raw.get("status_preview_limit", defaults.status_preview_limit)
        ),
        log_level=str(raw.get("log_level", defaults.log_level)).upper(),
    )
    _validate(cfg)
    return cfg


def _validate(cfg: StatusRepConfig) -> None:
    if not cfg.bot_prefix:
        raise ValueError("bot_prefix must not be empty")
    if cfg.cooldown_hours < 0:
        raise ValueError(f"cooldown_hours must be >= 0, got {cfg.cooldown_hours}")
    if cfg.status_preview_limit <= 0:
        raise ValueError(
            f"status_preview_limit must be positive, got {cfg.status_preview_limit}"
        )
    try:
        cfg.reward_role_color_value
    except ValueError:
        raise ValueError(
            f"reward_role_color must be a hex colour like #00ff00, "
            f"got {cfg.reward_role_color!r}"
        ) from None
