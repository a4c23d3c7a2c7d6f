"""
StatusRep — Vanity Status Rewards for Discord
==============================================
Watches members' custom status text for a guild-configured vanity marker
(e.g. ``discord.gg/example``) and rewards the first transition into it
with a perk role and a public shout-out.  All state is in-memory.

Package layout::

    statusrep/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Shared constants + text helpers
    ├── errors.py          # Exception taxonomy
    ├── engine/
    │   ├── state.py       # In-memory ledger / config / cooldown / counter stores
    │   └── decision.py    # Rising-edge + cooldown reward decision
    ├── services/
    │   ├── reward_target.py   # Narrow capability interface over guild + member
    │   ├── dispatcher.py      # Role grant + announcement + counter
    │   ├── embeds.py          # Discord embed builders
    │   └── reward_service.py  # Single-owner service wiring it all together
    └── bot/
        ├── core.py        # Bot subclass, cog loader
        ├── __main__.py    # Entry point
        └── cogs/
            ├── presence.py  # on_presence_update → reward pipeline
            └── admin.py     # !setup, !setstatus, !stats, !checkstatus, !resetcooldown
"""

__version__ = "0.1.0"
