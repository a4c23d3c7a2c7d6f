"""
tests/test_decision_engine.py — Unit Tests for the Reward Decision Engine
==========================================================================

Tests the pure decision logic (no Discord I/O): unchanged-status guard,
rising-edge detection, case-insensitive containment, and the cooldown.
"""

from __future__ import annotations

import pytest

from statusrep.constants import DAY_MS
from statusrep.engine.decision import Outcome, RewardDecisionEngine
from statusrep.engine.state import (
    CooldownTracker,
    GuildConfig,
    GuildConfigStore,
    PresenceLedger,
)

GUILD = 100
MEMBER = 1001
T0 = 50 * DAY_MS


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def ledger():
    return PresenceLedger()


@pytest.fixture
def cooldowns():
    return CooldownTracker(DAY_MS)


@pytest.fixture
def configs():
    store = GuildConfigStore()
    store.set(GUILD, GuildConfig(marker="example.gg", channel_id=555))
    return store


@pytest.fixture
def engine(ledger, configs, cooldowns):
    return RewardDecisionEngine(ledger, configs, cooldowns)


# ---------------------------------------------------------------------------
# Unchanged-status guard
# ---------------------------------------------------------------------------
class TestUnchanged:
    def test_same_as_ledger_is_ignored(self, engine, ledger):
        ledger.set(MEMBER, "hello")
        d = engine.decide(GUILD, MEMBER, "something else", "hello", T0)
        assert d.outcome is Outcome.UNCHANGED
        assert ledger.get(MEMBER) == "hello"

    def test_empty_status_for_unseen_member_creates_no_record(self, engine, ledger):
        d = engine.decide(GUILD, MEMBER, "", "", T0)
        assert d.outcome is Outcome.UNCHANGED
        assert not ledger.has(MEMBER)

    def test_duplicate_event_does_not_evaluate_again(self, engine, cooldowns):
        first = engine.decide(GUILD, MEMBER, "", "playing example.gg", T0)
        assert first.should_reward
        cooldowns.reset(MEMBER)
        second = engine.decide(GUILD, MEMBER, "", "playing example.gg", T0 + 1)
        assert second.outcome is Outcome.UNCHANGED


# ---------------------------------------------------------------------------
# Ledger updates
# ---------------------------------------------------------------------------
class TestLedger:
    def test_change_is_recorded_even_when_unconfigured(self, ledger, cooldowns):
        engine = RewardDecisionEngine(ledger, GuildConfigStore(), cooldowns)
        d = engine.decide(GUILD, MEMBER, "", "example.gg", T0)
        assert d.outcome is Outcome.UNCONFIGURED
        assert ledger.get(MEMBER) == "example.gg"
        assert cooldowns.last_reward(MEMBER) is None

    def test_change_is_recorded_without_edge(self, engine, ledger):
        engine.decide(GUILD, MEMBER, "", "just vibing", T0)
        assert ledger.get(MEMBER) == "just vibing"


# ---------------------------------------------------------------------------
# Rising edge
# ---------------------------------------------------------------------------
class TestRisingEdge:
    def test_transition_into_marker_rewards(self, engine):
        d = engine.decide(GUILD, MEMBER, "", "playing example.gg", T0)
        assert d.outcome is Outcome.REWARD
        assert d.marker == "example.gg"
        assert d.channel_id == 555

    def test_only_first_transition_rewards(self, engine, cooldowns):
        assert engine.decide(GUILD, MEMBER, "", "foo", T0).outcome is Outcome.NO_EDGE
        assert engine.decide(GUILD, MEMBER, "foo", "foo example.gg", T0).should_reward
        cooldowns.reset(MEMBER)
        d = engine.decide(GUILD, MEMBER, "foo example.gg", "foo example.gg again", T0)
        assert d.outcome is Outcome.NO_EDGE

    def test_removing_marker_is_not_an_edge(self, engine):
        engine.decide(GUILD, MEMBER, "", "example.gg", T0)
        d = engine.decide(GUILD, MEMBER, "example.gg", "nothing", T0 + 2 * DAY_MS)
        assert d.outcome is Outcome.NO_EDGE

    def test_case_insensitive_containment(self, engine):
        d = engine.decide(GUILD, 2002, "", "JOIN EXAMPLE.GG NOW", T0)
        assert d.should_reward

    def test_substring_not_word_match(self, engine):
        d = engine.decide(GUILD, MEMBER, "", "https://discord.example.gg/abc", T0)
        assert d.should_reward

    def test_had_marker_comes_from_ledger_not_snapshot(self, engine, ledger):
        # Snapshot claims the marker was already there; the ledger says no.
        ledger.set(MEMBER, "old")
        d = engine.decide(GUILD, MEMBER, "example.gg stale", "example.gg", T0)
        assert d.should_reward

    def test_ledger_with_marker_blocks_edge_despite_snapshot(self, engine, ledger):
        ledger.set(MEMBER, "example.gg")
        d = engine.decide(GUILD, MEMBER, "", "example.gg!!", T0)
        assert d.outcome is Outcome.NO_EDGE


# ---------------------------------------------------------------------------
# Cooldown
# ---------------------------------------------------------------------------
class TestCooldown:
    def _cycle(self, engine, now):
        engine.decide(GUILD, MEMBER, "", "off", now)
        return engine.decide(GUILD, MEMBER, "off", "example.gg", now)

    def test_reward_records_cooldown(self, engine, cooldowns):
        engine.decide(GUILD, MEMBER, "", "example.gg", T0)
        assert cooldowns.last_reward(MEMBER) == T0

    def test_within_window_is_suppressed(self, engine, cooldowns):
        assert self._cycle(engine, T0).should_reward
        d = self._cycle(engine, T0 + DAY_MS - 1)
        assert d.outcome is Outcome.ON_COOLDOWN
        assert cooldowns.last_reward(MEMBER) == T0

    def test_at_window_boundary_rewards_again(self, engine, cooldowns):
        assert self._cycle(engine, T0).should_reward
        d = self._cycle(engine, T0 + DAY_MS)
        assert d.should_reward
        assert cooldowns.last_reward(MEMBER) == T0 + DAY_MS

    def test_cooldown_is_per_member(self, engine):
        assert engine.decide(GUILD, MEMBER, "", "example.gg", T0).should_reward
        assert engine.decide(GUILD, 2002, "", "example.gg", T0).should_reward
