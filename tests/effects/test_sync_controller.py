"""
Tests for the delayed synchronization between the HP bar and the sprite.
"""

import pytest
from vitality.combat.affinity import AffinitySet
from vitality.combat.ledger import VitalityLedger
from vitality.core.constants import SyncState
from vitality.effects.scheduler import ManualClock, Scheduler
from vitality.effects.sync_controller import VisualSyncController


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)


@pytest.fixture
def ledger():
    return VitalityLedger(total_hp=100, affinities=AffinitySet(resistances={"Cold"}))


@pytest.fixture
def controller(ledger, scheduler):
    return VisualSyncController.attach(ledger, scheduler)


def advance(clock, scheduler, ms):
    clock.advance(ms)
    scheduler.advance()


def test_starts_idle_and_in_sync(controller):
    projection = controller.projection()
    assert projection.state == SyncState.IDLE
    assert projection.bar_hp == projection.sprite_hp == 100
    assert projection.pending_transition_deadline is None


def test_resisted_cold_hit_delays_the_sprite(clock, scheduler, ledger, controller):
    ledger.apply(-40, "Cold")

    assert controller.bar_hp == 80
    assert controller.sprite_hp == 100
    assert controller.state == SyncState.TRANSITIONING_DAMAGE
    assert controller.active_effect_category == "elemental"
    assert controller.flash_color == "#3b82f6"
    assert controller.pending_transition_deadline == 600

    advance(clock, scheduler, 599)
    assert controller.sprite_hp == 100

    advance(clock, scheduler, 1)
    assert controller.sprite_hp == 80
    assert controller.state == SyncState.IDLE
    assert controller.active_effect_category is None
    assert controller.crossfade.quadrant == 0


def test_heal_uses_the_longer_delay(clock, scheduler, ledger, controller):
    ledger.apply(-60, "Slashing")
    advance(clock, scheduler, 600)
    ledger.apply(30, "Healing")

    assert controller.state == SyncState.TRANSITIONING_HEAL
    assert controller.active_effect_category == "healing"
    assert controller.flash_color == "#16a34a"

    advance(clock, scheduler, 600)
    assert controller.sprite_hp == 40
    advance(clock, scheduler, 200)
    assert controller.sprite_hp == 70


def test_rapid_changes_are_debounced(clock, scheduler, ledger, controller):
    ledger.apply(-10, "Fire")
    advance(clock, scheduler, 300)
    ledger.apply(-10, "Fire")

    advance(clock, scheduler, 300)
    assert controller.sprite_hp == 100

    advance(clock, scheduler, 300)
    assert controller.sprite_hp == 80
    assert controller.state == SyncState.IDLE


def test_no_change_while_idle_snaps(clock, scheduler, controller):
    controller.observe(100, 70, "Fire")
    controller.cancel()
    assert controller.sprite_hp == 100
    controller.observe(70, 70, "Fire")
    assert controller.sprite_hp == 70
    assert controller.state == SyncState.IDLE
    assert controller.pending_transition_deadline is None
    advance(clock, scheduler, 1000)
    assert controller.sprite_hp == 70


def test_immune_hit_leaves_running_transition_alone(clock, scheduler):
    ledger = VitalityLedger(total_hp=100, affinities=AffinitySet(immunities={"Poison"}))
    controller = VisualSyncController.attach(ledger, scheduler)
    ledger.apply(-60, "Fire")
    advance(clock, scheduler, 100)
    ledger.apply(-10, "Poison")

    assert controller.state == SyncState.TRANSITIONING_DAMAGE
    assert controller.sprite_hp == 100
    assert controller.flash_color == "#ef4444"
    assert controller.pending_transition_deadline == 600

    advance(clock, scheduler, 499)
    assert controller.sprite_hp == 100
    advance(clock, scheduler, 1)
    assert controller.sprite_hp == 40
    assert controller.state == SyncState.IDLE


def test_undoing_a_no_change_entry_keeps_transition(clock, scheduler, controller, ledger):
    ledger.apply(-30, "Fire")
    ledger.apply(0, "Healing")
    ledger.undo()
    assert controller.state == SyncState.TRANSITIONING_DAMAGE
    assert controller.sprite_hp == 100
    advance(clock, scheduler, 600)
    assert controller.sprite_hp == 70


def test_undo_triggers_a_transition(clock, scheduler, ledger, controller):
    ledger.apply(-50, "Fire")
    advance(clock, scheduler, 600)
    ledger.undo()
    assert controller.bar_hp == 100
    assert controller.state == SyncState.TRANSITIONING_HEAL
    advance(clock, scheduler, 800)
    assert controller.sprite_hp == 100


def test_sprite_quadrant_follows_the_committed_hp(clock, scheduler, ledger, controller):
    ledger.apply(-60, "Fire")
    assert controller.crossfade.quadrant == 0
    advance(clock, scheduler, 600)
    assert controller.crossfade.quadrant == 2
    assert controller.crossfade.is_transitioning
    advance(clock, scheduler, 400)
    assert not controller.crossfade.is_transitioning


def test_cancel_keeps_stale_sprite(controller):
    controller.observe(100, 60, "Fire")
    assert controller.cancel()
    assert controller.sprite_hp == 100
    assert controller.bar_hp == 60
    assert controller.state == SyncState.IDLE
    assert not controller.cancel()


def test_projection_percentages(controller):
    controller.observe(100, 25, "Fire")
    projection = controller.projection()
    assert projection.bar_percent == 25.0
    assert projection.sprite_percent == 100.0
