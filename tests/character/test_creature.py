"""
Tests for the runtime creature wiring ledger, visuals and feedback together.
"""

import random

import pytest
from vitality.character.creature import Creature, CreatureRecord, describe_condition
from vitality.core.constants import AnimationMode, SyncState
from vitality.effects.feedback import FeedbackBoard
from vitality.effects.scheduler import ManualClock, Scheduler


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def creature(clock):
    scheduler = Scheduler(clock)
    return Creature.new(
        "Frost Troll",
        100,
        resistances={"Cold"},
        immunities={"Poison"},
        scheduler=scheduler,
        feedback=FeedbackBoard(scheduler, rng=random.Random(3)),
    )


def test_new_creature_starts_full(creature):
    assert creature.name == "Frost Troll"
    assert creature.record.current_hp == 100
    assert creature.record.animation_mode == AnimationMode.SPRITE
    assert creature.condition() == "Peak combat efficiency."
    assert not creature.is_dead


def test_resisted_hit_updates_everything(clock, creature):
    entry = creature.damage("40", "Cold")
    assert entry.new_hp == 80
    assert creature.record.current_hp == 80
    assert creature.record.logs == [entry]

    projection = creature.projection()
    assert projection.bar_hp == 80
    assert projection.sprite_hp == 100
    assert projection.state == SyncState.TRANSITIONING_DAMAGE
    assert [token.text for token in creature.feedback_tokens()] == ["-20"]

    clock.advance(600)
    creature.tick()
    assert creature.projection().sprite_hp == 80

    clock.advance(2400)
    creature.tick()
    assert creature.feedback_tokens() == []


def test_immune_hit_shows_token_without_moving_hp(creature):
    entry = creature.damage(30, "Poison")
    assert entry.new_hp == 100
    assert [token.text for token in creature.feedback_tokens()] == ["IMMUNE"]
    assert creature.projection().state == SyncState.IDLE


def test_ignored_input_changes_nothing(creature):
    assert creature.damage("0", "Fire") is None
    assert creature.damage("abc", "Fire") is None
    assert creature.heal("-4") is None
    assert creature.ledger.log == ()
    assert creature.feedback_tokens() == []


def test_undo_and_restore_keep_record_in_sync(creature):
    creature.damage(70, "Fire")
    assert creature.condition() == "Significantly damaged."
    creature.restore_to_full()
    assert creature.record.current_hp == 100
    assert creature.undo()
    assert creature.record.current_hp == 30
    assert len(creature.record.logs) == 1
    assert creature.undo()
    assert not creature.undo()
    assert creature.record.current_hp == 100


def test_video_position_follows_sprite(clock, creature):
    assert creature.video_position() == 0.001
    creature.damage(100, "Fire")
    assert creature.video_position() == 0.001
    clock.advance(600)
    creature.tick()
    assert creature.video_position() == 0.999
    assert creature.is_dead
    assert creature.condition() == "Life force extinguished."


def test_record_rejects_hp_above_total():
    with pytest.raises(ValueError):
        CreatureRecord(name="Imp", total_hp=10, current_hp=12)


def test_describe_condition_bands():
    assert describe_condition(10, False) == "Critically wounded. Mortal peril."
    assert describe_condition(30, False) == "Significantly damaged."
    assert describe_condition(50, False) == "Peak combat efficiency."
    assert describe_condition(0, True) == "Life force extinguished."


def test_new_creature_requires_a_name():
    with pytest.raises(ValueError):
        Creature.new("   ", 10)
