"""
Tests for the floating feedback tokens.
"""

import random

import pytest
from vitality.combat.ledger import LedgerEntry
from vitality.core.constants import AffinityModifier, EntryKind
from vitality.effects.feedback import (
    ANCHOR_LEFT,
    ANCHOR_TOP,
    JITTER,
    FeedbackBoard,
    feedback_text,
)
from vitality.effects.scheduler import ManualClock, Scheduler


def make_entry(kind, magnitude, original, prev_hp, new_hp, modifier=AffinityModifier.NONE):
    return LedgerEntry(
        kind=kind,
        tag="Fire",
        magnitude=magnitude,
        original_magnitude=original,
        prev_hp=prev_hp,
        new_hp=new_hp,
        modifier=modifier,
    )


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def board(clock):
    return FeedbackBoard(Scheduler(clock), rng=random.Random(7))


def test_damage_and_heal_text():
    assert feedback_text(make_entry(EntryKind.DAMAGE, 20, 40, 100, 80)) == ("-20", "text-red-500")
    assert feedback_text(make_entry(EntryKind.HEAL, 15, 15, 50, 65)) == ("+15", "text-green-500")


def test_immune_text():
    entry = make_entry(EntryKind.DAMAGE, 0, 25, 50, 50, AffinityModifier.IMMUNE)
    assert feedback_text(entry) == ("IMMUNE", "text-stone-400")


def test_resisted_to_zero_text():
    entry = make_entry(EntryKind.DAMAGE, 0, 1, 50, 50, AffinityModifier.RESISTANT)
    assert feedback_text(entry) == ("RESISTED", "text-blue-400")


def test_zero_heal_is_suppressed():
    assert feedback_text(make_entry(EntryKind.HEAL, 0, 0, 100, 100)) is None


def test_tokens_are_placed_near_the_anchor(board):
    token = board.emit(make_entry(EntryKind.DAMAGE, 5, 5, 10, 5))
    assert token is not None
    assert abs(token.left - ANCHOR_LEFT) <= JITTER
    assert abs(token.top - ANCHOR_TOP) <= JITTER
    assert board.tokens == [token]


def test_tokens_expire_after_their_lifetime(clock, board):
    first = board.emit(make_entry(EntryKind.DAMAGE, 5, 5, 10, 5))
    clock.advance(1000)
    second = board.emit(make_entry(EntryKind.HEAL, 2, 2, 5, 7))
    board.scheduler.advance()
    assert board.tokens == [first, second]

    clock.advance(2000)
    board.scheduler.advance()
    assert board.tokens == [second]

    clock.advance(1000)
    board.scheduler.advance()
    assert board.tokens == []


def test_suppressed_entries_add_nothing(board):
    assert board.emit(make_entry(EntryKind.HEAL, 0, 0, 10, 10)) is None
    assert board.tokens == []


def test_clear_cancels_expiry(clock, board):
    board.emit(make_entry(EntryKind.DAMAGE, 5, 5, 10, 5))
    board.clear()
    assert board.tokens == []
    assert board.scheduler.pending() == []
