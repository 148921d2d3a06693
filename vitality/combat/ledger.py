"""
Ledger module for the vitality engine.

The ledger owns a creature's current and maximum HP and the ordered history
of every resolved action. Each entry records the HP it started from, so undo
is a pop followed by a restore, and any number of undos walk back through
the history exactly.
"""

import time
import uuid
from typing import Callable, Iterable

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field, field_validator

from vitality.core.constants import (
    GENERIC_TAG,
    RESTORATION_TAG,
    AffinityModifier,
    EntryKind,
)
from vitality.core.error_handling import (
    ensure_int_in_range,
    ensure_positive_int,
    raise_invariant_violation,
)
from vitality.core.logging import log_debug
from vitality.core.utils import clamp, hp_percent
from vitality.effects.event_system import (
    EventDispatcher,
    EventType,
    HpChangedEvent,
    HpListener,
    event_type_for,
)

from .affinity import AffinitySet, resolve


def _now_ms() -> int:
    return int(time.time() * 1000)


class LedgerEntry(BaseModel):
    """
    Immutable record of one resolved action.

    Attributes:
        id (str):
            Unique identifier of the entry.
        timestamp (int):
            Creation time in milliseconds since the epoch.
        kind (EntryKind):
            Whether the action was damage or healing.
        tag (str):
            The damage tag of the action.
        magnitude (int):
            The HP change after affinities, before clamping, as a positive number.
        prev_hp (int):
            HP before the action.
        new_hp (int):
            HP after the action.
        original_magnitude (int):
            The magnitude requested by the caller.
        modifier (AffinityModifier):
            The affinity rule that altered the magnitude.

    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: int = Field(default_factory=_now_ms)
    kind: EntryKind = Field(alias="type")
    tag: str = Field(default=GENERIC_TAG, alias="subType")
    magnitude: int = Field(ge=0, alias="amount")
    prev_hp: int = Field(ge=0, alias="prevHp")
    new_hp: int = Field(ge=0, alias="newHp")
    original_magnitude: int = Field(ge=0, alias="originalAmount")
    modifier: AffinityModifier = AffinityModifier.NONE

    @field_validator("kind", mode="before")
    @classmethod
    def _restore_is_heal(cls, value: object) -> object:
        # Older records tagged full restorations with their own kind.
        return "heal" if value == "restore" else value

    @field_validator("modifier", mode="before")
    @classmethod
    def _normal_is_none(cls, value: object) -> object:
        if value is None or value == "normal":
            return AffinityModifier.NONE
        return value

    @property
    def signed_delta(self) -> int:
        """The effective delta with its sign restored."""
        return -self.magnitude if self.kind == EntryKind.DAMAGE else self.magnitude

    @property
    def hp_change(self) -> int:
        """The HP actually gained or lost once clamping is accounted for."""
        return self.new_hp - self.prev_hp


class VitalityState(BaseModel):
    """Current and maximum HP of a creature."""

    current_hp: int = Field(ge=0)
    total_hp: int = Field(gt=0)


def fold_entries(entries: Iterable[LedgerEntry], start_hp: int, total_hp: int) -> int:
    """
    Re-derives HP by replaying entries from a starting value.

    Args:
        entries (Iterable[LedgerEntry]):
            The entries, oldest first.
        start_hp (int):
            HP before the first entry.
        total_hp (int):
            Maximum HP used for clamping.

    Returns:
        int:
            HP after the last entry.

    """
    hp = start_hp
    for entry in entries:
        hp = clamp(hp + entry.signed_delta, 0, total_hp)
    return hp


class VitalityLedger:
    """
    Authoritative HP of one creature and the history that produced it.

    `apply`, `undo` and `restore_to_full` are the only ways HP changes.
    Listeners registered through `subscribe` are told about each change
    after it has been committed.
    """

    def __init__(
        self,
        total_hp: int,
        current_hp: int | None = None,
        affinities: AffinitySet | None = None,
        log: Iterable[LedgerEntry] = (),
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """
        Initializes the ledger.

        Args:
            total_hp (int):
                Maximum HP, strictly positive.
            current_hp (int | None):
                Starting HP. Defaults to total_hp.
            affinities (AffinitySet | None):
                Affinities of the creature. Defaults to an empty set.
            log (Iterable[LedgerEntry]):
                Previously persisted entries, oldest first.
            clock (Callable[[], int]):
                Returns the timestamp (ms) stamped on new entries.

        """
        total_hp = ensure_positive_int(total_hp, "total_hp")
        if current_hp is None:
            current_hp = total_hp
        current_hp = ensure_int_in_range(current_hp, "current_hp", 0, total_hp)
        self._state = VitalityState(current_hp=current_hp, total_hp=total_hp)
        self.affinities: AffinitySet = affinities if affinities is not None else AffinitySet()
        self._log: list[LedgerEntry] = list(log)
        self._clock = clock
        self._events = EventDispatcher()

        if self._log and self._log[-1].new_hp != current_hp:
            log_warning(
                "Last ledger entry does not match the current HP",
                {"entry_new_hp": self._log[-1].new_hp, "current_hp": current_hp},
            )

    # ============================================================================
    # ACCESSORS
    # ============================================================================

    @property
    def current_hp(self) -> int:
        return self._state.current_hp

    @property
    def total_hp(self) -> int:
        return self._state.total_hp

    @property
    def state(self) -> VitalityState:
        """A snapshot of the current HP state."""
        return self._state.model_copy()

    @property
    def log(self) -> tuple[LedgerEntry, ...]:
        """The entries, oldest first. Read-only."""
        return tuple(self._log)

    @property
    def hp_percent(self) -> float:
        return hp_percent(self.current_hp, self.total_hp)

    @property
    def is_dead(self) -> bool:
        return self.current_hp <= 0

    def can_undo(self) -> bool:
        return bool(self._log)

    def subscribe(self, listener: HpListener) -> Callable[[], None]:
        """Registers a listener for HP changes. Returns an unsubscribe function."""
        return self._events.subscribe(listener)

    # ============================================================================
    # MUTATORS
    # ============================================================================

    def apply(self, delta: int, tag: str = GENERIC_TAG) -> LedgerEntry:
        """
        Resolves a damage (negative) or healing (non-negative) delta.

        Callers are expected to drop zero, NaN and otherwise malformed input
        before signing the delta; this method does not filter it again.

        Args:
            delta (int):
                Signed HP change requested by the caller.
            tag (str):
                The damage tag of the action.

        Returns:
            LedgerEntry:
                The entry appended to the log.

        """
        original_magnitude = abs(delta)
        if delta < 0:
            result = resolve(original_magnitude, tag, self.affinities)
            effective_delta = -result.effective
            modifier = result.modifier
            kind = EntryKind.DAMAGE
        else:
            effective_delta = delta
            modifier = AffinityModifier.NONE
            kind = EntryKind.HEAL

        prev_hp = self.current_hp
        new_hp = clamp(prev_hp + effective_delta, 0, self.total_hp)
        entry = LedgerEntry(
            timestamp=self._clock(),
            kind=kind,
            tag=tag,
            magnitude=abs(effective_delta),
            prev_hp=prev_hp,
            new_hp=new_hp,
            original_magnitude=original_magnitude,
            modifier=modifier,
        )
        self._log.append(entry)
        self._set_hp(new_hp)

        log_debug(
            f"{kind.display_name} of {original_magnitude} {tag} resolved to "
            f"{entry.magnitude} ({modifier.value}), HP {prev_hp} -> {new_hp}",
            {"total_hp": self.total_hp, "entries": len(self._log)},
        )
        self._events.publish(
            HpChangedEvent(
                event_type=event_type_for(prev_hp, new_hp),
                prev_hp=prev_hp,
                new_hp=new_hp,
                total_hp=self.total_hp,
                tag=tag,
                entry=entry,
            )
        )
        return entry

    def undo(self) -> bool:
        """
        Reverts the most recent entry.

        Returns:
            bool:
                False if there was nothing to revert, True otherwise.

        """
        if not self._log:
            return False
        entry = self._log.pop()
        prev_hp = self.current_hp
        self._set_hp(entry.prev_hp)

        log_debug(
            f"Undid {entry.kind.value} of {entry.magnitude} {entry.tag}, "
            f"HP {prev_hp} -> {entry.prev_hp}",
            {"entries": len(self._log)},
        )
        self._events.publish(
            HpChangedEvent(
                event_type=EventType.ON_UNDO,
                prev_hp=prev_hp,
                new_hp=entry.prev_hp,
                total_hp=self.total_hp,
                tag=entry.tag,
                entry=entry,
            )
        )
        return True

    def restore_to_full(self) -> LedgerEntry:
        """Heals back to maximum HP as a regular, undoable entry."""
        return self.apply(self.total_hp - self.current_hp, RESTORATION_TAG)

    def replay(self) -> int:
        """Re-derives the current HP by folding the log from maximum HP."""
        return fold_entries(self._log, self.total_hp, self.total_hp)

    # ============================================================================
    # INTERNALS
    # ============================================================================

    def _set_hp(self, value: int) -> None:
        if not 0 <= value <= self.total_hp:
            raise_invariant_violation(
                f"Current HP {value} is outside [0, {self.total_hp}]",
                {"current_hp": value, "total_hp": self.total_hp},
            )
        self._state = VitalityState(current_hp=value, total_hp=self.total_hp)
