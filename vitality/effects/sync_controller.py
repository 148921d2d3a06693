"""
Visual synchronization between the HP bar and the sprite.

The bar follows the ledger on the same tick. The sprite keeps showing the
old HP for a short while after each change so the hit or heal animation can
play before the art swaps. The controller is a three-state machine:

    IDLE --damage--> TRANSITIONING_DAMAGE --timer--> IDLE
    IDLE --heal----> TRANSITIONING_HEAL   --timer--> IDLE

A change arriving while a timer is pending replaces that timer, and the
sprite commits straight to the newest HP once the last timer fires.
"""

from dataclasses import dataclass
from typing import Any

from vitality.core.constants import (
    DAMAGE_TRANSITION_MS,
    HEAL_TRANSITION_MS,
    HEALING_CATEGORY,
    SyncState,
)
from vitality.core.logging import log_debug
from vitality.core.utils import hp_percent
from vitality.visuals.sprite import QuadrantCrossfade

from .classifier import EffectClassifier
from .event_system import HpChangedEvent
from .scheduler import Scheduler, TimerHandle


@dataclass(frozen=True)
class VisualProjection:
    """Snapshot of what the presentation layer should draw."""

    bar_hp: int
    sprite_hp: int
    total_hp: int
    state: SyncState
    active_effect_category: str | None
    flash_color: str | None
    pending_transition_deadline: float | None

    @property
    def bar_percent(self) -> float:
        return hp_percent(self.bar_hp, self.total_hp)

    @property
    def sprite_percent(self) -> float:
        return hp_percent(self.sprite_hp, self.total_hp)


class VisualSyncController:
    """
    Derives the bar and sprite projections from a ledger's HP changes.

    The controller never stores the bar value itself: it reads the ledger
    (or the last observed HP) each time a projection is requested. Only the
    sprite value is held back, and it only moves when a transition commits.
    """

    def __init__(
        self,
        current_hp: int,
        total_hp: int,
        scheduler: Scheduler,
        classifier: EffectClassifier | None = None,
        damage_delay_ms: float = DAMAGE_TRANSITION_MS,
        heal_delay_ms: float = HEAL_TRANSITION_MS,
    ) -> None:
        """
        Initializes the controller with no lag between bar and sprite.

        Args:
            current_hp (int):
                The authoritative HP at construction time.
            total_hp (int):
                Maximum HP, used to compute percentages.
            scheduler (Scheduler):
                Timer source for the delayed commits.
            classifier (EffectClassifier | None):
                Tag classifier. Defaults to one over the shipped catalog.
            damage_delay_ms (float):
                Sprite delay after damage.
            heal_delay_ms (float):
                Sprite delay after healing.

        """
        self.scheduler = scheduler
        self.classifier = classifier if classifier is not None else EffectClassifier()
        self.damage_delay_ms = damage_delay_ms
        self.heal_delay_ms = heal_delay_ms
        self.total_hp = total_hp

        self._authoritative_hp = current_hp
        self._sprite_hp = current_hp
        self._target_hp = current_hp
        self._state = SyncState.IDLE
        self._effect_category: str | None = None
        self._flash_color: str | None = None
        self._timer: TimerHandle | None = None
        self.crossfade = QuadrantCrossfade(scheduler, hp_percent(current_hp, total_hp))

    @classmethod
    def attach(
        cls,
        ledger: Any,
        scheduler: Scheduler,
        classifier: EffectClassifier | None = None,
        **kwargs: Any,
    ) -> "VisualSyncController":
        """Builds a controller for a ledger and subscribes it to the ledger's changes."""
        controller = cls(
            ledger.current_hp, ledger.total_hp, scheduler, classifier, **kwargs
        )
        ledger.subscribe(controller.on_hp_changed)
        return controller

    # ============================================================================
    # PROJECTIONS
    # ============================================================================

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def bar_hp(self) -> int:
        return self._authoritative_hp

    @property
    def sprite_hp(self) -> int:
        return self._sprite_hp

    @property
    def active_effect_category(self) -> str | None:
        return self._effect_category

    @property
    def flash_color(self) -> str | None:
        return self._flash_color

    @property
    def pending_transition_deadline(self) -> float | None:
        if self._timer is not None and self._timer.pending:
            return self._timer.deadline
        return None

    def projection(self) -> VisualProjection:
        """Returns the current projection snapshot."""
        return VisualProjection(
            bar_hp=self.bar_hp,
            sprite_hp=self.sprite_hp,
            total_hp=self.total_hp,
            state=self._state,
            active_effect_category=self._effect_category,
            flash_color=self._flash_color,
            pending_transition_deadline=self.pending_transition_deadline,
        )

    # ============================================================================
    # TRANSITIONS
    # ============================================================================

    def on_hp_changed(self, event: HpChangedEvent) -> None:
        """Reacts to a committed ledger change."""
        self.observe(event.prev_hp, event.new_hp, event.tag)

    def observe(self, prev_hp: int, new_hp: int, tag: str) -> None:
        """
        Starts, restarts or skips a transition for an HP change.

        Args:
            prev_hp (int):
                HP before the change.
            new_hp (int):
                HP after the change.
            tag (str):
                Damage tag of the action that caused the change.

        """
        self._authoritative_hp = new_hp
        self._target_hp = new_hp

        if new_hp == prev_hp:
            # A running transition already targets this HP and keeps its flash.
            if self.pending_transition_deadline is None:
                self._commit()
            return

        if new_hp < prev_hp:
            state = SyncState.TRANSITIONING_DAMAGE
            self._effect_category = self.classifier.classify(tag)
            self._flash_color = self.classifier.flash_color(tag)
            delay = self.damage_delay_ms
        else:
            state = SyncState.TRANSITIONING_HEAL
            self._effect_category = HEALING_CATEGORY
            self._flash_color = self.classifier.heal_flash_color()
            delay = self.heal_delay_ms

        self.scheduler.cancel(self._timer)
        self._timer = self.scheduler.schedule(delay, self._commit, label=state.value)
        log_debug(
            f"Visual sync {self._state.value} -> {state.value}",
            {
                "prev_hp": prev_hp,
                "new_hp": new_hp,
                "effect": self._effect_category,
                "deadline": self._timer.deadline,
            },
        )
        self._state = state

    def cancel(self) -> bool:
        """
        Discards a pending transition without committing it.

        The sprite keeps its stale value until the next change. HP itself is
        untouched.
        """
        cancelled = self.scheduler.cancel(self._timer)
        self._timer = None
        if cancelled:
            self._state = SyncState.IDLE
            self._effect_category = None
            self._flash_color = None
        return cancelled

    def _commit(self) -> None:
        self._timer = None
        previous_state = self._state
        self._state = SyncState.IDLE
        self._effect_category = None
        self._flash_color = None
        self._sprite_hp = self._target_hp
        self.crossfade.update(hp_percent(self._sprite_hp, self.total_hp))
        if previous_state is not SyncState.IDLE:
            log_debug(
                f"Visual sync {previous_state.value} -> {SyncState.IDLE.value}",
                {"sprite_hp": self._sprite_hp},
            )
