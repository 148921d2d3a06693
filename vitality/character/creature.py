"""
Creature module for the vitality engine.

A `CreatureRecord` is the persisted shape of a creature: identity, HP, the
combat log and the affinity lists. A `Creature` wraps a record at runtime,
wiring its ledger to the visual projections and the floating feedback.
"""

import time
import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from vitality.combat.affinity import AffinitySet
from vitality.combat.ledger import LedgerEntry, VitalityLedger
from vitality.core.catalog import DamageCatalog
from vitality.core.constants import GENERIC_TAG, AnimationMode
from vitality.core.error_handling import require_non_empty_string
from vitality.core.utils import parse_delta_input
from vitality.effects.classifier import EffectClassifier
from vitality.effects.feedback import FeedbackBoard, FeedbackToken
from vitality.effects.scheduler import Scheduler
from vitality.effects.sync_controller import VisualProjection, VisualSyncController
from vitality.visuals.sprite import video_seek_ratio


class CreatureRecord(BaseModel):
    """
    Persisted state of a creature.

    Attributes:
        id (str):
            Unique identifier of the creature.
        name (str):
            Display name.
        race (str):
            Race label, kept for display only.
        total_hp (int):
            Maximum HP.
        current_hp (int):
            Current HP.
        logs (list[LedgerEntry]):
            Combat log, oldest first.
        resistances (set[str]):
            Tags whose damage is halved.
        immunities (set[str]):
            Tags whose damage is ignored.
        vulnerabilities (set[str]):
            Tags whose damage is doubled.
        animation_mode (AnimationMode):
            How the art asset is displayed.
        created_at (int):
            Creation time in milliseconds since the epoch.

    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(description="Display name of the creature.")
    race: str = Field(default="", description="Race label.")
    total_hp: int = Field(gt=0, alias="totalHp")
    current_hp: int | None = Field(default=None, ge=0, alias="currentHp")
    logs: list[LedgerEntry] = Field(default_factory=list)
    resistances: set[str] = Field(default_factory=set)
    immunities: set[str] = Field(default_factory=set)
    vulnerabilities: set[str] = Field(default_factory=set)
    animation_mode: AnimationMode = Field(default=AnimationMode.SPRITE, alias="animationMode")
    created_at: int = Field(
        default_factory=lambda: int(time.time() * 1000), alias="createdAt"
    )

    @model_validator(mode="after")
    def _check_hp(self) -> "CreatureRecord":
        if self.current_hp is None:
            self.current_hp = self.total_hp
        if self.current_hp > self.total_hp:
            raise ValueError(
                f"current_hp ({self.current_hp}) cannot exceed total_hp ({self.total_hp})"
            )
        return self

    @property
    def affinities(self) -> AffinitySet:
        return AffinitySet(
            resistances=set(self.resistances),
            immunities=set(self.immunities),
            vulnerabilities=set(self.vulnerabilities),
        )


def describe_condition(hp_percent: float, is_dead: bool) -> str:
    """Returns the flavour text shown on the condition card."""
    if is_dead:
        return "Life force extinguished."
    if hp_percent < 25:
        return "Critically wounded. Mortal peril."
    if hp_percent < 50:
        return "Significantly damaged."
    return "Peak combat efficiency."


class Creature:
    """
    Runtime view of a creature.

    Owns the ledger built from the record, the visual controller observing
    it and the feedback board. Every creature has its own instances, so
    nothing is shared between creatures except the scheduler, when the
    caller passes the same one in.
    """

    def __init__(
        self,
        record: CreatureRecord,
        scheduler: Scheduler | None = None,
        catalog: DamageCatalog | None = None,
        feedback: FeedbackBoard | None = None,
    ) -> None:
        self.record = record
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.classifier = EffectClassifier(catalog)
        self.ledger = VitalityLedger(
            total_hp=record.total_hp,
            current_hp=record.current_hp,
            affinities=record.affinities,
            log=record.logs,
        )
        self.visuals = VisualSyncController.attach(self.ledger, self.scheduler, self.classifier)
        self.feedback = feedback if feedback is not None else FeedbackBoard(self.scheduler)

    @classmethod
    def new(cls, name: str, total_hp: int, **kwargs: Any) -> "Creature":
        """Creates a creature at full HP with an empty log."""
        name = require_non_empty_string(name, "name")
        record_fields = {
            key: kwargs.pop(key)
            for key in list(kwargs)
            if key in CreatureRecord.model_fields
        }
        return cls(CreatureRecord(name=name, total_hp=total_hp, **record_fields), **kwargs)

    # ============================================================================
    # ACTIONS
    # ============================================================================

    def apply(self, delta: int, tag: str = GENERIC_TAG) -> LedgerEntry:
        """Applies a signed delta and emits the matching feedback token."""
        entry = self.ledger.apply(delta, tag)
        self.feedback.emit(entry)
        self.sync_record()
        return entry

    def damage(self, amount: Any, tag: str = GENERIC_TAG) -> LedgerEntry | None:
        """Applies damage from raw input. Returns None for ignored input."""
        delta = parse_delta_input(amount, sign=-1)
        if delta is None:
            return None
        return self.apply(delta, tag)

    def heal(self, amount: Any, tag: str = "Healing") -> LedgerEntry | None:
        """Applies healing from raw input. Returns None for ignored input."""
        delta = parse_delta_input(amount, sign=1)
        if delta is None:
            return None
        return self.apply(delta, tag)

    def undo(self) -> bool:
        undone = self.ledger.undo()
        if undone:
            self.sync_record()
        return undone

    def restore_to_full(self) -> LedgerEntry:
        entry = self.ledger.restore_to_full()
        self.feedback.emit(entry)
        self.sync_record()
        return entry

    def tick(self) -> int:
        """Fires the timers that are due. Returns how many fired."""
        return self.scheduler.advance()

    # ============================================================================
    # VIEWS
    # ============================================================================

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def is_dead(self) -> bool:
        return self.ledger.is_dead

    def projection(self) -> VisualProjection:
        return self.visuals.projection()

    def feedback_tokens(self) -> list[FeedbackToken]:
        return self.feedback.tokens

    def condition(self) -> str:
        return describe_condition(self.ledger.hp_percent, self.is_dead)

    def video_position(self) -> float:
        """Seek ratio for video mode, following the delayed sprite HP."""
        return video_seek_ratio(self.visuals.projection().sprite_percent)

    def sync_record(self) -> CreatureRecord:
        """Copies the ledger state back into the persisted record."""
        self.record.current_hp = self.ledger.current_hp
        self.record.logs = list(self.ledger.log)
        affinities = self.ledger.affinities
        self.record.resistances = set(affinities.resistances)
        self.record.immunities = set(affinities.immunities)
        self.record.vulnerabilities = set(affinities.vulnerabilities)
        return self.record
