"""
Event system module for the vitality engine.

Defines the events a ledger publishes when a creature's HP changes and a
small dispatcher that forwards them to subscribed listeners, such as the
visual synchronization controller.
"""

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, Field

from vitality.core.logging import log_debug


class EventType(Enum):
    """Enumeration of available event types."""

    ON_DAMAGE_TAKEN = "on_damage_taken"  # An apply lowered HP
    ON_HEAL = "on_heal"  # An apply raised HP
    ON_NO_CHANGE = "on_no_change"  # An apply resolved without moving HP
    ON_UNDO = "on_undo"  # An undo restored a previous HP
    ON_DEATH = "on_death"  # HP reached 0


class HpChangedEvent(BaseModel):
    """Published after every ledger mutation."""

    event_type: EventType = Field(
        description="The type of event.",
    )
    prev_hp: int = Field(description="HP before the mutation.")
    new_hp: int = Field(description="HP after the mutation.")
    total_hp: int = Field(description="Maximum HP of the creature.")
    tag: str = Field(description="Damage tag of the action involved.")
    entry: Any = Field(
        default=None,
        description="The ledger entry created or removed by the mutation.",
    )

    @property
    def delta(self) -> int:
        """Signed HP change carried by the event."""
        return self.new_hp - self.prev_hp

    def __str__(self) -> str:
        return (
            f"HpChangedEvent({self.event_type.value}, {self.prev_hp} -> "
            f"{self.new_hp}/{self.total_hp}, tag={self.tag})"
        )


def event_type_for(prev_hp: int, new_hp: int) -> EventType:
    """Classifies an apply by the direction it moved HP."""
    if new_hp == 0 and prev_hp > 0:
        return EventType.ON_DEATH
    if new_hp < prev_hp:
        return EventType.ON_DAMAGE_TAKEN
    if new_hp > prev_hp:
        return EventType.ON_HEAL
    return EventType.ON_NO_CHANGE


HpListener = Callable[[HpChangedEvent], None]


class EventDispatcher:
    """Keeps a list of listeners and forwards events to them in order."""

    def __init__(self) -> None:
        self._listeners: list[HpListener] = []

    def subscribe(self, listener: HpListener) -> Callable[[], None]:
        """
        Registers a listener.

        Args:
            listener (HpListener):
                Called with every published event.

        Returns:
            Callable[[], None]:
                A function that removes the listener again.

        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: HpChangedEvent) -> None:
        """Forwards an event to every listener."""
        log_debug(f"Publishing {event}", {"listeners": len(self._listeners)})
        for listener in list(self._listeners):
            listener(event)

    def __len__(self) -> int:
        return len(self._listeners)
