"""
Constants and enumerations for the vitality engine.

Defines timing constants for the visual projections, sprite atlas geometry,
the fixed healing tags, and the enumerations for ledger entries, affinity
modifiers and synchronization states.
"""

from enum import Enum

# Duration (ms) the sprite keeps its old value after a damaging change.
DAMAGE_TRANSITION_MS = 600
# Duration (ms) the sprite keeps its old value after a healing change.
HEAL_TRANSITION_MS = 800
# Lifetime (ms) of a floating feedback token.
FEEDBACK_LIFETIME_MS = 3000
# Duration (ms) of the cross-fade between two atlas quadrants.
CROSSFADE_MS = 400

# Sprite atlas geometry.
GRID_COLS = 2
GRID_ROWS = 2
# Zoom applied to the atlas so neighbouring quadrants never bleed in.
SPRITE_ZOOM = 1.1

# Tags that always belong to the healing effect category.
HEALING_TAG = "Healing"
RESTORATION_TAG = "Restoration"
HEALING_TAGS = frozenset({HEALING_TAG, RESTORATION_TAG})
# Tag used when the caller does not specify one.
GENERIC_TAG = "Generic"

# Effect categories with a fixed meaning.
HEALING_CATEGORY = "healing"
FALLBACK_CATEGORY = "physical"

# Flash colors.
DEFAULT_FLASH_COLOR = "#dc2626"
HEAL_FLASH_COLOR = "#16a34a"


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class EntryKind(NiceEnum):
    """Defines the kind of action recorded by a ledger entry."""

    DAMAGE = "damage"
    HEAL = "heal"

    @property
    def color(self) -> str:
        """Returns the color string associated with this entry kind."""
        return {
            EntryKind.DAMAGE: "bold red",
            EntryKind.HEAL: "bold green",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies entry kind color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class AffinityModifier(NiceEnum):
    """Defines which affinity rule altered an incoming magnitude."""

    NONE = "none"
    IMMUNE = "immune"
    RESISTANT = "resistant"
    VULNERABLE = "vulnerable"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this modifier."""
        return {
            AffinityModifier.IMMUNE: "🛡️",
            AffinityModifier.RESISTANT: "🔰",
            AffinityModifier.VULNERABLE: "💢",
        }.get(self, "")

    @property
    def color(self) -> str:
        """Returns the color string associated with this modifier."""
        return {
            AffinityModifier.IMMUNE: "bold green",
            AffinityModifier.RESISTANT: "bold blue",
            AffinityModifier.VULNERABLE: "bold red",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies modifier color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class AffinityKind(NiceEnum):
    """Defines the three affinity lists held by a creature."""

    RESISTANCE = "resistances"
    IMMUNITY = "immunities"
    VULNERABILITY = "vulnerabilities"


class SyncState(NiceEnum):
    """Defines the states of the visual synchronization state machine."""

    IDLE = "idle"
    TRANSITIONING_DAMAGE = "transitioning_damage"
    TRANSITIONING_HEAL = "transitioning_heal"


class AnimationMode(NiceEnum):
    """Defines how the creature's art asset is displayed."""

    SPRITE = "sprite"
    VIDEO = "video"
    STATIC = "static"
