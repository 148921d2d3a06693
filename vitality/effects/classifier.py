"""
Cosmetic classification of damage tags.

Maps a tag to the effect category that picks the shake/flash animation and
to the color the sprite flashes with. Both lookups are total: unknown tags
get the fallback category and color instead of an error.
"""

from vitality.core.catalog import DamageCatalog, default_catalog
from vitality.core.constants import (
    DEFAULT_FLASH_COLOR,
    FALLBACK_CATEGORY,
    HEAL_FLASH_COLOR,
    HEALING_CATEGORY,
    HEALING_TAGS,
)


class EffectClassifier:
    """Looks tags up in a damage catalog."""

    def __init__(self, catalog: DamageCatalog | None = None) -> None:
        self.catalog: DamageCatalog = catalog if catalog is not None else default_catalog()

    def classify(self, tag: str) -> str:
        """
        Returns the effect category of a tag.

        The owning catalog category wins. Otherwise the fixed healing tags map
        to the healing category, and anything else to the physical one.
        """
        category = self.catalog.category_of(tag)
        if category is not None:
            return category
        if tag in HEALING_TAGS:
            return HEALING_CATEGORY
        return FALLBACK_CATEGORY

    def flash_color(self, tag: str) -> str:
        """Returns the flash color configured for a damage tag."""
        return self.catalog.color_of(tag) or DEFAULT_FLASH_COLOR

    @staticmethod
    def heal_flash_color() -> str:
        return HEAL_FLASH_COLOR


def classify(tag: str, catalog: DamageCatalog) -> str:
    """Shortcut for `EffectClassifier(catalog).classify(tag)`."""
    return EffectClassifier(catalog).classify(tag)
