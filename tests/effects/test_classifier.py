"""
Tests for the cosmetic damage tag classifier.
"""

import pytest
from vitality.core.catalog import DamageCatalog
from vitality.effects.classifier import EffectClassifier, classify


@pytest.fixture
def classifier():
    return EffectClassifier()


def test_catalog_tags_map_to_their_category(classifier):
    assert classifier.classify("Fire") == "elemental"
    assert classifier.classify("Slashing") == "physical"
    assert classifier.classify("Radiant") == "energy"
    assert classifier.classify("Poison") == "chemical"


def test_healing_tags(classifier):
    assert classifier.classify("Healing") == "healing"
    assert classifier.classify("Restoration") == "healing"


def test_unknown_tags_fall_back_to_physical(classifier):
    assert classifier.classify("Banana") == "physical"
    assert classifier.classify("Generic") == "physical"


def test_catalog_wins_over_healing_tags():
    catalog = DamageCatalog.model_validate(
        {
            "divine": {
                "category_name": "Divine",
                "primary_color": {"name": "gold", "hex": "#ffd700"},
                "damage_types": [{"id": "Healing", "name": "Healing", "color": "#ffd700"}],
            }
        }
    )
    assert classify("Healing", catalog) == "divine"


def test_flash_colors(classifier):
    assert classifier.flash_color("Cold") == "#3b82f6"
    assert classifier.flash_color("Unknown") == "#dc2626"
    assert EffectClassifier.heal_flash_color() == "#16a34a"
