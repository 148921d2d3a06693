"""
Tests for loading and querying the damage catalog.
"""

import json

import pytest
from vitality.core.catalog import default_catalog, load_catalog


@pytest.fixture
def catalog():
    return default_catalog()


def test_default_catalog_categories(catalog):
    assert list(catalog) == ["physical", "elemental", "energy", "chemical"]
    assert len(catalog) == 4
    assert "elemental" in catalog
    assert catalog.get_category("energy").category_name == "Energy"
    assert catalog.get_category("missing") is None


def test_tag_lookups(catalog):
    assert catalog.category_of("Thunder") == "elemental"
    assert catalog.category_of("Acid") == "chemical"
    assert catalog.category_of("Banana") is None
    assert catalog.color_of("Necrotic") == "#581c87"
    assert catalog.color_of("Banana") is None
    assert catalog.get_damage_type("Psychic").name == "Psychic"


def test_all_tags_in_declaration_order(catalog):
    tags = catalog.all_tags()
    assert tags[:3] == ["Bludgeoning", "Piercing", "Slashing"]
    assert len(tags) == len(set(tags)) == 13


def test_default_catalog_returns_independent_copies():
    first = default_catalog()
    first.get_category("physical").damage_types.clear()
    assert default_catalog().category_of("Slashing") == "physical"


def test_load_custom_catalog_fills_ids(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            {
                "arcane": {
                    "category_name": "Arcane",
                    "primary_color": {"name": "Violet", "hex": "#7c3aed"},
                    "damage_types": [{"id": "Void", "name": "Void", "color": "#111111"}],
                }
            }
        )
    )
    catalog = load_catalog(path)
    assert catalog.get_category("arcane").id == "arcane"
    assert catalog.category_of("Void") == "arcane"


def test_duplicate_tags_keep_first_category(tmp_path):
    entry = {"id": "Fire", "name": "Fire", "color": "#ef4444"}
    color = {"name": "Red", "hex": "#ff0000"}
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            {
                "a": {"category_name": "A", "primary_color": color, "damage_types": [entry]},
                "b": {"category_name": "B", "primary_color": color, "damage_types": [entry]},
            }
        )
    )
    assert load_catalog(path).category_of("Fire") == "a"


@pytest.mark.parametrize(
    "content",
    ["", "not json", "[]", "{}", json.dumps({"a": {"category_name": "A"}})],
)
def test_invalid_catalog_files(tmp_path, content):
    path = tmp_path / "catalog.json"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_catalog(path)


def test_missing_catalog_file(tmp_path):
    with pytest.raises(ValueError):
        load_catalog(tmp_path / "missing.json")
