"""
Damage catalog module for the vitality engine.

The catalog is the user-editable taxonomy of damage tags: every tag belongs
to exactly one category and carries the color used when it flashes on the
sprite. The engine never hard-codes tags; it receives a catalog and looks
tags up in it.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterator

from catchery import log_warning
from pydantic import BaseModel, Field, RootModel, ValidationError, model_validator

# Location of the catalog shipped with the package.
DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "damage_catalog.json"


class ColorDef(BaseModel):
    """A named color."""

    name: str = Field(description="Human-readable color name.")
    hex: str = Field(description="The color as a #rrggbb string.")


class DamageTypeConfig(BaseModel):
    """A single damage tag and the color it flashes with."""

    id: str = Field(description="The tag identifier, e.g. 'Fire'.")
    name: str = Field(description="Display name of the tag.")
    color: str = Field(description="Flash color as a #rrggbb string.")


class DamageCategoryConfig(BaseModel):
    """A cosmetic grouping of damage tags."""

    id: str = Field(description="The category identifier, e.g. 'elemental'.")
    category_name: str = Field(description="Display name of the category.")
    primary_color: ColorDef = Field(description="Main color of the category.")
    accent_colors: list[ColorDef] = Field(
        default_factory=list,
        description="Secondary colors of the category.",
    )
    damage_types: list[DamageTypeConfig] = Field(
        default_factory=list,
        description="Tags owned by this category.",
    )

    def get_damage_type(self, tag: str) -> DamageTypeConfig | None:
        """Returns the configuration of the tag if this category owns it."""
        for damage_type in self.damage_types:
            if damage_type.id == tag:
                return damage_type
        return None


class DamageCatalog(RootModel[dict[str, DamageCategoryConfig]]):
    """
    Mapping of category id to category configuration.

    Categories keep the order they were declared in, and lookups walk them in
    that order, so the first category owning a tag wins.
    """

    @model_validator(mode="before")
    @classmethod
    def _fill_category_ids(cls, data: Any) -> Any:
        # Categories may omit their id; the mapping key is authoritative.
        if isinstance(data, dict):
            filled = {}
            for key, value in data.items():
                if isinstance(value, dict) and "id" not in value:
                    value = {**value, "id": key}
                filled[key] = value
            return filled
        return data

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self.root

    def categories(self) -> list[DamageCategoryConfig]:
        """Returns the categories in declaration order."""
        return list(self.root.values())

    def get_category(self, category_id: str) -> DamageCategoryConfig | None:
        """Get a category by id, or None if not found."""
        return self.root.get(category_id)

    def category_of(self, tag: str) -> str | None:
        """Returns the id of the category owning the tag, or None."""
        for category_id, category in self.root.items():
            if category.get_damage_type(tag):
                return category_id
        return None

    def get_damage_type(self, tag: str) -> DamageTypeConfig | None:
        """Returns the configuration of a tag, or None if no category owns it."""
        for category in self.root.values():
            damage_type = category.get_damage_type(tag)
            if damage_type:
                return damage_type
        return None

    def color_of(self, tag: str) -> str | None:
        """Returns the configured flash color of a tag, or None."""
        damage_type = self.get_damage_type(tag)
        return damage_type.color if damage_type else None

    def all_tags(self) -> list[str]:
        """Returns every tag of the catalog in declaration order."""
        return [
            damage_type.id
            for category in self.root.values()
            for damage_type in category.damage_types
        ]


def load_catalog(filepath: Path) -> DamageCatalog:
    """
    Loads and validates a damage catalog from a JSON file.

    Args:
        filepath (Path):
            The JSON file holding a mapping of category id to category.

    Returns:
        DamageCatalog:
            The validated catalog.

    Raises:
        ValueError:
            If the file is missing, is not valid JSON, or does not describe a
            catalog.

    """
    try:
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not data:
            raise ValueError(f"Empty catalog in {filepath}")
        if not isinstance(data, dict):
            raise ValueError(f"Expected mapping in {filepath}, got {type(data).__name__}")
        catalog = DamageCatalog.model_validate(data)
    except (json.JSONDecodeError, FileNotFoundError, ValidationError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}")

    _warn_duplicate_tags(catalog, filepath)
    return catalog


def _warn_duplicate_tags(catalog: DamageCatalog, filepath: Path) -> None:
    seen: dict[str, str] = {}
    for category in catalog.categories():
        for damage_type in category.damage_types:
            if damage_type.id in seen:
                log_warning(
                    f"Damage tag '{damage_type.id}' is listed in more than one category",
                    {
                        "file": str(filepath),
                        "first": seen[damage_type.id],
                        "second": category.id,
                    },
                )
            else:
                seen[damage_type.id] = category.id


@lru_cache(maxsize=1)
def _load_default_catalog() -> DamageCatalog:
    return load_catalog(DEFAULT_CATALOG_PATH)


def default_catalog() -> DamageCatalog:
    """Returns a fresh copy of the catalog shipped with the package."""
    return _load_default_catalog().model_copy(deep=True)
