"""
Creature serialization and deserialization functions.

This module converts creature records to and from dictionaries and JSON
files. Storage itself belongs to the embedding application; these helpers
only define the shape.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import ValidationError

from .creature import CreatureRecord


def creature_to_dict(record: CreatureRecord) -> dict[str, Any]:
    """
    Converts a creature record to a JSON-compatible dictionary.

    Affinity lists are sorted so the output is stable.

    Args:
        record (CreatureRecord):
            The record to convert.

    Returns:
        dict[str, Any]:
            The serialized record.

    """
    data = record.model_dump(mode="json")
    for key in ("resistances", "immunities", "vulnerabilities"):
        data[key] = sorted(data[key])
    return data


def creature_from_dict(data: dict[str, Any]) -> CreatureRecord:
    """
    Creates a creature record from a dictionary.

    Both snake_case keys and the camelCase keys of older records are
    accepted.

    Args:
        data (dict[str, Any]):
            The serialized record.

    Returns:
        CreatureRecord:
            The validated record.

    Raises:
        ValueError:
            If the data does not describe a valid creature.

    """
    try:
        record = CreatureRecord.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid creature data: {e}")

    overlap = (
        (record.resistances & record.immunities)
        | (record.resistances & record.vulnerabilities)
        | (record.immunities & record.vulnerabilities)
    )
    if overlap:
        log_warning(
            f"Creature '{record.name}' lists tags in more than one affinity",
            {"tags": sorted(overlap)},
        )
    return record


def save_creature(record: CreatureRecord, filepath: Path) -> None:
    """Writes a creature record to a JSON file."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(creature_to_dict(record), f, indent=2)


def load_creature(filepath: Path) -> CreatureRecord:
    """
    Loads a creature record from a JSON file.

    Raises:
        ValueError:
            If the file is missing, malformed or invalid.

    """
    try:
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping in {filepath}, got {type(data).__name__}")
    return creature_from_dict(data)


def load_creatures(filepath: Path) -> list[CreatureRecord]:
    """Loads a list of creature records from a JSON file."""
    try:
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}")
    if not isinstance(data, list):
        raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
    return [creature_from_dict(item) for item in data]
