"""
Core system module for the vitality tracker.

This module contains the constants, the damage catalog, error handling,
logging and display utilities shared by the rest of the engine.
"""

from .catalog import (
    DamageCatalog,
    DamageCategoryConfig,
    DamageTypeConfig,
    default_catalog,
    load_catalog,
)
from .constants import (
    AffinityKind,
    AffinityModifier,
    AnimationMode,
    EntryKind,
    SyncState,
)
from .error_handling import InvariantViolationError, VitalityError

__all__ = [
    # Import from catalog.py
    "DamageCatalog",
    "DamageCategoryConfig",
    "DamageTypeConfig",
    "default_catalog",
    "load_catalog",
    # Import from constants.py
    "AffinityKind",
    "AffinityModifier",
    "AnimationMode",
    "EntryKind",
    "SyncState",
    # Import from error_handling.py
    "InvariantViolationError",
    "VitalityError",
]
