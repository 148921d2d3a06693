"""
Creature module for the vitality tracker.

This module handles the persisted creature record, the runtime creature that
wires the ledger to its visual projections, and record serialization.
"""

from .creature import Creature, CreatureRecord, describe_condition
from .serialization import (
    creature_from_dict,
    creature_to_dict,
    load_creature,
    load_creatures,
    save_creature,
)

__all__ = [
    # Import from creature.py
    "Creature",
    "CreatureRecord",
    "describe_condition",
    # Import from serialization.py
    "creature_from_dict",
    "creature_to_dict",
    "load_creature",
    "load_creatures",
    "save_creature",
]
