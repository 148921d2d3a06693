"""
Combat resolution module for the vitality tracker.

This module handles the affinity rules applied to incoming damage and the
ledger that records every resolved action and supports multi-step undo.
"""

from .affinity import AffinityResult, AffinitySet, resolve
from .ledger import LedgerEntry, VitalityLedger, VitalityState, fold_entries

__all__ = [
    # Import from affinity.py
    "AffinityResult",
    "AffinitySet",
    "resolve",
    # Import from ledger.py
    "LedgerEntry",
    "VitalityLedger",
    "VitalityState",
    "fold_entries",
]
