"""
Effects system module for the vitality tracker.

This module contains the HP change events, the timer scheduler, the cosmetic
classification of damage tags, the visual synchronization state machine and
the floating feedback tokens.
"""
