"""
User interface module for the vitality tracker.

This module provides the command-line interface used to drive a creature.
"""
