"""
Vitality tracker package.

This package contains the vitality resolution engine: damage affinities, the
undoable HP ledger, the delayed sprite projection and the sprite atlas
mapping, plus a console front-end to drive a creature.
"""

__version__ = "0.1.0"
