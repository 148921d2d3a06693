"""
Affinity module for the vitality engine.

Holds a creature's resistances, immunities and vulnerabilities and the pure
rule that turns an incoming damage magnitude into the magnitude actually
taken.
"""

from typing import Iterable

from pydantic import BaseModel, Field

from vitality.core.catalog import DamageCatalog
from vitality.core.constants import AffinityKind, AffinityModifier
from vitality.core.logging import log_debug


class AffinityResult(BaseModel):
    """Outcome of resolving a damage magnitude against an affinity set."""

    effective: int = Field(
        ge=0,
        description="The magnitude actually taken, never negative.",
    )
    modifier: AffinityModifier = Field(
        default=AffinityModifier.NONE,
        description="The affinity rule that altered the magnitude, if any.",
    )


class AffinitySet(BaseModel):
    """
    The three affinity lists of a creature.

    A tag should appear in at most one of the lists. The mutators below keep
    that true; `resolve` only reads the sets and does not rely on it.

    Attributes:
        resistances (set[str]):
            Tags whose damage is halved (rounded down).
        immunities (set[str]):
            Tags whose damage is ignored entirely.
        vulnerabilities (set[str]):
            Tags whose damage is doubled.

    """

    resistances: set[str] = Field(
        default_factory=set,
        description="Tags whose damage is halved.",
    )
    immunities: set[str] = Field(
        default_factory=set,
        description="Tags whose damage is ignored.",
    )
    vulnerabilities: set[str] = Field(
        default_factory=set,
        description="Tags whose damage is doubled.",
    )

    def get(self, kind: AffinityKind) -> set[str]:
        """Returns the set backing the given affinity kind."""
        return getattr(self, kind.value)

    def kind_of(self, tag: str) -> AffinityKind | None:
        """Returns which list currently holds the tag, or None."""
        for kind in AffinityKind:
            if tag in self.get(kind):
                return kind
        return None

    def used_tags(self) -> set[str]:
        """Returns every tag present in any of the three lists."""
        return self.resistances | self.immunities | self.vulnerabilities

    def add(self, kind: AffinityKind, tag: str) -> bool:
        """
        Adds a tag to one of the lists.

        A tag already present in any list is left where it is, so the three
        lists stay disjoint.

        Args:
            kind (AffinityKind):
                The list to add the tag to.
            tag (str):
                The damage tag.

        Returns:
            bool:
                True if the tag was added, False if it was already in use.

        """
        if tag in self.used_tags():
            return False
        self.get(kind).add(tag)
        return True

    def remove(self, kind: AffinityKind, tag: str) -> bool:
        """Removes a tag from one list. Returns False if it was not there."""
        target = self.get(kind)
        if tag not in target:
            return False
        target.discard(tag)
        return True

    def replace(self, kind: AffinityKind, tags: Iterable[str]) -> None:
        """
        Replaces a whole list, dropping tags already held by the other lists.

        Args:
            kind (AffinityKind):
                The list to replace.
            tags (Iterable[str]):
                The new content of the list.

        """
        others = set()
        for other in AffinityKind:
            if other is not kind:
                others |= self.get(other)
        self.get(kind).clear()
        self.get(kind).update(tag for tag in tags if tag not in others)

    def available_tags(self, catalog: DamageCatalog) -> list[str]:
        """Returns the catalog tags not yet assigned to any list."""
        used = self.used_tags()
        return [tag for tag in catalog.all_tags() if tag not in used]


def resolve(magnitude: int, tag: str, affinities: AffinitySet) -> AffinityResult:
    """
    Applies immunity, resistance and vulnerability to a damage magnitude.

    Immunity is absolute and short-circuits the other two. Otherwise
    resistance halves the magnitude (rounding down) and vulnerability then
    doubles whatever is left, so a tag present in both lists comes back to
    the original magnitude for even values. When both apply the reported
    modifier is `VULNERABLE`.

    Args:
        magnitude (int):
            The incoming damage, as a non-negative integer.
        tag (str):
            The damage tag.
        affinities (AffinitySet):
            The affinities of the creature taking the damage.

    Returns:
        AffinityResult:
            The effective magnitude and the modifier that produced it.

    """
    if magnitude < 0:
        raise ValueError(f"magnitude must be non-negative, got {magnitude}")

    if tag in affinities.immunities:
        log_debug(f"{tag} damage ignored (immune)", {"magnitude": magnitude})
        return AffinityResult(effective=0, modifier=AffinityModifier.IMMUNE)

    effective = magnitude
    modifier = AffinityModifier.NONE
    if tag in affinities.resistances:
        effective = effective // 2
        modifier = AffinityModifier.RESISTANT
    if tag in affinities.vulnerabilities:
        effective = effective * 2
        modifier = AffinityModifier.VULNERABLE

    return AffinityResult(effective=max(effective, 0), modifier=modifier)
