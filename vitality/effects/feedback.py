"""
Floating feedback tokens.

After each resolved action the player gets a short-lived piece of text over
the sprite: the signed HP change, or IMMUNE / RESISTED when the action
resolved without moving HP. Tokens drift to a random spot near the center
and expire on their own.
"""

import random
import uuid
from dataclasses import dataclass, field

from vitality.combat.ledger import LedgerEntry
from vitality.core.constants import FEEDBACK_LIFETIME_MS, AffinityModifier, EntryKind
from vitality.core.logging import log_debug

from .scheduler import Scheduler, TimerHandle

IMMUNE_TEXT = "IMMUNE"
RESISTED_TEXT = "RESISTED"

# Text colors per token flavour.
DAMAGE_TEXT_COLOR = "text-red-500"
HEAL_TEXT_COLOR = "text-green-500"
IMMUNE_TEXT_COLOR = "text-stone-400"
RESISTED_TEXT_COLOR = "text-blue-400"

# Token anchor (percent of the viewport) and jitter around it.
ANCHOR_LEFT = 50.0
ANCHOR_TOP = 40.0
JITTER = 10.0


@dataclass(frozen=True)
class FeedbackToken:
    """A floating piece of text shown over the sprite."""

    text: str
    color: str
    left: float
    top: float
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


def feedback_text(entry: LedgerEntry) -> tuple[str, str] | None:
    """
    Decides whether an entry deserves a token, and with which text and color.

    A token is produced when the effective change is non-zero, when the
    creature was immune, or when resistance brought a non-zero hit down to
    zero. Anything else (such as a heal of 0) is suppressed.

    Returns:
        tuple[str, str] | None:
            The (text, color) pair, or None if no token should be shown.

    """
    effective_delta = entry.signed_delta
    if entry.modifier == AffinityModifier.IMMUNE:
        return IMMUNE_TEXT, IMMUNE_TEXT_COLOR
    if (
        entry.modifier == AffinityModifier.RESISTANT
        and effective_delta == 0
        and entry.original_magnitude > 0
    ):
        return RESISTED_TEXT, RESISTED_TEXT_COLOR
    if effective_delta == 0:
        return None
    if entry.kind == EntryKind.DAMAGE:
        return f"{effective_delta}", DAMAGE_TEXT_COLOR
    return f"+{effective_delta}", HEAL_TEXT_COLOR


class FeedbackBoard:
    """Holds the tokens currently on screen and expires them on schedule."""

    def __init__(
        self,
        scheduler: Scheduler,
        rng: random.Random | None = None,
        lifetime_ms: float = FEEDBACK_LIFETIME_MS,
    ) -> None:
        self.scheduler = scheduler
        self.rng = rng if rng is not None else random.Random()
        self.lifetime_ms = lifetime_ms
        self._tokens: dict[str, FeedbackToken] = {}
        self._timers: dict[str, TimerHandle] = {}

    @property
    def tokens(self) -> list[FeedbackToken]:
        """Active tokens, oldest first."""
        return list(self._tokens.values())

    def emit(self, entry: LedgerEntry) -> FeedbackToken | None:
        """
        Shows a token for a ledger entry if the entry warrants one.

        Args:
            entry (LedgerEntry):
                The entry returned by the ledger.

        Returns:
            FeedbackToken | None:
                The token added to the board, or None if suppressed.

        """
        content = feedback_text(entry)
        if content is None:
            return None
        text, color = content
        token = FeedbackToken(
            text=text,
            color=color,
            left=ANCHOR_LEFT + self.rng.uniform(-JITTER, JITTER),
            top=ANCHOR_TOP + self.rng.uniform(-JITTER, JITTER),
        )
        self._tokens[token.id] = token
        self._timers[token.id] = self.scheduler.schedule(
            self.lifetime_ms,
            lambda: self._expire(token.id),
            label=f"feedback-{text}",
        )
        log_debug(f"Feedback '{text}'", {"entry": entry.id})
        return token

    def clear(self) -> None:
        """Removes every token immediately."""
        for handle in self._timers.values():
            self.scheduler.cancel(handle)
        self._timers.clear()
        self._tokens.clear()

    def _expire(self, token_id: str) -> None:
        self._tokens.pop(token_id, None)
        self._timers.pop(token_id, None)
