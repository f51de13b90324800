"""A player's drafted pieces for the current round, and the dealer that hands them out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from src.core.config import RULES
from src.core.shared_types import Species
from src.draftosaurus.dice import RandomSource

logger = logging.getLogger(__name__)

SPECIES: tuple[Species, ...] = tuple(Species)


@dataclass(frozen=True)
class HandSlot:
    piece: Species
    played: bool = False


@dataclass(frozen=True)
class Hand:
    """
    Ordered slots. A slot is never removed once dealt (kept for the placement history),
    it only gets flagged as played.
    """

    slots: tuple[HandSlot, ...]

    @classmethod
    def of(cls, pieces: list[Species]) -> Hand:
        return cls(tuple(HandSlot(piece) for piece in pieces))

    def holds(self, slot: int, piece: Species) -> bool:
        """True if the slot exists, is not played yet and contains that piece."""
        if not 0 <= slot < len(self.slots):
            return False
        hand_slot = self.slots[slot]
        return not hand_slot.played and hand_slot.piece == piece

    def mark_played(self, slot: int) -> Hand:
        slots = list(self.slots)
        slots[slot] = replace(slots[slot], played=True)
        return Hand(tuple(slots))

    @property
    def played_count(self) -> int:
        return sum(1 for slot in self.slots if slot.played)

    @property
    def unplayed_count(self) -> int:
        return len(self.slots) - self.played_count

    def is_exhausted(self) -> bool:
        return self.unplayed_count == 0

    def unplayed(self) -> list[tuple[int, Species]]:
        return [(i, slot.piece) for i, slot in enumerate(self.slots) if not slot.played]


# --- DEALER ---
def deal_hand(rng: RandomSource, size: int = RULES.hand_size) -> Hand:
    """Draw with replacement: duplicates within a hand are fine."""
    return Hand.of([rng.choice(SPECIES) for _ in range(size)])


def deal_hands(round_number: int, rng: RandomSource) -> tuple[Hand, Hand]:
    """Both players get an independent hand. Called once at the start of every round."""
    hands = (deal_hand(rng), deal_hand(rng))
    logger.debug("Dealt hands for round %d", round_number)
    return hands
