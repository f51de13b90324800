"""A player's committed placements for the current round."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.core.shared_types import EnclosureId, Species


@dataclass(frozen=True)
class Board:
    """
    Enclosure -> pieces, in the order they were placed.

    NOTE enclosures nobody put anything into are simply absent. Never mutated: with_piece returns a new Board.
    """

    placements: dict[EnclosureId, tuple[Species, ...]] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Board:
        return cls({})

    def pieces(self, enclosure_id: EnclosureId) -> tuple[Species, ...]:
        return self.placements.get(enclosure_id, ())

    def occupant_count(self, enclosure_id: EnclosureId) -> int:
        return len(self.pieces(enclosure_id))

    def occupied_enclosures(self) -> list[EnclosureId]:
        return [enc for enc, pieces in self.placements.items() if pieces]

    def with_piece(self, enclosure_id: EnclosureId, piece: Species) -> Board:
        placements = dict(self.placements)
        placements[enclosure_id] = self.pieces(enclosure_id) + (piece,)
        return Board(placements)

    def total_pieces(self) -> int:
        return sum(len(pieces) for pieces in self.placements.values())

    def species_count(self, species: Species) -> int:
        """How often a species occurs across every enclosure."""
        return sum(pieces.count(species) for pieces in self.placements.values())
