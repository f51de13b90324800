"""
The enclosure catalog: static definitions of the seven enclosures on a player's board.

No logic lives here, only data. Needs to be imported by the validator, the dice resolver, and the scoring engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.core.exceptions import UnknownEnclosureError
from src.core.shared_types import EnclosureId


class PlacementRule(Enum):
    """How an enclosure limits what may be put into it."""

    UNIFORM_SPECIES = "uniform-species"
    DISTINCT_SPECIES = "distinct-species"
    MAX_COUNT_3 = "max-count-3"
    MAX_COUNT_1 = "max-count-1"
    UNRESTRICTED = "unrestricted"
    PER_PIECE_SCORE = "per-piece-score"


class ScoringRule(Enum):
    """How an enclosure turns its occupants into points."""

    SAMENESS_PROGRESSION = "sameness-progression"
    MEADOW_PROGRESSION = "meadow-progression"
    PAIRS = "pairs"
    TRIO = "trio"
    KING_OF_THE_JUNGLE = "king-of-the-jungle"
    SOLITARY = "solitary"
    PER_PIECE = "per-piece"


class Zone(Enum):
    FOREST = "forest"
    ROCKY = "rocky"
    RIVER = "river"


class Adjacency(Enum):
    BATHROOM = "adjacent-to-bathroom"
    CAFETERIA = "adjacent-to-cafeteria"


@dataclass(frozen=True)
class Enclosure:
    """
    Definition of one enclosure.

    NOTE capacity None means unbounded (only the river).
    NOTE dice_exempt enclosures accept a piece whatever the die says, so there is always somewhere legal to go.
    """

    id: EnclosureId
    name: str
    capacity: Optional[int]
    rule: PlacementRule
    scoring: ScoringRule
    zones: frozenset[Zone]
    adjacency: frozenset[Adjacency]
    dice_exempt: bool = False

    def has_room(self, occupants: int) -> bool:
        return self.capacity is None or occupants < self.capacity


ENCLOSURES: dict[EnclosureId, Enclosure] = {
    EnclosureId.FOREST_OF_SAMENESS: Enclosure(
        id=EnclosureId.FOREST_OF_SAMENESS,
        name="Forest of Sameness",
        capacity=6,
        rule=PlacementRule.UNIFORM_SPECIES,
        scoring=ScoringRule.SAMENESS_PROGRESSION,
        zones=frozenset({Zone.FOREST}),
        adjacency=frozenset({Adjacency.CAFETERIA}),
    ),
    EnclosureId.MEADOW_OF_DIFFERENCES: Enclosure(
        id=EnclosureId.MEADOW_OF_DIFFERENCES,
        name="Meadow of Differences",
        capacity=6,
        rule=PlacementRule.DISTINCT_SPECIES,
        scoring=ScoringRule.MEADOW_PROGRESSION,
        zones=frozenset({Zone.ROCKY}),
        adjacency=frozenset({Adjacency.CAFETERIA}),
    ),
    EnclosureId.MEADOW_OF_LOVE: Enclosure(
        id=EnclosureId.MEADOW_OF_LOVE,
        name="Meadow of Love",
        capacity=6,
        rule=PlacementRule.UNRESTRICTED,
        scoring=ScoringRule.PAIRS,
        zones=frozenset({Zone.ROCKY}),
        adjacency=frozenset({Adjacency.CAFETERIA}),
    ),
    EnclosureId.WOODY_TRIO: Enclosure(
        id=EnclosureId.WOODY_TRIO,
        name="Woody Trio",
        capacity=3,
        rule=PlacementRule.MAX_COUNT_3,
        scoring=ScoringRule.TRIO,
        zones=frozenset({Zone.FOREST}),
        adjacency=frozenset({Adjacency.BATHROOM}),
    ),
    EnclosureId.KING_OF_THE_JUNGLE: Enclosure(
        id=EnclosureId.KING_OF_THE_JUNGLE,
        name="King of the Jungle",
        capacity=1,
        rule=PlacementRule.MAX_COUNT_1,
        scoring=ScoringRule.KING_OF_THE_JUNGLE,
        zones=frozenset({Zone.FOREST}),
        adjacency=frozenset({Adjacency.BATHROOM}),
    ),
    EnclosureId.SOLITARY_ISLAND: Enclosure(
        id=EnclosureId.SOLITARY_ISLAND,
        name="Solitary Island",
        capacity=1,
        rule=PlacementRule.MAX_COUNT_1,
        scoring=ScoringRule.SOLITARY,
        zones=frozenset({Zone.ROCKY}),
        adjacency=frozenset({Adjacency.BATHROOM}),
    ),
    EnclosureId.RIVER: Enclosure(
        id=EnclosureId.RIVER,
        name="River",
        capacity=None,
        rule=PlacementRule.PER_PIECE_SCORE,
        scoring=ScoringRule.PER_PIECE,
        zones=frozenset({Zone.RIVER}),
        adjacency=frozenset(),
        dice_exempt=True,
    ),
}


def get_enclosure(enclosure_id: EnclosureId | str) -> Enclosure:
    """Look up a catalog entry. An id that is not in the catalog is a bug in the caller, so fail loudly."""
    try:
        return ENCLOSURES[EnclosureId(enclosure_id)]
    except (KeyError, ValueError):
        raise UnknownEnclosureError(
            f"Unknown enclosure {enclosure_id!r}. Pick one from {','.join(ENCLOSURES)}"
        ) from None
