"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)

Everything in here is plain JSON-compatible data: str, int, bool, None, list and dict.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# Type aliases to make MatchModel easier to read
PlayerName = str
EnclosureName = str
SpeciesName = str
JSONRecord = dict[str, Any]


@dataclass
class MatchModel:
    """Transport-safe snapshot of a match used between API, Service, DB, and domain layers."""

    players: list[PlayerName]
    status: str
    current_round: int
    current_turn: int
    current_player: int
    phase: str
    hands: list[list[JSONRecord]]
    boards: list[dict[EnclosureName, list[SpeciesName]]]
    scores: list[int]
    round_scores: list[list[int]] = field(default_factory=list)
    turn_roll: Optional[JSONRecord] = None
    restriction_face: Optional[int] = None
    restricted_player: Optional[int] = None
    winner: Optional[str] = None
    placements: list[JSONRecord] = field(default_factory=list)
    rolls: list[JSONRecord] = field(default_factory=list)
    # Bumped by the repository on every write. Not part of the game itself: domain layer ignores it.
    version: int = 0
