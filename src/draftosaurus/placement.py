"""
Placement validator
-----

The single authority on whether a piece may go into an enclosure. Pure: it only reads the Match snapshot.
The state machine applies a placement only after this returned an OK.

Checks, in order (first failure wins):
0. Preconditions: match in progress, your turn, you rolled and did not place yet, the slot holds that piece.
1. Capacity of the enclosure on your board.
2. The dice restriction, if it targets you (dice exempt enclosures always pass).
3. The enclosure's own placement rule.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from src.core.shared_types import EnclosureId, RejectionReason, Species, Status
from src.draftosaurus.dice import satisfies_restriction
from src.draftosaurus.enclosures import ENCLOSURES, PlacementRule, get_enclosure
from src.draftosaurus.match import Match, TurnPhase


@dataclass(frozen=True)
class Validation:
    """Outcome of a validation: OK (no reason) or rejected with a reason tag."""

    reason: Optional[RejectionReason] = None

    @property
    def ok(self) -> bool:
        return self.reason is None


OK = Validation()


def rejected(reason: RejectionReason) -> Validation:
    return Validation(reason)


# --- ENCLOSURE RULES ---
RuleCheckFn = Callable[[Species, tuple[Species, ...]], Optional[RejectionReason]]


def uniform_species_rule(
    piece: Species, occupants: tuple[Species, ...]
) -> Optional[RejectionReason]:
    """Once something lives here, only that species may join."""
    if occupants and occupants[0] != piece:
        return RejectionReason.SPECIES_CONFLICT
    return None


def distinct_species_rule(
    piece: Species, occupants: tuple[Species, ...]
) -> Optional[RejectionReason]:
    if piece in occupants:
        return RejectionReason.SPECIES_CONFLICT
    return None


def max_count_rule(limit: int) -> RuleCheckFn:
    """Same limit as the capacity, kept as a named rule because scoring depends on it."""

    def check(piece: Species, occupants: tuple[Species, ...]) -> Optional[RejectionReason]:
        if len(occupants) >= limit:
            return RejectionReason.ENCLOSURE_FULL
        return None

    return check


def no_rule(piece: Species, occupants: tuple[Species, ...]) -> Optional[RejectionReason]:
    return None


PLACEMENT_RULES: dict[PlacementRule, RuleCheckFn] = {
    PlacementRule.UNIFORM_SPECIES: uniform_species_rule,
    PlacementRule.DISTINCT_SPECIES: distinct_species_rule,
    PlacementRule.MAX_COUNT_3: max_count_rule(3),
    PlacementRule.MAX_COUNT_1: max_count_rule(1),
    PlacementRule.UNRESTRICTED: no_rule,
    PlacementRule.PER_PIECE_SCORE: no_rule,
}


def validate_placement(
    match: Match,
    player: int,
    enclosure_id: EnclosureId | str,
    piece: Species,
    slot: int,
) -> Validation:
    """Can `player` put the `piece` from hand `slot` into the enclosure right now?"""
    enclosure = get_enclosure(enclosure_id)

    if match.status != Status.IN_PROGRESS:
        return rejected(RejectionReason.NOT_IN_PROGRESS)
    if player != match.current_player:
        return rejected(RejectionReason.NOT_YOUR_TURN)
    if match.phase != TurnPhase.AWAITING_PLACEMENT:
        return rejected(RejectionReason.OUT_OF_PHASE)
    if not match.hand(player).holds(slot, piece):
        return rejected(RejectionReason.PIECE_NOT_IN_HAND)

    # 1. capacity
    occupants = match.board(player).pieces(enclosure.id)
    if not enclosure.has_room(len(occupants)):
        return rejected(RejectionReason.ENCLOSURE_FULL)

    # 2. dice restriction
    restriction = match.restriction_for(player)
    if restriction and not satisfies_restriction(restriction, enclosure, occupants):
        return rejected(RejectionReason.DICE_RESTRICTED)

    # 3. enclosure rule
    reason = PLACEMENT_RULES[enclosure.rule](piece, occupants)
    if reason:
        return rejected(reason)
    return OK


def legal_enclosures(
    match: Match, player: int, piece: Species, slot: int
) -> list[EnclosureId]:
    """Every enclosure the move would be accepted in. Clients use this to highlight drop targets."""
    return [
        enclosure_id
        for enclosure_id in ENCLOSURES
        if validate_placement(match, player, enclosure_id, piece, slot).ok
    ]
