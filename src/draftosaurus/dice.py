"""
Placement die: which face restricts what, and whom.

Key idea: every restriction kind gets its own predicate (strategy pattern, same as the placement rules),
so a new kind cannot be added without also saying how it is checked.

The die is rolled by the current player and constrains the other one. Drawing the face is done here
through an injected random source, never with the global random module, so tests can script it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol, Sequence, TypeVar

from src.core.config import RULES
from src.core.shared_types import Species
from src.draftosaurus.enclosures import Adjacency, Enclosure, Zone

T = TypeVar("T")


class RandomSource(Protocol):
    """Just the parts of random.Random the engine needs"""

    def randint(self, a: int, b: int) -> int: ...
    def choice(self, seq: Sequence[T]) -> T: ...


class RestrictionKind(Enum):
    ZONE = "zone"
    OCCUPIED_ENCLOSURE = "occupied-enclosure"
    NO_SPECIES = "no-species"
    ADJACENCY = "adjacency"


class Occupancy(Enum):
    """Parameter of an occupied-enclosure restriction: the state the target enclosure has to be in."""

    EMPTY = "empty"
    OCCUPIED = "occupied"


RestrictionParameter = Zone | Adjacency | Species | Occupancy


@dataclass(frozen=True)
class DiceRestriction:
    face: int
    kind: RestrictionKind
    parameter: RestrictionParameter
    title: str


DICE_FACES: dict[int, DiceRestriction] = {
    1: DiceRestriction(1, RestrictionKind.ZONE, Zone.FOREST, "Forest"),
    2: DiceRestriction(2, RestrictionKind.ZONE, Zone.ROCKY, "Rocky plains"),
    3: DiceRestriction(
        3, RestrictionKind.ADJACENCY, Adjacency.BATHROOM, "Bathroom side"
    ),
    4: DiceRestriction(
        4, RestrictionKind.ADJACENCY, Adjacency.CAFETERIA, "Cafeteria side"
    ),
    5: DiceRestriction(
        5, RestrictionKind.OCCUPIED_ENCLOSURE, Occupancy.OCCUPIED, "Occupied enclosure"
    ),
    6: DiceRestriction(6, RestrictionKind.NO_SPECIES, Species.T_REX, "No T-Rex"),
}


def roll_die(rng: RandomSource) -> int:
    return rng.randint(1, RULES.die_faces)


def resolve_dice(face: int) -> DiceRestriction:
    """Total over the six faces. Anything else means the caller rolled a die we do not have."""
    if face not in DICE_FACES:
        raise ValueError(f"Die face must be between 1 and {RULES.die_faces}: {face!r}")
    return DICE_FACES[face]


# --- RESTRICTION CHECKS ---
RestrictionCheckFn = Callable[[RestrictionParameter, Enclosure, tuple[Species, ...]], bool]


def zone_check(
    parameter: RestrictionParameter, enclosure: Enclosure, occupants: tuple[Species, ...]
) -> bool:
    return parameter in enclosure.zones


def occupancy_check(
    parameter: RestrictionParameter, enclosure: Enclosure, occupants: tuple[Species, ...]
) -> bool:
    if parameter == Occupancy.EMPTY:
        return len(occupants) == 0
    return len(occupants) > 0


def no_species_check(
    parameter: RestrictionParameter, enclosure: Enclosure, occupants: tuple[Species, ...]
) -> bool:
    return parameter not in occupants


def adjacency_check(
    parameter: RestrictionParameter, enclosure: Enclosure, occupants: tuple[Species, ...]
) -> bool:
    return parameter in enclosure.adjacency


RESTRICTION_CHECKS: dict[RestrictionKind, RestrictionCheckFn] = {
    RestrictionKind.ZONE: zone_check,
    RestrictionKind.OCCUPIED_ENCLOSURE: occupancy_check,
    RestrictionKind.NO_SPECIES: no_species_check,
    RestrictionKind.ADJACENCY: adjacency_check,
}


def satisfies_restriction(
    restriction: DiceRestriction, enclosure: Enclosure, occupants: tuple[Species, ...]
) -> bool:
    """Would putting a piece into this enclosure (currently holding `occupants`) respect the die?"""
    if enclosure.dice_exempt:
        return True
    check = RESTRICTION_CHECKS[restriction.kind]
    return check(restriction.parameter, enclosure, occupants)
