"""Unit tests for src/draftosaurus/dice.py"""

import random

import pytest

from src.core.shared_types import EnclosureId, Species
from src.draftosaurus.dice import (
    DICE_FACES,
    RESTRICTION_CHECKS,
    DiceRestriction,
    Occupancy,
    RestrictionKind,
    resolve_dice,
    roll_die,
    satisfies_restriction,
)
from src.draftosaurus.enclosures import Adjacency, Zone, get_enclosure


def test_six_faces() -> None:
    assert sorted(DICE_FACES) == [1, 2, 3, 4, 5, 6]
    for face, restriction in DICE_FACES.items():
        assert restriction.face == face


def test_every_restriction_kind_has_a_check() -> None:
    assert set(RESTRICTION_CHECKS) == set(RestrictionKind)


@pytest.mark.parametrize(
    "face, kind, parameter",
    [
        (1, RestrictionKind.ZONE, Zone.FOREST),
        (2, RestrictionKind.ZONE, Zone.ROCKY),
        (3, RestrictionKind.ADJACENCY, Adjacency.BATHROOM),
        (4, RestrictionKind.ADJACENCY, Adjacency.CAFETERIA),
        (5, RestrictionKind.OCCUPIED_ENCLOSURE, Occupancy.OCCUPIED),
        (6, RestrictionKind.NO_SPECIES, Species.T_REX),
    ],
)
def test_resolve_dice(face: int, kind: RestrictionKind, parameter: object) -> None:
    restriction = resolve_dice(face)
    assert restriction.kind == kind
    assert restriction.parameter == parameter


@pytest.mark.parametrize("face", [0, 7, -1])
def test_resolve_impossible_face(face: int) -> None:
    with pytest.raises(ValueError):
        resolve_dice(face)


def test_roll_die_stays_on_the_die() -> None:
    rng = random.Random(1234)
    faces = {roll_die(rng) for _ in range(200)}
    assert faces == {1, 2, 3, 4, 5, 6}


def test_roll_die_is_reproducible_with_a_seed() -> None:
    first = [roll_die(random.Random(7)) for _ in range(5)]
    second = [roll_die(random.Random(7)) for _ in range(5)]
    assert first == second


# --- RESTRICTION PREDICATES ---
def test_zone_restriction() -> None:
    forest = resolve_dice(1)
    assert satisfies_restriction(forest, get_enclosure(EnclosureId.WOODY_TRIO), ())
    assert not satisfies_restriction(
        forest, get_enclosure(EnclosureId.MEADOW_OF_LOVE), ()
    )


def test_adjacency_restriction() -> None:
    bathroom = resolve_dice(3)
    assert satisfies_restriction(
        bathroom, get_enclosure(EnclosureId.SOLITARY_ISLAND), ()
    )
    assert not satisfies_restriction(
        bathroom, get_enclosure(EnclosureId.FOREST_OF_SAMENESS), ()
    )


def test_occupied_enclosure_restriction() -> None:
    occupied = resolve_dice(5)
    meadow = get_enclosure(EnclosureId.MEADOW_OF_LOVE)
    assert satisfies_restriction(occupied, meadow, (Species.T_REX,))
    assert not satisfies_restriction(occupied, meadow, ())


def test_empty_enclosure_restriction() -> None:
    """Not on the die, but the occupancy check supports it."""
    empty = DiceRestriction(
        5, RestrictionKind.OCCUPIED_ENCLOSURE, Occupancy.EMPTY, "Empty enclosure"
    )
    meadow = get_enclosure(EnclosureId.MEADOW_OF_LOVE)
    assert satisfies_restriction(empty, meadow, ())
    assert not satisfies_restriction(empty, meadow, (Species.DIPLODOCUS,))


def test_no_t_rex_restriction() -> None:
    no_t_rex = resolve_dice(6)
    meadow = get_enclosure(EnclosureId.MEADOW_OF_LOVE)
    assert satisfies_restriction(no_t_rex, meadow, (Species.DIPLODOCUS,))
    assert not satisfies_restriction(
        no_t_rex, meadow, (Species.DIPLODOCUS, Species.T_REX)
    )


@pytest.mark.parametrize("face", [1, 2, 3, 4, 5, 6])
def test_river_is_exempt_from_every_face(face: int) -> None:
    river = get_enclosure(EnclosureId.RIVER)
    assert satisfies_restriction(resolve_dice(face), river, (Species.T_REX,))
