"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Species(StrEnum):
    T_REX = "t-rex"
    TRICERATOPS = "triceratops"
    STEGOSAURUS = "stegosaurus"
    DIPLODOCUS = "diplodocus"
    BRACHIOSAURUS = "brachiosaurus"
    PARASAUROLOPHUS = "parasaurolophus"


class EnclosureId(StrEnum):
    FOREST_OF_SAMENESS = "forest_of_sameness"
    MEADOW_OF_DIFFERENCES = "meadow_of_differences"
    MEADOW_OF_LOVE = "meadow_of_love"
    WOODY_TRIO = "woody_trio"
    KING_OF_THE_JUNGLE = "king_of_the_jungle"
    SOLITARY_ISLAND = "solitary_island"
    RIVER = "river"


class RejectionReason(StrEnum):
    """Tags for every way an engine call can be refused. Values are what a client gets to see."""

    ENCLOSURE_FULL = "enclosure-full"
    DICE_RESTRICTED = "dice-restricted"
    SPECIES_CONFLICT = "species-conflict"
    NOT_YOUR_TURN = "not-your-turn"
    NOT_IN_PROGRESS = "not-in-progress"
    OUT_OF_PHASE = "out-of-phase"
    PIECE_NOT_IN_HAND = "piece-not-in-hand"


# --- NOTE: player numbers are plain ints (1 or 2) everywhere. Player ids are the names the caller registered.
PLAYER_NUMBERS = (1, 2)
TIE = "tie"
