"""
The Match aggregate: one immutable snapshot of a game in progress.

Only the state machine in engine.py creates new snapshots. Everything else reads them.
from_model/to_model define how a snapshot crosses the boundary to the Service layer (plain JSON-compatible data).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from src.core.exceptions import GameStateError
from src.core.models import MatchModel
from src.core.shared_types import EnclosureId, Species, Status
from src.draftosaurus.board import Board
from src.draftosaurus.dice import DiceRestriction, resolve_dice
from src.draftosaurus.hand import Hand, HandSlot


class TurnPhase(Enum):
    AWAITING_ROLL = "awaiting_roll"
    AWAITING_PLACEMENT = "awaiting_placement"
    AWAITING_END_TURN = "awaiting_end_turn"


@dataclass(frozen=True)
class DiceRoll:
    """History entry for a die roll."""

    round: int
    turn: int
    player: int
    face: int
    affects_player: int
    exempt: bool = False

    @property
    def restriction(self) -> DiceRestriction:
        return resolve_dice(self.face)

    def to_dict(self) -> dict[str, Any]:
        return {
            "round": self.round,
            "turn": self.turn,
            "player": self.player,
            "face": self.face,
            "affects_player": self.affects_player,
            "exempt": self.exempt,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DiceRoll:
        return cls(**data)


@dataclass(frozen=True)
class Placement:
    """History entry for a piece put on a board. `order` counts placements across the whole match."""

    round: int
    turn: int
    player: int
    enclosure: EnclosureId
    piece: Species
    slot: int
    order: int
    dice_face: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "round": self.round,
            "turn": self.turn,
            "player": self.player,
            "enclosure": self.enclosure.value,
            "piece": self.piece.value,
            "slot": self.slot,
            "order": self.order,
            "dice_face": self.dice_face,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Placement:
        return cls(
            round=data["round"],
            turn=data["turn"],
            player=data["player"],
            enclosure=EnclosureId(data["enclosure"]),
            piece=Species(data["piece"]),
            slot=data["slot"],
            order=data["order"],
            dice_face=data.get("dice_face"),
        )


def _empty_hands() -> tuple[Hand, Hand]:
    return (Hand(()), Hand(()))


def _empty_boards() -> tuple[Board, Board]:
    return (Board.empty(), Board.empty())


@dataclass(frozen=True)
class Match:
    players: tuple[str, str]
    status: Status = Status.WAITING
    current_round: int = 1
    current_turn: int = 1
    current_player: int = 1
    phase: TurnPhase = TurnPhase.AWAITING_ROLL
    hands: tuple[Hand, Hand] = field(default_factory=_empty_hands)
    boards: tuple[Board, Board] = field(default_factory=_empty_boards)
    scores: tuple[int, int] = (0, 0)
    round_scores: tuple[tuple[int, int], ...] = ()
    # the roll made this turn: only comes into force once the roller has placed
    turn_roll: Optional[DiceRoll] = None
    restriction: Optional[DiceRestriction] = None
    restricted_player: Optional[int] = None
    winner: Optional[str] = None
    placements: tuple[Placement, ...] = ()
    rolls: tuple[DiceRoll, ...] = ()

    # --- READ HELPERS ---
    def hand(self, player: int) -> Hand:
        return self.hands[player - 1]

    def board(self, player: int) -> Board:
        return self.boards[player - 1]

    def player_id(self, player: int) -> str:
        return self.players[player - 1]

    def player_number(self, player_id: str) -> Optional[int]:
        """Map a registered player id onto 1 or 2 (None if they are not in this match)."""
        if player_id not in self.players:
            return None
        return self.players.index(player_id) + 1

    @staticmethod
    def opponent(player: int) -> int:
        return 2 if player == 1 else 1

    def restriction_for(self, player: int) -> Optional[DiceRestriction]:
        """The active restriction, if (and only if) it targets this player."""
        if self.restricted_player == player:
            return self.restriction
        return None

    def placed_this_round(self) -> int:
        return sum(board.total_pieces() for board in self.boards)

    def hands_dealt(self) -> bool:
        return all(hand.slots for hand in self.hands)

    def is_round_complete(self) -> bool:
        return self.hands_dealt() and all(hand.is_exhausted() for hand in self.hands)

    # --- FUNCTIONAL UPDATES ---
    def with_hand(self, player: int, hand: Hand) -> Match:
        hands = list(self.hands)
        hands[player - 1] = hand
        return replace(self, hands=(hands[0], hands[1]))

    def with_board(self, player: int, board: Board) -> Match:
        boards = list(self.boards)
        boards[player - 1] = board
        return replace(self, boards=(boards[0], boards[1]))

    # --- BOUNDARY CONVERSION ---
    @classmethod
    def from_model(cls, model: MatchModel) -> Match:
        """Define how to construct a Match from the information the Service layer actually has"""
        if len(model.players) != 2:
            raise GameStateError(
                f"A match needs exactly two players, got {model.players!r}"
            )
        try:
            return cls._from_model(model)
        except (KeyError, ValueError, TypeError) as exc:
            raise GameStateError(f"Invalid match snapshot: {exc!r}") from None

    @classmethod
    def _from_model(cls, model: MatchModel) -> Match:
        status = Status(model.status)
        phase = TurnPhase(model.phase)
        hands = [
            Hand(
                tuple(
                    HandSlot(Species(slot["piece"]), bool(slot["played"]))
                    for slot in hand
                )
            )
            for hand in model.hands
        ]
        boards = [
            Board(
                {
                    EnclosureId(enclosure): tuple(Species(piece) for piece in pieces)
                    for enclosure, pieces in board.items()
                }
            )
            for board in model.boards
        ]
        return cls(
            players=(model.players[0], model.players[1]),
            status=status,
            current_round=model.current_round,
            current_turn=model.current_turn,
            current_player=model.current_player,
            phase=phase,
            hands=(hands[0], hands[1]),
            boards=(boards[0], boards[1]),
            scores=(model.scores[0], model.scores[1]),
            round_scores=tuple((p1, p2) for p1, p2 in model.round_scores),
            turn_roll=DiceRoll.from_dict(model.turn_roll) if model.turn_roll else None,
            restriction=(
                resolve_dice(model.restriction_face)
                if model.restriction_face is not None
                else None
            ),
            restricted_player=model.restricted_player,
            winner=model.winner,
            placements=tuple(Placement.from_dict(p) for p in model.placements),
            rolls=tuple(DiceRoll.from_dict(r) for r in model.rolls),
        )

    def to_model(self) -> MatchModel:
        """Encode back into a format the Service layer uses"""
        return MatchModel(
            players=list(self.players),
            status=self.status.value,
            current_round=self.current_round,
            current_turn=self.current_turn,
            current_player=self.current_player,
            phase=self.phase.value,
            hands=[
                [{"piece": slot.piece.value, "played": slot.played} for slot in hand.slots]
                for hand in self.hands
            ],
            boards=[
                {
                    enclosure.value: [piece.value for piece in pieces]
                    for enclosure, pieces in board.placements.items()
                }
                for board in self.boards
            ],
            scores=list(self.scores),
            round_scores=[list(scores) for scores in self.round_scores],
            turn_roll=self.turn_roll.to_dict() if self.turn_roll else None,
            restriction_face=self.restriction.face if self.restriction else None,
            restricted_player=self.restricted_player,
            winner=self.winner,
            placements=[placement.to_dict() for placement in self.placements],
            rolls=[roll.to_dict() for roll in self.rolls],
        )
