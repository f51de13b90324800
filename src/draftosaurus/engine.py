"""
The MatchEngine will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
every call takes a Match snapshot and returns a Transition: the next snapshot plus what happened.

A turn always goes: roll() --> place() --> end_turn().
* The die rolled this turn constrains the opponent, and only comes into force once the roller has placed.
  (The restriction that constrained the roller is used up by that same placement.)
* The very first roll of the match never restricts anybody.
* The placement that empties the last hand closes the round: no end_turn() needed.

Rule violations are never raised. A rejected call returns the untouched snapshot and a reason tag.
"""

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from src.core.config import RULES
from src.core.exceptions import GameStateError, IllegalMoveError
from src.core.shared_types import EnclosureId, RejectionReason, Species, Status
from src.draftosaurus.board import Board
from src.draftosaurus.dice import RandomSource, resolve_dice, roll_die
from src.draftosaurus.enclosures import get_enclosure
from src.draftosaurus.hand import Hand, deal_hands
from src.draftosaurus.match import DiceRoll, Match, Placement, TurnPhase
from src.draftosaurus.placement import validate_placement
from src.draftosaurus.scoring import decide_winner, score_board

logger = logging.getLogger(__name__)

__all__ = [
    "Effect",
    "MatchEngine",
    "MatchScore",
    "Transition",
    "advance_turn",
    "apply_placement",
    "close_round",
    "deal_hands",
    "resolve_dice",
    "roll_die",
    "score_match",
    "validate_placement",
]


class Effect(Enum):
    HANDS_DEALT = "hands-dealt"
    DICE_ROLLED = "dice-rolled"
    PIECE_PLACED = "piece-placed"
    TURN_ENDED = "turn-ended"
    ROUND_ENDED = "round-ended"
    GAME_FINISHED = "game-finished"


@dataclass(frozen=True)
class Transition:
    match: Match
    effects: tuple[Effect, ...] = ()
    rejection: Optional[RejectionReason] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


@dataclass(frozen=True)
class MatchScore:
    player1_score: int
    player2_score: int
    winner: Optional[str]


# --- PURE TRANSFORMS (no randomness, no validation of turn order) ---
def apply_placement(
    match: Match,
    player: int,
    enclosure_id: EnclosureId | str,
    piece: Species,
    slot: int,
) -> Match:
    """
    Commit a placement that validate_placement already accepted.
    ----

    1. mark the hand slot played
    2. append the piece to the board
    3. record it in the placement history
    4. the restriction on the mover is used up, this turn's roll now constrains the opponent
    5. both hands exhausted --> close the round (see close_round)
    """
    validation = validate_placement(match, player, enclosure_id, piece, slot)
    if not validation.ok:
        raise IllegalMoveError(
            f"Placement of {piece} into {enclosure_id} was not validated: {validation.reason}"
        )
    enclosure = get_enclosure(enclosure_id)

    active = match.restriction_for(player)
    record = Placement(
        round=match.current_round,
        turn=match.current_turn,
        player=player,
        enclosure=enclosure.id,
        piece=piece,
        slot=slot,
        order=len(match.placements) + 1,
        dice_face=active.face if active else None,
    )

    roll = match.turn_roll
    in_force = roll is not None and not roll.exempt
    updated = match.with_hand(player, match.hand(player).mark_played(slot))
    updated = updated.with_board(player, match.board(player).with_piece(enclosure.id, piece))
    updated = replace(
        updated,
        placements=match.placements + (record,),
        phase=TurnPhase.AWAITING_END_TURN,
        turn_roll=None,
        restriction=roll.restriction if in_force else None,
        restricted_player=roll.affects_player if in_force else None,
    )
    if updated.is_round_complete():
        return close_round(updated)
    return updated


def close_round(match: Match) -> Match:
    """
    Both hands are empty.
    ----

    1. score both boards, add to the running totals
    2. last round? --> finished, decide the winner
    3. otherwise --> next round: player 1 starts, boards emptied, no restriction.
       The new hands are left for the engine to deal (it owns the random source).
    """
    scored = round_scores(match)
    totals = (match.scores[0] + scored[0], match.scores[1] + scored[1])
    match = replace(
        match,
        scores=totals,
        round_scores=match.round_scores + (scored,),
        turn_roll=None,
        restriction=None,
        restricted_player=None,
    )
    logger.info(
        "Round %d finished: %d - %d (totals %d - %d)",
        match.current_round,
        *scored,
        *totals,
    )

    if match.current_round >= RULES.total_rounds:
        winner = decide_winner(totals, match.players)
        logger.info("Match finished, winner: %s", winner)
        return replace(match, status=Status.FINISHED, winner=winner)

    return replace(
        match,
        current_round=match.current_round + 1,
        current_turn=1,
        current_player=1,
        phase=TurnPhase.AWAITING_ROLL,
        hands=(Hand(()), Hand(())),
        boards=(Board.empty(), Board.empty()),
    )


def advance_turn(match: Match) -> Match:
    """
    Hand the turn over to the opponent. They will have to roll first.

    Only a placed turn can be handed over: anything else (a round that was just closed, a finished match)
    comes back unchanged.
    """
    if match.status != Status.IN_PROGRESS or match.phase != TurnPhase.AWAITING_END_TURN:
        return match
    return replace(
        match,
        current_turn=match.current_turn + 1,
        current_player=Match.opponent(match.current_player),
        phase=TurnPhase.AWAITING_ROLL,
        turn_roll=None,
    )


def round_scores(match: Match) -> tuple[int, int]:
    """Score both boards as they are now."""
    board_1, board_2 = match.boards
    return score_board(board_1, board_2), score_board(board_2, board_1)


def score_match(match: Match) -> MatchScore:
    """
    Totals so far. Finished rounds are already in match.scores; an unfinished round adds what is on the boards now.
    The winner is only known once the match is finished.
    """
    if match.status == Status.FINISHED:
        return MatchScore(match.scores[0], match.scores[1], match.winner)

    live = round_scores(match) if match.status == Status.IN_PROGRESS else (0, 0)
    return MatchScore(match.scores[0] + live[0], match.scores[1] + live[1], None)


# --- STATE MACHINE ---
class MatchEngine:
    """Turn/round/game state machine. Owns the random source used for dice and dealing."""

    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        self.rng: RandomSource = rng if rng is not None else random.SystemRandom()

    def new_match(self, player1: str, player2: str) -> Match:
        if player1 == player2:
            raise GameStateError(f"Players need distinct names, got {player1!r} twice.")
        return Match(players=(player1, player2))

    def roll(self, match: Match, player: int) -> Transition:
        """
        Roll the placement die.
        ----

        Only the current player, only at the start of their turn.
        The first roll of a match also deals round 1 and starts the match.
        A round whose hands were never dealt gets them now.
        """
        if match.status == Status.FINISHED:
            return self._reject(match, "roll", player, RejectionReason.NOT_IN_PROGRESS)
        if player != match.current_player:
            return self._reject(match, "roll", player, RejectionReason.NOT_YOUR_TURN)
        if match.phase != TurnPhase.AWAITING_ROLL:
            return self._reject(match, "roll", player, RejectionReason.OUT_OF_PHASE)

        effects: list[Effect] = []
        if match.status == Status.WAITING:
            logger.info("Match started: %s vs %s", *match.players)
        if match.status == Status.WAITING or not match.hands_dealt():
            match = self._deal(replace(match, status=Status.IN_PROGRESS))
            effects.append(Effect.HANDS_DEALT)

        face = roll_die(self.rng)
        # a random source handing out faces the die does not have is a bug: fail here, not at placement time
        resolve_dice(face)
        roll = DiceRoll(
            round=match.current_round,
            turn=match.current_turn,
            player=player,
            face=face,
            affects_player=Match.opponent(player),
            exempt=not match.rolls,
        )
        effects.append(Effect.DICE_ROLLED)
        logger.debug(
            "Player %d rolled %d (affects player %d)", player, face, roll.affects_player
        )
        return Transition(
            replace(
                match,
                turn_roll=roll,
                rolls=match.rolls + (roll,),
                phase=TurnPhase.AWAITING_PLACEMENT,
            ),
            tuple(effects),
        )

    def place(
        self,
        match: Match,
        player: int,
        enclosure_id: EnclosureId | str,
        piece: Species,
        slot: int,
    ) -> Transition:
        """Validate, then commit the placement. Deals the next round right away when this placement closed one."""
        validation = validate_placement(match, player, enclosure_id, piece, slot)
        if validation.reason is not None:
            return self._reject(match, "place", player, validation.reason)

        placed = apply_placement(match, player, enclosure_id, piece, slot)
        effects = [Effect.PIECE_PLACED]
        logger.debug("Player %d placed %s in %s", player, piece, enclosure_id)

        if len(placed.round_scores) > len(match.round_scores):
            effects.append(Effect.ROUND_ENDED)
            if placed.status == Status.FINISHED:
                effects.append(Effect.GAME_FINISHED)
            else:
                placed = self._deal(placed)
                effects.append(Effect.HANDS_DEALT)
        return Transition(placed, tuple(effects))

    def end_turn(self, match: Match, player: int) -> Transition:
        if match.status != Status.IN_PROGRESS:
            return self._reject(match, "end_turn", player, RejectionReason.NOT_IN_PROGRESS)
        if player != match.current_player:
            return self._reject(match, "end_turn", player, RejectionReason.NOT_YOUR_TURN)
        if match.phase != TurnPhase.AWAITING_END_TURN:
            return self._reject(match, "end_turn", player, RejectionReason.OUT_OF_PHASE)
        return Transition(advance_turn(match), (Effect.TURN_ENDED,))

    # --- PRIVATE HELPERS ---
    def _deal(self, match: Match) -> Match:
        return replace(match, hands=deal_hands(match.current_round, self.rng))

    def _reject(
        self, match: Match, action: str, player: int, reason: RejectionReason
    ) -> Transition:
        logger.debug("Rejected %s by player %d: %s", action, player, reason)
        return Transition(match, (), reason)
