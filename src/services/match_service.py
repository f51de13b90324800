"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import threading
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, Optional
from uuid import UUID

from src.api.models import (
    CreateMatchRequest,
    DeleteMatchRequest,
    EndTurnRequest,
    GetMatchRequest,
    HandSlotResponse,
    LegalEnclosuresRequest,
    LegalEnclosuresResponse,
    MatchResponse,
    PlacePieceRequest,
    RestrictionResponse,
    RollDiceRequest,
    ScoreRequest,
    ScoreResponse,
)
from src.core.exceptions import InvalidRequestError, RepositoryError, error_for
from src.core.models import MatchModel
from src.db.repository import MatchRepository
from src.draftosaurus.engine import Effect, MatchEngine, Transition, score_match
from src.draftosaurus.match import Match
from src.draftosaurus.placement import legal_enclosures
from src.draftosaurus.scoring import score_breakdown

logger = logging.getLogger(__name__)


class MatchService:
    """
    Orchestration of layers for a Draftosaurus match.

    Mutating calls on the same match are serialised by a lock per match id (read - run engine - write).
    The repository's version check catches writers that do not go through this service instance.
    """

    def __init__(
        self, repository: MatchRepository, engine: Optional[MatchEngine] = None
    ) -> None:
        self.repo = repository
        self.engine = engine or MatchEngine()
        self._locks: defaultdict[UUID, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    # -- API routes logic ---
    def create_match(self, request: CreateMatchRequest) -> MatchResponse:
        """Both players are known up front. The match waits for the first die roll."""
        new_match = self.engine.new_match(request.player1_name, request.player2_name)
        stored, match_id = self.repo.create_match(new_match.to_model())
        logger.info(
            "Match %s created: %s vs %s", match_id, *new_match.players
        )
        return self._create_match_response(match_id, stored)

    def get_match(self, request: GetMatchRequest) -> MatchResponse:
        """
        Retrieve current match state.
        ----
        Reads do not take the lock: a snapshot is replaced as a whole on every write.
        """
        model = self._fetch_match(request.match_id)
        return self._create_match_response(request.match_id, model)

    def roll_dice(self, request: RollDiceRequest) -> MatchResponse:
        with self._match_lock(request.match_id):
            stored, match = self._load(request.match_id)
            player = self._player_number(match, request.player_name)
            transition = self.engine.roll(match, player)
            return self._commit(request.match_id, stored, transition, "roll")

    def place_piece(self, request: PlacePieceRequest) -> MatchResponse:
        with self._match_lock(request.match_id):
            stored, match = self._load(request.match_id)
            player = self._player_number(match, request.player_name)
            transition = self.engine.place(
                match, player, request.enclosure, request.piece, request.slot
            )
            return self._commit(request.match_id, stored, transition, "place")

    def end_turn(self, request: EndTurnRequest) -> MatchResponse:
        with self._match_lock(request.match_id):
            stored, match = self._load(request.match_id)
            player = self._player_number(match, request.player_name)
            transition = self.engine.end_turn(match, player)
            return self._commit(request.match_id, stored, transition, "end_turn")

    def legal_enclosures(self, request: LegalEnclosuresRequest) -> LegalEnclosuresResponse:
        """Where could this piece go right now? Empty when it is not your move."""
        _, match = self._load(request.match_id)
        player = self._player_number(match, request.player_name)
        return LegalEnclosuresResponse(
            match_id=request.match_id,
            player_name=request.player_name,
            piece=request.piece,
            slot=request.slot,
            enclosures=legal_enclosures(match, player, request.piece, request.slot),
        )

    def score(self, request: ScoreRequest) -> ScoreResponse:
        _, match = self._load(request.match_id)
        totals = score_match(match)
        board_1, board_2 = match.boards
        return ScoreResponse(
            match_id=request.match_id,
            player1_score=totals.player1_score,
            player2_score=totals.player2_score,
            winner=totals.winner,
            breakdown=[score_breakdown(board_1, board_2), score_breakdown(board_2, board_1)],
        )

    def delete_match(self, request: DeleteMatchRequest) -> None:
        """Handle a request to delete a Match record."""
        with self._match_lock(request.match_id):
            self.repo.delete_match(request.match_id)
        self._forget_lock(request.match_id)

    # -- Internal helpers --
    @contextmanager
    def _match_lock(self, match_id: UUID) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks[match_id]
        with lock:
            yield

    def _forget_lock(self, match_id: UUID) -> None:
        with self._locks_guard:
            self._locks.pop(match_id, None)

    def _commit(
        self, match_id: UUID, stored: MatchModel, transition: Transition, action: str
    ) -> MatchResponse:
        """Rejected --> raise the matching error, store nothing. Accepted --> store the new snapshot."""
        if transition.rejection is not None:
            raise error_for(
                transition.rejection,
                f"Cannot {action.replace('_', ' ')} in match {match_id}: {transition.rejection}",
            )

        # carry the version we read, so the repository can detect a concurrent write
        new_model = replace(transition.match.to_model(), version=stored.version)
        updated = self.repo.update_match(match_id, new_model)
        if updated is None:
            raise RepositoryError(f"Match with {match_id=} disappeared while playing.")

        logger.info(
            "Match %s: %s accepted (%s)",
            match_id,
            action,
            ", ".join(effect.value for effect in transition.effects),
        )
        if Effect.GAME_FINISHED in transition.effects:
            logger.info("Match %s finished, winner: %s", match_id, updated.winner)
            # a finished match accepts no further writes
            self._forget_lock(match_id)
        return self._create_match_response(match_id, updated, transition.effects)

    def _create_match_response(
        self, match_id: UUID, model: MatchModel, effects: tuple[Effect, ...] = ()
    ) -> MatchResponse:
        """Convert info in MatchModel to a MatchResponse (for match with given ID.)"""
        match = Match.from_model(model)
        restriction = None
        if match.restriction and match.restricted_player:
            restriction = RestrictionResponse(
                face=match.restriction.face,
                kind=match.restriction.kind.value,
                parameter=match.restriction.parameter.value,
                title=match.restriction.title,
                affects_player=match.restricted_player,
            )
        return MatchResponse(
            match_id=match_id,
            players=model.players,
            status=model.status,
            current_round=model.current_round,
            current_turn=model.current_turn,
            current_player=model.current_player,
            phase=model.phase,
            hands=[
                [HandSlotResponse(piece=slot.piece, played=slot.played) for slot in hand.slots]
                for hand in match.hands
            ],
            boards=[
                {enclosure: list(pieces) for enclosure, pieces in board.placements.items()}
                for board in match.boards
            ],
            scores=model.scores,
            round_scores=model.round_scores,
            restriction=restriction,
            rolled_face=match.turn_roll.face if match.turn_roll else None,
            winner=model.winner,
            effects=[effect.value for effect in effects],
        )

    def _load(self, match_id: UUID) -> tuple[MatchModel, Match]:
        stored = self._fetch_match(match_id)
        return stored, Match.from_model(stored)

    def _player_number(self, match: Match, player_name: str) -> int:
        player = match.player_number(player_name)
        if player is None:
            raise InvalidRequestError(f"{player_name!r} is not playing in this match.")
        return player

    def _fetch_match(self, match_id: UUID) -> MatchModel:
        """Attempt to find the match in the repository and raise error if it fails."""
        match_model = self.repo.get_match(match_id)
        if match_model is None:
            raise RepositoryError(f"Match with {match_id=} not found.")
        return match_model
