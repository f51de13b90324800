"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from src.core.config import RULES
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import EnclosureId, Species

PlayerName = str


def _validate_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise InvalidRequestError("Player name cannot be empty.")
    return name


def _validate_slot(value: int) -> int:
    if not 0 <= value < RULES.hand_size:
        raise InvalidRequestError(
            f"Hand slot must be between 0 and {RULES.hand_size - 1}, got {value}."
        )
    return value


# --- REQUEST MODELS ---
class CreateMatchRequest(BaseModel):
    player1_name: str
    player2_name: str

    @field_validator("player1_name", "player2_name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _validate_name(value)

    @model_validator(mode="after")
    def validate_distinct_players(self) -> "CreateMatchRequest":
        if self.player1_name == self.player2_name:
            raise InvalidRequestError(
                f"Both players are called {self.player1_name!r}. Pick two different names."
            )
        return self


class GetMatchRequest(BaseModel):
    match_id: UUID


class DeleteMatchRequest(BaseModel):
    match_id: UUID


class RollDiceRequest(BaseModel):
    match_id: UUID
    player_name: str


class EndTurnRequest(BaseModel):
    match_id: UUID
    player_name: str


class PlacePieceRequest(BaseModel):
    match_id: UUID
    player_name: str
    enclosure: EnclosureId
    piece: Species
    slot: int

    @field_validator("slot")
    @classmethod
    def validate_slot(cls, value: int) -> int:
        return _validate_slot(value)


class LegalEnclosuresRequest(BaseModel):
    match_id: UUID
    player_name: str
    piece: Species
    slot: int

    @field_validator("slot")
    @classmethod
    def validate_slot(cls, value: int) -> int:
        return _validate_slot(value)


class ScoreRequest(BaseModel):
    match_id: UUID


# --- RESPONSE MODELS ---
class HandSlotResponse(BaseModel):
    piece: Species
    played: bool


class RestrictionResponse(BaseModel):
    face: int
    kind: str
    parameter: str
    title: str
    affects_player: int


class MatchResponse(BaseModel):
    match_id: UUID
    players: list[PlayerName]
    status: str
    current_round: int
    current_turn: int
    current_player: int
    phase: str
    hands: list[list[HandSlotResponse]]
    boards: list[dict[EnclosureId, list[Species]]]
    scores: list[int]
    round_scores: list[list[int]]
    restriction: Optional[RestrictionResponse]
    rolled_face: Optional[int]
    winner: Optional[str]
    effects: list[str] = []


class LegalEnclosuresResponse(BaseModel):
    match_id: UUID
    player_name: str
    piece: Species
    slot: int
    enclosures: list[EnclosureId]


class ScoreResponse(BaseModel):
    match_id: UUID
    player1_score: int
    player2_score: int
    winner: Optional[str]
    breakdown: list[dict[EnclosureId, int]]
