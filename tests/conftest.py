"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

import json
from pathlib import Path
from typing import Any, Callable, Generator, Optional, Sequence, TypeVar

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import EnclosureId, Species, Status
from src.db.schema import Base
from src.draftosaurus.board import Board
from src.draftosaurus.dice import resolve_dice
from src.draftosaurus.hand import Hand
from src.draftosaurus.match import Match, TurnPhase

T = TypeVar("T")

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


# --- MOCK RANDOM SOURCE ---
class ScriptedRandom:
    """
    Stand-in for random.Random that hands out prepared values.

    faces: returned by randint (the die), in order.
    pieces: returned by choice (the dealer), in order.
    Once a script runs out: the lowest face / the first option.
    """

    def __init__(
        self, faces: Sequence[int] = (), pieces: Sequence[Species] = ()
    ) -> None:
        self.faces = list(faces)
        self.pieces = list(pieces)

    def randint(self, a: int, b: int) -> int:
        return self.faces.pop(0) if self.faces else a

    def choice(self, seq: Sequence[T]) -> T:
        if self.pieces:
            return self.pieces.pop(0)  # type: ignore[return-value]
        return seq[0]


@pytest.fixture
def scripted_rng() -> type[ScriptedRandom]:
    return ScriptedRandom


# --- MATCH BUILDER ---
MatchFactory = Callable[..., Match]


def build_match(
    hand1: Sequence[Species] = (),
    hand2: Sequence[Species] = (),
    board1: Optional[dict[EnclosureId, Sequence[Species]]] = None,
    board2: Optional[dict[EnclosureId, Sequence[Species]]] = None,
    current_player: int = 1,
    phase: TurnPhase = TurnPhase.AWAITING_PLACEMENT,
    status: Status = Status.IN_PROGRESS,
    restriction_face: Optional[int] = None,
    restricted_player: Optional[int] = None,
) -> Match:
    """Build an in-progress match in any position, skipping the dice rolls needed to get there."""

    def _board(placements: Optional[dict[EnclosureId, Sequence[Species]]]) -> Board:
        return Board({enc: tuple(pieces) for enc, pieces in (placements or {}).items()})

    return Match(
        players=("alice", "bob"),
        status=status,
        current_player=current_player,
        phase=phase,
        hands=(Hand.of(list(hand1)), Hand.of(list(hand2))),
        boards=(_board(board1), _board(board2)),
        restriction=resolve_dice(restriction_face) if restriction_face else None,
        restricted_player=restricted_player,
    )


@pytest.fixture
def match_factory() -> MatchFactory:
    return build_match


@pytest.fixture
def two_round_scenario() -> dict[str, Any]:
    """A full match: dealt hands, die faces and placements per turn, and the expected outcome."""
    with open(FIXTURES_DIR / "two_round_scenario.json") as f:
        return json.load(f)
