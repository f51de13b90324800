"""Implementation of (Match)Repository using SQLAlchemy"""

from dataclasses import asdict, replace
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from src.core.exceptions import ConcurrencyConflictError
from src.core.models import MatchModel
from src.db.schema import DBMatch

# Stored in their own columns, not inside the snapshot
_COLUMNS = ("players", "status", "winner", "version")


class SQLMatchRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_match(self, match_id: UUID) -> MatchModel | None:
        """Get match by ID, if record exists."""
        match_db = self._fetch_match(match_id)
        if match_db:
            return self._to_model(match_db)
        return None

    def create_match(self, match: MatchModel) -> tuple[MatchModel, UUID]:
        """Store new match and return the stored data + newly created match ID."""

        new_id = uuid4()
        match_db = DBMatch(
            id=new_id,
            players=match.players,
            status=match.status,
            winner=match.winner,
            snapshot=self._to_snapshot(match),
        )
        self.db.add(match_db)
        self.db.commit()
        self.db.refresh(match_db)
        return self._to_model(match_db), new_id

    def update_match(self, match_id: UUID, match: MatchModel) -> MatchModel | None:
        """Replace the stored snapshot, if nobody else wrote to it since `match` was read."""
        match_db = self._fetch_match(match_id)
        if not match_db:
            return None
        if match_db.version != match.version:
            raise ConcurrencyConflictError(
                f"Match {match_id} changed since it was read (version {match.version}, stored {match_db.version})."
            )
        match_db.players = match.players
        match_db.status = match.status
        match_db.winner = match.winner
        match_db.snapshot = self._to_snapshot(match)
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            raise ConcurrencyConflictError(
                f"Match {match_id} was updated concurrently."
            ) from None
        self.db.refresh(match_db)
        return self._to_model(match_db)

    def delete_match(self, match_id: UUID) -> MatchModel | None:
        """Remove a match's record."""
        match_db = self._fetch_match(match_id)
        if not match_db:
            return None
        match_model = self._to_model(match_db)
        self.db.delete(match_db)
        self.db.commit()
        return match_model

    def _fetch_match(self, match_id: UUID) -> DBMatch | None:
        query = select(DBMatch).where(DBMatch.id == match_id)
        return self.db.scalar(query)

    def _to_snapshot(self, match: MatchModel) -> dict:
        snapshot = asdict(match)
        for column in _COLUMNS:
            snapshot.pop(column)
        return snapshot

    def _to_model(self, match_db: DBMatch) -> MatchModel:
        """Convert SQLAlchemy model to data transfer model."""
        model = MatchModel(
            players=list(match_db.players),
            status=match_db.status,
            winner=match_db.winner,
            **match_db.snapshot,
        )
        return replace(model, version=match_db.version)
