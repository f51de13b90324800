"""In-process implementation of (Match)Repository: a dict of snapshots. Good for tests and a single-process server."""

from copy import deepcopy
from dataclasses import replace
from uuid import UUID, uuid4

from src.core.exceptions import ConcurrencyConflictError
from src.core.models import MatchModel


class InMemoryMatchRepository:
    def __init__(self) -> None:
        self._matches: dict[UUID, MatchModel] = {}

    def get_match(self, match_id: UUID) -> MatchModel | None:
        match = self._matches.get(match_id)
        # hand out copies: callers must not be able to change what is stored
        return deepcopy(match) if match else None

    def create_match(self, match: MatchModel) -> tuple[MatchModel, UUID]:
        match_id = uuid4()
        stored = replace(deepcopy(match), version=1)
        self._matches[match_id] = stored
        return deepcopy(stored), match_id

    def update_match(self, match_id: UUID, match: MatchModel) -> MatchModel | None:
        stored = self._matches.get(match_id)
        if stored is None:
            return None
        if stored.version != match.version:
            raise ConcurrencyConflictError(
                f"Match {match_id} changed since it was read (version {match.version}, stored {stored.version})."
            )
        updated = replace(deepcopy(match), version=stored.version + 1)
        self._matches[match_id] = updated
        return deepcopy(updated)

    def delete_match(self, match_id: UUID) -> MatchModel | None:
        return self._matches.pop(match_id, None)

    def clear(self) -> None:
        self._matches.clear()
