"""
Startup wiring: settings -> logging -> database -> repository -> service.

A router or a CLI only needs open_match_service(); everything below it is picked from the environment.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from src.core.config import Settings
from src.core.logging_config import configure_logging
from src.db.database import create_session_factory, get_db
from src.db.sql_repository import SQLMatchRepository
from src.draftosaurus.engine import MatchEngine
from src.services.match_service import MatchService


@contextmanager
def open_match_service(
    database_url: Optional[str] = None, engine: Optional[MatchEngine] = None
) -> Iterator[MatchService]:
    """MatchService backed by one database session, closed on exit."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    session_factory = create_session_factory(database_url or settings.database_url)
    with contextmanager(get_db)(session_factory) as db:
        yield MatchService(SQLMatchRepository(db), engine)
