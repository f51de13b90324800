"""Generate database session"""

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.schema import Base

logger = logging.getLogger(__name__)


def create_session_factory(database_url: Optional[str] = None) -> sessionmaker[Session]:
    """Bind a session factory to the configured database (ensures all tables are created)."""
    url = database_url or Settings.from_env().database_url
    engine = create_engine(url)
    Base.metadata.create_all(bind=engine)
    logger.info("Database ready: %s", engine.url.render_as_string(hide_password=True))
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
