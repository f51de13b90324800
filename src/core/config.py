"""
Configuration.

GameRules: the fixed numbers of the board game (not meant to be changed at runtime).
Settings: deployment specific values, read from the environment (a .env file is picked up if present).
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class GameRules:
    total_rounds: int = 2
    hand_size: int = 6
    die_faces: int = 6
    player_count: int = 2


RULES = GameRules()


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv(
                "DRAFTOSAURUS_DATABASE_URL", "sqlite:///draftosaurus.db"
            ),
            log_level=os.getenv("DRAFTOSAURUS_LOG_LEVEL", "INFO").upper(),
        )
