"""
Engine settings.

Values come from environment variables so a host process can tune the
engine without code changes:
- DOGMA_LOG_LEVEL: stdlib logging level name (default INFO)
- DOGMA_RECORD_REPLAY: attach a replay log to every game (default on)
- DOGMA_SHARE_BONUS: initiator draws when an opponent shared (default off)
- DOGMA_LOG_EVENTS: write every committed event to the log (default off)
"""

from __future__ import annotations
from dataclasses import dataclass
import os


_TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class EngineSettings:
    """Runtime switches for a game."""
    log_level: str = "INFO"
    record_replay: bool = True
    share_bonus: bool = False
    log_events: bool = False

    @classmethod
    def from_env(cls) -> EngineSettings:
        return cls(
            log_level=os.getenv("DOGMA_LOG_LEVEL", "INFO").upper(),
            record_replay=_flag("DOGMA_RECORD_REPLAY", "1"),
            share_bonus=_flag("DOGMA_SHARE_BONUS", "0"),
            log_events=_flag("DOGMA_LOG_EVENTS", "0"),
        )
