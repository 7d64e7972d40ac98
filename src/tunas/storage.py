"""Local dashboard state - the last club code the user searched for.

State is stored in ~/.tunas/state.json (see Settings.state_dir).
"""

import json
from pathlib import Path

from pydantic import BaseModel, field_validator

from tunas import get_logger
from tunas.config import get_settings

logger = get_logger(__name__)


class StoredState(BaseModel):
    """State stored locally."""

    last_club_code: str | None = None

    @field_validator("last_club_code")
    @classmethod
    def normalize_club_code(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip().upper() or None


def _state_file(path: Path | None) -> Path:
    return path or get_settings().state_file


def load_state(path: Path | None = None) -> StoredState:
    """Load state from file. Missing or corrupt files give empty state."""
    state_file = _state_file(path)
    if not state_file.exists():
        return StoredState()
    try:
        return StoredState(**json.loads(state_file.read_text()))
    except (json.JSONDecodeError, TypeError, ValueError):
        logger.warning("state_file_unreadable", path=str(state_file))
        return StoredState()


def save_state(state: StoredState, path: Path | None = None) -> None:
    """Save state to file."""
    state_file = _state_file(path)
    state_file.parent.mkdir(parents=True, exist_ok=True)
    state_file.write_text(state.model_dump_json(indent=2))


def save_last_club_code(club_code: str, path: Path | None = None) -> None:
    """Remember ``club_code`` (stripped, upper-cased) for the next session."""
    save_state(StoredState(last_club_code=club_code), path)


def load_last_club_code(path: Path | None = None) -> str | None:
    """The remembered club code, or None when nothing usable is stored."""
    return load_state(path).last_club_code


def clear_last_club_code(path: Path | None = None) -> None:
    """Forget the remembered club code."""
    state_file = _state_file(path)
    if state_file.exists():
        state_file.unlink()
