"""
Transient hand-off of submitted preferences between the form and the results view.

Each session owns a single key holding the JSON-serialized preferences. The
value is consumed by the first read, so it survives exactly one navigation
hop and is gone after a session reset.
"""

import logging
from typing import Dict, Optional

from app.models.property import PropertyPreferences

logger = logging.getLogger(__name__)

STORAGE_KEY = "propertyPreferences"


class PreferenceTransfer:
    """In-process key-value store for submitted preferences."""

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}

    @staticmethod
    def _key(session_id: str) -> str:
        return f"{session_id}:{STORAGE_KEY}"

    def put(self, session_id: str, preferences: PropertyPreferences) -> None:
        self._values[self._key(session_id)] = preferences.model_dump_json(by_alias=True)
        logger.debug("Stored preferences for session %s", session_id)

    def take(self, session_id: str) -> Optional[PropertyPreferences]:
        raw = self._values.pop(self._key(session_id), None)
        if raw is None:
            return None
        return PropertyPreferences.model_validate_json(raw)

    def clear(self, session_id: str) -> None:
        self._values.pop(self._key(session_id), None)

    def __contains__(self, session_id: str) -> bool:
        return self._key(session_id) in self._values


_transfer: Optional[PreferenceTransfer] = None


def get_preference_transfer() -> PreferenceTransfer:
    """Get or create the process-wide transfer store."""
    global _transfer
    if _transfer is None:
        _transfer = PreferenceTransfer()
    return _transfer
