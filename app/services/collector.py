"""
Preference collector: the submit step of the multi-step form.
"""

import logging

from app.errors import MissingRequiredField
from app.models.property import PropertyPreferences
from app.services.transfer import PreferenceTransfer

logger = logging.getLogger(__name__)


class PreferenceCollector:
    """Validates submitted preferences and hands them to the results stage."""

    def __init__(self, transfer: PreferenceTransfer) -> None:
        self.transfer = transfer

    def submit(self, preferences: PropertyPreferences, session_id: str) -> None:
        """
        Accept a completed preference form.

        Args:
            preferences: Preferences as entered by the user.
            session_id: Session whose transfer slot receives the preferences.

        Raises:
            MissingRequiredField: If the location is empty or whitespace-only.
        """
        if not preferences.location or not preferences.location.strip():
            logger.info("Rejected submission for session %s: no location", session_id)
            raise MissingRequiredField("location")

        self.transfer.put(session_id, preferences)
        logger.info(
            "Accepted preferences for session %s (language=%s)",
            session_id,
            preferences.language,
        )
