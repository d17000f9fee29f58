"""Repository for team membership lookups."""

import logging
from typing import List

from transcription_ingestor.db_models import Team
from transcription_ingestor.domain import Recipient

logger = logging.getLogger(__name__)


class TeamRepository:
    """Read-only access to teams and their members."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def get_recipients(self, team_id: str) -> List[Recipient]:
        """
        Returns the members of a team that can receive e-mail.

        Members without an e-mail address are skipped. An unknown team yields
        an empty list.
        """
        with self._session_factory() as db_session:
            team = db_session.get(Team, team_id)
            if team is None:
                logger.warning("Team not found", extra={"team_id": team_id})
                return []

            return [
                Recipient(name=user.name or user.email, email=user.email)
                for user in team.users
                if user.email
            ]
