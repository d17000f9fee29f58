"""Best-effort post-commit side effects."""

import logging
from concurrent.futures import ThreadPoolExecutor

from transcription_ingestor.domain import (
    FileRecord,
    Recipient,
    RecordedTranscript,
    SideEffectAttempt,
)
from transcription_ingestor.infrastructure.interfaces import (
    IndexingService,
    NotificationService,
)
from transcription_ingestor.repositories import TeamRepository

logger = logging.getLogger(__name__)


class SideEffectDispatcher:
    """
    Fans out indexing and team notification after a transcript is committed.

    Nothing here raises: every call is attempted and its result recorded as a
    SideEffectAttempt, so a failing downstream service never reaches the
    completed transcription.
    """

    def __init__(
        self,
        indexing: IndexingService,
        notifications: NotificationService,
        teams: TeamRepository,
        app_base_url: str,
        max_workers: int = 8,
    ):
        self._indexing = indexing
        self._notifications = notifications
        self._teams = teams
        self._app_base_url = app_base_url.rstrip("/")
        self._max_workers = max_workers

    def dispatch(
        self, file: FileRecord, transcript: RecordedTranscript
    ) -> list[SideEffectAttempt]:
        """Runs indexing, then team notification, and returns every attempt."""
        attempts = [self.trigger_indexing(transcript)]
        attempts.extend(self.notify_team(file))

        failed = [a for a in attempts if not a.succeeded]
        logger.info(
            "Side effects dispatched",
            extra={
                "file_id": file.id,
                "attempts": len(attempts),
                "failures": len(failed),
            },
        )
        return attempts

    def trigger_indexing(self, transcript: RecordedTranscript) -> SideEffectAttempt:
        try:
            self._indexing.index(transcript.transcript_id, transcript.content)
        except Exception as e:
            logger.exception(
                "Indexing failed", extra={"transcript_id": transcript.transcript_id}
            )
            return SideEffectAttempt(
                kind="indexing",
                target=transcript.transcript_id,
                succeeded=False,
                error=str(e),
            )
        return SideEffectAttempt(
            kind="indexing", target=transcript.transcript_id, succeeded=True
        )

    def notify_team(self, file: FileRecord) -> list[SideEffectAttempt]:
        """
        Notifies every member of the file's team.

        Each recipient is notified independently on a thread pool; one failed
        send does not stop the others.
        """
        try:
            recipients = self._teams.get_recipients(file.team_id)
        except Exception as e:
            logger.exception("Team lookup failed", extra={"team_id": file.team_id})
            return [
                SideEffectAttempt(
                    kind="notification",
                    target=f"team:{file.team_id}",
                    succeeded=False,
                    error=str(e),
                )
            ]

        if not recipients:
            logger.info("No recipients to notify", extra={"team_id": file.team_id})
            return []

        link = self.build_link(file)
        workers = min(self._max_workers, len(recipients))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(
                executor.map(lambda r: self._notify_one(r, file, link), recipients)
            )

    def build_link(self, file: FileRecord) -> str:
        """Returns the web app URL of a file."""
        return (
            f"{self._app_base_url}/teams/{file.team_id}"
            f"/projects/{file.project_id}/files/{file.id}"
        )

    def _notify_one(
        self, recipient: Recipient, file: FileRecord, link: str
    ) -> SideEffectAttempt:
        try:
            self._notifications.notify(recipient.email, recipient.name, file.name, link)
        except Exception as e:
            logger.exception(
                "Failed to send email",
                extra={"recipient": recipient.email, "file_id": file.id},
            )
            return SideEffectAttempt(
                kind="notification",
                target=recipient.email,
                succeeded=False,
                error=str(e),
            )
        return SideEffectAttempt(
            kind="notification", target=recipient.email, succeeded=True
        )
