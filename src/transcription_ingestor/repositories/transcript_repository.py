"""Repository for the transcript completion write."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from transcription_ingestor.db_models import (
    FileStatus,
    RequestMetadata,
    Transcript,
)
from transcription_ingestor.domain import (
    DeepgramCallback,
    FileRecord,
    RecordedTranscript,
)
from transcription_ingestor.exceptions import AlreadyTerminalError, PersistenceError

from .work_state_machine import WorkStateMachine

logger = logging.getLogger(__name__)


class TranscriptRepository:
    """
    Persists transcription results.

    Creating the transcript and completing its file happen in one
    transaction, keeping the handler layer free of transaction management.
    """

    def __init__(self, session_factory, state_machine: WorkStateMachine):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
            state_machine: Applies the COMPLETED transition inside the transaction.
        """
        self._session_factory = session_factory
        self._state_machine = state_machine

    def record_completion(
        self, file: FileRecord, event: DeepgramCallback
    ) -> RecordedTranscript:
        """
        Stores the transcript for a file and marks the file COMPLETED.

        An existing transcript for the file is reused instead of inserting a
        second one. Nothing is committed unless every step succeeds.

        Args:
            file: The file the callback was correlated to.
            event: The validated provider callback.

        Returns:
            RecordedTranscript describing the committed state.

        Raises:
            AlreadyTerminalError: If the file was completed by another delivery.
            PersistenceError: If the write fails for any other reason.
        """
        try:
            with self._session_factory() as db_session:
                transcript, created = self._get_or_create_transcript(
                    db_session, file.id, event
                )
                self._state_machine.commit_completed(db_session, file.id)
                db_session.commit()

                recorded = RecordedTranscript(
                    transcript_id=transcript.id,
                    file_id=file.id,
                    status=FileStatus.COMPLETED,
                    content=transcript.transcript_string,
                    created=created,
                )

        except AlreadyTerminalError:
            raise
        except IntegrityError as e:
            if self._transcript_exists(file.id):
                logger.info(
                    "Transcript written by a concurrent delivery",
                    extra={"file_id": file.id, "request_id": event.request_id},
                )
                raise AlreadyTerminalError(file.id) from e
            logger.exception("Transaction failed", extra={"file_id": file.id})
            raise PersistenceError(file.id, cause=e) from e
        except Exception as e:
            logger.exception("Transaction failed", extra={"file_id": file.id})
            raise PersistenceError(file.id, cause=e) from e

        logger.info(
            "Transcript recorded",
            extra={
                "file_id": file.id,
                "transcript_id": recorded.transcript_id,
                "transcript_created": recorded.created,
            },
        )
        return recorded

    def count_for_file(self, file_id: str) -> int:
        """Returns how many transcripts exist for a file."""
        with self._session_factory() as db_session:
            return len(
                db_session.exec(
                    select(Transcript.id).where(Transcript.file_id == file_id)
                ).all()
            )

    def _transcript_exists(self, file_id: str) -> bool:
        try:
            return self.count_for_file(file_id) > 0
        except Exception:
            logger.exception(
                "Failed to re-check transcript", extra={"file_id": file_id}
            )
            return False

    def _get_or_create_transcript(
        self, db_session: Session, file_id: str, event: DeepgramCallback
    ) -> tuple[Transcript, bool]:
        """Returns the file's transcript, creating it if missing."""
        existing = db_session.exec(
            select(Transcript).where(Transcript.file_id == file_id)
        ).first()
        if existing:
            logger.info(
                "Transcript already exists, skipping creation",
                extra={"file_id": file_id, "transcript_id": existing.id},
            )
            return existing, False

        alternative = event.best_alternative
        metadata = event.metadata

        transcript = Transcript(
            file_id=file_id,
            confidence=alternative.confidence,
            words=alternative.words,
            topics=alternative.topics or {},
            entities=alternative.entities or {},
            summaries=alternative.summaries or {},
            paragraphs=alternative.paragraphs,
            transcript_string=alternative.transcript,
            request_metadata=RequestMetadata(
                created=metadata.created,
                tags=metadata.tags,
                models=metadata.models,
                sha256=metadata.sha256,
                channels=metadata.channels,
                duration=metadata.duration,
                model_info=metadata.model_info,
                request_id=metadata.request_id,
            ),
        )
        db_session.add(transcript)
        db_session.flush()
        return transcript, True
