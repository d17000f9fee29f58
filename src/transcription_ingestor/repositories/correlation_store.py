"""Lookup of files by provider job id."""

import logging

from sqlmodel import select

from transcription_ingestor.db_models import File, TranscriptionRequest
from transcription_ingestor.domain import FileRecord
from transcription_ingestor.exceptions import PersistenceError, UnknownJobError

logger = logging.getLogger(__name__)


class CorrelationStore:
    """Resolves a provider request id to the file it was submitted for."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def resolve(self, request_id: str) -> FileRecord:
        """
        Finds the file registered for a transcription request.

        Args:
            request_id: The provider's job identifier.

        Returns:
            A detached FileRecord.

        Raises:
            UnknownJobError: If no transcription request matches.
            PersistenceError: If the lookup itself fails.
        """
        statement = (
            select(File)
            .join(TranscriptionRequest, TranscriptionRequest.file_id == File.id)
            .where(TranscriptionRequest.request_id == request_id)
        )

        try:
            with self._session_factory() as db_session:
                file = db_session.exec(statement).first()
                record = (
                    FileRecord.model_validate(file, from_attributes=True)
                    if file
                    else None
                )
        except Exception as e:
            logger.exception("File lookup failed", extra={"request_id": request_id})
            raise PersistenceError(None, cause=e) from e

        if record is None:
            logger.info("No file for request", extra={"request_id": request_id})
            raise UnknownJobError(request_id)

        return record
