"""Atomic file status transitions."""

import logging

from sqlalchemy import update
from sqlmodel import Session, select

from transcription_ingestor.db_models import File, FileStatus
from transcription_ingestor.domain import FileRecord, sources_for
from transcription_ingestor.exceptions import (
    AlreadyTerminalError,
    InvalidTransitionError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


class WorkStateMachine:
    """
    Owns the lifecycle status of files.

    Every transition is a single conditional UPDATE whose WHERE clause lists
    the legal source states, so concurrent deliveries for the same job cannot
    both pass a check and then both write.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def begin_processing(self, file_id: str) -> FileRecord:
        """
        Moves a file to PROCESSING unless it has already completed.

        Raises:
            AlreadyTerminalError: If the file is COMPLETED.
            InvalidTransitionError: If the file does not exist.
            PersistenceError: If the update fails.
        """
        try:
            with self._session_factory() as db_session:
                self._transition(db_session, file_id, FileStatus.PROCESSING)
                db_session.commit()
                file = db_session.get(File, file_id)
                record = FileRecord.model_validate(file, from_attributes=True)
        except (AlreadyTerminalError, InvalidTransitionError):
            raise
        except Exception as e:
            logger.exception(
                "Failed to lock file for processing", extra={"file_id": file_id}
            )
            raise PersistenceError(file_id, cause=e) from e

        logger.info("File locked for processing", extra={"file_id": file_id})
        return record

    def commit_completed(self, db_session: Session, file_id: str) -> None:
        """
        Moves a file to COMPLETED inside the caller's transaction.

        The caller owns the commit, so the status flip lands together with
        whatever else was written in `db_session`.

        Raises:
            AlreadyTerminalError: If the file is already COMPLETED.
            InvalidTransitionError: If the current status is not a legal source.
        """
        self._transition(db_session, file_id, FileStatus.COMPLETED)

    def mark_error(self, file_id: str) -> bool:
        """
        Moves a non-terminal file to ERROR as a compensating action.

        Best-effort: failures are logged, never raised.

        Returns:
            True if the file is now in ERROR.
        """
        try:
            with self._session_factory() as db_session:
                self._transition(db_session, file_id, FileStatus.ERROR)
                db_session.commit()
        except (AlreadyTerminalError, InvalidTransitionError) as e:
            logger.warning(
                "File not moved to error",
                extra={"file_id": file_id, "error": str(e)},
            )
            return False
        except Exception:
            logger.exception(
                "Failed to update file status to error", extra={"file_id": file_id}
            )
            return False

        logger.info("File marked as error", extra={"file_id": file_id})
        return True

    def _transition(
        self, db_session: Session, file_id: str, target: FileStatus
    ) -> None:
        """Applies a conditional status update and explains a miss."""
        statement = (
            update(File)
            .where(File.id == file_id, File.status.in_(sources_for(target)))
            .values(status=target)
            .execution_options(synchronize_session=False)
        )
        result = db_session.exec(statement)

        if result.rowcount == 1:
            return

        current = db_session.exec(
            select(File.status).where(File.id == file_id)
        ).first()
        if current == FileStatus.COMPLETED:
            raise AlreadyTerminalError(file_id)
        raise InvalidTransitionError(
            file_id, FileStatus(current).value if current else None, target.value
        )
