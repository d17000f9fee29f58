"""Handler for transcription-completed callbacks."""

import logging
from typing import Any

from pydantic import ValidationError

from transcription_ingestor.domain import (
    TERMINAL_STATES,
    Accepted,
    AlreadyProcessed,
    DeepgramCallback,
    FileRecord,
    NotFound,
    Outcome,
    ServerError,
    ValidationFailed,
)
from transcription_ingestor.exceptions import (
    AlreadyTerminalError,
    InvalidTransitionError,
    PersistenceError,
    UnknownJobError,
    WebhookValidationError,
)
from transcription_ingestor.repositories import (
    CorrelationStore,
    TranscriptRepository,
    WorkStateMachine,
)

from .side_effect_dispatcher import SideEffectDispatcher

logger = logging.getLogger(__name__)


class WebhookIngestor:
    """Orchestrates ingestion of a provider completion callback."""

    def __init__(
        self,
        correlations: CorrelationStore,
        state_machine: WorkStateMachine,
        transcripts: TranscriptRepository,
        side_effects: SideEffectDispatcher,
    ):
        self._correlations = correlations
        self._state_machine = state_machine
        self._transcripts = transcripts
        self._side_effects = side_effects

    def handle(self, raw_event: Any) -> Outcome:
        """
        Ingests a callback and returns the outcome for the caller.

        The transcript write is the only step that decides success. Indexing
        and notification failures are reported in the outcome but never turn
        an accepted delivery into a failure.

        Args:
            raw_event: The decoded JSON body sent by the provider.

        Returns:
            One of Accepted, AlreadyProcessed, NotFound, ValidationFailed
            or ServerError.
        """
        file: FileRecord | None = None

        try:
            event = self._parse(raw_event)
            logger.info(
                "Transcription callback received",
                extra={"request_id": event.request_id},
            )

            file = self._correlations.resolve(event.request_id)

            if file.status in TERMINAL_STATES:
                logger.info("File already processed", extra={"file_id": file.id})
                return AlreadyProcessed(file_id=file.id)

            self._state_machine.begin_processing(file.id)
            recorded = self._transcripts.record_completion(file, event)

        except WebhookValidationError as e:
            logger.warning("Invalid callback", extra={"reason": e.reason})
            return ValidationFailed(reason=e.reason)
        except UnknownJobError as e:
            return NotFound(request_id=e.request_id)
        except AlreadyTerminalError as e:
            logger.info("File already processed", extra={"file_id": e.file_id})
            return AlreadyProcessed(file_id=e.file_id)
        except (PersistenceError, InvalidTransitionError) as e:
            self._compensate(file)
            return ServerError(reason=str(e))
        except Exception as e:
            logger.exception("Callback processing failed")
            self._compensate(file)
            return ServerError(reason=str(e))

        attempts = self._side_effects.dispatch(file, recorded)

        logger.info(
            "Callback processed successfully",
            extra={
                "file_id": file.id,
                "transcript_id": recorded.transcript_id,
                "status": recorded.status.value,
            },
        )

        return Accepted(
            file_id=file.id,
            status=recorded.status,
            transcript_id=recorded.transcript_id,
            side_effect_failures=[a for a in attempts if not a.succeeded],
        )

    def _parse(self, raw_event: Any) -> DeepgramCallback:
        """Validates the callback shape once, at the boundary."""
        try:
            return DeepgramCallback.model_validate(raw_event)
        except ValidationError as e:
            raise WebhookValidationError(_describe(e)) from e

    def _compensate(self, file: FileRecord | None) -> None:
        if file is None:
            return
        logger.error("Marking file as error", extra={"file_id": file.id})
        self._state_machine.mark_error(file.id)


def _describe(error: ValidationError) -> str:
    """Summarizes a pydantic error as `loc: message` pairs."""
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'body'}: {item['msg']}"
        for item in error.errors()
    )
