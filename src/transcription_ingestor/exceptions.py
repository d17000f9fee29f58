"""Custom exceptions for the transcription ingestor."""


class WebhookValidationError(Exception):
    """Raised when an inbound callback does not have the expected shape."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid webhook payload: {reason}")


class UnknownJobError(Exception):
    """Raised when no transcription request matches the provider job id."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__(f"No file registered for request '{request_id}'")


class AlreadyTerminalError(Exception):
    """Raised when a file has already completed and must not be reprocessed."""

    def __init__(self, file_id: str):
        self.file_id = file_id
        super().__init__(f"File '{file_id}' is already completed")


class InvalidTransitionError(Exception):
    """Raised when a file status change is not a legal lifecycle edge."""

    def __init__(self, file_id: str, current: str | None, target: str):
        self.file_id = file_id
        self.current = current
        self.target = target
        super().__init__(
            f"File '{file_id}' cannot move from '{current}' to '{target}'"
        )


class PersistenceError(Exception):
    """Raised when reading or writing ingestion state fails."""

    def __init__(self, file_id: str | None, cause: Exception | None = None):
        self.file_id = file_id
        self.cause = cause
        super().__init__(f"Failed to persist transcription state for file '{file_id}'")


class SideEffectError(Exception):
    """Raised when a best-effort indexing or notification call fails."""

    def __init__(self, kind: str, target: str, cause: Exception | None = None):
        self.kind = kind
        self.target = target
        self.cause = cause
        super().__init__(f"{kind} failed for '{target}'")
