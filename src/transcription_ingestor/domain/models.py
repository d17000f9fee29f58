"""Domain models for the transcription ingestor."""

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from transcription_ingestor.db_models import FileStatus

# Detection results are lists of segments; a single object is also accepted.
DetectionResult = Union[list[dict[str, Any]], dict[str, Any]]


class Alternative(BaseModel):
    """One transcription hypothesis for a channel."""

    confidence: float
    words: list[dict[str, Any]] = Field(default_factory=list)
    topics: Optional[DetectionResult] = None
    entities: Optional[DetectionResult] = None
    summaries: Optional[DetectionResult] = None
    paragraphs: Optional[dict[str, Any]] = None
    transcript: str = ""


class Channel(BaseModel):
    alternatives: list[Alternative] = Field(min_length=1)


class Results(BaseModel):
    channels: list[Channel] = Field(min_length=1)


class CallbackMetadata(BaseModel):
    """Provider request metadata attached to a completion callback."""

    request_id: str = Field(min_length=1)
    created: Optional[datetime] = None
    tags: list[str] = Field(default_factory=list)
    models: list[str] = Field(default_factory=list)
    sha256: Optional[str] = None
    channels: Optional[int] = None
    duration: Optional[float] = None
    model_info: dict[str, Any] = Field(default_factory=dict)


class DeepgramCallback(BaseModel):
    """Represents an incoming transcription-completed callback."""

    metadata: CallbackMetadata
    results: Results

    @property
    def request_id(self) -> str:
        return self.metadata.request_id

    @property
    def best_alternative(self) -> Alternative:
        """The first alternative of the first channel."""
        return self.results.channels[0].alternatives[0]


class FileRecord(BaseModel, frozen=True):
    """Detached view of a file, safe to pass between transactions."""

    id: str
    team_id: str
    project_id: str
    name: str
    status: FileStatus


class RecordedTranscript(BaseModel, frozen=True):
    """Result of the atomic completion write."""

    transcript_id: str
    file_id: str
    status: FileStatus
    content: str
    created: bool


class Recipient(BaseModel, frozen=True):
    """A team member to notify."""

    name: str
    email: str


class SideEffectAttempt(BaseModel, frozen=True):
    """Outcome of a single best-effort side effect call."""

    kind: Literal["indexing", "notification"]
    target: str
    succeeded: bool
    error: Optional[str] = None


class Accepted(BaseModel, frozen=True):
    kind: Literal["accepted"] = "accepted"
    file_id: str
    status: FileStatus
    transcript_id: str
    side_effect_failures: list[SideEffectAttempt] = Field(default_factory=list)


class AlreadyProcessed(BaseModel, frozen=True):
    kind: Literal["already_processed"] = "already_processed"
    file_id: str


class NotFound(BaseModel, frozen=True):
    kind: Literal["not_found"] = "not_found"
    request_id: str


class ValidationFailed(BaseModel, frozen=True):
    kind: Literal["validation_error"] = "validation_error"
    reason: str


class ServerError(BaseModel, frozen=True):
    kind: Literal["server_error"] = "server_error"
    reason: str


Outcome = Annotated[
    Union[Accepted, AlreadyProcessed, NotFound, ValidationFailed, ServerError],
    Field(discriminator="kind"),
]
