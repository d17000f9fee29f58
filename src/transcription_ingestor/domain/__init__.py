"""Domain layer exports."""

from .models import (
    Accepted,
    AlreadyProcessed,
    DeepgramCallback,
    FileRecord,
    NotFound,
    Outcome,
    Recipient,
    RecordedTranscript,
    ServerError,
    SideEffectAttempt,
    ValidationFailed,
)
from .state_machine import TERMINAL_STATES, can_transition, sources_for

__all__ = [
    "Accepted",
    "AlreadyProcessed",
    "DeepgramCallback",
    "FileRecord",
    "NotFound",
    "Outcome",
    "Recipient",
    "RecordedTranscript",
    "ServerError",
    "SideEffectAttempt",
    "ValidationFailed",
    "TERMINAL_STATES",
    "can_transition",
    "sources_for",
]
