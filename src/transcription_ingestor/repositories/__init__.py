from .correlation_store import CorrelationStore
from .team_repository import TeamRepository
from .transcript_repository import TranscriptRepository
from .work_state_machine import WorkStateMachine

__all__ = [
    "CorrelationStore",
    "TeamRepository",
    "TranscriptRepository",
    "WorkStateMachine",
]
