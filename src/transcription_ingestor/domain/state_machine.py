"""File lifecycle transition rules."""

from transcription_ingestor.db_models import FileStatus

# ERROR -> PROCESSING lets a redelivered callback retry a failed file.
TRANSITIONS: dict[FileStatus, frozenset[FileStatus]] = {
    FileStatus.RECEIVED: frozenset({FileStatus.PROCESSING, FileStatus.ERROR}),
    FileStatus.PROCESSING: frozenset(
        {FileStatus.PROCESSING, FileStatus.COMPLETED, FileStatus.ERROR}
    ),
    FileStatus.ERROR: frozenset({FileStatus.PROCESSING}),
    FileStatus.COMPLETED: frozenset(),
}

TERMINAL_STATES = frozenset({FileStatus.COMPLETED})


def can_transition(current: FileStatus, target: FileStatus) -> bool:
    """Returns whether a file in `current` may move to `target`."""
    return target in TRANSITIONS[current]


def sources_for(target: FileStatus) -> list[FileStatus]:
    """
    Returns every status from which `target` is reachable in one step.

    Used as the WHERE clause of conditional status updates, so the check and
    the write happen in a single statement.
    """
    return [status for status, targets in TRANSITIONS.items() if target in targets]
