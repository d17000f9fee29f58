import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from transcription_ingestor.db_models import (
    File,
    FileStatus,
    RequestMetadata,
    Transcript,
)
from transcription_ingestor.domain import DeepgramCallback, FileRecord
from transcription_ingestor.exceptions import AlreadyTerminalError, PersistenceError
from tests.factories import insert_after_competitor, make_event


def _file(status: FileStatus = FileStatus.PROCESSING) -> FileRecord:
    return FileRecord(
        id="f1", team_id="t1", project_id="p1", name="interview.mp3", status=status
    )


def _event() -> DeepgramCallback:
    return DeepgramCallback.model_validate(make_event())


def test_record_completion_creates_transcript_and_completes_file(
    seed, transcripts, session_factory, file_status
):
    seed(FileStatus.PROCESSING)

    recorded = transcripts.record_completion(_file(), _event())

    assert recorded.created is True
    assert recorded.status == FileStatus.COMPLETED
    assert recorded.content == "hello world"
    assert file_status() == FileStatus.COMPLETED

    with session_factory() as db_session:
        transcript = db_session.get(Transcript, recorded.transcript_id)
        assert transcript.file_id == "f1"
        assert transcript.confidence == pytest.approx(0.97)
        assert len(transcript.words) == 2
        assert transcript.topics == {}
        assert transcript.paragraphs["transcript"] == "Hello world."

        metadata = db_session.exec(
            select(RequestMetadata).where(
                RequestMetadata.transcript_id == recorded.transcript_id
            )
        ).one()
        assert metadata.request_id == "dg-123"
        assert metadata.models == ["nova-2"]
        assert metadata.duration == pytest.approx(42.5)


def test_record_completion_reuses_existing_transcript(
    seed, transcripts, session_factory, transcript_count, file_status
):
    seed(FileStatus.PROCESSING)
    first = transcripts.record_completion(_file(), _event())

    # transcript present but file not yet completed
    with session_factory() as db_session:
        db_session.get(File, "f1").status = FileStatus.PROCESSING
        db_session.commit()

    second = transcripts.record_completion(_file(), _event())

    assert second.created is False
    assert second.transcript_id == first.transcript_id
    assert transcript_count() == 1
    assert file_status() == FileStatus.COMPLETED


def test_record_completion_on_completed_file_raises_already_terminal(
    seed, transcripts, transcript_count
):
    seed(FileStatus.PROCESSING)
    transcripts.record_completion(_file(), _event())

    with pytest.raises(AlreadyTerminalError):
        transcripts.record_completion(_file(), _event())

    assert transcript_count() == 1


def test_failed_status_update_rolls_back_transcript(
    seed, transcripts, state_machine, transcript_count, file_status, monkeypatch
):
    seed(FileStatus.PROCESSING)

    def fail_completion(db_session, file_id):
        raise RuntimeError("status update failed")

    monkeypatch.setattr(state_machine, "commit_completed", fail_completion)

    with pytest.raises(PersistenceError) as exc_info:
        transcripts.record_completion(_file(), _event())

    assert isinstance(exc_info.value.cause, RuntimeError)
    assert transcript_count() == 0
    assert file_status() == FileStatus.PROCESSING


def test_unique_violation_from_concurrent_delivery_is_already_terminal(
    seed, transcripts, session_factory, transcript_count, monkeypatch
):
    seed(FileStatus.PROCESSING)
    monkeypatch.setattr(
        transcripts,
        "_get_or_create_transcript",
        insert_after_competitor(session_factory),
    )

    with pytest.raises(AlreadyTerminalError) as exc_info:
        transcripts.record_completion(_file(), _event())

    assert exc_info.value.file_id == "f1"
    assert transcript_count() == 1


def test_unique_violation_without_competing_transcript_is_persistence_error(
    seed, transcripts, transcript_count, monkeypatch
):
    seed(FileStatus.PROCESSING)

    def fail_insert(db_session, file_id, event):
        raise IntegrityError("INSERT INTO transcripts", {}, Exception("constraint"))

    monkeypatch.setattr(transcripts, "_get_or_create_transcript", fail_insert)

    with pytest.raises(PersistenceError) as exc_info:
        transcripts.record_completion(_file(), _event())

    assert isinstance(exc_info.value.cause, IntegrityError)
    assert transcript_count() == 0


def test_list_shaped_detection_results_are_stored(
    seed, transcripts, session_factory
):
    seed(FileStatus.PROCESSING)
    event = make_event()
    alternative = event["results"]["channels"][0]["alternatives"][0]
    alternative["topics"] = [
        {"text": "hello world", "start_word": 0, "end_word": 1,
         "topics": [{"topic": "greeting", "confidence": 0.8}]}
    ]
    alternative["entities"] = [
        {"label": "LOCATION", "value": "world", "confidence": 0.7,
         "start_word": 1, "end_word": 2}
    ]
    alternative["summaries"] = [
        {"summary": "A greeting.", "start_word": 0, "end_word": 1}
    ]

    recorded = transcripts.record_completion(
        _file(), DeepgramCallback.model_validate(event)
    )

    with session_factory() as db_session:
        transcript = db_session.get(Transcript, recorded.transcript_id)
        assert transcript.topics[0]["topics"][0]["topic"] == "greeting"
        assert transcript.entities[0]["label"] == "LOCATION"
        assert transcript.summaries == [
            {"summary": "A greeting.", "start_word": 0, "end_word": 1}
        ]
