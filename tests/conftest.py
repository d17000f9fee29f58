from contextlib import contextmanager

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from transcription_ingestor.db_models import (
    File,
    FileStatus,
    Team,
    TranscriptionRequest,
    Transcript,
    User,
)
from transcription_ingestor.handlers import SideEffectDispatcher, WebhookIngestor
from transcription_ingestor.repositories import (
    CorrelationStore,
    TeamRepository,
    TranscriptRepository,
    WorkStateMachine,
)
from tests.factories import (
    APP_BASE_URL,
    TEAM_EMAILS,
    FakeIndexingService,
    FakeNotificationService,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    @contextmanager
    def factory():
        with Session(engine) as session:
            yield session

    return factory


@pytest.fixture
def seed(session_factory):
    """Creates team t1 with three members and file f1 registered as dg-123."""

    def _seed(status: FileStatus = FileStatus.RECEIVED) -> None:
        with session_factory() as db_session:
            users = [
                User(id=f"u{i}", name=email.split("@")[0].title(), email=email)
                for i, email in enumerate(TEAM_EMAILS, start=1)
            ]
            team = Team(id="t1", name="Research", users=users)
            db_session.add(team)
            db_session.add(
                File(
                    id="f1",
                    team_id="t1",
                    project_id="p1",
                    name="interview.mp3",
                    status=status,
                )
            )
            db_session.add(TranscriptionRequest(request_id="dg-123", file_id="f1"))
            db_session.commit()

    return _seed


@pytest.fixture
def indexing():
    return FakeIndexingService()


@pytest.fixture
def notifications():
    return FakeNotificationService()


@pytest.fixture
def state_machine(session_factory):
    return WorkStateMachine(session_factory)


@pytest.fixture
def transcripts(session_factory, state_machine):
    return TranscriptRepository(session_factory, state_machine)


@pytest.fixture
def dispatcher(session_factory, indexing, notifications):
    return SideEffectDispatcher(
        indexing,
        notifications,
        TeamRepository(session_factory),
        app_base_url=APP_BASE_URL,
        max_workers=4,
    )


@pytest.fixture
def ingestor(session_factory, state_machine, transcripts, dispatcher):
    return WebhookIngestor(
        CorrelationStore(session_factory), state_machine, transcripts, dispatcher
    )


@pytest.fixture
def file_status(session_factory):
    def _status(file_id: str = "f1") -> FileStatus:
        with session_factory() as db_session:
            return db_session.get(File, file_id).status

    return _status


@pytest.fixture
def transcript_count(session_factory):
    def _count(file_id: str = "f1") -> int:
        with session_factory() as db_session:
            return len(
                db_session.exec(
                    select(Transcript).where(Transcript.file_id == file_id)
                ).all()
            )

    return _count
