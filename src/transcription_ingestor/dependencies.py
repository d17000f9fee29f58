"""Dependency injection configuration for the transcription ingestor."""

import logging
from contextlib import contextmanager

import httpx
from sqlmodel import Session, create_engine

from transcription_ingestor.config import load_config
from transcription_ingestor.handlers import SideEffectDispatcher, WebhookIngestor
from transcription_ingestor.infrastructure import (
    HttpIndexingService,
    ResendNotificationService,
)
from transcription_ingestor.logging import setup_logging
from transcription_ingestor.repositories import (
    CorrelationStore,
    TeamRepository,
    TranscriptRepository,
    WorkStateMachine,
)

_config = load_config()

setup_logging(_config.log_level)
logger = logging.getLogger(__name__)

# PostgreSQL database
_engine = create_engine(_config.database.url, pool_pre_ping=True)
logger.info("Database engine created", extra={"host": _config.database.host})


@contextmanager
def _session_factory():
    """Creates a database session context manager."""
    with Session(_engine) as session:
        yield session


_correlations = CorrelationStore(_session_factory)
_state_machine = WorkStateMachine(_session_factory)
_transcripts = TranscriptRepository(_session_factory, _state_machine)
_teams = TeamRepository(_session_factory)

# Outbound HTTP capabilities
_indexing_client = httpx.Client(timeout=_config.indexing.timeout_seconds)
_indexing = HttpIndexingService(_indexing_client, _config.indexing.base_url)

_notification_client = httpx.Client(timeout=_config.notification.timeout_seconds)
_notifications = ResendNotificationService(
    _notification_client,
    api_url=_config.notification.api_url,
    api_key=_config.notification.api_key,
    sender=_config.notification.sender,
)

# Service composition
_side_effects = SideEffectDispatcher(
    _indexing,
    _notifications,
    _teams,
    app_base_url=_config.notification.app_base_url,
    max_workers=_config.notification.max_workers,
)
_ingestor = WebhookIngestor(_correlations, _state_machine, _transcripts, _side_effects)


def get_engine():
    """Returns the configured database engine."""
    return _engine


def get_ingestor() -> WebhookIngestor:
    """Returns the configured webhook ingestor."""
    return _ingestor
