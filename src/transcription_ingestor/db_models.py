from datetime import datetime
from enum import Enum
from typing import Any, List, Optional
from uuid import uuid4

from sqlalchemy import JSON, Column, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, Relationship, SQLModel

JSONType = JSON().with_variant(JSONB(), "postgresql")


def _new_id() -> str:
    return str(uuid4())


class FileStatus(str, Enum):
    RECEIVED = "RECEIVED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


class TeamMember(SQLModel, table=True):
    __tablename__ = "team_members"

    team_id: str = Field(foreign_key="teams.id", primary_key=True)
    user_id: str = Field(foreign_key="users.id", primary_key=True)


class Team(SQLModel, table=True):
    __tablename__ = "teams"

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str = Field(max_length=255)

    users: List["User"] = Relationship(back_populates="teams", link_model=TeamMember)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)

    teams: List[Team] = Relationship(back_populates="users", link_model=TeamMember)


class File(SQLModel, table=True):
    __tablename__ = "files"

    id: str = Field(default_factory=_new_id, primary_key=True)
    team_id: str = Field(foreign_key="teams.id", index=True)
    project_id: str = Field(index=True)
    name: str = Field(max_length=255)
    status: FileStatus = Field(default=FileStatus.RECEIVED)


class TranscriptionRequest(SQLModel, table=True):
    __tablename__ = "transcription_requests"

    request_id: str = Field(primary_key=True)
    file_id: str = Field(foreign_key="files.id", unique=True)


class Transcript(SQLModel, table=True):
    __tablename__ = "transcripts"

    id: str = Field(default_factory=_new_id, primary_key=True)
    file_id: str = Field(foreign_key="files.id", unique=True)
    confidence: float
    words: List[dict[str, Any]] = Field(sa_column=Column(JSONType, nullable=False))
    topics: Any = Field(sa_column=Column(JSONType, nullable=False))
    entities: Any = Field(sa_column=Column(JSONType, nullable=False))
    summaries: Any = Field(sa_column=Column(JSONType, nullable=False))
    paragraphs: Optional[dict[str, Any]] = Field(
        default=None, sa_column=Column(JSONType, nullable=True)
    )
    transcript_string: str = Field(sa_column=Column(Text, nullable=False))

    request_metadata: Optional["RequestMetadata"] = Relationship(
        back_populates="transcript", sa_relationship_kwargs={"uselist": False}
    )


class RequestMetadata(SQLModel, table=True):
    __tablename__ = "request_metadata"

    id: str = Field(default_factory=_new_id, primary_key=True)
    transcript_id: str = Field(foreign_key="transcripts.id", unique=True)
    created: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSONType))
    models: List[str] = Field(default_factory=list, sa_column=Column(JSONType))
    sha256: Optional[str] = None
    channels: Optional[int] = None
    duration: Optional[float] = None
    model_info: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType))
    request_id: str = Field(index=True)

    transcript: Transcript = Relationship(back_populates="request_metadata")
