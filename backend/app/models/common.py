from datetime import UTC, datetime
from enum import Enum

from pydantic import field_validator
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    return datetime.now(UTC)


class ChatMessage(SQLModel, table=True):
    __tablename__ = "chat_messages"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    message: str
    response: str | None = Field(default=None)
    is_ai_response: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)


class PromptSuggestion(SQLModel, table=True):
    __tablename__ = "prompt_suggestions"

    id: int | None = Field(default=None, primary_key=True)
    text: str
    category: str | None = Field(default=None)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)


class DeploymentStatus(str, Enum):
    PENDING = "pending"
    BUILDING = "building"
    DEPLOYED = "deployed"
    FAILED = "failed"


class Deployment(SQLModel, table=True):
    __tablename__ = "deployments"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    status: DeploymentStatus = Field(default=DeploymentStatus.PENDING)
    deployment_url: str | None = Field(default=None)
    build_logs: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = Field(default=None)


class DeploymentUpdate(SQLModel):
    status: DeploymentStatus | None = None
    deployment_url: str | None = None
    build_logs: str | None = None
    completed_at: datetime | None = None

    @field_validator("completed_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        # Timestamps are stored timezone-aware; naive input is taken as UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
