from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.common import utc_now


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    name: str
    description: str | None = Field(default=None)
    prompt: str
    slug: str = Field(unique=True, index=True)
    is_deployed: bool = Field(default=False)
    deployment_url: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectUpdate(SQLModel):
    """Partial update; unset fields are left alone, explicit None clears."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    prompt: str | None = Field(default=None, min_length=1)
    is_deployed: bool | None = None
    deployment_url: str | None = None
