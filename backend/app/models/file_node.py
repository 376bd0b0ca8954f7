from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.common import utc_now


class FileNode(SQLModel, table=True):
    __tablename__ = "files"
    __table_args__ = (
        UniqueConstraint("project_id", "path", name="uq_files_project_path"),
    )

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    path: str  # absolute, "/"-separated
    name: str
    content: str = Field(default="")
    is_folder: bool = Field(default=False)
    parent_path: str | None = Field(default=None)  # None for top-level nodes
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class FileNodeCreate(SQLModel):
    path: str
    name: str | None = None
    content: str = ""
    is_folder: bool = False
    parent_path: str | None = None


class FileNodeUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1)
    content: str | None = None
    path: str | None = None
