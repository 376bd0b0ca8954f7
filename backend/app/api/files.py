from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session

from app.api.deps import get_owned_project
from app.database import get_session
from app.models.file_node import FileNodeCreate, FileNodeUpdate
from app.models.project import Project
from app.services.file_tree import FileTreeStore

router = APIRouter(prefix="/projects/{project_id}/files", tags=["files"])


class FileNodeResponse(BaseModel):
    id: int
    project_id: int
    path: str
    name: str
    content: str
    is_folder: bool
    parent_path: str | None
    created_at: datetime
    updated_at: datetime


@router.get("", response_model=list[FileNodeResponse])
async def list_files(
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    return FileTreeStore(session).list_nodes(project.id)


@router.post("", response_model=FileNodeResponse, status_code=201)
async def create_file(
    body: FileNodeCreate,
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    return FileTreeStore(session).create_node(project.id, body)


@router.get("/{file_id}", response_model=FileNodeResponse)
async def get_file(
    file_id: int,
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    return FileTreeStore(session).get_node(file_id, project.id)


@router.patch("/{file_id}", response_model=FileNodeResponse)
async def update_file(
    file_id: int,
    body: FileNodeUpdate,
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    return FileTreeStore(session).update_node(file_id, body, project.id)


@router.delete("/{file_id}")
async def delete_file(
    file_id: int,
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    if not FileTreeStore(session).delete_node(file_id, project.id):
        raise HTTPException(status_code=404, detail="File not found")
    return {"detail": "File deleted"}
