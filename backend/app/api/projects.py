from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlmodel import Session

from app.api.deps import get_current_user, get_owned_project
from app.config import settings
from app.database import get_session
from app.models.project import Project, ProjectUpdate
from app.models.user import User
from app.services.generator import ProjectGenerator
from app.services.projects import ProjectStore

router = APIRouter(tags=["projects"])


def _store(session: Session) -> ProjectStore:
    return ProjectStore(
        session,
        slug_max_attempts=settings.slug_max_attempts,
        slug_fallback=settings.slug_fallback,
    )


# --- Pydantic models ---


class CreateProjectRequest(BaseModel):
    name: str = Field(min_length=1)
    prompt: str = Field(min_length=1)
    description: str | None = None


class ProjectResponse(BaseModel):
    id: int
    owner_id: int
    name: str
    description: str | None
    prompt: str
    slug: str
    is_deployed: bool
    deployment_url: str | None
    created_at: datetime
    updated_at: datetime


class GeneratedNodeResponse(BaseModel):
    path: str
    name: str
    content: str
    is_folder: bool


class GenerationResponse(BaseModel):
    project: ProjectResponse
    generated_nodes: list[GeneratedNodeResponse]


# --- Endpoints ---


@router.get("/projects", response_model=list[ProjectResponse])
async def list_projects(
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return _store(session).list_for_owner(user.id)


@router.post("/projects", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: CreateProjectRequest,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    if not body.name.strip():
        raise HTTPException(status_code=400, detail="Invalid project name")
    return _store(session).create(
        owner_id=user.id,
        name=body.name,
        prompt=body.prompt,
        description=body.description,
    )


@router.get("/projects/by-slug/{slug}", response_model=ProjectResponse)
async def get_project_by_slug(
    slug: str,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    project = _store(session).get_by_slug(slug)
    if not project or project.owner_id != user.id:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(project: Project = Depends(get_owned_project)):
    return project


@router.patch("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    body: ProjectUpdate,
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    return _store(session).update(project.id, body)


@router.delete("/projects/{project_id}")
async def delete_project(
    project_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    if not _store(session).delete(project_id, user.id):
        raise HTTPException(status_code=404, detail="Project not found")
    return {"detail": "Project deleted"}


@router.post("/projects/{project_id}/generate", response_model=GenerationResponse)
async def generate_project(
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    result = ProjectGenerator(session).generate(project.id)
    return GenerationResponse(
        project=ProjectResponse.model_validate(result.project, from_attributes=True),
        generated_nodes=[
            GeneratedNodeResponse(
                path=node.path,
                name=node.name,
                content=node.content,
                is_folder=node.is_folder,
            )
            for node in result.generated_nodes
        ],
    )
