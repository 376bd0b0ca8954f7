from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session

from app.api.deps import get_owned_project
from app.config import settings
from app.database import get_session
from app.models.common import DeploymentStatus, DeploymentUpdate
from app.models.project import Project
from app.services.deployments import DeploymentSimulator, DeploymentStore

router = APIRouter(prefix="/projects/{project_id}/deployments", tags=["deployments"])


class DeploymentResponse(BaseModel):
    id: int
    project_id: int
    status: DeploymentStatus
    deployment_url: str | None
    build_logs: str | None
    created_at: datetime
    completed_at: datetime | None


@router.get("", response_model=list[DeploymentResponse])
async def list_deployments(
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    return DeploymentStore(session).list_for_project(project.id)


@router.post("", response_model=DeploymentResponse, status_code=201)
async def deploy_project(
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    simulator = DeploymentSimulator(session, domain=settings.deployment_domain)
    return simulator.deploy(project.id)


@router.patch("/{deployment_id}", response_model=DeploymentResponse)
async def update_deployment(
    deployment_id: int,
    body: DeploymentUpdate,
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    return DeploymentStore(session).update(deployment_id, body, project.id)
