import logging

from sqlmodel import Session, col, select

from app.errors import NotFoundError
from app.models.common import (
    Deployment,
    DeploymentStatus,
    DeploymentUpdate,
    utc_now,
)
from app.models.project import Project

logger = logging.getLogger(__name__)

BUILD_STEPS = [
    "Uploading files to cloud...",
    "Installing dependencies...",
    "Building application...",
    "Optimizing assets...",
    "Deploying to servers...",
    "Running health checks...",
]


class DeploymentStore:
    """Append-only deployment history per project.

    Status changes are not checked against any transition order.
    """

    def __init__(self, session: Session):
        self.session = session

    def create(self, project_id: int) -> Deployment:
        if not self.session.get(Project, project_id):
            raise NotFoundError(f"Project {project_id} not found")
        deployment = Deployment(project_id=project_id, status=DeploymentStatus.PENDING)
        self.session.add(deployment)
        self.session.commit()
        self.session.refresh(deployment)
        return deployment

    def get(self, deployment_id: int, project_id: int | None = None) -> Deployment:
        deployment = self.session.get(Deployment, deployment_id)
        if not deployment or (
            project_id is not None and deployment.project_id != project_id
        ):
            raise NotFoundError(f"Deployment {deployment_id} not found")
        return deployment

    def update(
        self,
        deployment_id: int,
        update: DeploymentUpdate,
        project_id: int | None = None,
    ) -> Deployment:
        deployment = self.get(deployment_id, project_id)
        for key, value in update.model_dump(exclude_unset=True).items():
            setattr(deployment, key, value)
        self.session.add(deployment)
        self.session.commit()
        self.session.refresh(deployment)
        logger.info(f"Deployment {deployment_id} is {deployment.status.value}")
        return deployment

    def list_for_project(self, project_id: int) -> list[Deployment]:
        return list(
            self.session.exec(
                select(Deployment)
                .where(Deployment.project_id == project_id)
                .order_by(col(Deployment.created_at).desc(), col(Deployment.id).desc())
            ).all()
        )


class DeploymentSimulator:
    """Walks a deployment through pending -> building -> deployed.

    Nothing leaves the process: the URL is derived from the project slug and
    every build step just appends a log line.
    """

    def __init__(self, session: Session, domain: str = "vercel.app"):
        self.session = session
        self.domain = domain
        self.store = DeploymentStore(session)

    def deploy(self, project_id: int) -> Deployment:
        deployment = self.store.create(project_id)
        project = self.session.get(Project, project_id)

        logs: list[str] = []
        deployment = self.store.update(
            deployment.id, DeploymentUpdate(status=DeploymentStatus.BUILDING)
        )
        for step in BUILD_STEPS:
            logs.append(step)
            deployment = self.store.update(
                deployment.id, DeploymentUpdate(build_logs="\n".join(logs))
            )

        url = f"https://{project.slug}.{self.domain}"
        deployment = self.store.update(
            deployment.id,
            DeploymentUpdate(
                status=DeploymentStatus.DEPLOYED,
                deployment_url=url,
                completed_at=utc_now(),
            ),
        )

        project.is_deployed = True
        project.deployment_url = url
        project.updated_at = utc_now()
        self.session.add(project)
        self.session.commit()
        self.session.refresh(deployment)
        return deployment
