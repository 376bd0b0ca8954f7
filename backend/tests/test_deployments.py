from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.errors import NotFoundError
from app.models.common import DeploymentStatus, DeploymentUpdate
from app.models.user import User
from app.services.deployments import BUILD_STEPS, DeploymentSimulator, DeploymentStore
from app.services.projects import ProjectStore


@pytest.fixture
def project(session: Session, owner: User):
    return ProjectStore(session).create(owner_id=owner.id, name="Ship It", prompt="p")


def test_create_is_pending(session: Session, project):
    deployment = DeploymentStore(session).create(project.id)
    assert deployment.status is DeploymentStatus.PENDING
    assert deployment.deployment_url is None
    assert deployment.completed_at is None


def test_create_missing_project(session: Session):
    with pytest.raises(NotFoundError):
        DeploymentStore(session).create(9999)


def test_update_partial(session: Session, project):
    store = DeploymentStore(session)
    deployment = store.create(project.id)

    updated = store.update(
        deployment.id,
        DeploymentUpdate(status=DeploymentStatus.FAILED, build_logs="boom"),
    )
    assert updated.status is DeploymentStatus.FAILED
    assert updated.build_logs == "boom"

    finished = datetime(2026, 1, 1, tzinfo=UTC)
    updated = store.update(deployment.id, DeploymentUpdate(completed_at=finished))
    assert updated.build_logs == "boom"
    assert updated.completed_at.replace(tzinfo=None) == datetime(2026, 1, 1)


def test_naive_completion_time_is_taken_as_utc():
    update = DeploymentUpdate(completed_at=datetime(2026, 1, 1, 12, 30))
    assert update.completed_at == datetime(2026, 1, 1, 12, 30, tzinfo=UTC)


def test_update_missing(session: Session):
    with pytest.raises(NotFoundError):
        DeploymentStore(session).update(9999, DeploymentUpdate(status=DeploymentStatus.BUILDING))


def test_history_newest_first(session: Session, project):
    store = DeploymentStore(session)
    first = store.create(project.id)
    second = store.create(project.id)
    assert [d.id for d in store.list_for_project(project.id)] == [second.id, first.id]


def test_simulator_marks_project_deployed(session: Session, project):
    deployment = DeploymentSimulator(session, domain="example.app").deploy(project.id)

    assert deployment.status is DeploymentStatus.DEPLOYED
    assert deployment.deployment_url == "https://ship-it.example.app"
    assert deployment.completed_at is not None
    assert deployment.build_logs.splitlines() == BUILD_STEPS

    session.refresh(project)
    assert project.is_deployed is True
    assert project.deployment_url == "https://ship-it.example.app"


def test_deployments_http(client: TestClient, auth_headers: dict):
    project_id = client.post(
        "/api/projects", json={"name": "Live Site", "prompt": "p"}, headers=auth_headers
    ).json()["id"]
    base = f"/api/projects/{project_id}/deployments"

    resp = client.post(base, headers=auth_headers)
    assert resp.status_code == 201
    assert resp.json()["status"] == "deployed"
    assert resp.json()["deployment_url"] == "https://live-site.vercel.app"

    project = client.get(f"/api/projects/{project_id}", headers=auth_headers).json()
    assert project["is_deployed"] is True

    deployment_id = resp.json()["id"]
    patched = client.patch(
        f"{base}/{deployment_id}", json={"status": "failed"}, headers=auth_headers
    )
    assert patched.status_code == 200
    assert patched.json()["status"] == "failed"

    bad = client.patch(f"{base}/{deployment_id}", json={"status": "exploded"}, headers=auth_headers)
    assert bad.status_code == 422

    history = client.get(base, headers=auth_headers).json()
    assert len(history) == 1
