import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.auth import hash_password
from app.database import get_session
from app.main import app
from app.models.user import User


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def _make_user(session: Session, email: str, name: str) -> User:
    user = User(email=email, password_hash=hash_password("testpass123"), name=name)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def _login(client: TestClient, email: str) -> str:
    response = client.post(
        "/api/auth/login",
        json={"email": email, "password": "testpass123"},
    )
    return response.json()["access_token"]


@pytest.fixture
def owner(session: Session) -> User:
    return _make_user(session, "owner@example.com", "Owner")


@pytest.fixture
def other_user(session: Session) -> User:
    return _make_user(session, "other@example.com", "Other")


@pytest.fixture
def user_token(client: TestClient, owner: User) -> str:
    return _login(client, owner.email)


@pytest.fixture
def other_token(client: TestClient, other_user: User) -> str:
    return _login(client, other_user.email)


@pytest.fixture
def auth_headers(user_token: str) -> dict:
    return {"Authorization": f"Bearer {user_token}"}
