from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from app.auth import ACCESS, decode_user_id
from app.database import get_session
from app.models.project import Project
from app.models.user import User

security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    session: Session = Depends(get_session),
) -> User:
    try:
        user_id = decode_user_id(credentials.credentials, ACCESS)
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid token")
    user = session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


async def get_owned_project(
    project_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> Project:
    # Someone else's project looks exactly like a missing one
    project = session.get(Project, project_id)
    if not project or project.owner_id != user.id:
        raise HTTPException(status_code=404, detail="Project not found")
    return project
