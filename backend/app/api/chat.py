from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session

from app.api.deps import get_current_user, get_owned_project
from app.database import get_session
from app.models.project import Project
from app.models.user import User
from app.services.chat import ChatService

router = APIRouter(prefix="/projects/{project_id}/chat", tags=["chat"])


class SendMessageRequest(BaseModel):
    message: str = Field(min_length=1)


class ChatMessageResponse(BaseModel):
    id: int
    project_id: int
    user_id: int
    message: str
    response: str | None
    is_ai_response: bool
    created_at: datetime


@router.get("", response_model=list[ChatMessageResponse])
async def list_messages(
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
):
    return ChatService(session).list_messages(project.id)


@router.post("", response_model=ChatMessageResponse, status_code=201)
async def send_message(
    body: SendMessageRequest,
    project: Project = Depends(get_owned_project),
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    return ChatService(session).post_message(project.id, user.id, body.message)
