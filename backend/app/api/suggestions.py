from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session

from app.database import get_session
from app.services.suggestions import SuggestionCatalog

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


class SuggestionResponse(BaseModel):
    id: int
    text: str
    category: str | None
    is_active: bool
    created_at: datetime


@router.get("", response_model=list[SuggestionResponse])
async def list_suggestions(session: Session = Depends(get_session)):
    return SuggestionCatalog(session).list_active()
