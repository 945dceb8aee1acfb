from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from athletic_balance.api import deps
from athletic_balance.core.errors import AppError
from athletic_balance.db.session import get_db
from athletic_balance.models.user import User
from athletic_balance.schemas.session import CoachSessionPublic, CoachSessionSummary
from athletic_balance.services import sessions as session_service

router = APIRouter()


@router.get("", response_model=list[CoachSessionSummary])
def read_sessions(
    db: Session = Depends(get_db),  # noqa: B008
    current_user: User = Depends(deps.get_current_user),  # noqa: B008
) -> list[CoachSessionSummary]:
    return session_service.list_sessions(db, current_user.id)


@router.get("/{session_id}", response_model=CoachSessionPublic)
def read_session(
    session_id: str,
    db: Session = Depends(get_db),  # noqa: B008
    current_user: User = Depends(deps.get_current_user),  # noqa: B008
) -> CoachSessionPublic:
    session = session_service.get_session(db, current_user.id, session_id)
    if session is None:
        raise AppError("Session not found", status.HTTP_404_NOT_FOUND)
    return session
