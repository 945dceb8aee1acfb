from typing import Callable

from fastapi import Depends, Request, status
from sqlalchemy.orm import Session

from athletic_balance.coach.adapter import ChatProvider
from athletic_balance.coach.assistants import AssistantPair, build_assistant_pair
from athletic_balance.coach.factory import get_chat_provider, get_streaming_provider
from athletic_balance.core.config import get_settings
from athletic_balance.core.errors import AppError
from athletic_balance.db.session import SessionLocal, get_db
from athletic_balance.models.user import User
from athletic_balance.services import auth as auth_service
from athletic_balance.visuals.copy_bank import CopyBankManager


def get_auth_token(request: Request) -> str | None:
    return request.cookies.get(get_settings().auth_cookie_name)


def get_current_user(
    token: str | None = Depends(get_auth_token),
    db: Session = Depends(get_db),  # noqa: B008
) -> User:
    if not token:
        raise AppError("No token found", status.HTTP_401_UNAUTHORIZED)
    result = auth_service.get_user_from_token(db, token)
    if not result.ok:
        raise AppError(result.error or "Invalid token", status.HTTP_401_UNAUTHORIZED)
    return result.user


def get_optional_user(
    token: str | None = Depends(get_auth_token),
    db: Session = Depends(get_db),  # noqa: B008
) -> User | None:
    if not token:
        return None
    result = auth_service.get_user_from_token(db, token)
    return result.user if result.ok else None


def get_chat_client() -> ChatProvider:
    return get_chat_provider()


def get_streaming_client() -> ChatProvider:
    return get_streaming_provider()


def get_copy_bank() -> CopyBankManager:
    return CopyBankManager()


def get_session_factory() -> Callable[[], Session]:
    return SessionLocal


def get_assistant_pair_builder() -> Callable[..., AssistantPair]:
    return build_assistant_pair
