from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from athletic_balance.api import deps
from athletic_balance.core.config import get_settings
from athletic_balance.core.errors import AppError
from athletic_balance.core.security import token_lifetime
from athletic_balance.db.session import get_db
from athletic_balance.models.user import User
from athletic_balance.schemas import auth as auth_schema
from athletic_balance.schemas.user import UserEnvelope, UserPublic
from athletic_balance.services import auth as auth_service

router = APIRouter()


def _set_auth_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=int(token_lifetime().total_seconds()),
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


@router.post("/signup", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def sign_up(
    payload: auth_schema.SignUpRequest,
    response: Response,
    db: Session = Depends(get_db),  # noqa: B008
) -> UserEnvelope:
    result = auth_service.sign_up(db, payload.email, payload.password, payload.full_name)
    if not result.ok:
        if result.error == "User already exists":
            raise AppError(result.error, status.HTTP_409_CONFLICT)
        raise AppError(result.error or "Failed to create account")
    _set_auth_cookie(response, result.token)
    return UserEnvelope(user=UserPublic.model_validate(result.user))


@router.post("/signin", response_model=UserEnvelope)
def sign_in(
    payload: auth_schema.SignInRequest,
    response: Response,
    db: Session = Depends(get_db),  # noqa: B008
) -> UserEnvelope:
    if not payload.email or not payload.password:
        raise AppError("Email and password are required", status.HTTP_400_BAD_REQUEST)
    result = auth_service.sign_in(db, payload.email, payload.password)
    if not result.ok:
        raise AppError(result.error or "Invalid credentials", status.HTTP_401_UNAUTHORIZED)
    _set_auth_cookie(response, result.token)
    return UserEnvelope(user=UserPublic.model_validate(result.user))


@router.post("/signout")
def sign_out(
    response: Response,
    token: str | None = Depends(deps.get_auth_token),
    db: Session = Depends(get_db),  # noqa: B008
) -> dict[str, bool]:
    if token:
        auth_service.sign_out(db, token)
    response.delete_cookie(get_settings().auth_cookie_name, path="/")
    return {"success": True}


@router.get("/user", response_model=UserEnvelope)
def read_current_user(
    current_user: User = Depends(deps.get_current_user),  # noqa: B008
) -> UserEnvelope:
    return UserEnvelope(user=UserPublic.model_validate(current_user))
