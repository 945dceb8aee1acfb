from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from athletic_balance.core.security import (
    create_session_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from athletic_balance.models.profile import Profile
from athletic_balance.models.user import User
from athletic_balance.models.user_session import UserSession

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    user: User | None = None
    token: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.user is not None and self.error is None


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _open_session(db: Session, user: User) -> str:
    token, expires_at = create_session_token(user.id, user.email)
    db.add(
        UserSession(
            user_id=user.id,
            token=token,
            expires_at=expires_at.replace(tzinfo=None),
        )
    )
    return token


def sign_up(db: Session, email: str, password: str, full_name: str | None = None) -> AuthResult:
    email = _normalize_email(email)
    if db.query(User).filter(User.email == email).first():
        return AuthResult(error="User already exists")

    try:
        user = User(email=email, password_hash=get_password_hash(password), provider="email")
        db.add(user)
        db.flush()
        db.add(Profile(id=user.id, email=email, full_name=full_name))
        token = _open_session(db, user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Sign up failed for %s", email)
        return AuthResult(error="Failed to create account")

    db.refresh(user)
    logger.info("Created account %s", user.id)
    return AuthResult(user=user, token=token)


def sign_in(db: Session, email: str, password: str) -> AuthResult:
    user = db.query(User).filter(User.email == _normalize_email(email)).first()
    if not user or not user.password_hash or not verify_password(password, user.password_hash):
        return AuthResult(error="Invalid credentials")

    try:
        token = _open_session(db, user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Sign in failed for %s", user.id)
        return AuthResult(error="Failed to sign in")
    return AuthResult(user=user, token=token)


def get_user_from_token(db: Session, token: str) -> AuthResult:
    try:
        payload = decode_token(token)
    except ValueError:
        return AuthResult(error="Invalid token")

    session = (
        db.query(UserSession)
        .filter(UserSession.token == token, UserSession.expires_at > datetime.utcnow())
        .first()
    )
    if session is None or session.user_id != payload.get("sub"):
        return AuthResult(error="Invalid or expired token")

    user = db.get(User, session.user_id)
    if user is None:
        return AuthResult(error="User not found")
    return AuthResult(user=user, token=token)


def sign_out(db: Session, token: str) -> None:
    try:
        db.query(UserSession).filter(UserSession.token == token).delete()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Sign out error")


def cleanup_expired_sessions(db: Session) -> int:
    try:
        removed = (
            db.query(UserSession)
            .filter(UserSession.expires_at < datetime.utcnow())
            .delete()
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Session cleanup error")
        return 0
    if removed:
        logger.info("Removed %d expired sessions", removed)
    return removed
