from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from athletic_balance.core.config import get_settings


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password[:72], hashed_password)


def get_password_hash(password: str) -> str:
    settings = get_settings()
    return pwd_context.hash(password[:72], rounds=settings.password_hash_rounds)


def token_lifetime() -> timedelta:
    return timedelta(days=get_settings().auth_token_expire_days)


def create_session_token(user_id: str, email: str) -> tuple[str, datetime]:
    """Sign a session JWT and return it with its expiry."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + token_lifetime()
    to_encode: Dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "jti": uuid4().hex,
        "exp": expire,
    }
    token = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, expire


def decode_token(token: str) -> Dict[str, Any]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Invalid token") from exc
